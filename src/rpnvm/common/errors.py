''' Translation errors and machine faults '''

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    offset: int
    line: int
    column: int

    def __str__(self):
        return f'{self.line}:{self.column}'


# - Translation - #

class TranslationError(Exception):
    pass


class LexError(TranslationError):
    def __init__(self, position: Position, char: str, message: str | None = None):
        self.position = position
        self.char = char

        if message is None:
            message = f'unexpected character {char!r}'

        super().__init__(f'{position}: {message}')


class CompileError(TranslationError):
    position: Position | None = None

    def __init__(self, message: str, position: Position | None = None):
        self.message = message
        self.position = position
        super().__init__(message)

    def __str__(self):
        if self.position is None:
            return self.message

        return f'{self.position}: {self.message}'


class EncodeError(CompileError):
    pass


# - Loading - #

class FormatError(Exception):
    pass


# - Execution - #

class Fault(Exception):
    ''' Unrecoverable machine condition, stops execution '''
    pc: int | None = None

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self):
        message = super().__str__()

        if self.pc is None:
            return message

        return f'{self.kind} at pc={self.pc}: {message}'


class IllegalInstruction(Fault):
    pass


class ReservedInstruction(IllegalInstruction):
    pass


class RuntimeFault(Fault):
    pass


class StackUnderflow(RuntimeFault):
    pass


class StackOverflow(RuntimeFault):
    pass


class DivisionByZero(RuntimeFault):
    pass


class PcOutOfBounds(RuntimeFault):
    pass
