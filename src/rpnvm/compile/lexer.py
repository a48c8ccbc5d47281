''' Source tokenizer, an explicit finite-state machine '''

import enum
import logging as lg
from dataclasses import dataclass, field
from typing import Iterator, Dict, Tuple

from rpnvm.common.errors import LexError, Position
from rpnvm.common.hwconf import LITERAL_LIMIT


# Values at or above LITERAL_LIMIT stop growing; they are rejected by the encoder
@dataclass(frozen=True)
class Number:
    value: int
    position: Position | None = field(default=None, compare=False)


@dataclass(frozen=True)
class Operator:
    symbol: str
    position: Position | None = field(default=None, compare=False)


Token = Number | Operator


class State(enum.Enum):
    START = enum.auto()
    IN_NUMBER = enum.auto()
    MAYBE_COMMENT = enum.auto()
    IN_COMMENT = enum.auto()
    ERROR = enum.auto()


class CharClass(enum.Enum):
    DIGIT = enum.auto()
    SPACE = enum.auto()
    NEWLINE = enum.auto()
    OPERATOR = enum.auto()
    SLASH = enum.auto()
    OTHER = enum.auto()
    END = enum.auto()


class Action(enum.Enum):
    NONE = enum.auto()
    MARK = enum.auto()          # remember where a token starts
    ACCUMULATE = enum.auto()    # append a digit
    EMIT_NUMBER = enum.auto()
    EMIT_OPERATOR = enum.auto()
    EMIT_SLASH = enum.auto()
    FAIL = enum.auto()


# (next state, actions, consume the character)
Transition = Tuple[State, Tuple[Action, ...], bool]

_C = CharClass
_A = Action

TRANSITIONS: Dict[Tuple[State, CharClass], Transition] = {
    (State.START, _C.DIGIT): (State.IN_NUMBER, (_A.MARK, _A.ACCUMULATE), True),
    (State.START, _C.SPACE): (State.START, (), True),
    (State.START, _C.NEWLINE): (State.START, (), True),
    (State.START, _C.OPERATOR): (State.START, (_A.MARK, _A.EMIT_OPERATOR), True),
    (State.START, _C.SLASH): (State.MAYBE_COMMENT, (_A.MARK,), True),
    (State.START, _C.OTHER): (State.ERROR, (_A.FAIL,), False),

    (State.IN_NUMBER, _C.DIGIT): (State.IN_NUMBER, (_A.ACCUMULATE,), True),
    (State.IN_NUMBER, _C.SPACE): (State.START, (_A.EMIT_NUMBER,), False),
    (State.IN_NUMBER, _C.NEWLINE): (State.START, (_A.EMIT_NUMBER,), False),
    (State.IN_NUMBER, _C.OPERATOR): (State.START, (_A.EMIT_NUMBER,), False),
    (State.IN_NUMBER, _C.SLASH): (State.START, (_A.EMIT_NUMBER,), False),
    (State.IN_NUMBER, _C.OTHER): (State.START, (_A.EMIT_NUMBER,), False),
    (State.IN_NUMBER, _C.END): (State.START, (_A.EMIT_NUMBER,), False),

    (State.MAYBE_COMMENT, _C.SLASH): (State.IN_COMMENT, (), True),
    (State.MAYBE_COMMENT, _C.DIGIT): (State.START, (_A.EMIT_SLASH,), False),
    (State.MAYBE_COMMENT, _C.SPACE): (State.START, (_A.EMIT_SLASH,), False),
    (State.MAYBE_COMMENT, _C.NEWLINE): (State.START, (_A.EMIT_SLASH,), False),
    (State.MAYBE_COMMENT, _C.OPERATOR): (State.START, (_A.EMIT_SLASH,), False),
    (State.MAYBE_COMMENT, _C.OTHER): (State.START, (_A.EMIT_SLASH,), False),
    (State.MAYBE_COMMENT, _C.END): (State.START, (_A.EMIT_SLASH,), False),

    (State.IN_COMMENT, _C.DIGIT): (State.IN_COMMENT, (), True),
    (State.IN_COMMENT, _C.SPACE): (State.IN_COMMENT, (), True),
    (State.IN_COMMENT, _C.OPERATOR): (State.IN_COMMENT, (), True),
    (State.IN_COMMENT, _C.SLASH): (State.IN_COMMENT, (), True),
    (State.IN_COMMENT, _C.OTHER): (State.IN_COMMENT, (), True),
    (State.IN_COMMENT, _C.NEWLINE): (State.START, (), True),
    (State.IN_COMMENT, _C.END): (State.START, (), False),
}


def classify(char: str | None) -> CharClass:
    if char is None:
        return CharClass.END

    if char in '0123456789':
        return CharClass.DIGIT

    if char == '\n':
        return CharClass.NEWLINE

    if char in ' \t\r\f\v':
        return CharClass.SPACE

    if char == '/':
        return CharClass.SLASH

    if char in '+-*':
        return CharClass.OPERATOR

    return CharClass.OTHER


class Lexer:
    text: str
    state: State

    def __init__(self, text: str):
        self.text = text
        self.state = State.START
        self.offset = 0
        self.line = 1
        self.column = 1
        self.value = 0
        self.start: Position | None = None

    def position(self) -> Position:
        return Position(self.offset, self.line, self.column)

    def current(self) -> str | None:
        if self.offset < len(self.text):
            return self.text[self.offset]

        return None

    def advance(self):
        if self.text[self.offset] == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        self.offset += 1

    def perform(self, action: Action, char: str | None) -> Token | None:
        if action == Action.MARK:
            self.start = self.position()

        elif action == Action.ACCUMULATE:
            if self.value < LITERAL_LIMIT:
                self.value = self.value * 10 + int(str(char))

        elif action == Action.EMIT_NUMBER:
            token = Number(self.value, self.start)
            self.value = 0
            return token

        elif action == Action.EMIT_OPERATOR:
            return Operator(str(char), self.start)

        elif action == Action.EMIT_SLASH:
            return Operator('/', self.start)

        elif action == Action.FAIL:
            raise LexError(self.position(), str(char))

        return None

    def tokens(self) -> Iterator[Token]:
        while True:
            char = self.current()
            char_class = classify(char)

            if self.state == State.START and char_class == CharClass.END:
                return

            (next_state, actions, consume) = TRANSITIONS[(self.state, char_class)]
            self.state = next_state

            for action in actions:
                token = self.perform(action, char)

                if token is not None:
                    lg.debug(f'Token {token}')
                    yield token

            if consume:
                self.advance()


def tokenize(text: str) -> Iterator[Token]:
    return Lexer(text).tokens()


def decode_source(data: bytes) -> str:
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        line_start = data.rfind(b'\n', 0, e.start) + 1
        position = Position(e.start, data.count(b'\n', 0, e.start) + 1, e.start - line_start + 1)
        byte = data[e.start]
        raise LexError(position, chr(byte), f'undecodable byte 0x{byte:02X}') from e
