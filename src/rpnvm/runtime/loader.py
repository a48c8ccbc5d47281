import enum
import struct
import logging as lg
from dataclasses import dataclass, field

import rpnvm.common.isa as isa
from rpnvm.common.errors import Fault, FormatError
from rpnvm.common.hwconf import (
    MEMORY_SIZE, ORIGIN, WORD_SIZE, WORD_FORMAT, VALUE_FORMAT
)


class State(enum.Enum):
    RUNNING = 'running'
    HALTED = 'halted'
    FAULTED = 'faulted'


@dataclass
class Registers:
    pc: int = ORIGIN            # Next instruction to fetch
    sp: int = ORIGIN            # Top of stack, ORIGIN when empty
    state: State = State.RUNNING
    fault: Fault | None = None  # Set when FAULTED


@dataclass
class Machine:
    ''' Memory image and registers of a single execution run '''
    memory: bytearray = field(default_factory=lambda: bytearray(MEMORY_SIZE * WORD_SIZE))
    regs: Registers = field(default_factory=Registers)

    @property
    def size(self) -> int:
        return len(self.memory) // WORD_SIZE

    def read_word(self, addr: int) -> int:
        m = addr * WORD_SIZE
        (word,) = struct.unpack(WORD_FORMAT, self.memory[m:m + WORD_SIZE])
        return word

    def write_word(self, addr: int, word: int):
        m = addr * WORD_SIZE
        self.memory[m:m + WORD_SIZE] = struct.pack(WORD_FORMAT, word)

    def read_value(self, addr: int) -> int:
        m = addr * WORD_SIZE
        (value,) = struct.unpack(VALUE_FORMAT, self.memory[m:m + WORD_SIZE])
        return value

    def write_value(self, addr: int, value: int):
        m = addr * WORD_SIZE
        self.memory[m:m + WORD_SIZE] = struct.pack(VALUE_FORMAT, value)


def load(binary: bytes) -> Machine:
    words = isa.unpack_words(binary)

    if ORIGIN + len(words) > MEMORY_SIZE:
        raise FormatError(
            f'program of {len(words)} words does not fit in memory '
            f'({MEMORY_SIZE - ORIGIN} words available)'
        )

    machine = Machine()

    for (i, word) in enumerate(words):
        machine.write_word(ORIGIN + i, word)

    lg.debug(f'Loaded {len(words)} words @ {ORIGIN}')
    return machine
