''' Instruction format: 2-bit tag, 30-bit payload '''

import struct
import logging as lg
from dataclasses import dataclass
from typing import Iterable

import rpnvm.common.ops as ops
from rpnvm.common.errors import EncodeError, FormatError, IllegalInstruction
from rpnvm.common.hwconf import (
    WORD_SIZE, WORD_FORMAT, WORD_MASK, TAG_SHIFT, PAYLOAD_MASK, LITERAL_LIMIT
)


@dataclass(frozen=True)
class Push:
    value: int

    @property
    def tag(self) -> int:
        return ops.TAG_LITERAL

    @property
    def payload(self) -> int:
        return self.value

    def __str__(self):
        return f'push {self.value}'


@dataclass(frozen=True)
class Primitive:
    op: int

    @property
    def tag(self) -> int:
        return ops.TAG_PRIMITIVE

    @property
    def payload(self) -> int:
        return self.op

    @property
    def mnemonic(self) -> str:
        return ops.MNEMONICS[self.op]

    def __str__(self):
        return self.mnemonic


# Reserved: never emitted, no sign convention is defined for the payload
@dataclass(frozen=True)
class PushNegative:
    payload: int

    @property
    def tag(self) -> int:
        return ops.TAG_NEGATIVE

    def __str__(self):
        return f'.word 0x{make_word(ops.TAG_NEGATIVE, self.payload):08X}'


Instruction = Push | Primitive | PushNegative


def make_word(tag: int, payload: int) -> int:
    return (tag << TAG_SHIFT) | (payload & PAYLOAD_MASK)


def encode_literal(value: int) -> int:
    if not 0 <= value < LITERAL_LIMIT:
        raise EncodeError(f'literal out of range [0, {LITERAL_LIMIT})')

    return make_word(ops.TAG_LITERAL, value)


def encode_op(op: int) -> int:
    if op not in ops.MNEMONICS:
        raise EncodeError(f'unknown opcode {op}')

    return make_word(ops.TAG_PRIMITIVE, op)


def decode(word: int) -> Instruction:
    if not 0 <= word <= WORD_MASK:
        raise IllegalInstruction(f'word {word} does not fit 32 bits')

    tag = word >> TAG_SHIFT
    payload = word & PAYLOAD_MASK

    if tag == ops.TAG_LITERAL:
        return Push(payload)

    if tag == ops.TAG_PRIMITIVE:
        if payload not in ops.MNEMONICS:
            raise IllegalInstruction(f'unknown opcode {payload} in 0x{word:08X}')

        return Primitive(payload)

    if tag == ops.TAG_NEGATIVE:
        return PushNegative(payload)

    raise IllegalInstruction(f'invalid tag in 0x{word:08X}')


# - Serialization - #

def pack_words(words: Iterable[int]) -> bytes:
    bytestr = bytearray()

    for word in words:
        bytestr += struct.pack(WORD_FORMAT, word)

    return bytes(bytestr)


def unpack_words(binary: bytes) -> list[int]:
    if len(binary) % WORD_SIZE != 0:
        raise FormatError(
            f'bytecode length {len(binary)} is not a multiple of {WORD_SIZE}'
        )

    words = [word for (word,) in struct.iter_unpack(WORD_FORMAT, binary)]
    lg.debug(f'Unpacked {len(words)} words')
    return words
