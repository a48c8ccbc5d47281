''' Token to instruction translation, one word per token '''

import logging as lg
from typing import Iterable

import rpnvm.common.ops as ops
import rpnvm.common.isa as isa
from rpnvm.common.errors import CompileError, EncodeError
from rpnvm.common.hwconf import LITERAL_LIMIT
from rpnvm.compile.lexer import Token, Number, Operator, tokenize


HALT_WORD = isa.encode_op(ops.HLT)


def encode_token(token: Token) -> int:
    if isinstance(token, Number):
        try:
            return isa.encode_literal(token.value)
        except EncodeError as e:
            raise EncodeError(f'literal out of range [0, {LITERAL_LIMIT})', token.position) from e

    if isinstance(token, Operator):
        if token.symbol not in ops.SYMBOLS:
            raise CompileError(f'unknown operator {token.symbol!r}', token.position)

        return isa.encode_op(ops.SYMBOLS[token.symbol])

    raise CompileError(f'unrecognized token {token!r}', getattr(token, 'position', None))


def encode(tokens: Iterable[Token]) -> list[int]:
    words: list[int] = []

    for token in tokens:
        word = encode_token(token)
        lg.debug(f'Issuing word 0x{word:08X} for {token}')
        words.append(word)

    if not words or words[-1] != HALT_WORD:
        lg.debug('Appending implicit halt')
        words.append(HALT_WORD)

    return words


def serialize(words: Iterable[int]) -> bytes:
    return isa.pack_words(words)


def compile_source(text: str) -> bytes:
    return serialize(encode(tokenize(text)))
