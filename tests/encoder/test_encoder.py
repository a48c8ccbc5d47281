import pytest

import rpnvm.common.ops as ops
import rpnvm.common.isa as isa
import rpnvm.compile.encoder as encoder
from rpnvm.common.errors import CompileError, EncodeError, LexError
from rpnvm.compile.lexer import tokenize, Number, Operator


HALT = isa.encode_op(ops.HLT)


def test_one_word_per_token():
    words = encoder.encode(tokenize('3 4 + 2 * 2 + 4 /'))

    assert words == [
        isa.encode_literal(3),
        isa.encode_literal(4),
        isa.encode_op(ops.ADD),
        isa.encode_literal(2),
        isa.encode_op(ops.MUL),
        isa.encode_literal(2),
        isa.encode_op(ops.ADD),
        isa.encode_literal(4),
        isa.encode_op(ops.DIV),
        HALT,
    ]


def test_operator_table():
    words = encoder.encode([Operator('+'), Operator('-'), Operator('*'), Operator('/')])
    assert [isa.decode(w).op for w in words] == [ops.ADD, ops.SUB, ops.MUL, ops.DIV, ops.HLT]


def test_empty_program_halts():
    assert encoder.encode([]) == [HALT]


def test_single_halt_appended():
    assert encoder.encode([Number(1)]).count(HALT) == 1


def test_literal_out_of_range():
    with pytest.raises(EncodeError) as e:
        encoder.encode(tokenize('1\n 1073741824 +'))

    assert isinstance(e.value, CompileError)
    assert str(e.value.position) == '2:2'


def test_largest_literal():
    assert encoder.encode([Number(1073741823)])[0] == 0x3FFFFFFF


def test_unrecognized_token():
    with pytest.raises(CompileError):
        encoder.encode([Operator('%')])

    with pytest.raises(CompileError):
        encoder.encode(['3'])


def test_compile_source():
    assert encoder.compile_source('1 2 -') == bytes.fromhex('00000001' '00000002' '40000002' '40000000')


def test_compile_source_lex_error():
    with pytest.raises(LexError):
        encoder.compile_source('1 (2 +)')


def test_huge_literal_is_encode_error():
    with pytest.raises(EncodeError) as e:
        encoder.compile_source('1 ' + '9' * 5000)

    assert str(e.value) == '1:3: literal out of range [0, 1073741824)'
