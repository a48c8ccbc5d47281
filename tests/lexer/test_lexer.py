import pytest

from rpnvm.common.errors import LexError
from rpnvm.common.hwconf import LITERAL_LIMIT
from rpnvm.compile.lexer import tokenize, decode_source, Number, Operator, Position


def lex(text):
    return list(tokenize(text))


def test_worked_expression():
    assert lex('3 4 + 2 * 2 + 4 /') == [
        Number(3), Number(4), Operator('+'), Number(2), Operator('*'),
        Number(2), Operator('+'), Number(4), Operator('/')
    ]


def test_leading_comment():
    assert lex('// comment\n3') == [Number(3)]


def test_unterminated_comment():
    assert lex('1 2 // no newline') == [Number(1), Number(2)]
    assert lex('//') == []


def test_empty_and_blank():
    assert lex('') == []
    assert lex(' \t\n\r\n ') == []


def test_numbers_end_at_first_non_digit():
    assert lex('12+34') == [Number(12), Operator('+'), Number(34)]
    assert lex('007') == [Number(7)]
    assert lex('5/2') == [Number(5), Operator('/'), Number(2)]


def test_number_flushed_at_end():
    assert lex('42') == [Number(42)]


def test_slash_at_end():
    assert lex('8 2 /') == [Number(8), Number(2), Operator('/')]


def test_comment_after_number():
    assert lex('9// nine\n1') == [Number(9), Number(1)]


def test_positions():
    tokens = lex('1\n  22 -')

    assert tokens[0].position == Position(0, 1, 1)
    assert tokens[1].position == Position(4, 2, 3)
    assert tokens[2].position == Position(7, 2, 6)


def test_unexpected_character():
    with pytest.raises(LexError) as e:
        lex('1 2\n x')

    assert e.value.char == 'x'
    assert str(e.value.position) == '2:2'


def test_lazy_until_error():
    tokens = tokenize('1 2 $')

    assert next(tokens) == Number(1)
    assert next(tokens) == Number(2)

    with pytest.raises(LexError):
        next(tokens)


def test_huge_number_stays_out_of_range():
    tokens = lex('9' * 5000 + ' 1')

    assert len(tokens) == 2
    assert tokens[0].value >= LITERAL_LIMIT
    assert tokens[0].value < LITERAL_LIMIT * 10
    assert tokens[1] == Number(1)


def test_decode_source():
    assert decode_source('1 2 +'.encode()) == '1 2 +'


def test_decode_source_bad_byte():
    with pytest.raises(LexError) as e:
        decode_source(b'1\n22 \xfe')

    assert e.value.position == Position(5, 2, 4)
    assert 'undecodable byte 0xFE' in str(e.value)
