''' Listing grammar '''

import pyparsing as pp

import rpnvm.common.ops as ops
from rpnvm.common.hwconf import WORD_MASK


def to_int(text: str) -> int:
    ''' Values past 32 bits are clamped to WORD_MASK + 1 '''
    if text.lower().startswith('0x'):
        (base, digits) = (16, text[2:])
    else:
        (base, digits) = (10, text)

    value = 0

    for digit in digits:
        value = value * base + int(digit, 16)

        if value > WORD_MASK:
            return WORD_MASK + 1

    return value


def issue_push(asm, value):
    asm.issue_push(value)


def issue_op(asm, op):
    asm.issue_op(op)


def issue_word(asm, value):
    asm.issue_word(value)


comment = pp.Suppress(pp.Literal('//') + pp.rest_of_line)

number = pp.Regex('0[xX][0-9a-fA-F]+|[0-9]+').set_parse_action(lambda r: to_int(r[0]))

push_cmd = (pp.Keyword('push') + number).set_parse_action(lambda r: (issue_push, r[1]))

op_cmd = pp.MatchFirst(
    [pp.Keyword(name) for name in ops.BY_MNEMONIC]
).set_parse_action(lambda r: (issue_op, ops.BY_MNEMONIC[r[0]]))

word_cmd = (pp.Keyword('.word') + number).set_parse_action(lambda r: (issue_word, r[1]))

cmd = push_cmd | op_cmd | word_cmd

program = pp.ZeroOrMore(cmd)
program.ignore(comment)
