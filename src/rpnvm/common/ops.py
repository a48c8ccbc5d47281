# Tags (bits 30-31)
TAG_LITERAL = 0b00
TAG_PRIMITIVE = 0b01
TAG_NEGATIVE = 0b10  # reserved
TAG_INVALID = 0b11

# Primitives
HLT = 0x00  # stop
ADD = 0x01  # second + top
SUB = 0x02  # second - top
MUL = 0x03  # second * top
DIV = 0x04  # second / top

MNEMONICS = {
    HLT: 'halt',
    ADD: 'add',
    SUB: 'sub',
    MUL: 'mul',
    DIV: 'div',
}

BY_MNEMONIC = {name: op for op, name in MNEMONICS.items()}

# Source operators
SYMBOLS = {
    '+': ADD,
    '-': SUB,
    '*': MUL,
    '/': DIV,
}
