from pathlib import Path
import logging as lg
import sys

import click
import pyparsing as pp

import rpnvm.common.isa as isa
from rpnvm.common.errors import CompileError, EncodeError, Position, TranslationError
from rpnvm.common.hwconf import WORD_MASK
from rpnvm.compile.lexer import decode_source
from rpnvm.compile.rpnc import write_atomic
import rpnvm.sasm.grammar as grammar


class Assembler:
    words: list[int]

    def __init__(self):
        self.words = list()

    def issue_push(self, value: int):
        self.words.append(isa.encode_literal(value))

    def issue_op(self, op: int):
        self.words.append(isa.encode_op(op))

    def issue_word(self, value: int):
        if not 0 <= value <= WORD_MASK:
            raise EncodeError('word does not fit 32 bits')

        lg.debug(f'Raw word 0x{value:08X}')
        self.words.append(value)


def assemble(text: str) -> bytes:
    try:
        actions = grammar.program.parse_string(text, parse_all=True)
    except pp.ParseBaseException as e:
        raise CompileError(f'syntax error: {e.msg}', Position(e.loc, e.lineno, e.col)) from e

    assembler = Assembler()

    for (func, arg) in actions:
        func(assembler, arg)

    return isa.pack_words(assembler.words)


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-o', '--output', type=Path, default=Path('out.bin'), help='Output bytecode file')
@click.argument('listing', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def compile(verbose: bool, output: Path, listing: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('RPNVM ASM')

    try:
        bytestr = assemble(decode_source(listing.read_bytes()))
    except TranslationError as e:
        click.echo(f'error: {e}', err=True)
        sys.exit(1)

    write_atomic(output, bytestr)


if __name__ == '__main__':
    compile()
