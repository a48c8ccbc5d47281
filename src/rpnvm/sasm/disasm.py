from pathlib import Path
import logging as lg
import sys

import click

import rpnvm.common.isa as isa
from rpnvm.common.errors import FormatError, IllegalInstruction
from rpnvm.common.hwconf import ORIGIN


def disassemble_word(word: int) -> str:
    try:
        instruction = isa.decode(word)
    except IllegalInstruction:
        return f'.word 0x{word:08X}'

    return str(instruction)


def disassemble(binary: bytes, origin: int = ORIGIN) -> str:
    lines = []

    for (i, word) in enumerate(isa.unpack_words(binary)):
        text = disassemble_word(word)
        lines.append(f'{text:<20}// {origin + i:04}: {word:08X}')

    return ''.join(line + '\n' for line in lines)


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('binary', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def disasm(verbose: bool, binary: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)

    try:
        click.echo(disassemble(binary.read_bytes()), nl=False)
    except FormatError as e:
        click.echo(f'error: {e}', err=True)
        sys.exit(2)


if __name__ == '__main__':
    disasm()
