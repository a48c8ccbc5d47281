import os
import sys
import tempfile
from pathlib import Path
import logging as lg

import click

from rpnvm.common.errors import TranslationError
from rpnvm.compile.encoder import compile_source
from rpnvm.compile.lexer import decode_source
from rpnvm.compile.settings import CompileSettings


EXIT_OK = 0
EXIT_TRANSLATION_ERROR = 1


def write_atomic(path: Path, data: bytes):
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f'.{path.name}.', suffix='.tmp')

    try:
        with os.fdopen(fd, 'wb') as tmp:
            tmp.write(data)

        umask = os.umask(0)
        os.umask(umask)
        os.chmod(tmp_name, 0o666 & ~umask)

        os.replace(tmp_name, path)

    except BaseException:
        os.unlink(tmp_name)
        raise


def translate(settings: CompileSettings, source: Path):
    lg.info(f'Translating {source} to {settings.output}')
    bytestr = compile_source(decode_source(source.read_bytes()))
    write_atomic(settings.output, bytestr)
    lg.debug(f'Wrote {len(bytestr)} bytes')


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-o', '--output', type=Path, help='Output bytecode file (default: out.bin)')
@click.argument('source', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def compile(verbose: bool, output: Path | None, source: Path):
    settings = CompileSettings().update(verbose=verbose, output=output)

    lg.basicConfig(level=lg.DEBUG if settings.verbose else lg.INFO)
    lg.info('RPNC')

    try:
        translate(settings, source)

    except TranslationError as e:
        click.echo(f'error: {e}', err=True)
        sys.exit(EXIT_TRANSLATION_ERROR)

    sys.exit(EXIT_OK)


if __name__ == '__main__':
    compile()
