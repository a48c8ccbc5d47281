import sys
from pathlib import Path
import logging as lg
import traceback

import click

from rpnvm.common.errors import Fault, FormatError
from rpnvm.runtime.loader import load
import rpnvm.runtime.cpu as cpu


EXIT_HALT = 0
EXIT_FAULT = 1
EXIT_FORMAT_ERROR = 2
EXIT_KEYBOARD = 3
EXIT_EXEC_ERROR = 100


def execute(binary: bytes, trace: cpu.Trace | None = None) -> int | None:
    machine = load(binary)
    proc = cpu.CPU(machine, trace)
    return proc.run()


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-q', '--quiet', is_flag=True, help='Do not print the execution trace')
@click.argument('binary_filename', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def run(verbose: bool, quiet: bool, binary_filename: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('RPNVM')

    try:
        binary = binary_filename.read_bytes()
        result = execute(binary, None if quiet else click.echo)
        lg.info(f'Execution halted gracefully, result {result}')
        sys.exit(EXIT_HALT)

    except Fault as e:
        click.echo(f'fault: {e}', err=True)
        sys.exit(EXIT_FAULT)

    except FormatError as e:
        click.echo(f'error: {e}', err=True)
        sys.exit(EXIT_FORMAT_ERROR)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.info(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    run()
