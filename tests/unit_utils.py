from pathlib import Path

import rpnvm.common.isa as isa
import rpnvm.compile.encoder as encoder
import rpnvm.runtime.emulator as emulator


def find_file(filename: str) -> Path:
    return Path(__file__).parent / filename


def load_file(filename: str) -> str:
    return find_file(filename).read_text()


def compile_rpn(name: str) -> bytes:
    return encoder.compile_source(load_file(f'testdata/rpn/{name}.rpn'))


def execute_source(text: str, trace=None):
    return emulator.execute(encoder.compile_source(text), trace)


def execute_words(words: list[int], trace=None):
    return emulator.execute(isa.pack_words(words), trace)
