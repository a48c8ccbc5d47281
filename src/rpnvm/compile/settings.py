from pathlib import Path


DEFAULT_OUTPUT = Path('out.bin')


class CompileSettings:
    verbose: bool
    output: Path

    def __init__(self):
        self.verbose = False
        self.output = DEFAULT_OUTPUT

    def update(
        self,
        verbose: bool | None = None,
        output: Path | None = None
    ):
        if verbose is not None:
            self.verbose = verbose

        if output is not None:
            self.output = output

        return self
