import sys

from routecheck.coloring import Color
from routecheck.exitcode import ExitCode

__all__ = ["eprint", "wprint", "iprint"]


def eprint(
        msg: str,
        /,
        *,
        terminate: bool = True,
        exit_code: int | ExitCode = ExitCode.USAGE,
        flush: bool = False,
        precedence: str = "error",
        end: str = "\n",
) -> None:
    """
    Print an error message to stderr and exit the program if needed.
    """
    if not msg:
        return
    sys.stderr.write(f"{Color.red(Color.bold(f'{precedence}'))}: {msg}{end}")
    if flush:
        sys.stderr.flush()
    if terminate:
        if isinstance(exit_code, ExitCode):
            exit_code = exit_code.value
        sys.exit(exit_code)


def wprint(
        msg: str,
        /,
        *,
        flush: bool = False,
        precedence: str = "warning",
        end: str = "\n",
) -> None:
    """
    Print a warning message to stderr.
    """
    if not msg:
        return
    sys.stderr.write(f"{Color.yellow(Color.bold(f'{precedence}'))}: {msg}{end}")
    if flush:
        sys.stderr.flush()


def iprint(msg: str, /, *, precedence: str = "routecheck", end: str = "\n") -> None:
    """
    Print an informational (verbose) message to stdout.
    """
    print(f"{Color.cyan(precedence)}: {msg}", end=end, flush=True)
