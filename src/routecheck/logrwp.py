"""
Read, write, print the trace log.
"""


import datetime
from pathlib import Path
from typing import Literal

from routecheck.coloring import Color

__all__ = ["LogRWP"]


class LogRWP:
    """
    Read, write, print log files kept in a single directory.
    """

    def __init__(self, path: str, mode: Literal["read", "write"], /) -> None:
        self._logdir_path = Path(path).expanduser().resolve()
        self._mode = mode

    def read(self, name: str, /) -> list[str]:
        """
        Read the entries of a log file.

        Parameters
        ----------
        name : str
            File from which to read the entries.

        Returns
        -------
        list[str]
            The entries, oldest first. Empty if the file does not exist or
            the log was not opened for reading.
        """
        if self._mode != "read":
            return []

        fpath = self._logdir_path / name

        if not fpath.is_file():
            return []

        with fpath.open("r") as f:
            return [line.rstrip("\n") for line in f if line.strip()]

    def write(self, name: str, msg: str, /) -> int:
        """
        Append a timestamped message to a log file.

        Parameters
        ----------
        name : str
            File to which write a message.

        msg : str
            Message to write.

        Returns
        -------
        int
            The number of characters written, or -1 if the file does not
            exist.
        """
        if self._mode != "write":
            return 0

        fpath = self._logdir_path / name

        if not fpath.is_file():
            return -1

        datefmt = datetime.datetime.today().strftime("%Y-%m-%d %I:%M:%S %p")
        fmt = f"[{datefmt}]: {msg}\n"

        with fpath.open("a+") as f:
            return f.write(fmt)

    def print(self, name: str, /) -> None:
        """
        Print the contents of a log file.
        """
        entries = self.read(name)

        if not entries:
            print("there's nothing to print")
            return

        for line in entries:
            date, _, msg = line.partition(": ")
            print(f"{Color.yellow(date)}: {msg}")
