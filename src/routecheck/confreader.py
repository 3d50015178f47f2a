"""
Config file reader.
"""


import json
from pathlib import Path
from typing import Any

from routecheck.coloring import Color
from routecheck.configure import default_config
from routecheck.exitcode import ExitCode
from routecheck.printing import eprint

__all__ = ["ConfReader"]


class ConfReader:
    """
    Config file reader.
    """

    def __init__(self, file: str, /) -> None:
        self._file = Path(file).expanduser().resolve()
        if not self._file.exists():
            eprint(f"supplied config path does not exist: {self._file}",
                   precedence="error: confreader", exit_code=ExitCode.USAGE)

        self._data: dict[str, Any] = {}

    def read(self) -> dict[str, Any]:
        """
        Read the contents of the config file. Keys missing from the file
        take their default values.

        Returns
        -------
        dict[str, Any]
            The contents of the config file.
        """
        with self._file.open("r") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                eprint(f"malformed config file {self._file}: {e}",
                       precedence="error: confreader", exit_code=ExitCode.USAGE)

        if not isinstance(data, dict):
            eprint(f"config file {self._file} must hold a JSON object",
                   precedence="error: confreader", exit_code=ExitCode.USAGE)

        self._data = default_config(str(self._file.parent)) | data
        return self._data

    def print(self) -> None:
        """
        Print the contents of the config file.
        """
        print(f"path: {Color.blue(str(self._file))}", end="\n\n")
        for key, value in self._data.items():
            print(f"{Color.cyan(key)}: {Color.green(json.dumps(value))}")
