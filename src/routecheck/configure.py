import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Literal

__all__ = ["DEFAULT_CONF_DIR", "default_config", "configure", "is_configured"]


DEFAULT_CONF_DIR: Final = "~/.config/routecheck"


def is_configured(dest_dir: str | None = None) -> bool:
    if dest_dir is None:
        dest_dir = DEFAULT_CONF_DIR
    return Path(f"{dest_dir}/.routecheckcfgok").expanduser().resolve().exists()


@dataclass(frozen=True)
class _PathSpec:
    path: str
    type: Literal["dir", "file"]


def default_config(dest_dir: str = DEFAULT_CONF_DIR) -> dict[str, Any]:
    return {
        "max_hops": 30,
        "timeout": 10000,
        "colors": True,
        "log": True,
        "log_dir": f"{dest_dir}/logs",
    }


def configure(dest_dir: str | None = None) -> None:
    if dest_dir is None:
        dest_dir = DEFAULT_CONF_DIR

    # Create the destination directory (and its parents) if it doesn't exist
    Path(dest_dir).expanduser().resolve().mkdir(mode=0o755, parents=True,
                                                exist_ok=True)

    # Directories/files to populate
    paths = [
        _PathSpec(f"{dest_dir}/config.json", "file"),
        _PathSpec(f"{dest_dir}/logs/", "dir"),
        _PathSpec(f"{dest_dir}/logs/trace.log", "file"),
    ]

    for path in paths:
        if path.type == "dir":
            Path(path.path).expanduser().resolve().mkdir(mode=0o755, exist_ok=True)
        else:
            Path(path.path).expanduser().resolve().touch(mode=0o644, exist_ok=True)

    # Write config file
    with Path(f"{dest_dir}/config.json").expanduser().resolve().open("w") as f:
        json_object = json.dumps(default_config(dest_dir), indent=2)
        f.write(json_object)

    Path(f"{dest_dir}/.routecheckcfgok").expanduser().resolve().touch(mode=0o644,
                                                                     exist_ok=True)
