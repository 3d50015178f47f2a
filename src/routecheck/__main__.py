from routecheck.configure import configure, is_configured

if not is_configured():
    configure()

import platform
import sys


def routecheck_entry() -> None:
    from routecheck.printing import eprint, wprint

    supported_platforms = ["Linux", "Darwin"]
    current_platform = platform.system()
    if current_platform not in supported_platforms:
        wprint(f"routecheck has not been tested on '{current_platform}'")

    python_version = sys.version.split()[0]
    if sys.version_info < (3, 12):
        eprint(f"routecheck requires python 3.12+, used version {python_version}")

    from routecheck.main import main
    main(sys.argv[1:])


if __name__ == "__main__":
    routecheck_entry()
