"""
Check the route to a destination and report which of the specified gateways
were encountered on the way.
"""


import signal
import sys
from types import FrameType
from typing import Final

from routecheck.address import parse
from routecheck.coloring import Color, disable_colors
from routecheck.configure import DEFAULT_CONF_DIR
from routecheck.confreader import ConfReader
from routecheck.errors import InvalidAddress, InvalidConfig, ProbeResourceError
from routecheck.exitcode import ExitCode
from routecheck.flag import FlagParser, OptionFlag
from routecheck.logrwp import LogRWP
from routecheck.printing import eprint, iprint, wprint
from routecheck.probe import ScapyEchoProbe
from routecheck.report import build_report, format_report, summary_line
from routecheck.tracer import (HopEvent, NetworkNode, ProbeConfig, RouteTracer,
                               TraceResult, TraceStatus)

__all__ = ["main", "parse_gateway"]


_NAME: Final = "routecheck"
_VERSION: Final = "1.0.0"

CONF_PATH = f"{DEFAULT_CONF_DIR}/config.json"
LOG_NAME: Final = "trace.log"


def _error(message: str, code: ExitCode) -> None:
    precedence = (f"{Color.red(Color.bold('error'))}: "
                  f"{Color.red(Color.bold('routecheck'))}")
    eprint(message, exit_code=code, precedence=precedence)


def _signal_handler(signum: int, frame: FrameType | None) -> None:
    if signum == signal.SIGINT:
        sys.exit(ExitCode.SUCCESS.value)


def parse_gateway(arg: str, /) -> NetworkNode:
    """
    Parse a gateway argument, either 'ADDRESS' or 'LABEL=ADDRESS'.

    Raises
    ------
    InvalidAddress
        When the address part is malformed.
    """
    label, _, text = arg.rpartition("=")
    return NetworkNode(label or text, parse(text))


ROUTECHECK_FLAGS: Final = {
    "destination": OptionFlag(
        short="-d",
        long="--destination",
        help="destination we are trying to examine",
        type=str,
        default=None,
        metavar="<ip>",
    ),
    "gateways": OptionFlag(
        short="-g",
        long="--gateway",
        help="gateway or intermediate hop we are interested in. May be given "
             "more than once, optionally labelled as LABEL=IP",
        action="append",
        type=str,
        default=None,
        metavar="<ip>",
    ),
    "max_hops": OptionFlag(
        short="-t",
        long="--ttl",
        help="maximum hops to allow the trace to run (default: 30)",
        type=int,
        default=None,
        metavar="<hops>",
    ),
    "timeout": OptionFlag(
        short="-w",
        long="--timeout",
        help="maximum time in milliseconds to wait for each reply "
             "(default: 10000)",
        type=int,
        default=None,
        metavar="<ms>",
    ),
    "verbose": OptionFlag(
        short="-v",
        long="--verbose",
        help="verbose output to screen",
        action="store_true",
        default=False,
    ),
    "no_color": OptionFlag(
        long="--no-color",
        help="disable colors",
        action="store_true",
        default=False,
    ),
    "show_config": OptionFlag(
        long="--show-config",
        help="show the contents of the config file and exit",
        action="store_true",
        default=False,
    ),
    "show_log": OptionFlag(
        long="--show-log",
        help="show previous trace results and exit",
        action="store_true",
        default=False,
    ),
    "version": OptionFlag(
        long="--version",
        help="show the version and exit",
        action="version",
        version=f"{_NAME} {_VERSION}",
    ),
}


def _verbose_printer(destination: NetworkNode, timeout: int):
    def _print_event(event: HopEvent) -> None:
        if event.destination_probe:
            if event.responder is not None:
                iprint(f"destination {destination.name} replied")
            else:
                iprint(f"destination {destination.name} did not reply "
                       f"within {timeout}ms")
            return

        for gw in event.matched:
            iprint(f"gateway {gw.name} replied at hop {event.ttl}")

    return _print_event


def _log_result(conf_data: dict, result: TraceResult) -> None:
    if not conf_data["log"]:
        return
    log = LogRWP(conf_data["log_dir"], "write")
    if log.write(LOG_NAME, summary_line(result)) < 0:
        wprint(f"trace log does not exist: {conf_data['log_dir']}/{LOG_NAME}")


def main(args: list[str]) -> None:
    parser = FlagParser(
        prog=_NAME,
        description="check the route to a destination and report which of the "
                    "specified gateways were encountered",
        epilog=f"{_NAME} exits with 0 on success and prints a report to the "
               "screen",
    )
    parser.add_arguments(ROUTECHECK_FLAGS)

    if len(args) == 0:
        parser.print_help()
        sys.exit(ExitCode.USAGE.value)

    conf = ConfReader(CONF_PATH)
    conf_data = conf.read()

    if not conf_data["colors"]:
        disable_colors()

    flags = parser.parse_args(args)

    if flags.no_color:
        disable_colors()

    if flags.show_config:
        conf.print()
        return

    if flags.show_log:
        LogRWP(conf_data["log_dir"], "read").print(LOG_NAME)
        return

    # Destination
    if flags.destination is None:
        _error("no destination specified", ExitCode.NO_DESTINATION)

    if flags.verbose:
        iprint(f"destination: {flags.destination}")

    try:
        destination = NetworkNode(flags.destination, parse(flags.destination))
    except InvalidAddress:
        _error(f"destination address is invalid: {flags.destination}",
               ExitCode.NO_DESTINATION)

    # Gateways; malformed ones are left out of the trace
    gateways: list[NetworkNode] = []
    for arg in flags.gateways or []:
        if flags.verbose:
            iprint(f"gateway: {arg}")
        try:
            gateways.append(parse_gateway(arg))
        except InvalidAddress:
            wprint(f"gateway address is invalid, ignoring it: {arg}")

    if not gateways:
        wprint("no gateways specified, only checking that the destination "
               "replies")

    # Trace parameters; flags take precedence over the config file
    max_hops = flags.max_hops if flags.max_hops is not None else conf_data["max_hops"]
    timeout = flags.timeout if flags.timeout is not None else conf_data["timeout"]

    try:
        config = ProbeConfig(max_hops, timeout)
    except InvalidConfig as e:
        _error(str(e), ExitCode.USAGE)

    if flags.verbose:
        iprint(f"ttl: {config.max_hops}")
        iprint(f"timeout: {config.timeout}ms")

    # We use signals directly because scapy does not always react to
    # keyboard interrupts while waiting for a reply
    signal.signal(signal.SIGINT, _signal_handler)

    tracer = RouteTracer(
        ScapyEchoProbe(),
        callback=_verbose_printer(destination, config.timeout) if flags.verbose else None,
    )

    try:
        result = tracer.trace(destination, gateways, config)
    except ProbeResourceError as e:
        _error(str(e), ExitCode.PROBE_RESOURCE)

    _log_result(conf_data, result)

    print(format_report(build_report(result)))

    if result.status is TraceStatus.UNREACHABLE:
        _error(f"destination {destination.name} did not reply within "
               f"{config.timeout}ms", ExitCode.UNREACHABLE)
