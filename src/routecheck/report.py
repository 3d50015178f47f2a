"""
Turn a trace result into report lines.
"""


from dataclasses import dataclass
from enum import StrEnum

from routecheck.coloring import Color
from routecheck.tracer import NetworkNode, TraceResult

__all__ = ["Status", "ReportLine", "build_report", "format_report", "summary_line"]


class Status(StrEnum):
    REPLIED = "replied"
    NO_REPLY = "no reply"

    @classmethod
    def of(cls, node: NetworkNode) -> "Status":
        return cls.REPLIED if node.responded else cls.NO_REPLY


@dataclass(frozen=True)
class ReportLine:
    section: str
    label: str
    status: Status

    def __str__(self) -> str:
        return f"{self.section}:{self.label}:{self.status}"


def build_report(result: TraceResult) -> list[ReportLine]:
    """
    One line for the destination followed by one line per gateway, in the
    order the gateways were supplied.
    """
    lines = [ReportLine("Destination", result.destination.name,
                        Status.of(result.destination))]
    for gw in result.gateways:
        lines.append(ReportLine("Gateway", gw.name, Status.of(gw)))
    return lines


def format_report(lines: list[ReportLine]) -> str:
    """
    Render report lines, coloring the status if the terminal allows it.
    """
    out = []
    for line in lines:
        color = "green" if line.status is Status.REPLIED else "red"
        out.append(f"{Color.blue(line.section)}:{line.label}:"
                   f"{Color.color(str(line.status), color)}")
    return "\n".join(out)


def summary_line(result: TraceResult) -> str:
    # e.g. "10.0.0.1 completed [GW1=replied, GW2=no reply]"
    gateways = ", ".join(f"{gw.name}={Status.of(gw)}" for gw in result.gateways)
    return f"{result.destination.name} {result.status} [{gateways}]"
