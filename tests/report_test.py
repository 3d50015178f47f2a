from routecheck.address import parse
from routecheck.report import (ReportLine, Status, build_report, format_report,
                               summary_line)
from routecheck.tracer import NetworkNode, TraceResult, TraceStatus


def _result(dst_replied: bool, gateways: list[tuple[str, bool]]) -> TraceResult:
    return TraceResult(
        NetworkNode("10.0.0.1", parse("10.0.0.1"), dst_replied),
        tuple(NetworkNode(name, parse(f"192.168.1.{i}"), replied)
              for i, (name, replied) in enumerate(gateways, 1)),
        TraceStatus.COMPLETED if dst_replied else TraceStatus.UNREACHABLE,
    )


def test_build_report() -> None:
    lines = build_report(_result(True, [("GW1", True), ("GW2", False)]))

    assert lines == [
        ReportLine("Destination", "10.0.0.1", Status.REPLIED),
        ReportLine("Gateway", "GW1", Status.REPLIED),
        ReportLine("Gateway", "GW2", Status.NO_REPLY),
    ]
    assert [str(line) for line in lines] == [
        "Destination:10.0.0.1:replied",
        "Gateway:GW1:replied",
        "Gateway:GW2:no reply",
    ]


def test_build_report_unreachable() -> None:
    lines = build_report(_result(False, [("GW1", False)]))
    assert [str(line) for line in lines] == [
        "Destination:10.0.0.1:no reply",
        "Gateway:GW1:no reply",
    ]


def test_build_report_without_gateways() -> None:
    assert [str(line) for line in build_report(_result(True, []))] == [
        "Destination:10.0.0.1:replied",
    ]


def test_format_report_plain() -> None:
    # captured stdout is not a tty, so no escape codes are emitted
    lines = build_report(_result(True, [("GW1", False)]))
    assert format_report(lines) == ("Destination:10.0.0.1:replied\n"
                                    "Gateway:GW1:no reply")


def test_summary_line() -> None:
    assert summary_line(_result(True, [("GW1", True), ("GW2", False)])) == \
        "10.0.0.1 completed [GW1=replied, GW2=no reply]"
    assert summary_line(_result(False, [])) == "10.0.0.1 unreachable []"
