import json
from pathlib import Path

import pytest

import routecheck.main as cli
from routecheck.configure import configure
from routecheck.fakeprobe import FakeEchoProbe
from routecheck.logrwp import LogRWP


@pytest.fixture
def conf_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    configure(str(tmp_path))
    monkeypatch.setattr(cli, "CONF_PATH", str(tmp_path / "config.json"))
    return tmp_path


@pytest.fixture
def fake(monkeypatch: pytest.MonkeyPatch):
    """
    Replace the scapy probe with a scripted one; set `.probe` before calling
    main.
    """
    class Holder:
        probe = FakeEchoProbe({})

    monkeypatch.setattr(cli, "ScapyEchoProbe", lambda: Holder.probe)
    return Holder


def _exit_code(args: list[str]) -> int | None:
    with pytest.raises(SystemExit) as exc:
        cli.main(args)
    return exc.value.code


def test_no_args_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert _exit_code([]) == 1
    assert "--destination" in capsys.readouterr().out


def test_help_exits_zero(conf_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _exit_code(["-h"]) == 0
    assert "--gateway" in capsys.readouterr().out


def test_unknown_flag_is_usage_error(conf_dir: Path) -> None:
    assert _exit_code(["-d", "10.0.0.1", "--bogus"]) == 1


def test_missing_destination(conf_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _exit_code(["-v"]) == 2
    assert "no destination specified" in capsys.readouterr().err


def test_invalid_destination(conf_dir: Path, fake) -> None:
    assert _exit_code(["-d", "10.0.0.300"]) == 2
    assert fake.probe.calls == []


@pytest.mark.parametrize("args", [
    ["-d", "10.0.0.1", "-t", "0"],
    ["-d", "10.0.0.1", "-t", "300"],
    ["-d", "10.0.0.1", "-w", "-5"],
    ["-d", "10.0.0.1", "-t", "abc"],
])
def test_invalid_trace_parameters(conf_dir: Path, fake, args: list[str]) -> None:
    assert _exit_code(args) == 1
    assert fake.probe.calls == []


def test_completed_trace(conf_dir: Path, fake, capsys: pytest.CaptureFixture[str]) -> None:
    fake.probe = FakeEchoProbe.path(["192.168.1.1", "192.168.1.2"], "10.0.0.1")

    cli.main(["-d", "10.0.0.1", "-g", "GW1=192.168.1.1", "-g", "192.168.1.2",
              "-g", "192.168.1.3", "-t", "5"])

    assert capsys.readouterr().out.splitlines() == [
        "Destination:10.0.0.1:replied",
        "Gateway:GW1:replied",
        "Gateway:192.168.1.2:replied",
        "Gateway:192.168.1.3:no reply",
    ]
    assert fake.probe.ttls == [5, 1, 2, 3, 4]


def test_config_defaults_are_used(conf_dir: Path, fake) -> None:
    fake.probe = FakeEchoProbe.path([], "10.0.0.1")

    cli.main(["-d", "10.0.0.1", "-g", "192.168.1.1"])

    assert fake.probe.ttls == [30] + list(range(1, 30))
    assert {timeout for _, _, timeout in fake.probe.calls} == {10000}


def test_config_max_hops_out_of_range(
        conf_dir: Path,
        fake,
        capsys: pytest.CaptureFixture[str],
) -> None:
    conf_file = conf_dir / "config.json"
    data = json.loads(conf_file.read_text())
    conf_file.write_text(json.dumps(data | {"max_hops": 300}))

    assert _exit_code(["-d", "10.0.0.1"]) == 1
    assert "max hops must be between 1 and 255" in capsys.readouterr().err
    assert fake.probe.calls == []


def test_invalid_gateway_is_ignored(
        conf_dir: Path,
        fake,
        capsys: pytest.CaptureFixture[str],
) -> None:
    fake.probe = FakeEchoProbe.path(["192.168.1.1"], "10.0.0.1")

    cli.main(["-d", "10.0.0.1", "-g", "192.168.1", "-g", "192.168.1.1", "-t", "3"])

    captured = capsys.readouterr()
    assert "gateway address is invalid, ignoring it: 192.168.1" in captured.err
    assert captured.out.splitlines() == [
        "Destination:10.0.0.1:replied",
        "Gateway:192.168.1.1:replied",
    ]


def test_no_gateways(conf_dir: Path, fake, capsys: pytest.CaptureFixture[str]) -> None:
    fake.probe = FakeEchoProbe.path([], "10.0.0.1")

    cli.main(["-d", "10.0.0.1"])

    captured = capsys.readouterr()
    assert "no gateways specified" in captured.err
    assert captured.out.splitlines() == ["Destination:10.0.0.1:replied"]
    assert fake.probe.ttls == [30]


def test_unreachable_destination(
        conf_dir: Path,
        fake,
        capsys: pytest.CaptureFixture[str],
) -> None:
    fake.probe = FakeEchoProbe({})

    assert _exit_code(["-d", "10.0.0.1", "-g", "GW1=192.168.1.1", "-w", "20"]) == 4

    captured = capsys.readouterr()
    assert captured.out.splitlines() == [
        "Destination:10.0.0.1:no reply",
        "Gateway:GW1:no reply",
    ]
    assert "did not reply within 20ms" in captured.err
    assert len(fake.probe.calls) == 1


def test_probe_resource_failure(conf_dir: Path, fake) -> None:
    fake.probe = FakeEchoProbe({}, fail_open=True)
    assert _exit_code(["-d", "10.0.0.1", "-g", "192.168.1.1"]) == 3


def test_verbose_output(conf_dir: Path, fake, capsys: pytest.CaptureFixture[str]) -> None:
    fake.probe = FakeEchoProbe.path([None, "192.168.1.2"], "10.0.0.1")

    cli.main(["-v", "-d", "10.0.0.1", "-g", "GW2=192.168.1.2", "-t", "4"])

    out = capsys.readouterr().out
    assert "destination: 10.0.0.1" in out
    assert "gateway: GW2=192.168.1.2" in out
    assert "ttl: 4" in out
    assert "destination 10.0.0.1 replied" in out
    assert "gateway GW2 replied at hop 2" in out


def test_trace_is_logged(conf_dir: Path, fake, capsys: pytest.CaptureFixture[str]) -> None:
    fake.probe = FakeEchoProbe.path(["192.168.1.1"], "10.0.0.1")

    cli.main(["-d", "10.0.0.1", "-g", "GW1=192.168.1.1", "-t", "3"])

    entries = LogRWP(str(conf_dir / "logs"), "read").read("trace.log")
    assert len(entries) == 1
    assert entries[0].endswith("10.0.0.1 completed [GW1=replied]")

    capsys.readouterr()
    cli.main(["--show-log"])
    assert "10.0.0.1 completed [GW1=replied]" in capsys.readouterr().out


def test_show_config(conf_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["--show-config"])
    out = capsys.readouterr().out
    assert "max_hops: 30" in out
    assert "timeout: 10000" in out


@pytest.mark.parametrize("arg, name, addr", [
    ("192.168.1.1", "192.168.1.1", "192.168.1.1"),
    ("GW1=192.168.1.1", "GW1", "192.168.1.1"),
    ("=192.168.1.1", "192.168.1.1", "192.168.1.1"),
    ("core=gw=10.1.1.1", "core=gw", "10.1.1.1"),
])
def test_parse_gateway(arg: str, name: str, addr: str) -> None:
    gw = cli.parse_gateway(arg)
    assert gw.name == name
    assert str(gw.address) == addr
    assert gw.responded is False
