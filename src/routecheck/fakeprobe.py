"""
Scripted echo probe, used to drive traces without touching the network.
"""


from collections.abc import Mapping, Sequence

from routecheck.address import Address, parse
from routecheck.errors import ProbeResourceError
from routecheck.probe import EchoProbe, ProbeOutcome

__all__ = ["FakeEchoProbe"]


class FakeEchoProbe(EchoProbe):
    """
    script: dict[ttl] -> address text of the responder at that ttl.
    A ttl missing from the script (or mapped to None) times out.
    """

    def __init__(
            self,
            script: Mapping[int, str | None] | None = None,
            *,
            fail_open: bool = False,
    ) -> None:
        self.script: dict[int, Address | None] = {}
        for ttl, responder in (script or {}).items():
            self.script[ttl] = parse(responder) if responder is not None else None
        self.fail_open = fail_open
        self.calls: list[tuple[Address, int, int]] = []
        self.opened = 0
        self.closed = 0
        self._open = False

    @classmethod
    def path(
            cls,
            hops: Sequence[str | None],
            destination: str | None,
            max_ttl: int = 255,
    ) -> "FakeEchoProbe":
        """
        Build a probe simulating a route: hop n answers ttl n and every ttl
        past the last hop reaches `destination` (None for a silent one).
        """
        script: dict[int, str | None] = {}
        for ttl in range(1, max_ttl + 1):
            script[ttl] = hops[ttl - 1] if ttl <= len(hops) else destination
        return cls(script)

    def open(self) -> None:
        self.opened += 1
        if self.fail_open:
            raise ProbeResourceError("could not open a raw socket: permission denied")
        self._open = True

    def close(self) -> None:
        if self._open:
            self.closed += 1
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def probe(self, dst: Address, ttl: int, timeout: int) -> ProbeOutcome:
        if not self._open:
            raise ProbeResourceError("probe used before it was opened")
        self.calls.append((dst, ttl, timeout))
        responder = self.script.get(ttl)
        if responder is None:
            return ProbeOutcome(False)
        return ProbeOutcome(True, responder)

    @property
    def ttls(self) -> list[int]:
        return [ttl for _, ttl, _ in self.calls]
