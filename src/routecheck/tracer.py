"""
Check that a destination answers and find which gateways lie on the path to it.
"""


from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from enum import StrEnum

from routecheck.address import Address
from routecheck.errors import InvalidConfig
from routecheck.probe import EchoProbe, ProbeOutcome

__all__ = [
    "ProbeConfig",
    "NetworkNode",
    "TraceStatus",
    "HopEvent",
    "TraceResult",
    "RouteTracer",
]


# the IPv4 TTL field is a single byte
MAX_TTL = 255


@dataclass(frozen=True)
class ProbeConfig:
    max_hops: int = 30
    # milliseconds
    timeout: int = 10000

    def __post_init__(self) -> None:
        if isinstance(self.max_hops, bool) or not isinstance(self.max_hops, int):
            raise InvalidConfig(f"max hops must be an integer, got {self.max_hops!r}")
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, int):
            raise InvalidConfig(f"timeout must be an integer, got {self.timeout!r}")
        if not 1 <= self.max_hops <= MAX_TTL:
            raise InvalidConfig(f"max hops must be between 1 and {MAX_TTL}, "
                                f"got {self.max_hops}")
        if self.timeout < 0:
            raise InvalidConfig(f"timeout must not be negative, got {self.timeout}")


@dataclass(frozen=True)
class NetworkNode:
    """
    The destination or a gateway of interest.

    Nodes are equal as network locations when their addresses are equal;
    `name` is only used for display. `hop` is the first ttl a gateway was
    seen at.
    """

    name: str
    address: Address
    responded: bool = False
    hop: int | None = None


class TraceStatus(StrEnum):
    COMPLETED = "completed"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class HopEvent:
    ttl: int
    responder: Address | None
    matched: tuple[NetworkNode, ...] = ()
    destination_probe: bool = False


@dataclass(frozen=True)
class TraceResult:
    destination: NetworkNode
    gateways: tuple[NetworkNode, ...] = field(default_factory=tuple)
    status: TraceStatus = TraceStatus.COMPLETED

    @property
    def reachable(self) -> bool:
        return self.destination.responded


@dataclass
class _GatewayState:
    node: NetworkNode
    responded: bool = False
    hop: int | None = None

    def snapshot(self) -> NetworkNode:
        return replace(self.node, responded=self.responded, hop=self.hop)


class RouteTracer:
    """
    Probe a destination once at full distance, then sweep the ttl from 1 to
    `max_hops - 1` and record which gateways answered along the way.

    The tracer owns the probe resource for the duration of `trace()`: it is
    opened before the first probe and closed on every exit path.
    """

    def __init__(
            self,
            probe: EchoProbe,
            callback: Callable[[HopEvent], None] | None = None,
    ) -> None:
        self.probe = probe
        self.callback = callback

    def _emit(self, event: HopEvent) -> None:
        if self.callback:
            self.callback(event)

    def trace(
            self,
            destination: NetworkNode,
            gateways: Sequence[NetworkNode],
            config: ProbeConfig,
    ) -> TraceResult:
        """
        Run one trace.

        Parameters
        ----------
        destination : NetworkNode
            Node to trace the route to.

        gateways : Sequence[NetworkNode]
            Gateways to look for on the path. Their order is kept in the
            result.

        config : ProbeConfig
            Hop bound and per-probe timeout.

        Returns
        -------
        TraceResult
            Final state of the destination and of every gateway.

        Raises
        ------
        ProbeResourceError
            When the probe resource cannot be acquired. No partial result is
            produced.
        """
        if not isinstance(config, ProbeConfig):
            raise InvalidConfig(f"expected ProbeConfig, got {type(config).__name__}")

        states = [_GatewayState(gw) for gw in gateways]

        with self.probe:
            outcome = self.probe.probe(destination.address, config.max_hops,
                                       config.timeout)
            self._emit(HopEvent(config.max_hops, outcome.responder,
                                destination_probe=True))

            if not outcome.replied:
                return TraceResult(
                    replace(destination, responded=False),
                    tuple(s.snapshot() for s in states),
                    TraceStatus.UNREACHABLE,
                )

            dst = replace(destination, responded=True)

            if not states:
                return TraceResult(dst)

            # every ttl short of the destination probe is visited, even once
            # all gateways have been matched
            for ttl in range(1, config.max_hops):
                outcome = self.probe.probe(destination.address, ttl,
                                           config.timeout)
                matched = self._match(states, outcome, ttl)
                self._emit(HopEvent(ttl, outcome.responder, matched))

        return TraceResult(dst, tuple(s.snapshot() for s in states))

    @staticmethod
    def _match(
            states: list[_GatewayState],
            outcome: ProbeOutcome,
            ttl: int,
    ) -> tuple[NetworkNode, ...]:
        if not outcome.replied or outcome.responder is None:
            return ()

        matched = []
        for state in states:
            if state.responded:
                continue
            if state.node.address == outcome.responder:
                state.responded = True
                state.hop = ttl
                matched.append(state.snapshot())
        return tuple(matched)
