"""
Send a single TTL-bounded ICMP echo request and wait for whoever answers it.
"""


import secrets
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from types import TracebackType
from typing import Any, Final, Self

from routecheck.address import Address, parse
from routecheck.errors import ProbeResourceError
from routecheck.exitcode import ExitCode
from routecheck.printing import eprint

try:
    import logging
    logging.getLogger("scapy.runtime").setLevel(logging.ERROR)

    from scapy.config import conf
    from scapy.error import Scapy_Exception
    from scapy.layers.inet import ICMP, IP
    from scapy.packet import Packet, Raw
except ModuleNotFoundError:
    eprint("scapy is not installed. Install scapy and try again: "
           "'python3 -m pip install scapy'", exit_code=ExitCode.PROBE_RESOURCE)

__all__ = ["ProbeOutcome", "EchoProbe", "ScapyEchoProbe"]


@dataclass(frozen=True)
class ProbeOutcome:
    replied: bool
    responder: Address | None = None


class EchoProbe(ABC):
    """
    A resource able to send echo requests with a bounded TTL.

    The resource is acquired with `open()` (or by entering the probe as a
    context manager) and released with `close()`. `probe()` may only be
    called while the resource is open.
    """

    @abstractmethod
    def open(self) -> None:
        """
        Acquire the underlying resource.

        Raises
        ------
        ProbeResourceError
            When the resource cannot be acquired.
        """

    @abstractmethod
    def close(self) -> None:
        """
        Release the underlying resource. Closing twice is a no-op.
        """

    @abstractmethod
    def probe(self, dst: Address, ttl: int, timeout: int) -> ProbeOutcome:
        """
        Send one echo request to `dst` and wait at most `timeout`
        milliseconds for a reply.

        Parameters
        ----------
        dst : Address
            Destination of the echo request.

        ttl : int
            Time to live of the request.

        timeout : int
            Time (in milliseconds) to wait for a reply.

        Returns
        -------
        ProbeOutcome
            Whether anything replied and, if so, the address it replied from.
        """

    def __enter__(self) -> Self:
        self.open()
        return self

    def __exit__(
            self,
            exc_type: type[BaseException] | None,
            exc_val: BaseException | None,
            exc_tb: TracebackType | None,
    ) -> None:
        self.close()


# echo reply, destination unreachable, time exceeded
_REPLY_FILTER: Final = "icmp and (icmp[0]=0 or icmp[0]=3 or icmp[0]=11)"


class ScapyEchoProbe(EchoProbe):
    """
    Echo probe built on a scapy layer 3 socket.

    The socket is opened once per trace. Opening it needs raw socket
    privileges (root or CAP_NET_RAW).
    """

    def __init__(
            self,
            payload: bytes = b"\x2a",
            df: bool = True,
            socket_factory: Callable[..., Any] | None = None,
    ) -> None:
        self.payload = payload
        self.df = df
        self._socket_factory = socket_factory
        self._sock: Any | None = None
        self._id = secrets.randbelow(0xffff)
        self._seq = 0

    def open(self) -> None:
        if self._sock is not None:
            return
        factory = self._socket_factory or conf.L3socket
        try:
            self._sock = factory(filter=_REPLY_FILTER)
        except PermissionError as e:
            raise ProbeResourceError(
                "could not open a raw socket: permission denied. Run as root "
                "or grant CAP_NET_RAW") from e
        except (OSError, Scapy_Exception) as e:
            raise ProbeResourceError(f"could not open a raw socket: {e}") from e

    def close(self) -> None:
        if self._sock is None:
            return
        try:
            self._sock.close()
        finally:
            self._sock = None

    def _build_packet(self, dst: Address, ttl: int) -> Packet:
        self._seq = (self._seq + 1) & 0xffff
        ip = IP(
            id=secrets.randbelow(0xffff),
            flags="DF" if self.df else 0,
            ttl=ttl,
            dst=str(dst),
        )
        return ip / ICMP(type=8, code=0, id=self._id, seq=self._seq) / Raw(self.payload)

    def probe(self, dst: Address, ttl: int, timeout: int) -> ProbeOutcome:
        if self._sock is None:
            raise ProbeResourceError("probe used before it was opened")

        pkt = self._build_packet(dst, ttl)
        rec = self._sock.sr1(pkt, timeout=timeout / 1000, verbose=False)

        if rec is None or IP not in rec:
            return ProbeOutcome(False)
        return ProbeOutcome(True, parse(rec[IP].src))
