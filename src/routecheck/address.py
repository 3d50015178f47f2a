"""
Parse and format dotted-decimal IPv4 addresses.
"""


import ipaddress
from dataclasses import dataclass

from routecheck.errors import InvalidAddress

__all__ = ["Address", "parse", "format"]


@dataclass(frozen=True, slots=True)
class Address:
    """
    An IPv4 address held as its 4-byte network-order value.
    """

    packed: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.packed, bytes) or len(self.packed) != 4:
            raise InvalidAddress(f"expected 4 bytes, got {self.packed!r}")

    def __str__(self) -> str:
        return format(self)


def parse(text: str, /) -> Address:
    """
    Parse a dotted-decimal IPv4 literal.

    Parameters
    ----------
    text : str
        Address to parse, e.g. '192.168.1.1'.

    Returns
    -------
    Address
        The parsed address.

    Raises
    ------
    InvalidAddress
        When `text` is not a well-formed IPv4 literal.
    """
    if not isinstance(text, str):
        raise InvalidAddress(f"invalid address: {text!r}")
    try:
        # rejects octets out of range, leading zeros and anything that is
        # not exactly four decimal octets
        addr = ipaddress.IPv4Address(text)
    except ValueError:
        raise InvalidAddress(f"invalid address: '{text}'") from None
    return Address(addr.packed)


def format(addr: Address, /) -> str:
    """
    Canonical dotted-decimal form of an address.
    """
    return str(ipaddress.IPv4Address(addr.packed))
