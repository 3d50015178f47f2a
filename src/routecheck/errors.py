"""
Errors raised by routecheck.
"""


__all__ = [
    "RouteCheckError",
    "InvalidAddress",
    "InvalidConfig",
    "ProbeResourceError",
]


class RouteCheckError(Exception):
    """
    Base class for all routecheck errors.
    """

    def __init__(self, message: str, /) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidAddress(RouteCheckError):
    """
    Raised when a string is not a well-formed dotted-decimal IPv4 address.
    """


class InvalidConfig(RouteCheckError):
    """
    Raised when trace parameters are out of range.
    """


class ProbeResourceError(RouteCheckError):
    """
    Raised when the resource used to send echo probes cannot be acquired.
    """
