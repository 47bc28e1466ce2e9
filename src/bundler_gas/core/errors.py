"""
Exception types raised by the gas pricing service.
"""


class GasPricingError(Exception):
    """Base class for gas pricing failures."""


class RpcError(GasPricingError):
    """A JSON-RPC request to the node failed.

    Covers transport errors, HTTP error statuses, undecodable bodies and
    JSON-RPC ``error`` members returned by the node.
    """

    def __init__(self, method: str, message: str, code: int | None = None):
        self.method = method
        self.code = code
        detail = f" (code {code})" if code is not None else ""
        super().__init__(f"{method} failed{detail}: {message}")


class BaselineUnavailableError(GasPricingError):
    """The node's suggested fee could not be fetched or decoded."""
