"""
Exception hierarchy for iwd-spider.
Every failure surfaced by the entity model, directory or scan pipeline is one of these.
"""

from typing import Optional


class SpiderError(Exception):
    """Base class for all iwd-spider errors."""


class TransportError(SpiderError):
    """The remote channel failed: connection lost, call rejected or reply undecodable."""

    def __init__(self, message: str, remote_name: Optional[str] = None):
        """
        Args:
            message: Human readable description
            remote_name: Remote error name reported by the service, if any
        """
        super().__init__(message)
        self.remote_name = remote_name


class PropertyMissing(TransportError):
    """A requested property is not exposed by the remote object."""


class ValidationError(SpiderError):
    """A local precondition failed before any remote call was made."""


class NoStationsAvailable(SpiderError):
    """No Station objects exist, so nothing can be scanned."""


class NetworkForgottenError(SpiderError):
    """The KnownNetwork has been forgotten and can no longer be used."""

    def __init__(self, message: str = "network has been forgotten"):
        super().__init__(message)


class EntityNotFound(SpiderError):
    """A lookup by name matched no remote object."""


class NestingDepthExceeded(SpiderError):
    """Nested construction went deeper than the fixed interface graph allows."""
