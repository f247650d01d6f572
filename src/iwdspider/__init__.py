"""Client-side object model and scan/rank tooling for the iwd wireless daemon."""

__version__ = "0.3.0"

from iwdspider.directory import ServiceDirectory, ServiceState
from iwdspider.errors import (
    EntityNotFound,
    NestingDepthExceeded,
    NetworkForgottenError,
    NoStationsAvailable,
    PropertyMissing,
    SpiderError,
    TransportError,
    ValidationError,
)
from iwdspider.scan import rank_networks, scan_for_networks

__all__ = [
    '__version__',
    'ServiceDirectory',
    'ServiceState',
    'rank_networks',
    'scan_for_networks',
    'SpiderError',
    'TransportError',
    'PropertyMissing',
    'ValidationError',
    'NoStationsAvailable',
    'NetworkForgottenError',
    'EntityNotFound',
    'NestingDepthExceeded',
]
