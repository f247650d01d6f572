"""Typed snapshot entities for every iwd interface."""

from .base import Entity
from .adapter import Adapter
from .device import Device
from .basic_service_set import BasicServiceSet
from .known_network import KnownNetwork, KnownNetworkState
from .network import Network
from .station import HiddenAccessPoint, Station, StationOrderedNetwork
from .access_point import AccessPoint, AccessPointOrderedNetwork
from .adhoc import AdHoc
from .station_diagnostic import StationDiagnostic
from .agent_manager import AgentManager

__all__ = [
    'Entity',
    'Adapter',
    'Device',
    'BasicServiceSet',
    'KnownNetwork',
    'KnownNetworkState',
    'Network',
    'Station',
    'StationOrderedNetwork',
    'HiddenAccessPoint',
    'AccessPoint',
    'AccessPointOrderedNetwork',
    'AdHoc',
    'StationDiagnostic',
    'AgentManager',
]
