"""
Station proxy: a Device operating in station (client) mode.

Stations are stateless; every read is a fresh round trip.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from iwdspider.bus.channel import ObjectPath
from iwdspider.constants import INT16_MAX, INT16_MIN
from iwdspider.entities.base import Entity
from iwdspider.entities.basic_service_set import BasicServiceSet
from iwdspider.entities.network import Network
from iwdspider.errors import TransportError, ValidationError


def check_int16(value: int, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not INT16_MIN <= value <= INT16_MAX:
        raise ValidationError(f"{what} {value!r} is not a signed 16-bit integer")
    return value


@dataclass(frozen=True)
class StationOrderedNetwork:
    """A Network paired with its signal strength (100 * dBm) as ranked by a Station."""
    network: Network
    signal_strength: int

    def __post_init__(self):
        check_int16(self.signal_strength, "signal strength")


@dataclass(frozen=True)
class HiddenAccessPoint:
    """An access point that does not broadcast its SSID."""
    address: str
    signal_strength: int
    type: Optional[str] = None


class Station(Entity):
    """Proxy for net.connman.iwd.Station."""

    INTERFACE = "net.connman.iwd.Station"

    def get_state(self) -> str:
        """Connection state, e.g. 'connected', 'disconnected', 'connecting'."""
        return self._required("State", str)

    def get_scanning(self) -> bool:
        return self._required("Scanning", bool)

    def get_connected_network(self) -> Optional[Network]:
        """
        Build a snapshot of the network the station is connected to.

        Returns:
            Network, or None when not connected
        """
        path = self._optional("ConnectedNetwork", ObjectPath)
        if path is None:
            return None
        return self._root(Network, path)

    def get_connected_access_point(self) -> Optional[BasicServiceSet]:
        path = self._optional("ConnectedAccessPoint", ObjectPath)
        if path is None:
            return None
        return self._root(BasicServiceSet, path)

    def _root(self, entity_cls, path):
        # On-demand reads start a new construction chain at depth 1
        try:
            entity = entity_cls.from_path(self._channel, path, self._base_logger)
        except TransportError as e:
            self.logger.error(f"Failed to create {entity_cls.__name__} from {path}: {e}")
            raise
        return entity

    def scan(self) -> None:
        """
        Start a scan unless one is already running.

        Raises:
            TransportError: If the scanning state cannot be read or the scan is rejected
        """
        if self.get_scanning():
            self.logger.info("Station is already scanning")
            return
        self._call_remote("Scan")
        self.logger.debug("Scanning")

    def disconnect(self) -> None:
        self._call_remote("Disconnect")
        self.logger.info("Disconnected")

    def get_ordered_networks(self) -> List[StationOrderedNetwork]:
        """
        Fetch the station's own ranking of visible networks.

        Returns:
            StationOrderedNetwork list in the order the service reported

        Raises:
            TransportError: If the call or any Network construction fails
        """
        reply = self._call_remote("GetOrderedNetworks") or []
        ordered = []
        for path, signal_strength in reply:
            network = self._root(Network, ObjectPath(path))
            ordered.append(StationOrderedNetwork(network, signal_strength))
        self.logger.debug(f"Found {len(ordered)} ordered networks")
        return ordered

    def get_hidden_access_points(self) -> List[HiddenAccessPoint]:
        reply = self._call_remote("GetHiddenAccessPoints") or []
        access_points = []
        for entry in reply:
            address, signal_strength = entry[0], entry[1]
            ap_type = entry[2] if len(entry) > 2 else None
            access_points.append(HiddenAccessPoint(address, check_int16(signal_strength, "signal strength"), ap_type))
        self.logger.debug(f"Found {len(access_points)} hidden access points")
        return access_points

    def connect_hidden_network(self, ssid: str) -> None:
        self._call_remote("ConnectHiddenNetwork", ssid, signature="s")
        self.logger.info(f"Connected to hidden network {ssid}")

    def register_signal_level_agent(self, agent, levels: Sequence[int]) -> None:
        """
        Register a SignalLevelAgent to be told when RSSI crosses the given thresholds.

        Args:
            agent: SignalLevelAgent implementation
            levels: Thresholds in dBm, each a signed 16-bit integer

        Raises:
            ValidationError: If levels is empty or out of range; nothing is sent
            TransportError: If the registration is rejected
        """
        if not levels:
            raise ValidationError("at least one signal level is required")
        levels = [check_int16(level, "signal level") for level in levels]
        self._call_remote("RegisterSignalLevelAgent", ObjectPath(agent.path), levels, signature="oan")
        self.logger.debug(f"Registered SignalLevelAgent {agent.path} with level(s) {levels}")

    def unregister_signal_level_agent(self, agent) -> None:
        self._call_remote("UnregisterSignalLevelAgent", ObjectPath(agent.path), signature="o")
        self.logger.debug(f"Unregistered SignalLevelAgent {agent.path}")
