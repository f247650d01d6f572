"""Network snapshot: a visible network as seen through one Device."""

from typing import List, Optional

from iwdspider.bus.channel import ObjectPath
from iwdspider.entities.base import Entity
from iwdspider.entities.basic_service_set import BasicServiceSet
from iwdspider.entities.device import Device
from iwdspider.entities.known_network import KnownNetwork


class Network(Entity):
    """
    Snapshot of net.connman.iwd.Network.

    Owns independent copies of its Device (and that Device's Adapter), its
    KnownNetwork when the network is known, and the BasicServiceSets that
    make up its extended service set.
    """

    INTERFACE = "net.connman.iwd.Network"

    def _load(self) -> None:
        self._name: str = self._required("Name", str)
        self._connected: bool = self._required("Connected", bool)
        self._device: Device = self._nested(Device, self._required("Device", ObjectPath))
        self._type: str = self._required("Type", str)

        known_path = self._optional("KnownNetwork", ObjectPath)
        self._known_network: Optional[KnownNetwork] = (
            self._nested(KnownNetwork, known_path) if known_path is not None else None)

        bss_paths = self._optional("ExtendedServiceSet", list, str)
        self._extended_service_set: Optional[List[BasicServiceSet]] = None
        if bss_paths is not None:
            self._extended_service_set = [self._nested(BasicServiceSet, p) for p in bss_paths]

    @property
    def name(self) -> str:
        return self._name

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def device(self) -> Device:
        return self._device

    @property
    def type(self) -> str:
        """Security type tag, e.g. 'open', 'psk' or '8021x'."""
        return self._type

    @property
    def known_network(self) -> Optional[KnownNetwork]:
        return self._known_network

    @property
    def extended_service_set(self) -> Optional[List[BasicServiceSet]]:
        return self._extended_service_set

    def connect(self) -> None:
        """
        Connect to this network. Credentials are requested through the registered Agent.

        Raises:
            TransportError: If the remote call fails; the snapshot is unchanged
        """
        self._call_remote("Connect")
        with self._lock:
            self._connected = True
        self.logger.info(f"Connected to {self._name}")

    def _repr_fields(self):
        return [
            ("name", self._name),
            ("type", self._type),
            ("connected", self._connected),
            ("device", self._device),
            ("known_network", self._known_network),
            ("extended_service_set", self._extended_service_set),
        ]
