"""AccessPoint snapshot: a Device operating in ap mode."""

from dataclasses import dataclass
from typing import List, Optional

from iwdspider.entities.base import Entity
from iwdspider.entities.station import check_int16


@dataclass(frozen=True)
class AccessPointOrderedNetwork:
    """A network seen by an access point scan."""
    name: str
    signal_strength: int
    security: str


class AccessPoint(Entity):
    """Snapshot of net.connman.iwd.AccessPoint."""

    INTERFACE = "net.connman.iwd.AccessPoint"

    def _load(self) -> None:
        self._started: bool = self._required("Started", bool)
        self._name: Optional[str] = self._optional("Name", str)
        self._frequency: Optional[int] = self._optional("Frequency", int)
        self._pairwise_ciphers: Optional[List[str]] = self._optional("PairwiseCiphers", list, str)
        self._group_cipher: Optional[str] = self._optional("GroupCipher", str)

    @property
    def started(self) -> bool:
        return self._started

    @property
    def name(self) -> Optional[str]:
        """SSID while started."""
        return self._name

    @property
    def frequency(self) -> Optional[int]:
        return self._frequency

    @property
    def pairwise_ciphers(self) -> Optional[List[str]]:
        return self._pairwise_ciphers

    @property
    def group_cipher(self) -> Optional[str]:
        return self._group_cipher

    def _mark_started(self, started: bool) -> None:
        with self._lock:
            self._started = started

    def start(self, ssid: str, psk: str) -> None:
        """Start a WPA2 access point with the given passphrase."""
        self._call_remote("Start", ssid, psk, signature="ss")
        self._mark_started(True)
        self.logger.info(f"Started SSID {ssid}")

    def start_profile(self, ssid: str) -> None:
        """Start an access point from a provisioned profile."""
        self._call_remote("StartProfile", ssid, signature="s")
        self._mark_started(True)
        self.logger.info(f"Profile started SSID {ssid}")

    def stop(self) -> None:
        self._call_remote("Stop")
        self._mark_started(False)
        self.logger.info("Stopped")

    def scan(self) -> None:
        self._call_remote("Scan")
        self.logger.debug("Scanning")

    def get_scanning(self) -> bool:
        return self._required("Scanning", bool)

    def get_ordered_networks(self) -> List[AccessPointOrderedNetwork]:
        reply = self._call_remote("GetOrderedNetworks") or []
        networks = [
            AccessPointOrderedNetwork(name, check_int16(signal_strength, "signal strength"), security)
            for name, signal_strength, security in reply
        ]
        self.logger.debug(f"Found {len(networks)} ordered networks")
        return networks

    def _repr_fields(self):
        return [
            ("name", self._name),
            ("started", self._started),
            ("frequency", self._frequency),
            ("pairwise_ciphers", self._pairwise_ciphers),
            ("group_cipher", self._group_cipher),
        ]
