"""
KnownNetwork snapshot and its forget lifecycle.

A known network starts ACTIVE. forget() moves it to FORGOTTEN only after the
remote Forget call succeeds. FORGOTTEN is terminal: every accessor and
mutator raises NetworkForgottenError without touching the bus.
"""

from enum import Enum
from typing import Optional

from iwdspider.entities.base import Entity
from iwdspider.errors import NetworkForgottenError


class KnownNetworkState(Enum):
    """Lifecycle states of a KnownNetwork."""
    ACTIVE = "active"
    FORGOTTEN = "forgotten"   # Terminal


class KnownNetwork(Entity):
    """Snapshot of net.connman.iwd.KnownNetwork."""

    INTERFACE = "net.connman.iwd.KnownNetwork"

    def _load(self) -> None:
        self._state = KnownNetworkState.ACTIVE
        self._name: str = self._required("Name", str)
        self._type: str = self._required("Type", str)
        self._hidden: bool = self._required("Hidden", bool)
        self._last_connected_time: Optional[str] = self._optional("LastConnectedTime", str)
        self._auto_connect: bool = self._required("AutoConnect", bool)

    @property
    def state(self) -> KnownNetworkState:
        return self._state

    @property
    def forgotten(self) -> bool:
        return self._state is KnownNetworkState.FORGOTTEN

    def _ensure_active(self) -> None:
        if self.forgotten:
            self.logger.error(f"Network {self._name} has been forgotten")
            raise NetworkForgottenError(f"network {self._name} has been forgotten")

    @property
    def name(self) -> str:
        self._ensure_active()
        return self._name

    @property
    def type(self) -> str:
        self._ensure_active()
        return self._type

    @property
    def hidden(self) -> bool:
        self._ensure_active()
        return self._hidden

    @property
    def last_connected_time(self) -> Optional[str]:
        """ISO 8601 timestamp of the last connection, None if never connected."""
        self._ensure_active()
        return self._last_connected_time

    @property
    def auto_connect(self) -> bool:
        self._ensure_active()
        return self._auto_connect

    def set_auto_connect(self, auto_connect: bool) -> None:
        """
        Enable or disable automatic connection.

        Raises:
            NetworkForgottenError: If the network was forgotten
            TransportError: If the remote write fails; the snapshot is unchanged
        """
        self._ensure_active()
        self._set_remote("AutoConnect", bool(auto_connect), "b", "_auto_connect")

    def forget(self) -> None:
        """
        Ask the service to delete this network profile and tombstone the snapshot.

        Raises:
            NetworkForgottenError: If the network was already forgotten
            TransportError: If the remote call fails; the network stays ACTIVE
        """
        # Concurrent callers send Forget at most once
        with self._lock:
            self._ensure_active()
            self._call_remote("Forget")
            self._state = KnownNetworkState.FORGOTTEN
        self.logger.info(f"Forgot network {self._name}")

    def _repr_fields(self):
        return [
            ("name", self._name),
            ("type", self._type),
            ("hidden", self._hidden),
            ("last_connected_time", self._last_connected_time),
            ("auto_connect", self._auto_connect),
            ("state", self._state.value),
        ]
