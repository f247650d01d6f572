"""Device snapshot: a network interface (wlan0) bound to an Adapter."""

from typing import Tuple

from iwdspider.bus.channel import ObjectPath
from iwdspider.constants import DEVICE_MODES
from iwdspider.entities.adapter import Adapter
from iwdspider.entities.base import Entity
from iwdspider.errors import ValidationError


class Device(Entity):
    """Snapshot of net.connman.iwd.Device with an owned Adapter copy."""

    INTERFACE = "net.connman.iwd.Device"

    def _load(self) -> None:
        self._name: str = self._required("Name", str)
        self._address: str = self._required("Address", str)
        self._powered: bool = self._required("Powered", bool)
        self._adapter: Adapter = self._nested(Adapter, self._required("Adapter", ObjectPath))
        self._mode: str = self._required("Mode", str)

    @property
    def name(self) -> str:
        return self._name

    @property
    def address(self) -> str:
        """Hardware (MAC) address."""
        return self._address

    @property
    def powered(self) -> bool:
        return self._powered

    @property
    def adapter(self) -> Adapter:
        return self._adapter

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def supported_modes(self) -> Tuple[str, ...]:
        return DEVICE_MODES

    def set_powered(self, powered: bool) -> None:
        """
        Bring the interface up or down.

        Raises:
            TransportError: If the remote write fails; the snapshot is unchanged
        """
        self._set_remote("Powered", bool(powered), "b", "_powered")

    def set_mode(self, mode: str) -> None:
        """
        Switch the operating mode.

        Args:
            mode: One of supported_modes

        Raises:
            ValidationError: If mode is not supported; nothing is sent
            TransportError: If the remote write fails; the snapshot is unchanged
        """
        if mode not in self.supported_modes:
            message = f"invalid mode {mode!r}; valid modes are {list(self.supported_modes)}"
            self.logger.error(message)
            raise ValidationError(message)
        self._set_remote("Mode", mode, "s", "_mode")

    def _repr_fields(self):
        return [
            ("name", self._name),
            ("address", self._address),
            ("powered", self._powered),
            ("mode", self._mode),
            ("adapter", self._adapter),
        ]
