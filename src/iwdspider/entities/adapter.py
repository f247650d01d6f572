"""Adapter snapshot: one physical radio (phy)."""

from typing import Optional, Tuple

from iwdspider.entities.base import Entity


class Adapter(Entity):
    """Snapshot of net.connman.iwd.Adapter. Leaf entity."""

    INTERFACE = "net.connman.iwd.Adapter"

    def _load(self) -> None:
        self._name: str = self._required("Name", str)
        self._model: Optional[str] = self._optional("Model", str)
        self._vendor: Optional[str] = self._optional("Vendor", str)
        self._supported_modes: Tuple[str, ...] = tuple(self._required("SupportedModes", list, str))
        self._powered: bool = self._required("Powered", bool)

    @property
    def name(self) -> str:
        return self._name

    @property
    def model(self) -> Optional[str]:
        return self._model

    @property
    def vendor(self) -> Optional[str]:
        return self._vendor

    @property
    def supported_modes(self) -> Tuple[str, ...]:
        return self._supported_modes

    @property
    def powered(self) -> bool:
        return self._powered

    def set_powered(self, powered: bool) -> None:
        """
        Power the radio on or off.

        Raises:
            TransportError: If the remote write fails; the snapshot is unchanged
        """
        self._set_remote("Powered", bool(powered), "b", "_powered")

    def _repr_fields(self):
        return [
            ("name", self._name),
            ("model", self._model),
            ("vendor", self._vendor),
            ("supported_modes", self._supported_modes),
            ("powered", self._powered),
        ]
