"""BasicServiceSet snapshot: one access point radio behind a Network."""

from iwdspider.entities.base import Entity


class BasicServiceSet(Entity):
    """Snapshot of net.connman.iwd.BasicServiceSet. Leaf entity."""

    INTERFACE = "net.connman.iwd.BasicServiceSet"

    def _load(self) -> None:
        self._address: str = self._required("Address", str)

    @property
    def address(self) -> str:
        return self._address

    def _repr_fields(self):
        return [("address", self._address)]
