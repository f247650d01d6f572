"""AdHoc snapshot: a Device operating in ad-hoc (IBSS) mode."""

from typing import List

from iwdspider.entities.base import Entity


class AdHoc(Entity):
    """Snapshot of net.connman.iwd.AdHoc. Connected peers are fetched on demand."""

    INTERFACE = "net.connman.iwd.AdHoc"

    def _load(self) -> None:
        self._started: bool = self._required("Started", bool)

    @property
    def started(self) -> bool:
        return self._started

    def _mark_started(self, started: bool) -> None:
        with self._lock:
            self._started = started

    def start(self, ssid: str, psk: str) -> None:
        self._call_remote("Start", ssid, psk, signature="ss")
        self._mark_started(True)
        self.logger.info(f"Started SSID {ssid}")

    def start_open(self, ssid: str) -> None:
        self._call_remote("StartOpen", ssid, signature="s")
        self._mark_started(True)
        self.logger.info(f"Started open SSID {ssid}")

    def stop(self) -> None:
        self._call_remote("Stop")
        self._mark_started(False)
        self.logger.info("Stopped")

    def get_connected_peers(self) -> List[str]:
        """Hardware addresses of the peers currently connected."""
        return self._required("ConnectedPeers", list, str)

    def _repr_fields(self):
        return [("started", self._started)]
