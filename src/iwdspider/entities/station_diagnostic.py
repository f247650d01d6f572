"""StationDiagnostic proxy."""

from typing import Any, Dict

from iwdspider.entities.base import Entity
from iwdspider.errors import TransportError


class StationDiagnostic(Entity):
    """Proxy for net.connman.iwd.StationDiagnostic."""

    INTERFACE = "net.connman.iwd.StationDiagnostic"

    def get_diagnostics(self) -> Dict[str, Any]:
        """
        Fetch link diagnostics for the current connection.

        Returns:
            Mapping such as {'ConnectedBss': ..., 'Frequency': ..., 'RSSI': ...}
        """
        reply = self._call_remote("GetDiagnostics")
        if reply is None:
            return {}
        if not isinstance(reply, dict):
            raise TransportError(f"GetDiagnostics on {self.path} returned {type(reply).__name__}")
        self.logger.debug(f"Diagnostics {reply!r}")
        return dict(reply)
