"""
PyGObject/Gio-based channel implementation.
Talks to the daemon over the system (or session) bus with synchronous calls.
"""

import logging
from typing import Any, Optional

from gi.repository import Gio, GLib

from iwdspider.bus.channel import ManagedObjects, ObjectPath, RemoteChannel, split_member
from iwdspider.constants import (
    IWD_SERVICE,
    OBJECT_MANAGER_INTERFACE,
    OBJECT_MANAGER_PATH,
    PROPERTIES_INTERFACE,
)
from iwdspider.errors import PropertyMissing, TransportError

logger = logging.getLogger(__name__)

MISSING_PROPERTY_ERRORS = (
    "org.freedesktop.DBus.Error.InvalidArgs",
    "org.freedesktop.DBus.Error.UnknownProperty",
)


def infer_signature(value: Any) -> str:
    """
    Pick a wire type for a Python value.

    Args:
        value: Value to send

    Returns:
        Single complete type signature

    Raises:
        TypeError: If the type has no obvious wire mapping
    """
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "b"
    if isinstance(value, int):
        return "i"
    if isinstance(value, ObjectPath):
        return "o"
    if isinstance(value, str):
        return "s"
    raise TypeError(f"Cannot infer a wire type for {type(value).__name__}; pass a signature")


class GioChannel(RemoteChannel):
    """RemoteChannel implementation using Gio.DBusConnection."""

    def __init__(self, bus: str = "system", service: str = IWD_SERVICE,
                 timeout_ms: int = -1, connection: Optional[Any] = None):
        """
        Initialize the channel and connect to the bus.

        Args:
            bus: 'system' or 'session'
            service: Well-known bus name of the daemon
            timeout_ms: Per-call timeout, -1 for the library default
            connection: Pre-made Gio.DBusConnection (skips connecting)

        Raises:
            ValueError: If the bus name is unknown
            TransportError: If the bus cannot be reached
        """
        self.service = service
        self.timeout_ms = timeout_ms
        if connection is not None:
            self._connection = connection
            return
        if bus == "system":
            bus_type = Gio.BusType.SYSTEM
        elif bus == "session":
            bus_type = Gio.BusType.SESSION
        else:
            raise ValueError(f"Unknown bus {bus!r}; expected 'system' or 'session'")
        try:
            self._connection = Gio.bus_get_sync(bus_type, None)
        except GLib.Error as e:
            logger.error(f"Failed to connect to the {bus} bus: {e.message}")
            raise TransportError(f"failed to connect to the {bus} bus: {e.message}") from e
        logger.info(f"Connected to the {bus} bus for {service}")

    def _translate(self, error: "GLib.Error", what: str) -> TransportError:
        remote_name = Gio.DBusError.get_remote_error(error)
        message = f"{what}: {error.message}"
        if remote_name in MISSING_PROPERTY_ERRORS:
            return PropertyMissing(message, remote_name=remote_name)
        return TransportError(message, remote_name=remote_name)

    def _call_sync(self, path: str, interface: str, method: str,
                   parameters: Optional["GLib.Variant"], reply_type: Optional[str]) -> tuple:
        what = f"{interface}.{method} on {path}"
        try:
            reply = self._connection.call_sync(
                self.service,
                path,
                interface,
                method,
                parameters,
                GLib.VariantType.new(reply_type) if reply_type else None,
                Gio.DBusCallFlags.NONE,
                self.timeout_ms,
                None,
            )
        except GLib.Error as e:
            raise self._translate(e, what) from e
        if reply is None:
            return ()
        return reply.unpack()

    def enumerate_all(self) -> ManagedObjects:
        (objects,) = self._call_sync(
            OBJECT_MANAGER_PATH, OBJECT_MANAGER_INTERFACE, "GetManagedObjects",
            None, "(a{oa{sa{sv}}})")
        logger.debug(f"Enumerated {len(objects)} managed objects")
        return {ObjectPath(path): interfaces for path, interfaces in objects.items()}

    def get_property(self, path: str, name: str) -> Any:
        interface, prop = split_member(name)
        (value,) = self._call_sync(
            path, PROPERTIES_INTERFACE, "Get",
            GLib.Variant("(ss)", (interface, prop)), "(v)")
        return value

    def set_property(self, path: str, name: str, value: Any,
                     signature: Optional[str] = None) -> None:
        interface, prop = split_member(name)
        wrapped = GLib.Variant(signature or infer_signature(value), value)
        self._call_sync(
            path, PROPERTIES_INTERFACE, "Set",
            GLib.Variant("(ssv)", (interface, prop, wrapped)), None)

    def call(self, path: str, method: str, *args: Any, signature: str = "") -> Any:
        interface, member = split_member(method)
        parameters = GLib.Variant(f"({signature})", args) if args else None
        result = self._call_sync(path, interface, member, parameters, None)
        if not result:
            return None
        if len(result) == 1:
            return result[0]
        return tuple(result)
