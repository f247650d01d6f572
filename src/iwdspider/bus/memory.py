"""
In-memory channel used as a test double.
Holds an object graph in process and records every remote interaction so
tests can assert exactly which calls were issued.
"""

import copy
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Set, Tuple

from iwdspider.bus.channel import ManagedObjects, ObjectPath, RemoteChannel, split_member
from iwdspider.errors import PropertyMissing, TransportError

logger = logging.getLogger(__name__)

ENUMERATE = "org.freedesktop.DBus.ObjectManager.GetManagedObjects"


class InMemoryChannel(RemoteChannel):
    """RemoteChannel backed by a dictionary instead of a bus."""

    def __init__(self, objects: Optional[Mapping[str, Mapping[str, Mapping[str, Any]]]] = None):
        """
        Args:
            objects: Initial graph of path -> interface -> properties
        """
        self.objects: Dict[ObjectPath, Dict[str, Dict[str, Any]]] = {}
        self.methods: Dict[str, Callable[..., Any]] = {}
        self.calls: List[Tuple[Any, ...]] = []
        self._failures: Set[Tuple[Optional[str], str]] = set()
        for path, interfaces in (objects or {}).items():
            for interface, properties in interfaces.items():
                self.add_object(path, interface, properties)

    def add_object(self, path: str, interface: str,
                   properties: Optional[Mapping[str, Any]] = None) -> None:
        """Expose an interface with the given properties at a path."""
        bag = self.objects.setdefault(ObjectPath(path), {})
        bag[interface] = dict(properties or {})

    def remove_object(self, path: str) -> None:
        """Drop every interface at a path."""
        self.objects.pop(ObjectPath(path), None)

    def on_method(self, method: str, handler: Callable[..., Any]) -> None:
        """
        Register a handler for a qualified method name.

        The handler is called as handler(path, *args) and its return value
        becomes the reply.
        """
        self.methods[method] = handler

    def fail(self, member: str, path: Optional[str] = None) -> None:
        """Make every access to a property or method fail, optionally only at one path."""
        self._failures.add((path, member))

    def recover(self, member: str, path: Optional[str] = None) -> None:
        """Undo a previous fail()."""
        self._failures.discard((path, member))

    def remote_calls(self, kind: Optional[str] = None) -> List[Tuple[Any, ...]]:
        """Recorded interactions, optionally filtered by kind ('enumerate', 'get', 'set', 'call')."""
        if kind is None:
            return list(self.calls)
        return [c for c in self.calls if c[0] == kind]

    def _check_failure(self, member: str, path: Optional[str] = None) -> None:
        if (None, member) in self._failures or (path, member) in self._failures:
            logger.debug(f"Injected failure for {member} at {path}")
            raise TransportError(f"{member} failed at {path}",
                                 remote_name="org.freedesktop.DBus.Error.Failed")

    def _bag(self, path: str, interface: str) -> Dict[str, Any]:
        try:
            return self.objects[ObjectPath(path)][interface]
        except KeyError:
            raise TransportError(f"No interface {interface} at {path}",
                                 remote_name="org.freedesktop.DBus.Error.UnknownObject")

    def enumerate_all(self) -> ManagedObjects:
        self.calls.append(("enumerate",))
        self._check_failure(ENUMERATE)
        return copy.deepcopy(self.objects)

    def get_property(self, path: str, name: str) -> Any:
        self.calls.append(("get", path, name))
        self._check_failure(name, path)
        interface, prop = split_member(name)
        bag = self._bag(path, interface)
        if prop not in bag:
            raise PropertyMissing(f"No such property '{prop}' on {interface} at {path}",
                                  remote_name="org.freedesktop.DBus.Error.InvalidArgs")
        return copy.deepcopy(bag[prop])

    def set_property(self, path: str, name: str, value: Any,
                     signature: Optional[str] = None) -> None:
        self.calls.append(("set", path, name, value))
        self._check_failure(name, path)
        interface, prop = split_member(name)
        self._bag(path, interface)[prop] = value

    def call(self, path: str, method: str, *args: Any, signature: str = "") -> Any:
        self.calls.append(("call", path, method, args))
        self._check_failure(method, path)
        handler = self.methods.get(method)
        if handler is None:
            raise TransportError(f"Unknown method {method}",
                                 remote_name="org.freedesktop.DBus.Error.UnknownMethod")
        return handler(path, *args)
