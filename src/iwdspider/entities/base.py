"""
Common construction protocol for typed snapshot entities.

Each entity is built from one object path by fetching its declared
properties one at a time:

- a required property that cannot be fetched aborts construction and the
  TransportError propagates;
- an optional property that cannot be fetched is stored as None;
- a property holding a reference to another object is resolved into a new,
  exclusively owned snapshot before the parent is complete.

Nested resolution depth is bounded by MAX_NESTING_DEPTH (Network -> Device
-> Adapter). Constructing deeper raises NestingDepthExceeded.
"""

import logging
import threading
from typing import Any, List, Optional, Tuple, Type, TypeVar

from iwdspider.bus.channel import ObjectPath, RemoteChannel
from iwdspider.constants import MAX_NESTING_DEPTH
from iwdspider.errors import NestingDepthExceeded, SpiderError, TransportError
from iwdspider.logging import EntityLogger, get_logger

logger = get_logger(__name__)

E = TypeVar("E", bound="Entity")


class Entity:
    """Base class for all remote object snapshots and proxies."""

    INTERFACE = ""

    def __init__(self, channel: RemoteChannel, path: str,
                 parent_logger: Optional[logging.Logger] = None):
        self._channel = channel
        self._path = ObjectPath(path)
        self._depth = 1
        self._lock = threading.Lock()
        self._base_logger = parent_logger or logger
        self.logger = EntityLogger(self._base_logger, type(self).__name__, self._path)

    @classmethod
    def from_path(cls: Type[E], channel: RemoteChannel, path: str,
                  parent_logger: Optional[logging.Logger] = None, depth: int = 1) -> E:
        """
        Build a snapshot of the object at path.

        Args:
            channel: Channel used for every fetch
            path: Object path implementing cls.INTERFACE
            parent_logger: Logger the entity's own EntityLogger writes through
            depth: Position in the nested-resolution chain, 1 for a root

        Returns:
            Fully constructed entity

        Raises:
            NestingDepthExceeded: If depth is outside 1..MAX_NESTING_DEPTH
            TransportError: If a required property cannot be fetched
        """
        if depth < 1 or depth > MAX_NESTING_DEPTH:
            raise NestingDepthExceeded(
                f"cannot build {cls.__name__} at depth {depth}; maximum is {MAX_NESTING_DEPTH}")
        entity = cls(channel, path, parent_logger)
        entity._depth = depth
        entity._load()
        return entity

    def _load(self) -> None:
        """Fetch the snapshot fields. Stateless proxies fetch nothing."""

    @property
    def path(self) -> ObjectPath:
        return self._path

    @property
    def interface(self) -> str:
        return self.INTERFACE

    @property
    def depth(self) -> int:
        """Nesting depth this snapshot was built at (1 for a root)."""
        return self._depth

    def _member(self, name: str) -> str:
        return f"{self.INTERFACE}.{name}"

    def _check_type(self, name: str, value: Any, expected: type,
                    item_type: Optional[type] = None) -> Any:
        if expected is list:
            if not isinstance(value, (list, tuple)):
                raise TransportError(
                    f"property '{name}' on {self._path} is {type(value).__name__}, expected list")
            items = [self._check_type(name, item, item_type) for item in value] if item_type else list(value)
            return items
        if expected is ObjectPath:
            if not isinstance(value, str):
                raise TransportError(
                    f"property '{name}' on {self._path} is {type(value).__name__}, expected object path")
            return ObjectPath(value)
        if expected is int and isinstance(value, bool):
            raise TransportError(f"property '{name}' on {self._path} is bool, expected int")
        if not isinstance(value, expected):
            raise TransportError(
                f"property '{name}' on {self._path} is {type(value).__name__}, expected {expected.__name__}")
        return value

    def _fetch(self, name: str, expected: type, item_type: Optional[type] = None,
               optional: bool = False) -> Any:
        try:
            value = self._channel.get_property(self._path, self._member(name))
        except TransportError as e:
            if optional:
                self.logger.info(f"Failed to get optional property '{name}': {e}")
                return None
            self.logger.error(f"Failed to get property '{name}': {e}")
            raise
        try:
            value = self._check_type(name, value, expected, item_type)
        except TransportError as e:
            self.logger.error(f"Failed to store property '{name}': {e}")
            raise
        self.logger.debug(f"{name} = {value!r}")
        return value

    def _required(self, name: str, expected: type, item_type: Optional[type] = None) -> Any:
        return self._fetch(name, expected, item_type)

    def _optional(self, name: str, expected: type, item_type: Optional[type] = None) -> Any:
        return self._fetch(name, expected, item_type, optional=True)

    def _nested(self, entity_cls: Type[E], path: str) -> E:
        """Resolve a reference into an owned snapshot one level deeper."""
        try:
            child = entity_cls.from_path(self._channel, path, self._base_logger, self._depth + 1)
        except SpiderError as e:
            self.logger.error(f"Failed to create {entity_cls.__name__} from {path}: {e}")
            raise
        self.logger.debug(f"Created {entity_cls.__name__} from {path}")
        return child

    def _set_remote(self, name: str, value: Any, signature: str, attribute: str) -> None:
        """Write a property, then update the local snapshot field."""
        try:
            self._channel.set_property(self._path, self._member(name), value, signature)
        except TransportError as e:
            self.logger.error(f"Failed to set property '{name}' to {value!r}: {e}")
            raise
        with self._lock:
            setattr(self, attribute, value)
        self.logger.debug(f"Set {name} {value!r}")

    def _call_remote(self, method: str, *args: Any, signature: str = "") -> Any:
        try:
            result = self._channel.call(self._path, self._member(method), *args, signature=signature)
        except TransportError as e:
            self.logger.error(f"Failed to call {method}: {e}")
            raise
        return result

    def _repr_fields(self) -> List[Tuple[str, Any]]:
        return []

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in
                           [("path", str(self._path))] + self._repr_fields())
        return f"{type(self).__name__}({fields})"
