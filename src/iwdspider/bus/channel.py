"""
Remote object channel interface.
Abstracts the bus transport so entities can be built against a live daemon
or against an in-memory double in tests.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class ObjectPath(str):
    """Opaque hierarchical handle of a remote object."""

    def __repr__(self) -> str:
        return f"ObjectPath({str.__repr__(self)})"


# path -> interface name -> property name -> value
ManagedObjects = Dict[ObjectPath, Dict[str, Dict[str, Any]]]


def split_member(member: str):
    """
    Split a fully qualified member name into interface and short name.

    Args:
        member: Name such as 'net.connman.iwd.Adapter.Powered'

    Returns:
        Tuple of (interface, name)

    Raises:
        ValueError: If the name has no interface part
    """
    interface, sep, name = member.rpartition(".")
    if not sep or not interface or not name:
        raise ValueError(f"Member name {member!r} is not qualified by an interface")
    return interface, name


class RemoteChannel(ABC):
    """Abstract base class for bus transports."""

    @abstractmethod
    def enumerate_all(self) -> ManagedObjects:
        """
        Enumerate every object the service manages.

        Returns:
            Mapping of object path to interface name to property bag

        Raises:
            TransportError: If the enumeration call fails
        """

    @abstractmethod
    def get_property(self, path: str, name: str) -> Any:
        """
        Fetch a single property.

        Args:
            path: Object path
            name: Qualified property name, '<InterfaceName>.<PropertyName>'

        Returns:
            The unpacked property value

        Raises:
            PropertyMissing: If the object does not expose the property
            TransportError: If the call fails for any other reason
        """

    @abstractmethod
    def set_property(self, path: str, name: str, value: Any,
                     signature: Optional[str] = None) -> None:
        """
        Write a single property.

        Args:
            path: Object path
            name: Qualified property name, '<InterfaceName>.<PropertyName>'
            value: New value
            signature: Wire type of the value; inferred when omitted

        Raises:
            TransportError: If the remote side rejects the write
        """

    @abstractmethod
    def call(self, path: str, method: str, *args: Any,
             signature: str = "") -> Any:
        """
        Invoke a remote method.

        Args:
            path: Object path
            method: Qualified method name, '<InterfaceName>.<MethodName>'
            *args: Positional arguments
            signature: Wire signature of the arguments

        Returns:
            None for no reply value, the single value, or a tuple of values

        Raises:
            TransportError: If the call fails
        """
