"""Bus transports.

The Gio implementation needs PyGObject and is imported from
``iwdspider.bus.gio_channel`` directly.
"""

from .channel import ManagedObjects, ObjectPath, RemoteChannel, split_member
from .memory import InMemoryChannel

__all__ = [
    'ManagedObjects',
    'ObjectPath',
    'RemoteChannel',
    'split_member',
    'InMemoryChannel',
]
