"""Mapping from interface name to the entity class that models it."""

from typing import Dict, Optional, Type

from iwdspider.entities import (
    AccessPoint,
    AdHoc,
    Adapter,
    AgentManager,
    BasicServiceSet,
    Device,
    Entity,
    KnownNetwork,
    Network,
    Station,
    StationDiagnostic,
)

ENTITY_TYPES: Dict[str, Type[Entity]] = {
    cls.INTERFACE: cls
    for cls in (
        AccessPoint,
        AdHoc,
        Adapter,
        AgentManager,
        BasicServiceSet,
        Device,
        KnownNetwork,
        Network,
        Station,
        StationDiagnostic,
    )
}


def entity_class_for(interface: str) -> Optional[Type[Entity]]:
    """
    Look up the entity class for an interface name.

    Returns:
        Entity subclass, or None for interfaces this package does not model
        (org.freedesktop.DBus.*, newer daemon interfaces)
    """
    return ENTITY_TYPES.get(interface)
