"""
Service directory: discovers every object the wireless service manages and
builds a typed entity for each interface it recognises.

Every call enumerates the remote object graph again. Nothing is cached, so
lookups always reflect the service's current state.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Type, TypeVar

from iwdspider.bus.channel import ObjectPath, RemoteChannel
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
from iwdspider.errors import EntityNotFound, TransportError, ValidationError
from iwdspider.logging import get_logger
from iwdspider.registry import entity_class_for

E = TypeVar("E", bound=Entity)


@dataclass
class ServiceState:
    """All entities found by one discovery pass, grouped by kind."""
    access_points: List[AccessPoint] = field(default_factory=list)
    adapters: List[Adapter] = field(default_factory=list)
    adhocs: List[AdHoc] = field(default_factory=list)
    agent_manager: Optional[AgentManager] = None
    basic_service_sets: List[BasicServiceSet] = field(default_factory=list)
    devices: List[Device] = field(default_factory=list)
    known_networks: List[KnownNetwork] = field(default_factory=list)
    networks: List[Network] = field(default_factory=list)
    stations: List[Station] = field(default_factory=list)
    station_diagnostics: List[StationDiagnostic] = field(default_factory=list)

    def add(self, entity: Entity) -> None:
        if isinstance(entity, AgentManager):
            self.agent_manager = entity
        elif isinstance(entity, AccessPoint):
            self.access_points.append(entity)
        elif isinstance(entity, Adapter):
            self.adapters.append(entity)
        elif isinstance(entity, AdHoc):
            self.adhocs.append(entity)
        elif isinstance(entity, BasicServiceSet):
            self.basic_service_sets.append(entity)
        elif isinstance(entity, Device):
            self.devices.append(entity)
        elif isinstance(entity, KnownNetwork):
            self.known_networks.append(entity)
        elif isinstance(entity, Network):
            self.networks.append(entity)
        elif isinstance(entity, Station):
            self.stations.append(entity)
        elif isinstance(entity, StationDiagnostic):
            self.station_diagnostics.append(entity)
        else:
            raise TypeError(f"ServiceState has no slot for {type(entity).__name__}")

    def __len__(self) -> int:
        return sum(len(group) for group in (
            self.access_points, self.adapters, self.adhocs, self.basic_service_sets,
            self.devices, self.known_networks, self.networks, self.stations,
            self.station_diagnostics,
        )) + (1 if self.agent_manager is not None else 0)


class ServiceDirectory:
    """Builds typed entities from the service's managed object graph."""

    def __init__(self, channel: RemoteChannel, logger: Optional[logging.Logger] = None):
        """
        Args:
            channel: Transport to the wireless service
            logger: Logger handed to every entity built by this directory
        """
        self.channel = channel
        self.logger = logger or get_logger(__name__)

    def _objects(self) -> Iterator[Tuple[ObjectPath, str]]:
        try:
            objects = self.channel.enumerate_all()
        except TransportError as e:
            self.logger.error(f"Failed to get managed objects: {e}")
            raise
        for path, interfaces in objects.items():
            for interface in interfaces:
                yield ObjectPath(path), interface

    def _build(self, entity_cls: Type[E], path: ObjectPath) -> E:
        try:
            entity = entity_cls.from_path(self.channel, path, self.logger)
        except TransportError as e:
            self.logger.error(f"Failed to create {entity_cls.__name__} from {path}: {e}")
            raise
        self.logger.debug(f"Created {entity!r}")
        return entity

    def discover_all(self) -> ServiceState:
        """
        Enumerate the service and build every recognised entity.

        Returns:
            ServiceState grouping the entities by kind

        Raises:
            TransportError: If enumeration fails or any entity misses a required property
        """
        state = ServiceState()
        for path, interface in self._objects():
            entity_cls = entity_class_for(interface)
            if entity_cls is None:
                self.logger.debug(f"Skipping unknown interface {interface} at {path}")
                continue
            state.add(self._build(entity_cls, path))
        self.logger.info(f"Discovered {len(state)} entities")
        return state

    def by_type(self, entity_cls: Type[E]) -> List[E]:
        """
        Build every entity of one kind, in enumeration order.

        Raises:
            TransportError: If enumeration or construction fails
        """
        return [
            self._build(entity_cls, path)
            for path, interface in self._objects()
            if interface == entity_cls.INTERFACE
        ]

    def by_name(self, entity_cls: Type[E], name: str) -> E:
        """
        Find the first entity of one kind whose name matches.

        Raises:
            ValidationError: If entity_cls has no name; nothing is sent
            EntityNotFound: If nothing matches
            TransportError: If enumeration or construction fails
        """
        if not isinstance(getattr(entity_cls, "name", None), property):
            raise ValidationError(f"{entity_cls.__name__} has no name to look up")
        for entity in self.by_type(entity_cls):
            if entity.name == name:
                return entity
        self.logger.warning(f"Could not find {entity_cls.__name__} with name {name}")
        raise EntityNotFound(f"could not find {entity_cls.__name__} with name {name}")

    def adapters(self) -> List[Adapter]:
        return self.by_type(Adapter)

    def adapter_by_name(self, name: str) -> Adapter:
        return self.by_name(Adapter, name)

    def devices(self) -> List[Device]:
        return self.by_type(Device)

    def device_by_name(self, name: str) -> Device:
        return self.by_name(Device, name)

    def networks(self) -> List[Network]:
        return self.by_type(Network)

    def known_networks(self) -> List[KnownNetwork]:
        return self.by_type(KnownNetwork)

    def known_network_by_name(self, name: str) -> KnownNetwork:
        return self.by_name(KnownNetwork, name)

    def stations(self) -> List[Station]:
        return self.by_type(Station)

    def agent_manager(self) -> AgentManager:
        """
        Raises:
            EntityNotFound: If the service exposes no AgentManager
        """
        managers = self.by_type(AgentManager)
        if not managers:
            raise EntityNotFound("could not find AgentManager")
        return managers[0]
