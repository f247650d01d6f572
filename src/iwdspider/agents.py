"""
Callback contracts the wireless service invokes on the client.
Agents answer credential prompts, network configuration agents receive
address settings, and signal level agents are told when RSSI crosses a
registered threshold. Exporting an agent on the bus is the transport's job;
these classes only define the shape.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple

from iwdspider.logging import get_logger

logger = get_logger(__name__)


class Agent(ABC):
    """Answers credential requests raised while connecting to a network."""

    @property
    @abstractmethod
    def path(self) -> str:
        """Object path the agent is exported at."""

    @abstractmethod
    def release(self) -> None:
        """The service no longer uses this agent."""

    @abstractmethod
    def request_passphrase(self, network_path: str) -> str:
        """Return the passphrase for a PSK network."""

    @abstractmethod
    def request_private_key_passphrase(self, network_path: str) -> str:
        """Return the passphrase protecting an 802.1x private key."""

    @abstractmethod
    def request_user_name_and_password(self, network_path: str) -> Tuple[str, str]:
        """Return (user, password) for an 802.1x network."""

    @abstractmethod
    def request_user_password(self, network_path: str, user: Optional[str]) -> str:
        """Return the password for the given 802.1x user."""

    @abstractmethod
    def cancel(self, reason: str) -> None:
        """
        A pending request was cancelled.

        Args:
            reason: 'out-of-range', 'user-canceled', 'timed-out' or 'shutdown'
        """


@dataclass(frozen=True)
class NetworkConfigurationAddress:
    """One configured address with its prefix length."""
    address: str
    prefix_length: int
    broadcast: Optional[str] = None


@dataclass(frozen=True)
class NetworkConfigurationRoute:
    destination: str
    prefix_length: int
    router: Optional[str] = None
    preferred_source: Optional[str] = None
    priority: Optional[int] = None


@dataclass(frozen=True)
class NetworkConfiguration:
    """Address configuration for one address family on one device."""
    method: str
    addresses: List[NetworkConfigurationAddress] = field(default_factory=list)
    routes: List[NetworkConfigurationRoute] = field(default_factory=list)
    domain_name_servers: List[str] = field(default_factory=list)
    domain_names: List[str] = field(default_factory=list)
    mdns: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NetworkConfiguration":
        """
        Build from the mapping passed to ConfigureIPv4/ConfigureIPv6.

        Args:
            data: Mapping with a required 'Method' key and optional
                'Addresses', 'Routes', 'DomainNameServers', 'DomainNames', 'MDNS'

        Returns:
            NetworkConfiguration

        Raises:
            ValueError: If 'Method' is missing or an entry is malformed
        """
        if "Method" not in data:
            raise ValueError("network configuration has no 'Method'")
        try:
            addresses = [
                NetworkConfigurationAddress(
                    address=entry["Address"],
                    prefix_length=int(entry["PrefixLength"]),
                    broadcast=entry.get("Broadcast"),
                )
                for entry in data.get("Addresses", [])
            ]
            routes = [
                NetworkConfigurationRoute(
                    destination=entry["Destination"],
                    prefix_length=int(entry["PrefixLength"]),
                    router=entry.get("Router"),
                    preferred_source=entry.get("PreferredSource"),
                    priority=entry.get("Priority"),
                )
                for entry in data.get("Routes", [])
            ]
        except KeyError as e:
            raise ValueError(f"network configuration entry is missing {e}") from e
        return cls(
            method=data["Method"],
            addresses=addresses,
            routes=routes,
            domain_name_servers=list(data.get("DomainNameServers", [])),
            domain_names=list(data.get("DomainNames", [])),
            mdns=data.get("MDNS"),
        )


class NetworkConfigurationAgent(ABC):
    """Receives network configuration in place of the service applying it."""

    @property
    @abstractmethod
    def path(self) -> str:
        """Object path the agent is exported at."""

    @abstractmethod
    def release(self) -> None:
        pass

    @abstractmethod
    def configure_ipv4(self, device_path: str, config: NetworkConfiguration) -> None:
        pass

    @abstractmethod
    def configure_ipv6(self, device_path: str, config: NetworkConfiguration) -> None:
        pass

    @abstractmethod
    def cancel_ipv4(self, device_path: str, reason: str) -> None:
        pass

    @abstractmethod
    def cancel_ipv6(self, device_path: str, reason: str) -> None:
        pass


class SignalLevelAgent(ABC):
    """Told when a station's signal moves between registered threshold ranges."""

    @property
    @abstractmethod
    def path(self) -> str:
        """Object path the agent is exported at."""

    @abstractmethod
    def release(self, device_path: str) -> None:
        pass

    @abstractmethod
    def changed(self, device_path: str, level: int) -> None:
        """
        Args:
            device_path: Station object path
            level: Index of the threshold range the signal is now in
        """


class SimpleAgent(Agent):
    """
    Agent that answers every request from values held in memory.

    Useful for scripted connections where the credentials are already known.
    Secrets are never logged.
    """

    DEFAULT_USER = "User"
    DEFAULT_PASSPHRASE = "Passphrase"
    DEFAULT_PRIVATE_KEY_PASSPHRASE = "Passphrase"

    def __init__(self, path: str = "/iwdspider/agent", user: str = DEFAULT_USER,
                 passphrase: str = DEFAULT_PASSPHRASE,
                 private_key_passphrase: str = DEFAULT_PRIVATE_KEY_PASSPHRASE):
        self._path = path
        self._user = user
        self._passphrase = passphrase
        self._private_key_passphrase = private_key_passphrase
        self.released = False
        self.cancel_reason: Optional[str] = None

    @property
    def path(self) -> str:
        return self._path

    @property
    def user(self) -> str:
        return self._user

    def set_user(self, user: str) -> None:
        self._user = user

    def set_passphrase(self, passphrase: str) -> None:
        self._passphrase = passphrase

    def set_private_key_passphrase(self, passphrase: str) -> None:
        self._private_key_passphrase = passphrase

    def release(self) -> None:
        self.released = True
        logger.info(f"Agent {self._path} released")

    def request_passphrase(self, network_path: str) -> str:
        logger.info(f"Passphrase requested for {network_path}")
        return self._passphrase

    def request_private_key_passphrase(self, network_path: str) -> str:
        logger.info(f"Private key passphrase requested for {network_path}")
        return self._private_key_passphrase

    def request_user_name_and_password(self, network_path: str) -> Tuple[str, str]:
        logger.info(f"User name and password requested for {network_path}")
        return self._user, self._passphrase

    def request_user_password(self, network_path: str, user: Optional[str]) -> str:
        logger.info(f"Password for user {user or self._user} requested for {network_path}")
        return self._passphrase

    def cancel(self, reason: str) -> None:
        self.cancel_reason = reason
        logger.warning(f"Agent request cancelled: {reason}")
