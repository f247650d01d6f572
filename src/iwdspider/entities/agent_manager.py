"""AgentManager proxy: registers credential and configuration agents."""

from iwdspider.bus.channel import ObjectPath
from iwdspider.entities.base import Entity


class AgentManager(Entity):
    """Proxy for net.connman.iwd.AgentManager."""

    INTERFACE = "net.connman.iwd.AgentManager"

    def _agent_call(self, method: str, agent, action: str) -> None:
        self._call_remote(method, ObjectPath(agent.path), signature="o")
        self.logger.debug(f"{action} {type(agent).__name__} {agent.path}")

    def register_agent(self, agent) -> None:
        self._agent_call("RegisterAgent", agent, "Registered")

    def unregister_agent(self, agent) -> None:
        self._agent_call("UnregisterAgent", agent, "Unregistered")

    def register_network_configuration_agent(self, agent) -> None:
        self._agent_call("RegisterNetworkConfigurationAgent", agent, "Registered")

    def unregister_network_configuration_agent(self, agent) -> None:
        self._agent_call("UnregisterNetworkConfigurationAgent", agent, "Unregistered")
