"""
Unit tests for the callback contracts and SimpleAgent.
"""

import logging

import pytest

from iwdspider.agents import (
    Agent,
    NetworkConfiguration,
    NetworkConfigurationAddress,
    NetworkConfigurationAgent,
    NetworkConfigurationRoute,
    SignalLevelAgent,
    SimpleAgent,
)


class TestContracts:

    @pytest.mark.parametrize("contract", [Agent, NetworkConfigurationAgent, SignalLevelAgent])
    def test_contracts_are_abstract(self, contract):
        with pytest.raises(TypeError):
            contract()

    def test_partial_agent_rejected(self):
        class PassphraseOnly(Agent):
            @property
            def path(self):
                return "/x"

            def request_passphrase(self, network_path):
                return "p"

        with pytest.raises(TypeError):
            PassphraseOnly()


class TestSimpleAgent:

    def test_defaults(self):
        agent = SimpleAgent()
        assert agent.path == "/iwdspider/agent"
        assert agent.user == "User"
        assert agent.request_passphrase("/net/1") == "Passphrase"
        assert agent.request_user_name_and_password("/net/1") == ("User", "Passphrase")

    def test_setters(self):
        agent = SimpleAgent(path="/a")
        agent.set_user("alice")
        agent.set_passphrase("hunter22")
        assert agent.request_user_name_and_password("/net/1") == ("alice", "hunter22")
        assert agent.request_user_password("/net/1", "alice") == "hunter22"

    def test_private_key_passphrase_is_separate(self):
        agent = SimpleAgent()
        assert agent.request_private_key_passphrase("/net/1") == "Passphrase"
        agent.set_passphrase("network-psk")
        assert agent.request_private_key_passphrase("/net/1") == "Passphrase"
        agent.set_private_key_passphrase("key-secret")
        assert agent.request_private_key_passphrase("/net/1") == "key-secret"
        assert agent.request_passphrase("/net/1") == "network-psk"

    def test_private_key_passphrase_from_constructor(self):
        agent = SimpleAgent(passphrase="psk", private_key_passphrase="tls-key")
        assert agent.request_private_key_passphrase("/net/1") == "tls-key"
        assert agent.request_passphrase("/net/1") == "psk"

    def test_release_and_cancel(self):
        agent = SimpleAgent()
        agent.release()
        agent.cancel("user-canceled")
        assert agent.released is True
        assert agent.cancel_reason == "user-canceled"

    def test_secret_never_logged(self, caplog):
        agent = SimpleAgent(passphrase="s3cr3t-value")
        with caplog.at_level(logging.DEBUG, logger="iwdspider"):
            agent.request_passphrase("/net/1")
            agent.request_user_name_and_password("/net/1")
            agent.request_user_password("/net/1", None)
        assert caplog.records
        assert "s3cr3t-value" not in caplog.text


class TestNetworkConfiguration:

    def test_from_dict(self):
        config = NetworkConfiguration.from_dict({
            "Method": "static",
            "Addresses": [{"Address": "192.168.1.10", "PrefixLength": 24, "Broadcast": "192.168.1.255"}],
            "Routes": [{"Destination": "0.0.0.0", "PrefixLength": 0, "Router": "192.168.1.1"}],
            "DomainNameServers": ["192.168.1.1"],
            "DomainNames": ["lan"],
            "MDNS": "resolve",
        })
        assert config.method == "static"
        assert config.addresses == [NetworkConfigurationAddress("192.168.1.10", 24, "192.168.1.255")]
        assert config.routes == [NetworkConfigurationRoute("0.0.0.0", 0, router="192.168.1.1")]
        assert config.domain_name_servers == ["192.168.1.1"]
        assert config.domain_names == ["lan"]
        assert config.mdns == "resolve"

    def test_minimal(self):
        config = NetworkConfiguration.from_dict({"Method": "dhcp"})
        assert config.addresses == []
        assert config.routes == []
        assert config.mdns is None

    def test_missing_method(self):
        with pytest.raises(ValueError):
            NetworkConfiguration.from_dict({})

    def test_malformed_address(self):
        with pytest.raises(ValueError):
            NetworkConfiguration.from_dict({"Method": "static", "Addresses": [{"Address": "10.0.0.1"}]})
