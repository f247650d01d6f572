"""
Shared fixtures: an in-memory iwd object graph.

Layout:
    /net/connman/iwd                    AgentManager
    /net/connman/iwd/0                  Adapter phy0
    /net/connman/iwd/0/4                Device wlan0 + Station + StationDiagnostic
    /net/connman/iwd/0/4/486f6d65_psk   Network Home (connected, known)
    /net/connman/iwd/0/4/4775657374_open  Network Guest
    /net/connman/iwd/0/4/486f6d65_psk/aabbccddeeff  BasicServiceSet
    /net/connman/iwd/486f6d65_psk       KnownNetwork Home
    /net/connman/iwd/0/6                Device wlan1 + AccessPoint
    /net/connman/iwd/0/7                Device wlan2 + AdHoc
    /net/connman/iwd/0/9                Device wlan3 + net.connman.iwd.P2P.Device (not modelled)
"""

import pytest

from iwdspider.bus import InMemoryChannel

IWD = "net.connman.iwd"
AGENT_MANAGER_PATH = "/net/connman/iwd"
ADAPTER_PATH = "/net/connman/iwd/0"
DEVICE_PATH = "/net/connman/iwd/0/4"
HOME_PATH = DEVICE_PATH + "/486f6d65_psk"
GUEST_PATH = DEVICE_PATH + "/4775657374_open"
BSS_PATH = HOME_PATH + "/aabbccddeeff"
KNOWN_PATH = "/net/connman/iwd/486f6d65_psk"
AP_DEVICE_PATH = "/net/connman/iwd/0/6"
ADHOC_DEVICE_PATH = "/net/connman/iwd/0/7"
P2P_DEVICE_PATH = "/net/connman/iwd/0/9"


class FakeIwd:
    """Populates an InMemoryChannel the way a running daemon would look."""

    def __init__(self):
        self.channel = InMemoryChannel()
        # Station path -> list of (network path, signal strength)
        self.ordered = {}

    def add_adapter(self, path=ADAPTER_PATH, name="phy0", powered=True):
        self.channel.add_object(path, f"{IWD}.Adapter", {
            "Name": name,
            "Model": "Wireless 8265",
            "Vendor": "Intel Corporation",
            "SupportedModes": ["station", "ap", "ad-hoc"],
            "Powered": powered,
        })

    def add_device(self, path, name, mode="station", adapter=ADAPTER_PATH):
        self.channel.add_object(path, f"{IWD}.Device", {
            "Name": name,
            "Address": "02:00:00:00:00:" + path[-2:].replace("/", "0"),
            "Powered": True,
            "Adapter": adapter,
            "Mode": mode,
        })

    def add_station(self, path, scanning=False, connected_network=None, ordered=None):
        properties = {"State": "connected" if connected_network else "disconnected",
                      "Scanning": scanning}
        if connected_network:
            properties["ConnectedNetwork"] = connected_network
            properties["ConnectedAccessPoint"] = BSS_PATH
        self.channel.add_object(path, f"{IWD}.Station", properties)
        self.ordered[path] = list(ordered or [])

    def add_network(self, path, name, device=DEVICE_PATH, connected=False,
                    network_type="psk", known=None, bss=None):
        properties = {
            "Name": name,
            "Connected": connected,
            "Device": device,
            "Type": network_type,
        }
        if known:
            properties["KnownNetwork"] = known
        if bss is not None:
            properties["ExtendedServiceSet"] = bss
        self.channel.add_object(path, f"{IWD}.Network", properties)

    def add_known_network(self, path, name, network_type="psk", auto_connect=True,
                          last_connected="2024-05-01T10:20:30Z"):
        properties = {
            "Name": name,
            "Type": network_type,
            "Hidden": False,
            "AutoConnect": auto_connect,
        }
        if last_connected:
            properties["LastConnectedTime"] = last_connected
        self.channel.add_object(path, f"{IWD}.KnownNetwork", properties)

    def install_methods(self):
        channel = self.channel

        def scan(path):
            channel.objects[path][f"{IWD}.Station"]["Scanning"] = True

        def connect(path):
            channel.objects[path][f"{IWD}.Network"]["Connected"] = True

        channel.on_method(f"{IWD}.Station.Scan", scan)
        channel.on_method(f"{IWD}.Station.GetOrderedNetworks",
                          lambda path: list(self.ordered.get(path, [])))
        channel.on_method(f"{IWD}.Station.GetHiddenAccessPoints",
                          lambda path: [("aa:bb:cc:dd:ee:01", -7000, "psk")])
        channel.on_method(f"{IWD}.Station.Disconnect", lambda path: None)
        channel.on_method(f"{IWD}.Station.ConnectHiddenNetwork", lambda path, ssid: None)
        channel.on_method(f"{IWD}.Station.RegisterSignalLevelAgent", lambda path, agent, levels: None)
        channel.on_method(f"{IWD}.Station.UnregisterSignalLevelAgent", lambda path, agent: None)
        channel.on_method(f"{IWD}.StationDiagnostic.GetDiagnostics", lambda path: {
            "ConnectedBss": "aa:bb:cc:dd:ee:ff",
            "Frequency": 2412,
            "RSSI": -45,
            "Security": "WPA2-Personal",
        })
        channel.on_method(f"{IWD}.Network.Connect", connect)
        channel.on_method(f"{IWD}.KnownNetwork.Forget", lambda path: channel.remove_object(path))
        for method in ("RegisterAgent", "UnregisterAgent",
                       "RegisterNetworkConfigurationAgent", "UnregisterNetworkConfigurationAgent"):
            channel.on_method(f"{IWD}.AgentManager.{method}", lambda path, agent: None)
        for iface in ("AccessPoint", "AdHoc"):
            channel.on_method(f"{IWD}.{iface}.Start", lambda path, ssid, psk: None)
            channel.on_method(f"{IWD}.{iface}.Stop", lambda path: None)
        channel.on_method(f"{IWD}.AccessPoint.StartProfile", lambda path, ssid: None)
        channel.on_method(f"{IWD}.AccessPoint.Scan", lambda path: None)
        channel.on_method(f"{IWD}.AccessPoint.GetOrderedNetworks", lambda path: [
            ("Neighbour", -5200, "psk"),
            ("Cafe", -8100, "open"),
        ])
        channel.on_method(f"{IWD}.AdHoc.StartOpen", lambda path, ssid: None)

    def populate(self):
        """Build the full layout from the module docstring."""
        self.channel.add_object(AGENT_MANAGER_PATH, f"{IWD}.AgentManager", {})
        self.add_adapter()
        self.add_device(DEVICE_PATH, "wlan0")
        self.add_station(DEVICE_PATH, connected_network=HOME_PATH,
                         ordered=[(HOME_PATH, -4000), (GUEST_PATH, -6500)])
        self.channel.add_object(DEVICE_PATH, f"{IWD}.StationDiagnostic", {})
        self.add_network(HOME_PATH, "Home", connected=True, known=KNOWN_PATH, bss=[BSS_PATH])
        self.add_network(GUEST_PATH, "Guest", network_type="open")
        self.channel.add_object(BSS_PATH, f"{IWD}.BasicServiceSet", {"Address": "aa:bb:cc:dd:ee:ff"})
        self.add_known_network(KNOWN_PATH, "Home")
        self.add_device(AP_DEVICE_PATH, "wlan1", mode="ap")
        self.channel.add_object(AP_DEVICE_PATH, f"{IWD}.AccessPoint", {
            "Started": False,
            "Frequency": 2437,
            "PairwiseCiphers": ["CCMP"],
            "GroupCipher": "CCMP",
        })
        self.add_device(ADHOC_DEVICE_PATH, "wlan2", mode="ad-hoc")
        self.channel.add_object(ADHOC_DEVICE_PATH, f"{IWD}.AdHoc", {
            "Started": True,
            "ConnectedPeers": ["02:11:22:33:44:55"],
        })
        self.add_device(P2P_DEVICE_PATH, "wlan3")
        self.channel.add_object(P2P_DEVICE_PATH, f"{IWD}.P2P.Device", {"Name": "p2p"})
        self.install_methods()
        return self


@pytest.fixture
def iwd():
    """Fully populated fake daemon."""
    return FakeIwd().populate()


@pytest.fixture
def channel(iwd):
    return iwd.channel
