"""
Command-line entry point for iwd-spider.

    iwd-spider objects
    iwd-spider scan --wait 5
    iwd-spider device-mode wlan0 station
    iwd-spider forget HomeWifi
"""

import argparse
import sys
from typing import List, Optional

from iwdspider import __version__
from iwdspider.bus.channel import RemoteChannel
from iwdspider.config import load_config
from iwdspider.directory import ServiceDirectory
from iwdspider.errors import SpiderError
from iwdspider.logging import LOG_FORMATS, configure_logging, get_logger
from iwdspider.scan import scan_for_networks

logger = get_logger(__name__)

ON_OFF = {"on": True, "off": False}


def open_channel(cfg: dict) -> RemoteChannel:
    """
    Connect to the wireless service described by the configuration.

    Raises:
        TransportError: If the bus connection fails
    """
    # PyGObject is an optional extra; only the live transport needs it
    from iwdspider.bus.gio_channel import GioChannel
    return GioChannel(bus=cfg["bus"], service=cfg["service"], timeout_ms=cfg["call_timeout_ms"])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="iwd-spider",
        description="Inspect and control the iwd wireless daemon")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="Path to YAML configuration file")
    parser.add_argument("--bus", choices=["system", "session"], help="Bus to connect to")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR")
    parser.add_argument("--log-format", choices=LOG_FORMATS, help="Log output format")
    parser.add_argument("--log-file", help="Also write logs to this file")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("objects", help="Discover and print every entity")

    scan = sub.add_parser("scan", help="Scan on every station and print the ranked networks")
    scan.add_argument("--wait", type=float, help="Seconds to wait for scan results")

    adapter_power = sub.add_parser("adapter-power", help="Power an adapter on or off")
    adapter_power.add_argument("name")
    adapter_power.add_argument("state", choices=sorted(ON_OFF))

    device_power = sub.add_parser("device-power", help="Power a device on or off")
    device_power.add_argument("name")
    device_power.add_argument("state", choices=sorted(ON_OFF))

    device_mode = sub.add_parser("device-mode", help="Change a device's operating mode")
    device_mode.add_argument("name")
    device_mode.add_argument("mode")

    sub.add_parser("known", help="List known networks")

    forget = sub.add_parser("forget", help="Forget a known network")
    forget.add_argument("name")

    autoconnect = sub.add_parser("autoconnect", help="Toggle auto-connect on a known network")
    autoconnect.add_argument("name")
    autoconnect.add_argument("state", choices=sorted(ON_OFF))

    return parser


def format_ranked(ranked) -> List[str]:
    """Render scan results one line per network."""
    lines = []
    for index, entry in enumerate(ranked, start=1):
        network = entry.network
        flags = []
        if network.connected:
            flags.append("connected")
        if network.known_network is not None:
            flags.append("known")
        lines.append(
            f"{index:3d}. {network.name:<32} {entry.signal_strength / 100:6.1f} dBm  "
            f"{network.type:<6} {network.device.name} {' '.join(flags)}".rstrip())
    return lines


def run_command(args: argparse.Namespace, directory: ServiceDirectory, cfg: dict) -> None:
    """
    Execute one parsed command against the directory.

    Raises:
        SpiderError: If discovery, lookup or the requested change fails
    """
    if args.command == "objects":
        state = directory.discover_all()
        for group in ("adapters", "devices", "stations", "access_points", "adhocs",
                      "networks", "known_networks", "basic_service_sets",
                      "station_diagnostics"):
            for entity in getattr(state, group):
                print(repr(entity))
        if state.agent_manager is not None:
            print(repr(state.agent_manager))

    elif args.command == "scan":
        wait = cfg["scan_wait_seconds"] if args.wait is None else args.wait
        ranked = scan_for_networks(directory, wait)
        for line in format_ranked(ranked):
            print(line)
        if not ranked:
            print("No networks found")

    elif args.command == "adapter-power":
        directory.adapter_by_name(args.name).set_powered(ON_OFF[args.state])
        print(f"Adapter {args.name} powered {args.state}")

    elif args.command == "device-power":
        directory.device_by_name(args.name).set_powered(ON_OFF[args.state])
        print(f"Device {args.name} powered {args.state}")

    elif args.command == "device-mode":
        directory.device_by_name(args.name).set_mode(args.mode)
        print(f"Device {args.name} mode set to {args.mode}")

    elif args.command == "known":
        for known in directory.known_networks():
            last = known.last_connected_time or "never"
            auto = "auto" if known.auto_connect else "manual"
            print(f"{known.name:<32} {known.type:<6} {auto:<6} last connected {last}")

    elif args.command == "forget":
        directory.known_network_by_name(args.name).forget()
        print(f"Forgot {args.name}")

    elif args.command == "autoconnect":
        directory.known_network_by_name(args.name).set_auto_connect(ON_OFF[args.state])
        print(f"Auto-connect {args.state} for {args.name}")


def main(argv: Optional[List[str]] = None) -> int:
    """iwd-spider entry point."""
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"iwd-spider: cannot load configuration: {e}", file=sys.stderr)
        return 1

    if args.bus:
        cfg["bus"] = args.bus
    log_cfg = cfg["logging"]
    try:
        configure_logging(
            log_level=args.log_level or log_cfg["level"],
            log_file=args.log_file or log_cfg["file"],
            log_format=args.log_format or log_cfg["format"],
            syslog_address=log_cfg["syslog_address"])
    except (OSError, ValueError) as e:
        print(f"iwd-spider: cannot configure logging: {e}", file=sys.stderr)
        return 1

    try:
        directory = ServiceDirectory(open_channel(cfg))
        run_command(args, directory, cfg)
        return 0
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130
    except ImportError as e:
        logger.error(f"PyGObject is required to reach the bus (pip install iwd-spider[gio]): {e}")
        return 1
    except SpiderError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
