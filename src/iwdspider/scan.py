"""
Scan and rank pipeline.

Scans on every station, waits once, collects each station's ordered
networks and merges them into one ranking:

    connected first, then known networks, then strongest signal, then name

The ranking is four stable sorts applied in turn, lowest priority first, so
each later pass keeps the order of the earlier one for equal keys.
"""

import time
from typing import Callable, List, Sequence

from iwdspider.entities.station import StationOrderedNetwork
from iwdspider.errors import NoStationsAvailable, TransportError, ValidationError
from iwdspider.logging import get_logger

logger = get_logger(__name__)


def rank_networks(entries: Sequence[StationOrderedNetwork]) -> List[StationOrderedNetwork]:
    """
    Rank ordered networks gathered from one or more stations.

    Args:
        entries: Concatenated station results

    Returns:
        New list, best candidate first
    """
    ranked = list(entries)
    ranked.sort(key=lambda entry: entry.network.name)
    # reverse=True keeps equal elements in their original order
    ranked.sort(key=lambda entry: entry.signal_strength, reverse=True)
    ranked.sort(key=lambda entry: entry.network.known_network is None)
    ranked.sort(key=lambda entry: not entry.network.connected)
    return ranked


def scan_for_networks(directory, wait_seconds: float,
                      sleep: Callable[[float], None] = time.sleep) -> List[StationOrderedNetwork]:
    """
    Scan on every station and return one merged ranking.

    Args:
        directory: ServiceDirectory to discover stations from
        wait_seconds: Pause between issuing the scans and reading results; 0 skips it
        sleep: Blocking pause function

    Returns:
        Ranked StationOrderedNetwork list

    Raises:
        ValidationError: If wait_seconds is negative
        NoStationsAvailable: If the service has no stations; no scan is issued
        TransportError: If any scan or result fetch fails; no partial result is returned
    """
    if wait_seconds < 0:
        raise ValidationError(f"wait must not be negative, got {wait_seconds}")

    stations = directory.stations()
    if not stations:
        logger.error("No stations available; power on an adapter and put a device in station mode")
        raise NoStationsAvailable("no stations available")

    for station in stations:
        try:
            station.scan()
        except TransportError as e:
            logger.error(f"Scan failed on {station.path}: {e}")
            raise

    if wait_seconds > 0:
        logger.info(f"Waiting {wait_seconds}s for scan results from {len(stations)} station(s)")
        sleep(wait_seconds)

    entries: List[StationOrderedNetwork] = []
    for station in stations:
        try:
            entries.extend(station.get_ordered_networks())
        except TransportError as e:
            logger.error(f"Failed to get ordered networks from {station.path}: {e}")
            raise

    ranked = rank_networks(entries)
    logger.debug(f"Ordered networks: {ranked}")
    return ranked
