"""Locate the receipt printer in the OS printer registry."""
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from printer_bridge.printer.errors import DiscoveryUnavailable
from printer_bridge.printer.facade import PrinterFacade

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PrinterTarget:
    """Resolved printer identity.

    Attributes:
        port: Transport locator, a Windows port name (``USB001``, ``LPT1``)
            or an absolute device path (``/dev/usb/lp0``)
        name: Registered printer name, None when discovery failed
    """
    port: str
    name: Optional[str] = None

    @property
    def device_path(self) -> str:
        """Path that can be opened for writing."""
        if self.port.startswith(("/", "\\\\")):
            return self.port
        return f"\\\\.\\{self.port}"

    @property
    def resolved(self) -> bool:
        return self.name is not None


NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")

# wmic CSV output always starts with a Node column, then the requested
# fields in alphabetical order.
PORT_QUERY = (["Name", "PortName"], 2)
NAME_QUERY = (["Name"], 1)
OFFLINE_QUERY = (["Name", "WorkOffline"], 2)


class PrinterDiscovery:
    """Finds a printer by vendor name in the registry CSV."""

    def __init__(self, facade: PrinterFacade, vendor: str = "SEWOO"):
        self.facade = facade
        self.vendor = vendor

    def query(self, fields: List[str], index: int, sanitize: bool = True) -> Optional[str]:
        """Return one column of the first registry row naming the vendor.

        Args:
            fields: Registry columns to request
            index: Position of the wanted column in the CSV row
            sanitize: Keep only ASCII letters and digits (for ports). When
                False only whitespace is trimmed (for display names).

        Returns:
            The column value, or None if the query failed or nothing matched.
        """
        try:
            output = self.facade.query_registry(fields)
        except DiscoveryUnavailable as e:
            logger.debug("Registry query for %s unavailable: %s", ",".join(fields), e)
            return None

        vendor = self.vendor.upper()
        for line in output.strip().splitlines():
            if vendor not in line.upper():
                continue
            columns = line.split(",")
            if index >= len(columns):
                return None
            if sanitize:
                value = NON_ALPHANUMERIC.sub("", columns[index])
            else:
                value = columns[index].replace("\r", "").strip()
            return value or None
        return None

    def find_port(self) -> Optional[str]:
        """Registry port of the printer, e.g. ``USB001``."""
        fields, index = PORT_QUERY
        return self.query(fields, index)

    def find_name(self) -> Optional[str]:
        """Registered printer name, e.g. ``SEWOO SLK-TS 100``."""
        fields, index = NAME_QUERY
        return self.query(fields, index, sanitize=False)

    def find_offline_flag(self) -> Optional[str]:
        """Raw ``WorkOffline`` value (``TRUE``/``FALSE``) if available."""
        fields, index = OFFLINE_QUERY
        return self.query(fields, index)

    def find_target(self) -> Optional[PrinterTarget]:
        """Resolve both port and name, or None if either is missing."""
        port = self.find_port()
        name = self.find_name()
        if port and name:
            return PrinterTarget(port=port, name=name)
        return None

    def __repr__(self):
        return f"PrinterDiscovery(vendor={self.vendor!r})"
