"""Cached printer target for the lifetime of the service."""
import logging
import threading
from typing import Optional

from printer_bridge.printer.discovery import PrinterDiscovery, PrinterTarget

logger = logging.getLogger(__name__)


class PrinterContext:
    """Holds the printer target resolved at first use.

    Discovery runs once; the result is reused until ``release_target()``.
    A printer swapped while the service runs is only picked up after
    ``rediscover()`` or a restart.
    """

    def __init__(self, discovery: PrinterDiscovery, fallback_port: str = "LPT1"):
        self.discovery = discovery
        self.fallback_port = fallback_port
        self._target: Optional[PrinterTarget] = None
        self._lock = threading.Lock()

    def get_target(self) -> PrinterTarget:
        """Return the cached target, discovering it on first call."""
        with self._lock:
            if self._target is None:
                self._target = self._resolve()
            return self._target

    def _resolve(self) -> PrinterTarget:
        target = self.discovery.find_target()
        if target is not None:
            logger.info("Found %s on port %s", target.name, target.port)
            return target

        logger.warning(
            "No %s printer found, falling back to %s",
            self.discovery.vendor,
            self.fallback_port,
        )
        return PrinterTarget(port=self.fallback_port)

    def release_target(self) -> None:
        """Forget the cached target."""
        with self._lock:
            if self._target is not None:
                logger.info("Released printer %s", self._target.name or self._target.port)
            self._target = None

    def rediscover(self) -> PrinterTarget:
        """Drop the cached target and run discovery again."""
        self.release_target()
        return self.get_target()

    def is_cached(self) -> bool:
        return self._target is not None

    def is_online(self) -> bool:
        """Report whether the printer is ready, never raising.

        Uses the registry ``WorkOffline`` flag when present, otherwise
        whether discovery can still see the printer port.
        """
        try:
            self.get_target()
            offline = self.discovery.find_offline_flag()
            if offline:
                return offline.upper() == "FALSE"
            return self.discovery.find_port() is not None
        except Exception:
            logger.exception("Printer status check failed")
            return False

    def __repr__(self):
        return f"PrinterContext(target={self._target!r})"
