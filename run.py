#!/usr/bin/env python3
"""Entry point for the receipt printer bridge."""
import logging
import os
import signal
import sys

from printer_bridge import create_app

app = create_app(os.environ.get("FLASK_ENV", "default"))

logger = logging.getLogger("printer_bridge")


def shutdown(signum, frame):
    """Release the printer before exiting on SIGINT/SIGTERM."""
    logger.info("Received %s, shutting down", signal.Signals(signum).name)
    app.extensions["printer"].shutdown()
    sys.exit(0)


if __name__ == "__main__":
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    host = app.config["HOST"]
    port = app.config["PORT"]
    debug = os.environ.get("FLASK_ENV", "default") == "development"

    logger.info("Starting printer bridge on http://%s:%s", host, port)
    logger.info("Health check: http://localhost:%s/health", port)

    service = app.extensions["printer"]
    if service.is_online():
        logger.info("Printer ready")
    else:
        logger.warning("Printer not connected - check the USB cable")

    app.run(host=host, port=port, debug=debug, use_reloader=False)
