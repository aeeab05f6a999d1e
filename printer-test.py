#!/usr/bin/env python3
"""
Receipt Printer Connectivity Tester
Finds the printer, checks its status, and prints a sample receipt
"""

import argparse
import os
import sys
from datetime import datetime

from printer_bridge.config import config
from printer_bridge.printer import (
    LineItem,
    PrintService,
    ReceiptDocument,
    TransmissionFailure,
)


def sample_document() -> ReceiptDocument:
    """A small order exercising every receipt section."""
    return ReceiptDocument(
        order_id="0",
        display_code="TEST-01",
        paid_at=datetime.now().replace(microsecond=0),
        delivery_hour=18,
        delivery_minute=30,
        buyer_name="테스트",
        phone="010-0000-0000",
        items=(
            LineItem("사과세트", 2, 20000),
            LineItem("제주 한라봉 선물세트 특대", 1, 45000),
        ),
        total_product_amount=65000,
        delivery_fee=3000,
        distance_km=2.5,
        address1="테스트 주소 1",
        address2="101동 1001호",
    )


def test_discovery(service: PrintService) -> bool:
    """Show what discovery resolves to."""
    target = service.context.get_target()
    if target.resolved:
        print(f"✓ Found {target.name} on port {target.port}")
    else:
        print(f"✗ No {service.context.discovery.vendor} printer found")
        print(f"  Falling back to {target.port}")
    print(f"  Device path: {target.device_path}")
    return target.resolved


def test_status(service: PrintService) -> bool:
    """Check whether the printer reports ready."""
    if service.is_online():
        print("✓ Printer online")
        return True
    print("✗ Printer offline")
    return False


def test_sample(service: PrintService, print_test: bool = True) -> bool:
    """Render the sample receipt and optionally print it."""
    buffer = service.builder.build(sample_document())
    print(buffer.preview())
    print(f"  {len(buffer)} bytes")

    if not print_test:
        return True

    try:
        service.transport.transmit(buffer, service.context.get_target())
    except TransmissionFailure as e:
        print(f"✗ Print failed: {e}")
        return False
    print("✓ Sample receipt sent")
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Receipt Printer Connectivity Tester",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python printer-test.py discover
  python printer-test.py status
  python printer-test.py sample --no-print
  python printer-test.py --transport device --port /dev/usb/lp0 sample
        """
    )

    parser.add_argument("--transport", choices=["spooler", "device"],
                        help="Override PRINTER_TRANSPORT")
    parser.add_argument("--port",
                        help="Override PRINTER_FALLBACK_PORT (port name or device path)")

    subparsers = parser.add_subparsers(dest="mode", required=True)
    subparsers.add_parser("discover", help="Find the printer in the OS registry")
    subparsers.add_parser("status", help="Check whether the printer is online")
    sample_parser = subparsers.add_parser("sample", help="Print a sample receipt")
    sample_parser.add_argument("--no-print", action="store_true",
                               help="Skip printing the sample (preview only)")

    args = parser.parse_args(argv)

    settings = {
        key: getattr(config[os.environ.get("FLASK_ENV", "default")], key)
        for key in dir(config["default"]) if key.isupper()
    }
    if args.transport:
        settings["PRINTER_TRANSPORT"] = args.transport
    if args.port:
        settings["PRINTER_FALLBACK_PORT"] = args.port

    service = PrintService.from_config(settings)

    print("=" * 40)
    print("Receipt Printer Connectivity Tester")
    print("=" * 40 + "\n")

    try:
        if args.mode == "discover":
            ok = test_discovery(service)
        elif args.mode == "status":
            ok = test_status(service)
        else:
            ok = test_sample(service, print_test=not args.no_print)
    finally:
        service.shutdown()

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
