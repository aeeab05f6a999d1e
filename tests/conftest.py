from datetime import datetime

import pytest

from printer_bridge import create_app
from printer_bridge.printer import (
    LineItem,
    PrintService,
    PrinterFacade,
    ReceiptDocument,
)
from printer_bridge.printer.errors import DiscoveryUnavailable

SEWOO_PORT_CSV = "\r\n".join([
    "",
    "Node,Name,PortName\r",
    "DESK-01,Microsoft Print to PDF,PORTPROMPT:\r",
    "DESK-01,SEWOO SLK-TS 100,USB001\r",
    "",
])

SEWOO_NAME_CSV = "\r\n".join([
    "",
    "Node,Name\r",
    "DESK-01,Microsoft Print to PDF\r",
    "DESK-01,SEWOO SLK-TS 100\r",
])

SEWOO_OFFLINE_CSV = "\r\n".join([
    "Node,Name,WorkOffline\r",
    "DESK-01,SEWOO SLK-TS 100,FALSE\r",
])


class FakePrinterFacade(PrinterFacade):
    """In-memory registry and spooler."""

    def __init__(self, registry=None, fail_query=False, fail_submit=None):
        # Maps "Name,PortName" style keys to CSV output
        self.registry = registry if registry is not None else {}
        self.fail_query = fail_query
        self.fail_submit = fail_submit
        self.queries = []
        self.jobs = []
        self.staged_paths = []

    def query_registry(self, fields):
        key = ",".join(fields)
        self.queries.append(key)
        if self.fail_query:
            raise DiscoveryUnavailable("wmic timed out")
        return self.registry.get(key, "Node," + key + "\r\n")

    def submit_raw_job(self, printer_name, file_path):
        self.staged_paths.append(file_path)
        with open(file_path, "rb") as f:
            data = f.read()
        if self.fail_submit is not None:
            raise self.fail_submit
        self.jobs.append((printer_name, data))


def sewoo_registry(offline="FALSE"):
    registry = {
        "Name,PortName": SEWOO_PORT_CSV,
        "Name": SEWOO_NAME_CSV,
    }
    if offline is not None:
        registry["Name,WorkOffline"] = SEWOO_OFFLINE_CSV.replace("FALSE", offline)
    return registry


@pytest.fixture
def facade():
    return FakePrinterFacade(registry=sewoo_registry())


@pytest.fixture
def missing_facade():
    return FakePrinterFacade()


def make_service(facade, tmp_path, **overrides):
    settings = {
        "STORE_NAME": "과일맛집1995",
        "PRINTER_TRANSPORT": "spooler",
        "PRINTER_FALLBACK_PORT": "LPT1",
        "PRINTER_STAGING_DIR": str(tmp_path),
    }
    settings.update(overrides)
    return PrintService.from_config(settings, facade=facade)


@pytest.fixture
def service(facade, tmp_path):
    return make_service(facade, tmp_path)


@pytest.fixture
def app(service):
    app = create_app("testing", printer_service=service)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


def make_document(**overrides):
    values = dict(
        order_id="1024",
        paid_at=datetime(2026, 2, 12, 2, 8, 3),
        delivery_hour=18,
        delivery_minute=30,
        buyer_name="홍길동",
        phone="010-1234-5678",
        items=(LineItem("사과세트", 2, 20000),),
        total_product_amount=20000,
        delivery_fee=3000,
        distance_km=2.5,
        address1="서울시 강남구 테헤란로 1",
    )
    values.update(overrides)
    return ReceiptDocument(**values)


@pytest.fixture
def document():
    return make_document()


def order_payload(**overrides):
    payload = {
        "orderId": 1024,
        "paidAt": "2026-02-12T02:08:03",
        "deliveryHour": 18,
        "deliveryMinute": 30,
        "buyerName": "홍길동",
        "phone": "010-1234-5678",
        "items": [{"productName": "사과세트", "quantity": 2, "amount": 20000}],
        "totalProductAmount": 20000,
        "deliveryFee": 3000,
        "distanceKm": 2.5,
        "address1": "서울시 강남구 테헤란로 1",
        "address2": "101동 1001호",
    }
    payload.update(overrides)
    return payload


