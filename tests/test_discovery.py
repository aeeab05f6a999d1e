from conftest import FakePrinterFacade, sewoo_registry

from printer_bridge.printer.discovery import PrinterDiscovery, PrinterTarget


def test_find_port_sanitizes_value():
    discovery = PrinterDiscovery(FakePrinterFacade(registry=sewoo_registry()))
    assert discovery.find_port() == "USB001"


def test_find_name_preserves_spaces_and_hyphens():
    discovery = PrinterDiscovery(FakePrinterFacade(registry=sewoo_registry()))
    assert discovery.find_name() == "SEWOO SLK-TS 100"


def test_vendor_match_is_case_insensitive():
    facade = FakePrinterFacade(registry={"Name": "Node,Name\r\nPC,Sewoo Lk-T100\r\n"})
    assert PrinterDiscovery(facade, vendor="SEWOO").find_name() == "Sewoo Lk-T100"


def test_header_row_is_ignored():
    facade = FakePrinterFacade(registry={"Name,PortName": "Node,Name,PortName\r\n"})
    assert PrinterDiscovery(facade).find_port() is None


def test_no_matching_printer():
    facade = FakePrinterFacade(registry={
        "Name,PortName": "Node,Name,PortName\r\nPC,Microsoft Print to PDF,PORTPROMPT:\r\n",
    })
    assert PrinterDiscovery(facade).find_port() is None


def test_query_failure_is_not_found():
    discovery = PrinterDiscovery(FakePrinterFacade(registry=sewoo_registry(), fail_query=True))
    assert discovery.find_port() is None
    assert discovery.find_name() is None
    assert discovery.find_target() is None


def test_missing_column_is_not_found():
    facade = FakePrinterFacade(registry={"Name,PortName": "PC,SEWOO SLK-TS 100\r\n"})
    assert PrinterDiscovery(facade).find_port() is None


def test_empty_value_is_not_found():
    facade = FakePrinterFacade(registry={"Name,PortName": "PC,SEWOO SLK-TS 100,\r\n"})
    assert PrinterDiscovery(facade).find_port() is None


def test_query_requests_positional_columns():
    facade = FakePrinterFacade(registry=sewoo_registry())
    discovery = PrinterDiscovery(facade)
    discovery.find_port()
    discovery.find_name()
    discovery.find_offline_flag()
    assert facade.queries == ["Name,PortName", "Name", "Name,WorkOffline"]


def test_offline_flag():
    discovery = PrinterDiscovery(FakePrinterFacade(registry=sewoo_registry(offline="TRUE")))
    assert discovery.find_offline_flag() == "TRUE"


def test_find_target():
    discovery = PrinterDiscovery(FakePrinterFacade(registry=sewoo_registry()))
    assert discovery.find_target() == PrinterTarget(port="USB001", name="SEWOO SLK-TS 100")


def test_find_target_needs_name_and_port():
    registry = sewoo_registry()
    del registry["Name"]
    assert PrinterDiscovery(FakePrinterFacade(registry=registry)).find_target() is None


def test_device_path():
    assert PrinterTarget("USB001").device_path == "\\\\.\\USB001"
    assert PrinterTarget("LPT1").device_path == "\\\\.\\LPT1"
    assert PrinterTarget("/dev/usb/lp0").device_path == "/dev/usb/lp0"
    assert not PrinterTarget("LPT1").resolved
