"""Print and health routes called by the store admin page."""
import logging

from flask import Blueprint, current_app, jsonify, request

from printer_bridge import db
from printer_bridge.models import PrintHistory
from printer_bridge.printer import DeviceOffline, ReceiptDocument, TransmissionFailure

logger = logging.getLogger(__name__)

print_bp = Blueprint("print", __name__)

REQUIRED_FIELDS = (
    "orderId", "paidAt", "deliveryHour", "deliveryMinute",
    "buyerName", "phone", "items", "totalProductAmount",
    "deliveryFee", "distanceKm", "address1",
)


def get_service():
    return current_app.extensions["printer"]


def record_history(order_id, status, result=None, error=None, target=None):
    """Store a print attempt in the history table."""
    history = PrintHistory(order_id=str(order_id), status=status)
    if result is not None:
        history.byte_count = result.byte_count
        history.rendered_preview = result.preview
        target = result.target
    if target is not None:
        history.printer_name = target.name
        history.printer_port = target.port
    if error is not None:
        history.error_message = str(error)
        history.error_class = getattr(error, "error_class", None)
    db.session.add(history)
    db.session.commit()
    return history


@print_bp.route("/print", methods=["POST"])
def print_receipt():
    """Print a delivery receipt.

    Request body:
    {
        "orderId": 1024,
        "displayCode": "A-12",            // optional
        "paidAt": "2026-02-12T02:08:03",
        "deliveryHour": 15, "deliveryMinute": 10,
        "scheduledDeliveryHour": 17,      // optional
        "scheduledDeliveryMinute": 30,    // optional
        "buyerName": "...", "phone": "...",
        "items": [{"productName": "...", "quantity": 2, "amount": 20000}],
        "totalProductAmount": 20000, "deliveryFee": 3000, "distanceKm": 2.5,
        "address1": "...", "address2": "..."  // address2 optional
    }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    logger.debug(
        "Print request %s scheduled=%s:%s",
        data.get("orderId"),
        data.get("scheduledDeliveryHour"),
        data.get("scheduledDeliveryMinute"),
    )

    for field in REQUIRED_FIELDS:
        if data.get(field) is None:
            return jsonify({"error": f"Missing required field: {field}"}), 400

    if not isinstance(data["items"], list) or not data["items"]:
        return jsonify({"error": "items must be a non-empty list"}), 400

    try:
        document = ReceiptDocument.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({"error": f"Invalid order data: {e}"}), 400

    service = get_service()
    try:
        result = service.print_receipt(document)
    except DeviceOffline as e:
        record_history(document.order_id, "offline", error=e,
                       target=service.context.get_target())
        return jsonify({
            "error": "Printer not connected - check the USB cable and power"
        }), 500
    except TransmissionFailure as e:
        logger.error("Print of order %s failed: %s", document.order_id, e)
        history = record_history(document.order_id, "failed", error=e,
                                 target=service.context.get_target())
        return jsonify({
            "error": f"Print failed: {e}",
            "error_class": e.error_class,
            "history_id": history.id,
        }), 500

    history = record_history(document.order_id, "success", result=result)
    return jsonify({
        "message": "Receipt printed",
        "orderId": data["orderId"],
        "history_id": history.id,
    })


@print_bp.route("/health", methods=["GET"])
def health():
    """Report printer readiness for the admin page's print button."""
    if get_service().is_online():
        return jsonify({"status": "connected", "message": "Printer ready"})
    return jsonify({"status": "disconnected", "message": "Printer not connected"}), 503
