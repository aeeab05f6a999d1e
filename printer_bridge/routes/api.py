"""REST API endpoints for programmatic access."""
from flask import Blueprint, current_app, jsonify, request

from printer_bridge.models import PrintHistory

api_bp = Blueprint("api", __name__)


# Printer API

@api_bp.route("/printer", methods=["GET"])
def get_printer():
    """Show the cached printer target without triggering discovery."""
    context = current_app.extensions["printer"].context
    target = context.get_target() if context.is_cached() else None
    return jsonify({
        "cached": target is not None,
        "port": target.port if target else None,
        "name": target.name if target else None,
    })


@api_bp.route("/printer/rediscover", methods=["POST"])
def rediscover_printer():
    """Forget the cached target and look for the printer again."""
    target = current_app.extensions["printer"].context.rediscover()
    return jsonify({
        "cached": True,
        "port": target.port,
        "name": target.name,
        "resolved": target.resolved,
    })


# History API

@api_bp.route("/history", methods=["GET"])
def list_history():
    """List print history.

    Query params:
    - page: Page number (default: 1)
    - per_page: Items per page (default: 20, max: 100)
    - status: Filter by status (success/failed/offline)
    - order_id: Filter by order
    """
    page = request.args.get("page", 1, type=int)
    per_page = min(request.args.get("per_page", 20, type=int), 100)

    query = PrintHistory.query.order_by(PrintHistory.printed_at.desc(), PrintHistory.id.desc())

    status = request.args.get("status")
    if status:
        query = query.filter_by(status=status)

    order_id = request.args.get("order_id")
    if order_id:
        query = query.filter_by(order_id=order_id)

    pagination = query.paginate(page=page, per_page=per_page, error_out=False)

    return jsonify({
        "history": [h.to_dict() for h in pagination.items],
        "page": pagination.page,
        "pages": pagination.pages,
        "total": pagination.total,
        "has_next": pagination.has_next,
        "has_prev": pagination.has_prev
    })


@api_bp.route("/history/<int:history_id>", methods=["GET"])
def get_history(history_id):
    """Get a specific history record."""
    record = PrintHistory.query.get_or_404(history_id)
    return jsonify(record.to_dict())
