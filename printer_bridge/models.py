"""Database models."""
from datetime import datetime

from printer_bridge import db


class PrintHistory(db.Model):
    """One receipt print attempt."""
    __tablename__ = "print_history"

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.String(64), nullable=True, index=True)
    status = db.Column(db.String(20), nullable=False)  # success, failed, offline
    error_message = db.Column(db.Text, nullable=True)
    error_class = db.Column(db.String(100), nullable=True)  # Underlying OS error type
    byte_count = db.Column(db.Integer, nullable=True)
    printer_name = db.Column(db.String(200), nullable=True)
    printer_port = db.Column(db.String(200), nullable=True)
    rendered_preview = db.Column(db.Text, nullable=True)
    printed_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "order_id": self.order_id,
            "status": self.status,
            "error_message": self.error_message,
            "error_class": self.error_class,
            "byte_count": self.byte_count,
            "printer_name": self.printer_name,
            "printer_port": self.printer_port,
            "rendered_preview": self.rendered_preview,
            "printed_at": self.printed_at.isoformat() if self.printed_at else None,
        }

    def __repr__(self):
        return f"<PrintHistory {self.id} ({self.status})>"
