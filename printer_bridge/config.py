"""Application configuration."""
import os
import platform

IS_WINDOWS = platform.system() == "Windows"


class Config:
    """Base configuration."""
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Receipt layout
    STORE_NAME = os.environ.get("STORE_NAME", "과일맛집1995")
    RECEIPT_WIDTH = 32  # Characters per line (58mm paper)
    LINE_CHARACTER = os.environ.get("LINE_CHARACTER", "=")
    PRINTER_CODEPAGE = os.environ.get("PRINTER_CODEPAGE", "cp949")

    # Printer discovery and transport
    PRINTER_VENDOR = os.environ.get("PRINTER_VENDOR", "SEWOO")
    PRINTER_DEFAULT_NAME = os.environ.get("PRINTER_DEFAULT_NAME", "SEWOO SLK-TS 100")
    PRINTER_FALLBACK_PORT = os.environ.get(
        "PRINTER_FALLBACK_PORT", "LPT1" if IS_WINDOWS else "/dev/usb/lp0"
    )
    PRINTER_TRANSPORT = os.environ.get(
        "PRINTER_TRANSPORT", "spooler" if IS_WINDOWS else "device"
    )
    PRINTER_STAGING_DIR = os.environ.get("PRINTER_STAGING_DIR")
    DISCOVERY_TIMEOUT = float(os.environ.get("DISCOVERY_TIMEOUT", 5))
    SUBMIT_TIMEOUT = float(os.environ.get("SUBMIT_TIMEOUT", 10))

    # Server
    HOST = os.environ.get("HOST", "0.0.0.0")
    PORT = int(os.environ.get("PORT", 18181))


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        "sqlite:///print_history.db"
    )


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        "sqlite:///print_history.db"
    )


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    STORE_NAME = "과일맛집1995"
    PRINTER_TRANSPORT = "spooler"
    PRINTER_FALLBACK_PORT = "LPT1"


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}
