import logging

from backend.app.core.logging_config import configure_logging
from backend.app.core.settings import get_settings


def test_settings_defaults():
    settings = get_settings()
    assert settings.app_name == "Ledgerly Invoicing"
    assert settings.environment == "development"
    assert isinstance(settings.database_url, str) and settings.database_url
    assert settings.currency_symbol == "₹"
    assert settings.default_template_color == "#3b82f6"


def test_settings_is_singleton():
    assert get_settings() is get_settings()


def test_configure_logging_accepts_level_names():
    configure_logging("debug")
    assert logging.getLogger().level == logging.DEBUG
    configure_logging("not-a-level")
    assert logging.getLogger().level == logging.INFO
    configure_logging(logging.WARNING)
    assert logging.getLogger().level == logging.WARNING
