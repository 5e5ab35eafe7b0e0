import os


class Settings:
    def __init__(self):
        self.app_name = "Ledgerly Invoicing"
        self.api_version = "1.0.0"
        self.environment = os.getenv("LEDGERLY_ENVIRONMENT", "development")
        self.database_url = os.getenv("LEDGERLY_DATABASE_URL", "sqlite:///./ledgerly.db")
        self.log_level = os.getenv("LEDGERLY_LOG_LEVEL", "INFO")
        self.currency_symbol = "₹"
        self.default_template_color = "#3b82f6"
        self.cors_origins = [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
