import os

# ============================================================================
# CONFIGURATION CLASS
# ============================================================================

def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Centralized configuration with validation"""
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:8000")

    # Identifier codec
    ID_SALT_LENGTH: int = int(os.getenv("ID_SALT_LENGTH", "8"))
    ID_ITERATIONS: int = int(os.getenv("ID_ITERATIONS", "3"))
    ID_INCLUDE_CHECKSUM: bool = _env_bool("ID_INCLUDE_CHECKSUM", "true")
    ID_CUSTOM_KEY: str = os.getenv("ID_CUSTOM_KEY", "SecureKey2024")

    # Rate limiting
    RATE_LIMIT_ENCODE: str = os.getenv("RATE_LIMIT_ENCODE", "60/minute")
    RATE_LIMIT_DECODE: str = os.getenv("RATE_LIMIT_DECODE", "120/minute")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_DIR: str = os.getenv("LOG_DIR", os.path.join(os.path.dirname(__file__), "logs"))

    # View details links
    VIEW_DETAILS_PATH: str = "/view-details"
    VIEW_DETAILS_TYPES: tuple[str, ...] = (
        "transaction", "booking", "property-booking", "tour-booking", "property", "tour", "user"
    )

    # Sample ids checked by the health endpoint
    HEALTH_CHECK_IDS: tuple[str, ...] = ("123", "456789", "abc123", "999999")

    @classmethod
    def validate(cls):
        """Validate configuration on startup"""
        if not cls.BASE_URL:
            raise ValueError("BASE_URL must be set")
        if not cls.BASE_URL.startswith(("http://", "https://")):
            raise ValueError("BASE_URL must include http:// or https://")
        if cls.ID_SALT_LENGTH < 1:
            raise ValueError("ID_SALT_LENGTH must be a positive integer")
        if cls.ID_ITERATIONS < 1:
            raise ValueError("ID_ITERATIONS must be a positive integer")
        if not cls.ID_CUSTOM_KEY:
            raise ValueError("ID_CUSTOM_KEY must not be empty")

# ============================================================================
# SINGLETON INSTANCE & DERIVED CONSTANTS
# ============================================================================

config = Config()

# --- Expose class attributes as module constants for convenience ---
for attr in [a for a in dir(config) if not a.startswith('__') and not callable(getattr(config, a))]:
    globals()[attr] = getattr(config, attr)
