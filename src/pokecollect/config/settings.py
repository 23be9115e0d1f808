"""
Configuration settings for the PokeCollect client.
"""
import os
import sys
import configparser
from typing import Dict, List
from pathlib import Path


def get_config_path() -> Path:
    """Get the path to config.ini file."""
    override = os.getenv("POKECOLLECT_CONFIG")
    if override:
        return Path(override)
    if getattr(sys, 'frozen', False):
        exe_dir = Path(sys.executable).parent
        config_path = exe_dir / 'config.ini'
    else:
        # Go up from src/pokecollect/config/ to the project root
        config_path = Path(__file__).parent.parent.parent.parent / 'config.ini'
    return config_path


def load_config() -> configparser.ConfigParser:
    """Load configuration from config.ini file."""
    config = configparser.ConfigParser()
    config_path = get_config_path()
    if config_path.exists():
        config.read(config_path)
    return config


def _as_bool(value: str) -> bool:
    return str(value).lower() in ("true", "1", "yes")


_config = load_config()


class AppSettings:
    """Application configuration settings."""

    # Application metadata
    APP_NAME = "PokeCollect"
    APP_VERSION = "1.0.0"

    # API Configuration
    API_BASE_URL = _config.get('server', 'api_base_url',
                               fallback=os.getenv("API_BASE_URL", "http://localhost:8080"))
    API_TIMEOUT = float(_config.get('server', 'api_timeout',
                                    fallback=os.getenv("API_TIMEOUT", "30")))
    # Single attempt per call; callers decide whether to retry
    API_RETRY_ATTEMPTS = 0
    API_POOL_CONNECTIONS = 10
    API_POOL_MAXSIZE = 20

    # Image loading / caching
    IMAGE_REQUEST_TIMEOUT = float(_config.get('images', 'request_timeout',
                                              fallback=os.getenv("IMAGE_REQUEST_TIMEOUT", "30")))
    IMAGE_RESOURCE_TIMEOUT = float(_config.get('images', 'resource_timeout',
                                               fallback=os.getenv("IMAGE_RESOURCE_TIMEOUT", "60")))
    IMAGE_CACHE_COUNT_LIMIT = int(_config.get('images', 'cache_count_limit',
                                              fallback=os.getenv("IMAGE_CACHE_COUNT_LIMIT", "100")))
    IMAGE_CACHE_COST_LIMIT = int(_config.get('images', 'cache_cost_limit',
                                             fallback=os.getenv("IMAGE_CACHE_COST_LIMIT",
                                                                str(50 * 1024 * 1024))))
    IMAGE_CHUNK_SIZE = 64 * 1024

    # Authentication / session
    TOKEN_ACCOUNT_KEY = "jwt_token"
    SESSION_VALIDATE_BLOCKING = _as_bool(_config.get('session', 'validate_blocking',
                                                     fallback=os.getenv("SESSION_VALIDATE_BLOCKING",
                                                                        "False")))
    WORKER_THREADS = int(os.getenv("WORKER_THREADS", "4"))

    # Security
    CREDENTIAL_STORE_SERVICE = _config.get('security', 'credential_service',
                                           fallback=os.getenv("CREDENTIAL_STORE_SERVICE",
                                                              "com.tlam.pokecollect"))
    CREDENTIAL_BACKEND = _config.get('security', 'credential_backend',
                                     fallback=os.getenv("CREDENTIAL_BACKEND", "keyring"))

    # Validation rules
    EMAIL_MAX_LENGTH = 100
    PASSWORD_MIN_LENGTH = 8
    PASSWORD_MAX_LENGTH = 128
    NAME_MIN_LENGTH = 2
    NAME_MAX_LENGTH = 100
    RESET_CODE_LENGTH = 6
    PASSWORD_SYMBOLS = "@$!%*?&"

    # Browse
    DEFAULT_SERIES: List[str] = [
        "Scarlet & Violet",
        "Sword & Shield",
        "Sun & Moon",
        "XY",
        "Classic",
    ]

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("LOG_FILE", "pokecollect.log")
    LOG_MAX_SIZE = int(os.getenv("LOG_MAX_SIZE", "10485760"))   # 10 MB
    LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "5"))
    LOG_TO_FILE = _as_bool(os.getenv("LOG_TO_FILE", "True"))

    # File paths
    CONFIG_DIR = Path(os.getenv("POKECOLLECT_HOME", str(Path.home() / ".pokecollect")))
    LOG_DIR = CONFIG_DIR / "logs"
    TOKEN_FILE = CONFIG_DIR / ".token"
    KEY_FILE = CONFIG_DIR / ".key"

    # Debug (request/response logging)
    DEBUG = _as_bool(os.getenv("DEBUG", "False"))

    @classmethod
    def ensure_directories(cls):
        """Ensure required directories exist."""
        for directory in [cls.CONFIG_DIR, cls.LOG_DIR]:
            directory.mkdir(parents=True, exist_ok=True)

    @classmethod
    def get_api_endpoints(cls) -> Dict[str, str]:
        """Get all API endpoint paths (relative to API_BASE_URL)."""
        auth = "/api/auth"
        return {
            # Authentication
            "login": f"{auth}/login",
            "register": f"{auth}/register",
            "forgot_password": f"{auth}/forgot-password",
            "verify_reset_code": f"{auth}/verify-reset-code",
            "reset_password": f"{auth}/reset-password",
            "test": "/api/test",

            # Catalog
            "sets_by_series": "/api/sets/series/{series}",
            "cards_by_set": "/api/cards/set/{set_id}",

            # Collection
            "collection_add": "/api/collection/add",
            "collection_delete": "/api/collection/delete/{entry_id}",
            "collection_user": "/api/collection/user/{user_id}",
        }


# Global settings instance
settings = AppSettings()
