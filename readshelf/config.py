"""
Client configuration.

Settings are loaded from environment variables (and a local ``.env``
file when present). The data mode selects between the live HTTP
backend and the in-memory mock catalog.
"""

import os
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from dotenv import load_dotenv


class DataMode(str, Enum):
    """Where catalog data comes from."""
    LIVE = "live"
    MOCK = "mock"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Client settings loaded from environment."""
    
    # Backend
    api_base_url: str = "http://localhost:3000/api"
    request_timeout: float = 10.0
    
    # live | mock
    data_mode: DataMode = DataMode.LIVE
    
    # Auth
    clear_user_on_logout_failure: bool = False
    
    # Logging
    log_level: str = "INFO"
    
    # Environment
    environment: str = "development"
    
    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        load_dotenv()
        
        return cls(
            api_base_url=os.getenv("API_BASE_URL", cls.api_base_url),
            request_timeout=float(os.getenv("READSHELF_REQUEST_TIMEOUT", cls.request_timeout)),
            data_mode=DataMode(os.getenv("READSHELF_DATA_MODE", cls.data_mode.value).strip().lower()),
            clear_user_on_logout_failure=_env_flag("READSHELF_CLEAR_USER_ON_LOGOUT_FAILURE"),
            log_level=os.getenv("READSHELF_LOG_LEVEL", cls.log_level).upper(),
            environment=os.getenv("READSHELF_ENV", cls.environment),
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached client settings."""
    return Settings.from_env()
