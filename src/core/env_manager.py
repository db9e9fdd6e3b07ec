import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


class EnvManager:
    """Read configuration values from the environment (and a local .env file)."""

    @staticmethod
    def get_env_variable(name: str, default: Optional[str] = None) -> Optional[str]:
        value = os.getenv(name)
        if value is None or value == "":
            return default
        return value

    @staticmethod
    def get_bool(name: str, default: bool = False) -> bool:
        value = os.getenv(name)
        if value is None or value == "":
            return default
        return value.strip().lower() in ("1", "true", "yes", "on")
