import logging
import math
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_DEEPSEEK_BASE_URL = "https://api.deepseek.com"
DEFAULT_DEEPSEEK_MODEL = "deepseek-chat"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def _optional_float(name: str) -> float | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    try:
        number = float(value)
    except ValueError:
        number = math.nan
    if not math.isfinite(number) or number <= 0:
        logger.warning("Ignoring invalid %s=%r", name, value)
        return None
    return number


@dataclass(frozen=True)
class DeepSeekConfig:
    """Immutable upstream settings handed to the polish handler."""

    api_key: str = ""
    base_url: str = DEFAULT_DEEPSEEK_BASE_URL
    model: str = DEFAULT_DEEPSEEK_MODEL
    # None means no timeout at all
    timeout: float | None = None

    @classmethod
    def from_env(cls) -> "DeepSeekConfig":
        return cls(
            api_key=os.getenv("DEEPSEEK_API_KEY", ""),
            base_url=os.getenv("DEEPSEEK_BASE_URL") or DEFAULT_DEEPSEEK_BASE_URL,
            model=os.getenv("DEEPSEEK_MODEL") or DEFAULT_DEEPSEEK_MODEL,
            timeout=_optional_float("DEEPSEEK_TIMEOUT"),
        )

    @property
    def completions_url(self) -> str:
        return f"{self.base_url}/v1/chat/completions"
