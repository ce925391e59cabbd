import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from engine.core.constants import DEFAULT_DEPTH
from engine.core.search import SearchLimits

load_dotenv()

DEFAULT_PRESETS_PATH = Path(__file__).resolve().parents[2] / "config" / "presets.yaml"


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


class Settings(BaseModel):
    default_depth: int = Field(default=DEFAULT_DEPTH, ge=0)
    node_budget: Optional[int] = Field(default=None, ge=1)
    time_limit_ms: Optional[int] = Field(default=None, ge=1)
    presets_path: str = str(DEFAULT_PRESETS_PATH)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            default_depth=int(os.getenv("C4_DEFAULT_DEPTH", DEFAULT_DEPTH)),
            node_budget=_optional_int("C4_NODE_BUDGET"),
            time_limit_ms=_optional_int("C4_TIME_LIMIT_MS"),
            presets_path=os.getenv("C4_PRESETS_PATH", str(DEFAULT_PRESETS_PATH)),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def search_limits(self) -> Optional[SearchLimits]:
        if self.node_budget is None and self.time_limit_ms is None:
            return None
        return SearchLimits(node_budget=self.node_budget, time_limit_ms=self.time_limit_ms)


def configure_logging(level: Optional[str] = None):
    logging.basicConfig(
        level=level or settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Singleton instance
settings = Settings.from_env()
