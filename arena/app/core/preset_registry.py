import yaml
from pydantic import BaseModel, Field
from typing import Dict, Optional

from arena.app.core.settings import settings
from arena.app.game.players import ComputerPlayer
from engine.core.search import SearchLimits

class PresetConfig(BaseModel):
    label: str
    depth: int = Field(ge=0)
    node_budget: Optional[int] = Field(default=None, ge=1)
    time_limit_ms: Optional[int] = Field(default=None, ge=1)

    def search_limits(self) -> Optional[SearchLimits]:
        if self.node_budget is None and self.time_limit_ms is None:
            return None
        return SearchLimits(node_budget=self.node_budget, time_limit_ms=self.time_limit_ms)

class PresetRegistry:
    def __init__(self, config_path: str = settings.presets_path):
        self.presets: Dict[str, PresetConfig] = {}
        self._load(config_path)

    def _load(self, path: str):
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
            for key, val in data.get("presets", {}).items():
                self.presets[key] = PresetConfig(**val)

    def get(self, name: str) -> Optional[PresetConfig]:
        return self.presets.get(name)

    def list_all(self) -> Dict[str, PresetConfig]:
        return self.presets

    def build_player(self, name: str, side: int) -> ComputerPlayer:
        preset = self.get(name)
        if preset is None:
            raise ValueError(f"Unknown preset: {name}")
        return ComputerPlayer(side=side, depth=preset.depth, limits=preset.search_limits())

# Singleton instance
registry = PresetRegistry()
