"""Game configuration: YAML settings file plus command-line overrides."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

import yaml

from .Board import Stone
from .ai.search_minimax import SearchConfig

PROJECT_DIR = Path(__file__).resolve().parent
DEFAULT_SETTINGS_PATH = "config/settings.yaml"

_SIDE_NAMES = {"black": Stone.BLACK, "white": Stone.WHITE, "none": None}
_TRUE_WORDS = {"true", "yes", "on", "1"}
_FALSE_WORDS = {"false", "no", "off", "0"}


@dataclass(frozen=True)
class GameConfig:
    ai_side: Optional[Stone] = Stone.WHITE
    search_depth: int = 2
    node_budget: Optional[int] = 20_000
    time_budget: Optional[float] = None
    draw_move_limit: Optional[int] = 400
    radius: int = 2
    candidate_limit: int = 12
    overline_wins: bool = True

    def search_config(self) -> SearchConfig:
        return SearchConfig(
            depth=self.search_depth,
            node_budget=self.node_budget,
            time_budget=self.time_budget,
            radius=self.radius,
            candidate_limit=self.candidate_limit,
            overline_wins=self.overline_wins,
        )

    def with_overrides(self, **overrides) -> "GameConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def parse_side(value) -> Optional[Stone]:
    if value is None or isinstance(value, Stone):
        return value
    try:
        return _SIDE_NAMES[str(value).strip().lower()]
    except KeyError as exc:
        raise ValueError(f"ai_side must be black, white or none, got {value!r}") from exc


def parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"expected a boolean, got {value!r}")


def _optional(convert, value):
    # Settings may leave a budget or limit empty to disable it
    return None if value is None else convert(value)


def resolve_project_path(path: str | Path) -> Path:
    """Resolve a package-relative path when invoked from outside `Infinite_Omok/`."""
    p = Path(path)
    if p.is_absolute() or p.exists():
        return p
    candidate = PROJECT_DIR / p
    return candidate if candidate.exists() else p


def load_settings(path=DEFAULT_SETTINGS_PATH) -> dict:
    path = resolve_project_path(path)
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def config_from_settings(settings: dict) -> GameConfig:
    defaults = GameConfig()
    search = settings.get("search", {}) or {}
    return GameConfig(
        ai_side=parse_side(settings.get("ai_side", defaults.ai_side.name)),
        search_depth=int(search.get("depth", defaults.search_depth)),
        node_budget=_optional(int, search.get("node_budget", defaults.node_budget)),
        time_budget=_optional(float, search.get("time_budget_seconds", defaults.time_budget)),
        draw_move_limit=_optional(int, settings.get("draw_move_limit", defaults.draw_move_limit)),
        radius=int(search.get("radius", defaults.radius)),
        candidate_limit=int(search.get("candidate_limit", defaults.candidate_limit)),
        overline_wins=parse_bool(settings.get("overline_wins", defaults.overline_wins)),
    )
