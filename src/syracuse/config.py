"""Configuration helpers for loading JSON config files."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

REPO_ROOT = Path(__file__).resolve().parents[2]
CONFIG_DIR = REPO_ROOT / "config"
DEFAULT_SEARCH_CONFIG = "search_config.json"


def load_json_config(file_name: str) -> Any:
    """Load a JSON config file relative to the repository config directory."""

    file_path = Path(file_name)
    if not file_path.is_absolute() and not file_path.exists():
        file_path = CONFIG_DIR / file_name

    if not file_path.exists():
        raise FileNotFoundError(f"Config file '{file_name}' does not exist at {file_path}")

    with file_path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def auto_load_json_config(file_name: str,
                          tag: str = "default") -> Dict[str, Any]:
    """
    Using tag strategy to load one preset from a file holding several.
    Return the {} item tagged with ``tag`` from [{},{}], or the first item.
    """
    config_data = load_json_config(file_name)

    if isinstance(config_data, list):
        if not config_data:
            raise ValueError(f"Config file '{file_name}' is an empty list.")

        for config in config_data:
            if tag in config.get("tags", []):
                return config

        return config_data[0]

    return config_data


@dataclass
class SearchSettings:
    """Resolved parameters for a term, search or batch run."""

    relation: str = "syracuse"
    initial_terms: Tuple[int, ...] = (6,)
    target: int = 1
    count: int = 10
    step: int = 1
    max_workers: Optional[int] = None
    timeout: Optional[float] = None
    max_steps: Optional[int] = None
    tags: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchSettings":
        known = {name for name in cls.__dataclass_fields__}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown search settings: {', '.join(sorted(unknown))}")
        values = dict(data)
        if "initial_terms" in values:
            values["initial_terms"] = tuple(int(term) for term in values["initial_terms"])
        if "tags" in values:
            values["tags"] = tuple(values["tags"])
        return cls(**values)

    def override(self, **overrides: Any) -> "SearchSettings":
        """Return a copy with every non-None override applied."""
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})


def load_search_settings(config_name: Optional[str] = None, tag: str = "default") -> SearchSettings:
    """Load the preset tagged ``tag``; built-in defaults if no config is found."""
    name = config_name or DEFAULT_SEARCH_CONFIG
    try:
        data = auto_load_json_config(name, tag=tag)
    except FileNotFoundError:
        if config_name is not None:
            raise
        return SearchSettings()
    return SearchSettings.from_dict(data)
