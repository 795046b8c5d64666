"""Environment variable parsing and configuration."""

import os
from pathlib import Path
from typing import Optional


def get_str(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get string env var."""
    return os.environ.get(key, default)


def get_int(key: str, default: int) -> int:
    """Get integer env var."""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        return default


def get_bool(key: str, default: bool = False) -> bool:
    """Get boolean env var (0/1, true/false, yes/no)."""
    val = os.environ.get(key, "").lower()
    if not val:
        return default
    return val in ("1", "true", "yes", "on")


def get_path(key: str, default: str) -> Path:
    """Get path env var, expanding user and making absolute."""
    val = os.environ.get(key, default)
    return Path(val).expanduser().resolve()


def get_choice(key: str, choices: tuple[str, ...], default: str) -> str:
    """Get a lowercased env var restricted to a fixed set of values."""
    val = os.environ.get(key, "").strip().lower()
    return val if val in choices else default


class Config:
    """Configuration loaded from environment variables."""

    def __init__(self):
        self.debug = get_bool("DAYRATE_DEBUG", False)

        # Rating provider
        self.token = get_str("DAYRATE_TOKEN")  # None = unauthenticated

        # Paths
        self.out_dir = get_path("OUT_DIR", "./out")
        self.ratings_file = get_path("RATINGS_FILE", "./data/ratings.json")
        self.categories_file = get_path("CATEGORIES_FILE", "./data/categories.json")

        # Chart viewport and appearance
        self.chart_width = get_int("CHART_WIDTH", 343)
        self.chart_height = get_int("CHART_HEIGHT", 130)
        self.chart_theme = get_choice("CHART_THEME", ("light", "dark"), "light")


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config
