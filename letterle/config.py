"""
Game constants and environment configuration.

The alphabet order drives feedback distance; the keyboard layout only
orders the share grid.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
import os


LETTERS: tuple[str, ...] = tuple("abcdefghijklmnopqrstuvwxyz")

KEYBOARD_LAYOUT: tuple[str, ...] = tuple("qwertyuiopasdfghjklzxcvbnm")

# Share grid row widths, matching the keyboard rows
KEYBOARD_ROWS: tuple[int, ...] = (10, 9, 7)

# Max alphabet distance for a "close" tile
RANGE_THRESHOLD = 2

STORAGE_KEY = "localData"

GAME_TITLE = "Find Phunk"
SITE_URL = "https://ajames.dev/find-phunk"


def normalize_guess(raw: str) -> str:
    """Lower-case and strip raw keyboard input before dispatching a guess."""
    return raw.strip().lower()


@dataclass
class Settings:
    """
    Runtime settings, read from the environment.

    CLI flags override these after loading.
    """
    env: str = "development"
    data_dir: Path = field(default_factory=lambda: Path.home() / ".letterle")
    prefers_dark: bool = False
    log_level: str = "WARNING"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> Settings:
        data_dir = os.getenv("LETTERLE_DATA_DIR")
        return cls(
            env=os.getenv("LETTERLE_ENV", "development"),
            data_dir=Path(data_dir).expanduser() if data_dir else Path.home() / ".letterle",
            prefers_dark=os.getenv("LETTERLE_THEME", "light").lower() == "dark",
            log_level=os.getenv("LETTERLE_LOG_LEVEL", "WARNING").upper(),
            allowed_origins=os.getenv("ALLOWED_ORIGINS", "*").split(","),
        )
