"""Settings file and colour themes."""
from __future__ import annotations

import json
import os
from typing import Any, Optional

from box_breathing.backgrounds import BACKGROUNDS, DEFAULT_BACKGROUND

# ─── Config ───────────────────────────────────────────────────
CONFIG_FILE = os.environ.get(
    "BOX_BREATHING_CONFIG",
    os.path.join(os.path.expanduser("~"), "box_breathing_config.json"))

DEFAULT_CONFIG = {
    "theme": "nord",                  # Theme: dark, light, nord
    "background": DEFAULT_BACKGROUND, # Selected background id
    "custom_background_path": "",     # Optional image file offered as an extra card
    "remember_background": True,      # Save the selection for next launch
    "frame_interval_ms": 16,          # Animation frame delay (~60fps)
    "sample_step": 0.2,               # Seconds between waveform samples
    "graph_width": 640,
    "graph_height": 320,
    "graph_padding": 40,
    "recommended_cycles": 4,          # Shown next to the cycle counter
    "max_cycles": 8,
    "show_tray": True,                # Tray icon with Play/Pause/Reset
    "window_position": None,          # Saved [x, y] (None = centred)
}

# (key, minimum, maximum, default, whole number)
NUMERIC_LIMITS = [
    ("frame_interval_ms", 1, 1000, 16, True),     # tk after() only takes integers
    ("sample_step", 0.01, 4.0, 0.2, False),
    ("graph_width", 200, 2400, 640, True),
    ("graph_height", 120, 1400, 320, True),
    ("graph_padding", 10, 100, 40, True),
    ("recommended_cycles", 1, 100, 4, True),
    ("max_cycles", 1, 100, 8, True),
]


def _checked_number(value: Any, min_val, max_val, default, whole: bool):
    """Return ``value`` if it is a number within limits, otherwise ``default``."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if whole:
        if isinstance(value, float) and not value.is_integer():
            return default
        value = int(value)
    if not min_val <= value <= max_val:
        return default
    return value


def load_config(path: Optional[str] = None) -> dict[str, Any]:
    """Load config from file, falling back to defaults for missing/invalid values."""
    path = path or CONFIG_FILE
    cfg = json.loads(json.dumps(DEFAULT_CONFIG))
    if os.path.exists(path):
        try:
            with open(path, encoding="utf-8") as f:
                user_cfg = json.load(f)
            if isinstance(user_cfg, dict):
                cfg.update(user_cfg)
        except (json.JSONDecodeError, IOError, OSError) as e:
            print(f"  [!] Config load error: {e}. Using defaults.")

    for key, min_val, max_val, default, whole in NUMERIC_LIMITS:
        cfg[key] = _checked_number(cfg.get(key), min_val, max_val, default, whole)
    if (cfg["graph_width"] <= cfg["graph_padding"] * 2
            or cfg["graph_height"] <= cfg["graph_padding"] * 2):
        for key in ("graph_width", "graph_height", "graph_padding"):
            cfg[key] = DEFAULT_CONFIG[key]
    if cfg["max_cycles"] < cfg["recommended_cycles"]:
        cfg["max_cycles"] = cfg["recommended_cycles"]

    if cfg.get("background") not in [b["id"] for b in BACKGROUNDS] + ["custom"]:
        cfg["background"] = DEFAULT_BACKGROUND
    if cfg.get("theme") not in THEMES:
        cfg["theme"] = DEFAULT_CONFIG["theme"]
    if not isinstance(cfg.get("custom_background_path"), str):
        cfg["custom_background_path"] = ""
    pos = cfg.get("window_position")
    if not (isinstance(pos, list) and len(pos) == 2):
        cfg["window_position"] = None

    return cfg


def save_config(cfg: dict[str, Any], path: Optional[str] = None) -> None:
    """Save config to file."""
    try:
        with open(path or CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(cfg, f, indent=2)
    except (IOError, OSError) as e:
        print(f"  [!] Config save error: {e}")


# ─── Themes ──────────────────────────────────────────────────
THEMES = {
    "dark": {
        "bg": "#111827", "card": "#1e293b", "card_sel": "#253349",
        "accent": "#f43f5e", "accent2": "#0ea5e9",
        "btn_pri": "#1d4ed8", "btn_sec": "#334155",
        "text": "#f1f5f9", "text_dim": "#94a3b8", "text_mut": "#64748b",
        "graph_bg": "#0c1222", "wave": "#22d3ee", "marker": "#fbbf24",
    },
    "light": {
        "bg": "#f8fafc", "card": "#ffffff", "card_sel": "#dbeafe",
        "accent": "#e11d48", "accent2": "#0284c7",
        "btn_pri": "#2563eb", "btn_sec": "#e2e8f0",
        "text": "#1e293b", "text_dim": "#475569", "text_mut": "#94a3b8",
        "graph_bg": "#e0f2fe", "wave": "#0369a1", "marker": "#d97706",
    },
    "nord": {
        "bg": "#2e3440", "card": "#3b4252", "card_sel": "#5e81ac",
        "accent": "#bf616a", "accent2": "#88c0d0",
        "btn_pri": "#5e81ac", "btn_sec": "#4c566a",
        "text": "#eceff4", "text_dim": "#d8dee9", "text_mut": "#a3be8c",
        "graph_bg": "#242933", "wave": "#8fbcbb", "marker": "#ebcb8b",
    },
}


def get_theme(theme_name: str) -> dict[str, str]:
    return THEMES.get(theme_name, THEMES["dark"])


def with_overrides(cfg: dict[str, Any], overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    """Copy of ``cfg`` with one-off (command line) values applied; ``cfg`` is untouched."""
    merged = dict(cfg)
    for key, value in (overrides or {}).items():
        if value is not None:
            merged[key] = value
    return merged
