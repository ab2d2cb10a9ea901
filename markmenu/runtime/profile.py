from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from markmenu.core.config import PRESETS, PresetName, Settings


def _profile_path() -> Path:
    p = Path.home() / ".config" / "markmenu"
    p.mkdir(parents=True, exist_ok=True)
    return p / "profile.json"


def save_profile(overrides: dict, path: Optional[Path] = None) -> Path:
    """Store grouped overrides ({"main": {...}, ...}) after checking they merge."""
    Settings.from_overrides(overrides)
    path = path or _profile_path()
    path.write_text(json.dumps(overrides, indent=2))
    return path


def load_profile(path: Optional[Path] = None) -> Optional[dict]:
    p = path or _profile_path()
    if not p.exists():
        return None
    return json.loads(p.read_text())


def load_settings(preset: PresetName = PresetName.DEFAULT, path: Optional[Path] = None) -> Settings:
    """Preset with the saved profile merged on top; a broken profile is reported and skipped."""
    base = PRESETS[preset]
    try:
        prof = load_profile(path)
        return Settings.from_overrides(prof, base=base)
    except (OSError, ValueError) as e:
        print(f"[markmenu] ignoring profile: {e}")
        return base
