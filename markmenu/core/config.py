"""
markmenu - Defaults (Presets)

A Settings snapshot is built once per Menu and never mutated afterwards.
User overrides are merged field by field onto a preset.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Mapping, Optional


class PresetName(str, Enum):
    DEFAULT = "Default"
    EXPERT = "Expert"
    NOVICE = "Novice"


@dataclass(frozen=True)
class MainSettings:
    min_distance: float = 150.0        # travel before a decision point / marking mode
    min_trace_distance: float = 175.0  # first-step travel that commits a gesture
    animation_duration: int = 250      # fade-in, ms
    click_timeout_ms: int = 200        # press->release window for a click
    enable_auto_resize: bool = False
    enable_max_click_radius: bool = False
    max_click_radius: float = 300.0
    smoothing: bool = False            # One Euro filter on pointer positions


@dataclass(frozen=True)
class TraceSettings:
    decision_angle: float = 45.0       # degrees of turn that start a new step
    min_cutoff_hz: float = 2.0
    beta: float = 0.06
    d_cutoff_hz: float = 1.0


@dataclass(frozen=True)
class ItemSettings:
    angle_tolerance: Optional[float] = None   # degrees; None = nearest always wins
    start_angle: float = 0.0                  # slot of the first evenly placed child
    center_radius: float = 30.0               # clicks inside cancel the active level


# Authoring tools and JSON profiles use camelCase option names.
_ALIASES = {
    "minDistance": "min_distance",
    "minTraceDistance": "min_trace_distance",
    "animationDuration": "animation_duration",
    "clickTimeout": "click_timeout_ms",
    "enableAutoResize": "enable_auto_resize",
    "enableMaxClickRadius": "enable_max_click_radius",
    "maxClickRadius": "max_click_radius",
    "decisionAngle": "decision_angle",
    "minCutoffHz": "min_cutoff_hz",
    "dCutoffHz": "d_cutoff_hz",
    "angleTolerance": "angle_tolerance",
    "startAngle": "start_angle",
    "centerRadius": "center_radius",
}


def _merge_group(group: Any, overrides: Mapping[str, Any], group_name: str) -> Any:
    known = {f.name for f in fields(group)}
    changes = {}
    for key, value in overrides.items():
        name = _ALIASES.get(key, key)
        if name not in known:
            raise ValueError(f"unknown setting '{group_name}.{key}'")
        changes[name] = value
    return replace(group, **changes)


@dataclass(frozen=True)
class Settings:
    name: PresetName = PresetName.DEFAULT
    main: MainSettings = MainSettings()
    trace: TraceSettings = TraceSettings()
    item: ItemSettings = ItemSettings()

    @classmethod
    def from_overrides(cls, overrides: Optional[Mapping[str, Any]] = None,
                       base: Optional["Settings"] = None) -> "Settings":
        """
        Merge {"main": {...}, "trace": {...}, "item": {...}} onto base.

        Unknown groups or keys raise ValueError.
        """
        settings = base if base is not None else DEFAULT_SETTINGS
        if not overrides:
            return settings
        groups = {"main": settings.main, "trace": settings.trace, "item": settings.item}
        for group_name, values in overrides.items():
            if group_name not in groups:
                raise ValueError(f"unknown settings group '{group_name}'")
            groups[group_name] = _merge_group(groups[group_name], values, group_name)
        return replace(settings, **groups)


DEFAULT_SETTINGS = Settings()

# Experienced users flick shorter and sharper.
EXPERT_SETTINGS = Settings(
    name=PresetName.EXPERT,
    main=MainSettings(min_distance=90.0, min_trace_distance=110.0, animation_duration=150, click_timeout_ms=160),
    trace=TraceSettings(decision_angle=35.0),
    item=ItemSettings(center_radius=20.0),
)

NOVICE_SETTINGS = Settings(
    name=PresetName.NOVICE,
    main=MainSettings(min_distance=180.0, min_trace_distance=210.0, animation_duration=350,
                      click_timeout_ms=260, enable_max_click_radius=True, max_click_radius=360.0),
    trace=TraceSettings(decision_angle=55.0),
    item=ItemSettings(angle_tolerance=60.0, center_radius=40.0),
)

PRESETS = {
    PresetName.DEFAULT: DEFAULT_SETTINGS,
    PresetName.EXPERT: EXPERT_SETTINGS,
    PresetName.NOVICE: NOVICE_SETTINGS,
}
