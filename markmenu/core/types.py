"""
markmenu - CORE CONTRACTS

Value types shared by the recognizer, the item hierarchy and the input
interpreter. Everything here is immutable.

Angles are radians inside the core and degrees [0, 360) at the edges
(events, authoring data, settings).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


# ============================================================
# Geometry
# ============================================================

@dataclass(frozen=True)
class Point:
    """2D position or vector in screen coordinates (y grows downward)."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> "Point":
        return Point(self.x * k, self.y * k)

    @property
    def length(self) -> float:
        return math.hypot(self.x, self.y)

    @property
    def angle(self) -> float:
        """Direction in radians, atan2(y, x): 0 = east, pi/2 = down."""
        return math.atan2(self.y, self.x)

    def distance_to(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    @classmethod
    def from_polar(cls, angle: float, length: float) -> "Point":
        return cls(math.cos(angle) * length, math.sin(angle) * length)


ZERO_POINT = Point(0.0, 0.0)


# ============================================================
# Item hierarchy
# ============================================================

class ItemState(str, Enum):
    NONE = "NONE"
    HIDDEN = "HIDDEN"
    ACTIVE = "ACTIVE"
    SELECTED = "SELECTED"


class ItemType(str, Enum):
    SIMPLE = "simple"
    CHECKBOX = "checkbox"
    SLIDER = "slider"


class MenuItemEventType(str, Enum):
    HOVER = "hover"
    DESCEND = "descend"
    SELECTION = "selection"
    CANCEL = "cancel"


@dataclass(frozen=True)
class MenuIdentifier:
    """An item as seen at the moment of an event (not a permanent handle)."""
    item_id: str
    angle: float


@dataclass(frozen=True)
class SimpleData:
    kind = ItemType.SIMPLE

    def to_json(self) -> Optional[dict]:
        return None

    def payload(self, distance: float = 0.0) -> Optional[dict]:
        return None


@dataclass(frozen=True)
class CheckboxData:
    selected: bool = False
    kind = ItemType.CHECKBOX

    def toggled(self) -> "CheckboxData":
        return CheckboxData(selected=not self.selected)

    def to_json(self) -> dict:
        return {"selected": self.selected}

    def payload(self, distance: float = 0.0) -> dict:
        return {"selected": self.selected}


@dataclass(frozen=True)
class SliderData:
    min: float = 0.0
    max: float = 100.0
    initial: float = 0.0
    precision: int = 0
    step_dist: float = 10.0
    step_size: float = 1.0
    kind = ItemType.SLIDER

    def value_at(self, distance: float) -> float:
        """Value after dragging *distance* units past the item (negative moves down)."""
        steps = int(distance / self.step_dist) if self.step_dist > 0 else 0
        value = self.initial + steps * self.step_size
        value = max(self.min, min(self.max, value))
        return round(value, self.precision)

    def to_json(self) -> dict:
        return {
            "min": self.min,
            "max": self.max,
            "initial": self.initial,
            "precision": self.precision,
            "stepDist": self.step_dist,
            "stepSize": self.step_size,
        }

    def payload(self, distance: float = 0.0) -> dict:
        return {"value": self.value_at(distance)}


ItemData = Union[SimpleData, CheckboxData, SliderData]


# ============================================================
# Input (platform boundary → interpreter)
# ============================================================

class ClickState(str, Enum):
    LEFT_CLICK = "LEFT_CLICK"
    RIGHT_CLICK = "RIGHT_CLICK"


class DragState(str, Enum):
    DRAGGING = "DRAGGING"
    END = "END"


PRIMARY_BUTTONS = 1   # bitmask value for "primary button / contact held"
LEFT_BUTTON = 0       # button index reported on release


@dataclass(frozen=True)
class ActivateInput:
    """Button press / touch start."""
    t_ms: int
    buttons: int = PRIMARY_BUTTONS
    position: Optional[Point] = None


@dataclass(frozen=True)
class DeactivateInput:
    """
    Button release / touch end.

    button is None for a pointer leaving the surface (or a cancelled touch).
    """
    t_ms: int
    button: Optional[int] = LEFT_BUTTON
    position: Optional[Point] = None

    @property
    def is_leave(self) -> bool:
        return self.button is None


@dataclass(frozen=True)
class DragDefinition:
    position: Point
    state: DragState
