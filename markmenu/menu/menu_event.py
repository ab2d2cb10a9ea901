from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from markmenu.core import angle
from markmenu.core.types import MenuIdentifier, MenuItemEventType

_ANGLE_EPS = 1e-9  # degrees


@dataclass(frozen=True, eq=False, init=False)
class MenuEvent:
    """
    Immutable hover / descend / selection / cancel notification.

    Angles are passed in as radians and stored as degrees [0, 360); data is
    a read-only copy of the payload.

    The source angle takes no part in equality: only the target direction
    tells two selections apart. Targets are compared only when both events
    carry one.
    """
    type: MenuItemEventType
    source: MenuIdentifier
    target: Optional[MenuIdentifier] = None
    data: Optional[Mapping[str, Any]] = field(default=None)

    def __init__(self, type: MenuItemEventType, source: MenuIdentifier,
                 target: Optional[MenuIdentifier] = None,
                 data: Optional[Mapping[str, Any]] = None) -> None:
        object.__setattr__(self, "type", type)
        object.__setattr__(self, "source", MenuIdentifier(source.item_id, angle.to_deg(source.angle)))
        if target is not None:
            target = MenuIdentifier(target.item_id, angle.to_deg(target.angle))
        object.__setattr__(self, "target", target)
        object.__setattr__(self, "data", MappingProxyType(dict(data)) if data is not None else None)

    def equals(self, other: Optional["MenuEvent"]) -> bool:
        if other is None:
            return False
        if other.type != self.type or other.source.item_id != self.source.item_id:
            return False
        if self.target is not None and other.target is not None:
            if other.target.item_id != self.target.item_id:
                return False
            if abs(angle.difference(self.target.angle, other.target.angle)) > _ANGLE_EPS:
                return False
        return other.data == self.data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MenuEvent):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        # a missing target can equal any target, so targets stay out of the hash
        return hash((self.type, self.source.item_id))
