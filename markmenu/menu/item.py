from __future__ import annotations

import logging
import weakref
from collections.abc import Iterator
from typing import TYPE_CHECKING, Optional

from markmenu.core import angle
from markmenu.core.config import DEFAULT_SETTINGS, Settings
from markmenu.core.errors import DuplicateIdentifier
from markmenu.core.signal import Signal
from markmenu.core.types import (
    ItemData, ItemState, ItemType, MenuIdentifier, MenuItemEventType,
    Point, ZERO_POINT,
    CheckboxData, SimpleData, SliderData,
)
from markmenu.menu.menu_event import MenuEvent

if TYPE_CHECKING:
    from markmenu.interpreter.menu import Menu

log = logging.getLogger(__name__)

_DEFAULT_DATA = {
    ItemType.SIMPLE: SimpleData,
    ItemType.CHECKBOX: CheckboxData,
    ItemType.SLIDER: SliderData,
}


def _spread(directions: list[float], count: int, start: float) -> list[float]:
    """
    Slots (degrees) for *count* items without an explicit direction.

    With no explicit directions the circle is split evenly from *start*.
    Otherwise each free item goes to the gap whose share per item is
    largest, and items within one gap are spaced evenly.
    """
    if count == 0:
        return []
    if not directions:
        step = 360.0 / count
        return [(start + i * step) % 360.0 for i in range(count)]

    taken = sorted(d % 360.0 for d in directions)
    gaps = []
    for i, a in enumerate(taken):
        b = taken[(i + 1) % len(taken)]
        width = (b - a) % 360.0 or 360.0
        gaps.append((a, width))

    counts = [0] * len(gaps)
    for _ in range(count):
        best = max(range(len(gaps)), key=lambda i: gaps[i][1] / (counts[i] + 1))
        counts[best] += 1

    slots: list[float] = []
    for (a, width), k in zip(gaps, counts):
        slots.extend((a + width * (j + 1) / (k + 1)) % 360.0 for j in range(k))
    return slots


class MenuItem:
    """
    Node of the menu tree.

    A node owns its children. The parent and the owning Menu are weak
    references, so a subtree dies with the node that holds it.

    States run NONE -> HIDDEN -> ACTIVE -> {SELECTED | HIDDEN}. An ACTIVE
    child keeps its parent ACTIVE (an open sub-menu).
    """

    def __init__(
        self,
        id: str,
        text: str = "",
        icon: str = "",
        type: ItemType = ItemType.SIMPLE,
        data: Optional[ItemData] = None,
        direction: Optional[float] = None,
    ) -> None:
        self.id = id
        self.text = text
        self.icon = icon
        self.type = ItemType(type)
        if data is None:
            data = _DEFAULT_DATA[self.type]()
        if data.kind != self.type:
            raise ValueError(f"item '{id}': {data.__class__.__name__} does not match type '{self.type.value}'")
        self.data: ItemData = data
        self.direction = direction  # authoring value, degrees

        self.children: list[MenuItem] = []
        self.angle: float = 0.0  # radians, slot relative to the parent's centre
        self._slot: float = 0.0  # same slot in degrees, kept exact for tie-breaks
        self.position: Point = ZERO_POINT

        # rendering-only state
        self.visible: bool = False
        self.opacity: float = 1.0

        self.selection: Signal[MenuEvent] = Signal()

        self._state = ItemState.NONE
        self._parent_ref: Optional[weakref.ref[MenuItem]] = None
        self._menu_ref: Optional[weakref.ref[Menu]] = None
        self._settings: Optional[Settings] = None

    def __repr__(self) -> str:
        return f"MenuItem(id={self.id!r}, state={self._state.value}, children={len(self.children)})"

    # ---------------------- tree ----------------------

    @property
    def parent(self) -> Optional["MenuItem"]:
        return self._parent_ref() if self._parent_ref is not None else None

    @property
    def root(self) -> "MenuItem":
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def menu(self) -> Optional["Menu"]:
        root = self.root
        return root._menu_ref() if root._menu_ref is not None else None

    @menu.setter
    def menu(self, menu: Optional["Menu"]) -> None:
        self._menu_ref = weakref.ref(menu) if menu is not None else None

    @property
    def settings(self) -> Settings:
        root = self.root
        return root._settings if root._settings is not None else DEFAULT_SETTINGS

    @settings.setter
    def settings(self, settings: Settings) -> None:
        self._settings = settings

    @property
    def slot(self) -> float:
        """Angle slot in degrees [0, 360)."""
        return self._slot

    def _set_slot(self, degrees: float) -> None:
        self.angle = angle.to_rad(degrees)
        self._slot = float(degrees) % 360.0

    @property
    def identifier(self) -> MenuIdentifier:
        return MenuIdentifier(item_id=self.id, angle=self.angle)

    def walk(self) -> Iterator["MenuItem"]:
        """Pre-order traversal of this subtree."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, item_id: str) -> Optional["MenuItem"]:
        for item in self.walk():
            if item.id == item_id:
                return item
        return None

    def add_child(self, item: "MenuItem") -> "MenuItem":
        """
        Append *item* (and its subtree) below this node.

        Raises DuplicateIdentifier if any id in the incoming subtree already
        exists anywhere in this hierarchy; the tree is left unchanged.
        """
        if item.parent is not None:
            raise ValueError(f"item '{item.id}' already belongs to '{item.parent.id}'")
        existing = {node.id for node in self.root.walk()}
        incoming: set[str] = set()
        for node in item.walk():
            if node.id in existing or node.id in incoming:
                raise DuplicateIdentifier(f"item id '{node.id}' already exists in the menu")
            incoming.add(node.id)

        item._parent_ref = weakref.ref(self)
        self.children.append(item)
        return item

    def init(self) -> None:
        """Assign angle slots to the subtree and move every node to HIDDEN."""
        explicit = [c.direction for c in self.children if c.direction is not None]
        free = [c for c in self.children if c.direction is None]
        for child, slot in zip(free, _spread(explicit, len(free), self.settings.item.start_angle)):
            child._set_slot(slot)
        for child in self.children:
            if child.direction is not None:
                child._set_slot(child.direction)
            child.init()
        self._state = ItemState.HIDDEN

    # ---------------------- state ----------------------

    @property
    def state(self) -> ItemState:
        return self._state

    @state.setter
    def state(self, state: ItemState) -> None:
        if state == self._state:
            return
        log.debug("item %s: %s -> %s", self.id, self._state.value, state.value)
        self._state = state
        if state == ItemState.ACTIVE:
            parent = self.parent
            if parent is not None and parent.state != ItemState.ACTIVE:
                parent.state = ItemState.ACTIVE
        elif state == ItemState.HIDDEN:
            for child in self.children:
                child.state = ItemState.HIDDEN

    def reset(self) -> None:
        """End of a session: the whole subtree goes back to HIDDEN."""
        for item in self.walk():
            item._state = ItemState.HIDDEN
            item.visible = False

    def display(self) -> None:
        """Start a new session with this node as the open menu."""
        self.reset()
        self.visible = True
        self.state = ItemState.ACTIVE

    def active_item(self) -> Optional["MenuItem"]:
        """Deepest ACTIVE node of this subtree, None if this node is not ACTIVE."""
        if self._state != ItemState.ACTIVE:
            return None
        for child in self.children:
            if child.state == ItemState.ACTIVE:
                return child.active_item()
        return self

    # ---------------------- selection ----------------------

    def nearest_child(self, direction: float) -> Optional["MenuItem"]:
        """
        Child whose slot is angularly closest to *direction* (degrees).

        Ties go to the child added first. Returns None when there are no
        children or the best match lies outside angle_tolerance.
        """
        best = None
        best_diff = 0.0
        for child in self.children:
            diff = abs(angle.difference(child.slot, direction))
            if best is None or diff < best_diff:
                best, best_diff = child, diff
        tolerance = self.settings.item.angle_tolerance
        if best is not None and tolerance is not None and best_diff > tolerance:
            return None
        return best

    def resolve_click(self, pointer_angle: float, position: Optional[Point] = None) -> Optional[MenuEvent]:
        """Select or open the child nearest to *pointer_angle* (degrees)."""
        child = self.nearest_child(pointer_angle)
        if child is None:
            log.debug("item %s: no child near %.1f deg", self.id, pointer_angle)
            return None
        return self.choose(child, position=position)

    def choose(self, child: "MenuItem", position: Optional[Point] = None,
               final: bool = True, travel: float = 0.0) -> MenuEvent:
        """
        Apply the outcome of picking *child*.

        Intermediate children open (DESCEND). Leaves are selected on the
        final step of an interaction and only hovered before that.
        """
        if child.children:
            if position is not None:
                child.position = position
            child.visible = True
            child.state = ItemState.ACTIVE
            event = MenuEvent(MenuItemEventType.DESCEND, self.identifier, child.identifier)
        elif not final:
            event = MenuEvent(MenuItemEventType.HOVER, self.identifier, child.identifier)
        else:
            event = child._select(travel)
        self._emit(event)
        return event

    def _select(self, travel: float) -> MenuEvent:
        parent = self.parent
        assert parent is not None
        if isinstance(self.data, CheckboxData):
            self.data = self.data.toggled()
        event = MenuEvent(
            MenuItemEventType.SELECTION,
            parent.identifier,
            self.identifier,
            self.data.payload(travel),
        )
        self.root.reset()
        self._state = ItemState.SELECTED
        return event

    def cancel(self) -> Optional[MenuEvent]:
        """Close this level; the parent (if any) stays open."""
        if self._state != ItemState.ACTIVE:
            return None
        parent = self.parent
        self.state = ItemState.HIDDEN
        self.visible = False
        target = parent.identifier if parent is not None else None
        event = MenuEvent(MenuItemEventType.CANCEL, self.identifier, target)
        self._emit(event)
        return event

    def _emit(self, event: MenuEvent) -> None:
        node: Optional[MenuItem] = self
        while node is not None:
            node.selection.emit(event)
            node = node.parent

    # ---------------------- authoring ----------------------

    def to_json(self) -> dict:
        out = {
            "id": self.id,
            "text": self.text,
            "icon": self.icon,
            "type": self.type.value,
            "direction": self.direction,
        }
        data = self.data.to_json()
        if data is not None:
            out["data"] = data
        if self.children:
            out["children"] = [child.to_json() for child in self.children]
        return out
