from __future__ import annotations

import json
from typing import Any, Mapping

from markmenu.core.errors import MenuStructureError
from markmenu.core.types import CheckboxData, ItemData, ItemType, SimpleData, SliderData
from markmenu.menu.item import MenuItem

# authoring key -> SliderData field
_SLIDER_KEYS = {
    "min": "min",
    "max": "max",
    "initial": "initial",
    "precision": "precision",
    "stepDist": "step_dist",
    "stepSize": "step_size",
}


class MenuParser:
    """
    Builds MenuItem trees from the authoring shape:

        {"id", "text", "icon", "type", "direction", "data"?, "children"?}

    Raises MenuStructureError on malformed input and DuplicateIdentifier
    when an id repeats anywhere in the tree.
    """

    def parse_json(self, text: str) -> MenuItem:
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MenuStructureError(f"menu description is not valid JSON: {exc}") from exc
        return self.parse(raw)

    def parse(self, raw: Mapping[str, Any]) -> MenuItem:
        item = self.parse_item(raw)
        for child in self._children(raw):
            item.add_child(self.parse(child))
        return item

    def parse_item(self, raw: Mapping[str, Any]) -> MenuItem:
        """Parse one node, ignoring its children."""
        if not isinstance(raw, Mapping):
            raise MenuStructureError(f"menu item must be an object, got {type(raw).__name__}")
        item_id = raw.get("id")
        if not isinstance(item_id, str) or item_id == "":
            raise MenuStructureError(f"menu item needs a non-empty string id, got {item_id!r}")

        try:
            item_type = ItemType(raw.get("type") or ItemType.SIMPLE.value)
        except ValueError:
            raise MenuStructureError(f"item '{item_id}': unknown type {raw.get('type')!r}") from None

        return MenuItem(
            id=item_id,
            text=str(raw.get("text", "")),
            icon=str(raw.get("icon", "")),
            type=item_type,
            data=self._data(item_id, item_type, raw.get("data")),
            direction=self._direction(item_id, raw.get("direction")),
        )

    def _children(self, raw: Mapping[str, Any]) -> list:
        children = raw.get("children") or []
        if not isinstance(children, list):
            raise MenuStructureError(f"item '{raw.get('id')}': children must be a list")
        return children

    def _direction(self, item_id: str, value: Any) -> float | None:
        # authoring forms submit "" for "no direction"
        if value is None or value == "":
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            raise MenuStructureError(f"item '{item_id}': direction {value!r} is not a number") from None

    def _data(self, item_id: str, item_type: ItemType, data: Any) -> ItemData:
        if item_type == ItemType.SIMPLE:
            return SimpleData()
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise MenuStructureError(f"item '{item_id}': data must be an object")

        if item_type == ItemType.CHECKBOX:
            return CheckboxData(selected=bool(data.get("selected", False)))

        values = {}
        for key, name in _SLIDER_KEYS.items():
            if key in data:
                try:
                    values[name] = int(data[key]) if name == "precision" else float(data[key])
                except (TypeError, ValueError):
                    raise MenuStructureError(f"item '{item_id}': slider {key} {data[key]!r} is not a number") from None
        slider = SliderData(**values)
        if slider.min > slider.max:
            raise MenuStructureError(f"item '{item_id}': slider min {slider.min} > max {slider.max}")
        return slider
