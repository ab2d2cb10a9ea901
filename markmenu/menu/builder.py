from __future__ import annotations

from typing import Any, Mapping

from markmenu.core.errors import DuplicateIdentifier, MenuStructureError
from markmenu.menu.item import MenuItem
from markmenu.menu.parser import MenuParser


class MenuBuilder:
    """
    Grows a menu one authored item at a time.

    The first item becomes the root; every later item names its parent via
    a "parent" key. structure() returns the JSON description of the tree.
    """

    def __init__(self, parser: MenuParser | None = None) -> None:
        self._parser = parser or MenuParser()
        self._items: dict[str, MenuItem] = {}
        self._root_id: str | None = None

    @property
    def root(self) -> MenuItem | None:
        return self._items.get(self._root_id) if self._root_id is not None else None

    def add(self, raw: Mapping[str, Any]) -> dict:
        item = self._parser.parse_item(raw)
        if item.id in self._items:
            raise DuplicateIdentifier(f"item id '{item.id}' already exists in the menu")

        if self._root_id is None:
            self._root_id = item.id
        else:
            parent_id = raw.get("parent") or self._root_id
            parent = self._items.get(parent_id)
            if parent is None:
                raise MenuStructureError(f"item '{item.id}': unknown parent '{parent_id}'")
            parent.add_child(item)

        self._items[item.id] = item
        return self.structure()

    def structure(self) -> dict:
        root = self.root
        return root.to_json() if root is not None else {}
