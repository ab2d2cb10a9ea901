import pytest

from markmenu.core.errors import DuplicateIdentifier, MenuStructureError
from markmenu.core.types import CheckboxData, ItemType, SliderData
from markmenu.menu.builder import MenuBuilder
from markmenu.menu.parser import MenuParser
from markmenu.runtime.run_loop import DEMO_MENU


def test_parse_demo_menu():
    root = MenuParser().parse(DEMO_MENU)
    assert [c.id for c in root.children] == ["copy", "format", "paste", "undo"]
    fmt = root.find("format")
    assert fmt.parent is root
    bold, size = fmt.children
    assert bold.data == CheckboxData(selected=False)
    assert size.type == ItemType.SLIDER
    assert size.data == SliderData(min=8, max=72, initial=12, precision=0, step_dist=20, step_size=2)


def test_json_round_trip_keeps_structure():
    parser = MenuParser()
    root = parser.parse(DEMO_MENU)
    again = parser.parse(root.to_json())
    assert again.to_json() == root.to_json()


def test_empty_direction_means_automatic():
    root = MenuParser().parse({"id": "root", "children": [{"id": "a", "direction": ""}]})
    assert root.children[0].direction is None


@pytest.mark.parametrize("raw", [
    {"text": "no id"},
    {"id": ""},
    {"id": "x", "type": "radio"},
    {"id": "x", "direction": "north"},
    {"id": "x", "children": {"id": "y"}},
    {"id": "x", "type": "slider", "data": {"min": 10, "max": 0}},
    {"id": "x", "type": "slider", "data": {"stepDist": "far"}},
    ["not", "an", "object"],
])
def test_malformed_items_rejected(raw):
    with pytest.raises(MenuStructureError):
        MenuParser().parse(raw)


def test_invalid_json_text():
    with pytest.raises(MenuStructureError):
        MenuParser().parse_json("{nope")


def test_duplicate_ids_in_description():
    raw = {"id": "root", "children": [{"id": "a"}, {"id": "b", "children": [{"id": "a"}]}]}
    with pytest.raises(DuplicateIdentifier):
        MenuParser().parse(raw)


def test_builder_grows_tree():
    b = MenuBuilder()
    assert b.structure() == {}
    b.add({"id": "root", "text": "Root"})
    b.add({"id": "a", "direction": 0})
    b.add({"id": "sub", "direction": 180})
    out = b.add({"id": "leaf", "parent": "sub", "type": "checkbox", "data": {"selected": True}})

    assert [c["id"] for c in out["children"]] == ["a", "sub"]
    leaf = out["children"][1]["children"][0]
    assert leaf == {"id": "leaf", "text": "", "icon": "", "type": "checkbox",
                    "direction": None, "data": {"selected": True}}
    assert b.root.find("leaf").parent.id == "sub"


def test_builder_rejects_duplicates_and_unknown_parents():
    b = MenuBuilder()
    b.add({"id": "root"})
    b.add({"id": "a"})
    with pytest.raises(DuplicateIdentifier):
        b.add({"id": "a"})
    with pytest.raises(MenuStructureError):
        b.add({"id": "b", "parent": "missing"})
    assert [c.id for c in b.root.children] == ["a"]
