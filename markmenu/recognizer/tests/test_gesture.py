import math

from markmenu.core.config import DEFAULT_SETTINGS, Settings
from markmenu.core.types import CheckboxData, ItemState, ItemType, MenuItemEventType, Point, SliderData
from markmenu.menu.item import MenuItem
from markmenu.menu.parser import MenuParser
from markmenu.recognizer.gesture import resolve_steps, resolve_trace
from markmenu.recognizer.trace import Step, Trace
from markmenu.runtime.run_loop import DEMO_MENU


def polyline(*corners, step=10.0):
    pts = [Point(*corners[0])]
    for (ax, ay), (bx, by) in zip(corners, corners[1:]):
        n = max(1, int(math.hypot(bx - ax, by - ay) / step))
        for i in range(1, n + 1):
            pts.append(Point(ax + (bx - ax) * i / n, ay + (by - ay) * i / n))
    return pts


def open_menu(root, settings=DEFAULT_SETTINGS):
    root.settings = settings
    root.init()
    root.display()
    return root


def trace_of(points, settings=DEFAULT_SETTINGS):
    trace = Trace(settings)
    for p in points:
        trace.update(p)
    return trace


def two_way_menu(settings=DEFAULT_SETTINGS):
    root = MenuItem("root")
    root.add_child(MenuItem("A", direction=0))
    root.add_child(MenuItem("B", direction=180))
    return open_menu(root, settings)


def test_flick_out_and_back_hovers_then_selects():
    root = two_way_menu()
    p1 = Point.from_polar(math.radians(2), 250)
    p2 = p1 + Point.from_polar(math.radians(178), 500)
    trace = trace_of(polyline((0, 0), (p1.x, p1.y), (p2.x, p2.y)))

    events = resolve_trace(root, trace, DEFAULT_SETTINGS)

    assert [e.type for e in events] == [MenuItemEventType.HOVER, MenuItemEventType.SELECTION]
    assert [e.target.item_id for e in events] == ["A", "B"]
    assert root.find("B").state == ItemState.SELECTED
    assert root.state == ItemState.HIDDEN


def test_short_first_stroke_is_not_committed():
    root = two_way_menu()
    # long enough to count as a gesture, shorter than min_trace_distance
    trace = trace_of(polyline((0, 0), (160, 0)))
    assert trace.is_gesture()
    assert resolve_trace(root, trace, DEFAULT_SETTINGS) == []
    assert root.state == ItemState.ACTIVE


def test_symmetric_out_and_back_hovers_then_selects():
    root = two_way_menu()
    p1 = Point.from_polar(math.radians(2), 250)
    p2 = p1 + Point.from_polar(math.radians(178), 250)
    trace = trace_of(polyline((0, 0), (p1.x, p1.y), (p2.x, p2.y)))
    # ends next to its start, but the turn was committed
    assert trace.origin.distance_to(trace.end) < DEFAULT_SETTINGS.main.min_distance
    assert [round(s.length) for s in trace.steps()] == [250, 250]

    events = resolve_trace(root, trace, DEFAULT_SETTINGS)

    assert [(e.type, e.target.item_id) for e in events] == [
        (MenuItemEventType.HOVER, "A"),
        (MenuItemEventType.SELECTION, "B"),
    ]


def test_wobble_back_to_start_resolves_to_nothing():
    root = two_way_menu()
    trace = trace_of(polyline((0, 0), (140, 0), (10, 0)))
    assert resolve_trace(root, trace, DEFAULT_SETTINGS) == []


def test_quick_out_and_back_is_an_abort():
    root = two_way_menu()
    # first stroke passes min_distance but not min_trace_distance
    trace = trace_of(polyline((0, 0), (160, 0), (0, 0)))
    assert trace.decision_points == (Point(160, 0),)
    assert resolve_trace(root, trace, DEFAULT_SETTINGS) == []
    assert root.state == ItemState.ACTIVE


def test_descend_then_select_nested_leaf():
    root = open_menu(MenuParser().parse(DEMO_MENU))
    seen = []
    root.selection.subscribe(seen.append)
    trace = trace_of(polyline((400, 300), (400, 520), (160, 520)))

    events = resolve_trace(root, trace, DEFAULT_SETTINGS)

    assert [e.type for e in events] == [MenuItemEventType.DESCEND, MenuItemEventType.SELECTION]
    assert events[0].source.item_id == "root"
    assert events[0].target.item_id == "format"
    assert events[1].source.item_id == "format"
    assert events[1].target.item_id == "size"
    # 240px stroke, 65px past min_trace_distance -> 3 steps of 2 from 12
    assert events[1].data == {"value": 18.0}
    assert seen == events

    assert root.state == ItemState.HIDDEN
    assert root.find("format").state == ItemState.HIDDEN
    assert root.find("size").state == ItemState.SELECTED


def test_stroke_outside_tolerance_stops_the_walk():
    settings = Settings.from_overrides({"item": {"angleTolerance": 20}})
    root = two_way_menu(settings)
    trace = trace_of(polyline((0, 0), (125, 217)), settings)  # ~60 deg
    assert resolve_trace(root, trace, settings) == []
    assert root.state == ItemState.ACTIVE


def test_tolerance_is_inclusive():
    settings = Settings.from_overrides({"item": {"angle_tolerance": 30}})
    root = two_way_menu(settings)
    step = Step(Point(0, 0), Point.from_polar(math.radians(30), 300))
    events = resolve_steps(root, [step], settings)
    assert [e.target.item_id for e in events] == ["A"]


def test_walk_stops_below_an_opened_submenu():
    settings = Settings.from_overrides({"item": {"angleTolerance": 20}})
    root = open_menu(MenuParser().parse(DEMO_MENU), settings)
    steps = [
        Step(Point(0, 0), Point(0, 250)),      # down: format
        Step(Point(0, 250), Point(180, 430)),  # 45 deg: nothing under format
    ]
    events = resolve_steps(root, steps, settings)
    assert [e.type for e in events] == [MenuItemEventType.DESCEND]
    # the sub-menu stays open for visual selection
    assert root.active_item().id == "format"


def test_slider_value_clamped_to_max():
    root = MenuItem("root")
    root.add_child(MenuItem("vol", type=ItemType.SLIDER, direction=0,
                            data=SliderData(min=0, max=100, initial=50, step_dist=10, step_size=5)))
    open_menu(root)
    events = resolve_steps(root, [Step(Point(0, 0), Point(300, 0))], DEFAULT_SETTINGS)
    assert events[0].data == {"value": 100}


def test_checkbox_toggles_on_selection():
    root = MenuItem("root")
    box = root.add_child(MenuItem("grid", type=ItemType.CHECKBOX, direction=90, data=CheckboxData(False)))
    open_menu(root)
    events = resolve_steps(root, [Step(Point(0, 0), Point(0, 200))], DEFAULT_SETTINGS)
    assert events[0].data == {"selected": True}
    assert box.data.selected is True


def test_no_steps_no_events():
    root = two_way_menu()
    assert resolve_steps(root, [], DEFAULT_SETTINGS) == []
