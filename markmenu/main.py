from __future__ import annotations

import argparse
import time
from pathlib import Path

from markmenu.core.config import PresetName
from markmenu.menu.menu_event import MenuEvent
from markmenu.menu.parser import MenuParser
from markmenu.runtime import run_loop
from markmenu.runtime.profile import load_settings


def _print_event(ev: MenuEvent) -> None:
    target = ev.target.item_id if ev.target else "-"
    print(f"[markmenu] {ev.type.value:<9} {ev.source.item_id} -> {target} {dict(ev.data) if ev.data else ''}")


def run_live(menu_path: Path | None, preset: PresetName, trace_png: Path | None) -> None:
    # pynput needs a display; only import it when actually going live
    from markmenu.ui.mouse_source import MouseSource

    settings = load_settings(preset)
    structure = MenuParser().parse_json(menu_path.read_text()) if menu_path else None
    menu = run_loop.build_menu(structure, settings)
    menu.selection.subscribe(_print_event)
    view = menu.draw_trace() if trace_png else None

    src = MouseSource()
    src.start()
    print("[markmenu] Live pointer loop. Ctrl+C to exit.")
    print("  - click to open the menu, click an item to pick it")
    print("  - or press and draw a mark to pick without waiting")
    try:
        while True:
            src.drain(menu)
            menu.tick()
            time.sleep(0.008)
    except KeyboardInterrupt:
        print("\n[markmenu] exiting")
    finally:
        src.stop()
        if view is not None:
            print(f"[markmenu] trace written to {view.save(trace_png)}")


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(prog="markmenu", description="Marking menu input pipeline")
    sub = ap.add_subparsers(dest="cmd", required=True)
    sub.add_parser("demo", help="replay scripted marks against the demo menu")
    live = sub.add_parser("live", help="drive a menu with the desktop mouse")
    live.add_argument("--menu", type=Path, default=None, help="JSON menu description")
    live.add_argument("--preset", type=PresetName, choices=list(PresetName), default=PresetName.DEFAULT)
    live.add_argument("--trace-png", type=Path, default=None, help="write a debug trace image on exit")
    args = ap.parse_args(argv)

    if args.cmd == "demo":
        run_loop.run()
    else:
        run_live(args.menu, args.preset, args.trace_png)


if __name__ == "__main__":
    main()
