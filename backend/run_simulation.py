"""Headless driver: replay a key script against a graph session.

Each key is handled between ticks, then the loop runs until the camera
settles. Useful for checking navigation and layout without a renderer.

Usage:
    python run_simulation.py --keys ddwaws --source random --seed 7
    python run_simulation.py --keys dwn --note "pack light"
"""

import argparse
import logging

logger = logging.getLogger("graphnav.simulation")


def main() -> None:
    parser = argparse.ArgumentParser(description="graphnav headless simulation")
    parser.add_argument("--keys", type=str, default="", help="Key presses, e.g. 'ddw' (a/d/w/s/n)")
    parser.add_argument("--source", type=str, default=None, help="default, random, or a URL")
    parser.add_argument("--seed", type=int, default=None, help="Seed for positions and random graphs")
    parser.add_argument("--dt", type=float, default=0.016, help="Seconds per tick")
    parser.add_argument("--settle-ticks", type=int, default=120, help="Max ticks to wait per key")
    parser.add_argument("--notes-url", type=str, default=None, help="Notes API base URL (default http://127.0.0.1:8000)")
    parser.add_argument("--note", type=str, default=None, help="Text to save when the notes panel opens")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    from graphnav.services.graph_provider import load_graph
    from graphnav.services.input_map import command_for_key, is_panel_toggle
    from graphnav.services.notes_panel import NotesClient, NotesPanel
    from graphnav.services.scene import GraphSession
    from graphnav.services.scene_config import layout_config_from_env

    graph = load_graph(args.source, seed=args.seed)
    now = 0.0
    session = GraphSession(graph, layout_config_from_env(), clock=lambda: now)
    logger.info("Loaded %d nodes, %d edges; start at %s", len(graph), len(graph.edges()), session.current_label)

    panel = NotesPanel(NotesClient(args.notes_url))
    session.attach_notes_panel(panel)

    for key in args.keys:
        if is_panel_toggle(key):
            if session.toggle_notes_panel():
                logger.info("Notes panel opened for %s: %r", panel.label, panel.draft)
                if args.note is not None:
                    panel.edit(args.note)
                    logger.info("Saved note for %s: %s", panel.label, panel.save())
            else:
                logger.info("Notes panel closed")
            continue
        command = command_for_key(key)
        if command is None:
            logger.warning("Unbound key %r", key)
            continue
        request = session.handle_command(command, now=now)
        if request is None:
            logger.info("%s: ignored", key)
            continue
        for _ in range(args.settle_ticks):
            now += args.dt
            frame = session.tick(args.dt, now=now)
            if not frame.transitioning:
                break
        nav = session.navigator.view()
        target = graph.node(nav.target_node).label if nav.target_node is not None else "-"
        logger.info(
            "%s: at %s, target %s, history %s",
            key,
            session.current_label,
            target,
            [graph.node(n).label for n in nav.history],
        )

    logger.info(
        "Layout after %d ticks: max speed %.4f, kinetic energy %.4f",
        session.layout.ticks,
        session.layout.max_speed(),
        session.layout.kinetic_energy(),
    )


if __name__ == "__main__":
    main()
