import argparse
import json
import logging
import os
import re
import sys
from datetime import datetime

from .errors import InvalidConfiguration
from .schema import load_plan, resolve_weights
from .spawner import SpawnSession


log = logging.getLogger('room_spawner')


def heatmap_filename(index: int, name: str) -> str:
    """Per-item score heatmap file; the index keeps repeated names apart."""
    safe = re.sub(r'[^A-Za-z0-9_.-]+', '_', name).strip('.') or 'item'
    return f"scores_{index:02d}_{safe}.png"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Room Spawner - tile grid object placement")
    parser.add_argument("input_file", help="Path to spawn plan (JSON or YAML)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Override the plan's random seed")
    parser.add_argument("--output-dir", default="outputs",
                        help="Directory that receives run_<timestamp> folders")
    parser.add_argument("--debug-maps", action="store_true",
                        help="Export layout and anchor score PNG images")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log every reservation")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        plan = load_plan(args.input_file)
        if args.seed is not None:
            plan = plan.model_copy(update={'seed': args.seed})
        session = SpawnSession(plan)
        report = session.run()
    except InvalidConfiguration as e:
        log.error("%s", e)
        return 1

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_dir = os.path.join(args.output_dir, f"run_{timestamp}")
    os.makedirs(out_dir, exist_ok=True)

    json_path = os.path.join(out_dir, "layout.json")
    with open(json_path, 'w') as f:
        json.dump(report.to_dict(), f, indent=4)

    with open(os.path.join(out_dir, "input_snapshot.json"), 'w') as f:
        json.dump(plan.model_dump(), f, indent=4)

    if args.debug_maps:
        from .visualize import export_placement_diagram, export_score_heatmap

        export_placement_diagram(session.grid, report.placed, os.path.join(out_dir, "layout.png"))
        for index, item in enumerate(plan.items):
            weights = resolve_weights(item, session.presets)
            export_score_heatmap(session.grid, item.footprint, weights,
                                 os.path.join(out_dir, heatmap_filename(index, item.name)))

    log.info("Generated %s (%d placed, %d skipped)",
             json_path, len(report.placed), len(report.skipped))
    return 0


if __name__ == '__main__':
    sys.exit(main())
