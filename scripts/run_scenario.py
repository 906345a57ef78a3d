"""CLI for running offline LiftCall scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from fleet import Dispatcher, EventLog, FleetConfig, FloorPanel, ThreadedDispatcher, build_dispatcher


def build_fleet(config: Dict) -> Dispatcher:
    fleet_cfg = FleetConfig.from_dict(config.get("fleet", {}))
    return build_dispatcher(fleet_cfg)


def run_requests(dispatcher: Dispatcher, requests: List[Dict]) -> List[Dict]:
    """Submit each request through the panel on its floor and collect the outcome."""

    panels: Dict[int, FloorPanel] = {}
    log = EventLog()
    dispatcher.register_sink(log)
    results: List[Dict] = []

    for request in requests:
        if "strategy" in request:
            dispatcher.use_strategy(request["strategy"], **request.get("strategy_options", {}))
        floor = request["floor"]
        panel = panels.get(floor)
        if panel is None:
            panel = panels[floor] = FloorPanel(floor, dispatcher)
            dispatcher.register_sink(panel)
        car_id = panel.request_elevator(request["direction"])
        if isinstance(dispatcher, ThreadedDispatcher):
            dispatcher.wait_idle()
        results.append(
            {
                "floor": floor,
                "direction": request["direction"],
                "car_id": car_id,
                "events": [event.to_dict() for event in log.drain()],
            }
        )
    return results


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write the served requests and final fleet as JSON",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level, e.g. INFO or DEBUG")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    config = json.loads(args.config.read_text())
    dispatcher = build_fleet(config)
    if isinstance(dispatcher, ThreadedDispatcher):
        dispatcher.start()
    try:
        served = run_requests(dispatcher, config.get("requests", []))
    finally:
        if isinstance(dispatcher, ThreadedDispatcher):
            dispatcher.stop()

    results = {
        "scenario": config.get("name", args.config.stem),
        "description": config.get("description"),
        "strategy": type(dispatcher.strategy).__name__,
        "requests": served,
        "final_fleet": [snapshot.to_dict() for snapshot in dispatcher.snapshot()],
    }

    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(f"Strategy: {results['strategy']}")
    for entry in served:
        car = entry["car_id"] if entry["car_id"] is not None else "none"
        print(f"  floor {entry['floor']} {entry['direction']}: car {car}, {len(entry['events'])} updates")
    print("Final fleet:")
    for car in results["final_fleet"]:
        print(f"  car {car['id']}: floor {car['floor']} ({car['state']})")
    if args.output:
        print(f"Saved results to {args.output}")


if __name__ == "__main__":
    main()
