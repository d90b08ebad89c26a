import argparse
import logging

from src.config import ServiceConfig, load_corridor
from src.core.interlocking import Interlocking
from src.sim.render import render_board

# t18 and t102 share nothing; t34 runs the short single-track hop
DEMO_TRAINS = [("t18", 1, 8), ("t102", 10, 2), ("t34", 3, 4)]


def run_demo(network: Interlocking, ticks: int = 3) -> None:
    for name, entry, destination in DEMO_TRAINS:
        network.add_train(name, entry, destination)
    print(network.get_train("t18"))
    print(network.get_section(1))
    print(render_board(network))
    names = [name for name, _, _ in DEMO_TRAINS]
    for _ in range(ticks):
        active = [n for n in names if n in network.active]
        if not active:
            break
        moved = network.move_trains(active)
        print(f"moved: {moved}")
        print(render_board(network))


if __name__ == "__main__":
    cfg = ServiceConfig()
    parser = argparse.ArgumentParser(description="Run the demo corridor for a few ticks")
    parser.add_argument("--corridor", default=cfg.corridor_path, help="Corridor JSON file")
    parser.add_argument("--ticks", type=int, default=3)
    args = parser.parse_args()

    logging.basicConfig(level=cfg.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_demo(Interlocking(load_corridor(args.corridor)), ticks=args.ticks)
