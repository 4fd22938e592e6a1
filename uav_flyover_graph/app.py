import datetime
import logging
import os
import random

import numpy as np

from .config import LogConfig, PlannerConfig
from .geometry import Point, generate_random_obstacles, generate_random_polygon
from .location import Location, Obstacle, unproject
from .planner import Pathfinder

logger = logging.getLogger(__name__)


def random_scenario(center, extent, num_obstacles, max_height):
    """
    Random irregular flyzone of roughly `extent` meters radius around the
    geodetic `center`, with non-overlapping circular obstacles inside it.
    """
    flyzone = [
        unproject(Point(x, y), center)
        for x, y in generate_random_polygon((0, 0), extent, 0.4, 0.3, random.randint(6, 10))
    ]
    obstacles = [
        Obstacle(unproject(Point(x, y), center), radius, height)
        for x, y, radius, height in generate_random_obstacles(
            num_obstacles, extent / 2, extent / 40, extent / 12, max_height
        )
    ]
    return [flyzone], obstacles


def main():
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--lat", type=float, default=32.88)
    parser.add_argument("--lon", type=float, default=-117.23)
    parser.add_argument("--extent", type=float, default=400.0)
    parser.add_argument("--obstacles", type=int, default=8)
    parser.add_argument("--max_height", type=float, default=60.0)
    parser.add_argument("--buffer", type=float, default=5.0)
    parser.add_argument("--policy", choices=["flyover", "block"], default="flyover")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log_level", default="INFO")
    parser.add_argument("--plot", action="store_true")
    args = parser.parse_args()

    log_config = LogConfig(level=args.log_level.upper())
    logging.basicConfig(level=log_config.level, format="%(levelname)s %(name)s: %(message)s")

    if args.seed is not None:
        random.seed(args.seed)
        np.random.seed(args.seed)

    center = Location.from_degrees(args.lat, args.lon)
    flyzones, obstacles = random_scenario(center, args.extent, args.obstacles, args.max_height)
    config = PlannerConfig(buffer=args.buffer, obstacle_policy=args.policy)

    pathfinder = Pathfinder(flyzones, obstacles, config)
    start_time = datetime.datetime.now()
    pathfinder.build_graph()
    duration = (datetime.datetime.now() - start_time).total_seconds()

    sentinels = sum(1 for v in pathfinder.arena if v.sentinel)
    flyovers = sum(
        1 for v in pathfinder.arena if v.connection is not None and v.connection.threshold > 0
    )
    logger.info(
        "Built graph in %.2f s: %d nodes, %d vertices, %d edges (%d flyover), %d sentinels",
        duration,
        len(pathfinder.nodes),
        len(pathfinder.arena),
        pathfinder.edge_count(),
        flyovers,
        sentinels,
    )

    if args.plot:
        results_dir = "results"
        if not os.path.exists(results_dir):
            os.makedirs(results_dir)
        timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
        pathfinder.visualize(save_path=os.path.join(results_dir, f"run_{timestamp}_graph.png"))
    return pathfinder


if __name__ == "__main__":
    main()
