#!/usr/bin/env python3
"""Name -> strategy lookup. Names are matched exactly, case included."""

from typing import Dict, List

from pathfinder.core.astar import AStarAlgo
from pathfinder.core.bfs import BreadthFirstAlgo
from pathfinder.core.dfs import DepthFirstAlgo
from pathfinder.core.dijkstra import DijkstraAlgo
from pathfinder.core.greedy import GreedyBestFirstAlgo
from pathfinder.core.search_base import SearchAlgo
from pathfinder.core.types import UnknownAlgorithmError

ALGORITHMS: Dict[str, SearchAlgo] = {
    algo.name: algo
    for algo in (
        DijkstraAlgo(),
        AStarAlgo(),
        BreadthFirstAlgo(),
        DepthFirstAlgo(),
        GreedyBestFirstAlgo(),
    )
}

# labels shown in the viewer
DISPLAY_NAMES: Dict[str, str] = {
    "Dijkstra": "Dijkstra",
    "A*": "A*",
    "BreadthFirst": "Breadth First",
    "DepthFirst": "Depth First",
    "GreedyBestFirst": "Greedy Best First",
}


def algorithm_names() -> List[str]:
    return list(ALGORITHMS)


def get_algorithm(name: str) -> SearchAlgo:
    try:
        return ALGORITHMS[name]
    except KeyError:
        raise UnknownAlgorithmError(name, algorithm_names()) from None
