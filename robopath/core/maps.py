# robopath/core/maps.py
#!/usr/bin/env python3
"""
World layouts stored as JSON:

    {"name": "default", "size": 18, "start": [2, 2], "goal": [12, 12],
     "walls": [[5, 7], [6, 7]]}
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet

from robopath.core.types import Cell, Grid, OutOfBoundsError

MAP_DIR = Path(__file__).resolve().parents[1] / "maps"


class MapError(ValueError):
    pass


@dataclass(frozen=True)
class MapSpec:
    name: str
    size: int
    start: Cell
    goal: Cell
    walls: FrozenSet[Cell] = field(default_factory=frozenset)


def _cell(value, what: str) -> Cell:
    try:
        x, y = value
        return int(x), int(y)
    except (TypeError, ValueError):
        raise MapError(f"{what} must be an [x, y] pair, got {value!r}") from None


def parse_map(data: dict, name: str = "custom") -> MapSpec:
    try:
        size = data["size"]
        start = _cell(data["start"], "start")
        goal = _cell(data["goal"], "goal")
    except KeyError as ex:
        raise MapError(f"map {name!r} is missing key {ex.args[0]!r}") from None
    walls = [_cell(w, "wall") for w in data.get("walls", [])]

    try:
        grid = Grid.build(size, walls)
        grid.validate(start, "start")
        grid.validate(goal, "goal")
    except OutOfBoundsError as ex:
        raise MapError(f"map {name!r}: {ex}") from None
    if grid.is_block(start) or grid.is_block(goal):
        raise MapError(f"map {name!r}: start and goal must not be walls")
    if start == goal:
        raise MapError(f"map {name!r}: start and goal must differ")

    return MapSpec(str(data.get("name", name)), size, start, goal, grid.walls)


def load_map(path: Path) -> MapSpec:
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as ex:
        raise MapError(f"{path.name}: invalid JSON ({ex})") from None
    if not isinstance(data, dict):
        raise MapError(f"{path.name}: top level must be an object")
    return parse_map(data, name=path.stem)


def bundled_maps() -> Dict[str, Path]:
    """Shipped map files by key, e.g. {"01_default": .../01_default.json}."""
    return {p.stem: p for p in sorted(MAP_DIR.glob("*.json"))}


def blank_map(size: int) -> MapSpec:
    """Empty size x size world, robot top-left, goal bottom-right."""
    if isinstance(size, bool) or not isinstance(size, int) or size < 2:
        raise MapError(f"a blank map needs size >= 2, got {size!r}")
    return MapSpec("blank", size, (0, 0), (size - 1, size - 1))
