import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import numpy as np
import tsplib95

from .solvers.base import InvalidInputError, PointSet, check_origin, tour_length

logger = logging.getLogger(__name__)


@dataclass
class Instance:
    name: str
    path: Path
    points: PointSet
    origin: int
    optimum: Optional[float] = None


def _parse_float(token: str) -> Optional[float]:
    try:
        return float(token)
    except ValueError:
        return None


def parse_coordinates(lines: Iterable[str]) -> List[Tuple[float, float]]:
    """
    Parse ``x,y`` records. A record carrying a text label instead of numbers
    (e.g. ``Depot``) marks the origin and is read as ``(0.0, 0.0)``.
    """
    records: List[Tuple[float, float]] = []
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        fields = [f.strip() for f in line.split(",")]
        values = [_parse_float(f) for f in fields]
        if any(v is None for v in values):
            if any(v is not None for v in values):
                raise InvalidInputError(f"line {lineno}: mixed label and numeric fields: {line!r}")
            records.append((0.0, 0.0))
            continue
        if len(values) != 2:
            raise InvalidInputError(f"line {lineno}: expected 2 coordinates, got {len(values)}: {line!r}")
        records.append((values[0], values[1]))
    if not records:
        raise InvalidInputError("no coordinates found")
    return records


def find_origin(points: PointSet) -> Optional[int]:
    hits = np.flatnonzero((points.coords == 0.0).all(axis=1))
    if hits.size == 0:
        return None
    return int(hits[0])


def resolve_origin(points: PointSet, override: Optional[int] = None) -> int:
    if override is not None:
        check_origin(points, override)
        return override
    origin = find_origin(points)
    if origin is None:
        logger.warning("no point at (0, 0); using point 0 as origin")
        return 0
    return origin


def load_coordinates(path: Path, origin: Optional[int] = None) -> Instance:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"{path} could not be found.")
    try:
        with path.open("r", encoding="utf-8") as f:
            points = PointSet.from_iterable(parse_coordinates(f))
    except UnicodeDecodeError as exc:
        raise InvalidInputError(f"{path} is not valid UTF-8 text: {exc}") from exc
    return Instance(name=path.stem, path=path, points=points, origin=resolve_origin(points, origin))


def _solution_candidates(path: Path) -> Iterable[Path]:
    yield path.with_suffix(".opt.tour")
    for ext in (".opt.tour", ".opt", ".tour"):
        yield path.parent / "solutions" / f"{path.stem}{ext}"


def _read_dimension(path: Path) -> Optional[int]:
    try:
        with path.open("r") as f:
            for line in f:
                if "DIMENSION" in line.upper():
                    parts = line.replace(":", " ").split()
                    for token in parts:
                        if token.isdigit():
                            return int(token)
        return None
    except OSError:
        return None


def _load_optimum(path: Path, node_index: dict, points: PointSet) -> Optional[float]:
    for candidate in _solution_candidates(path):
        if not candidate.exists():
            continue
        try:
            tour_file = tsplib95.parse(candidate.read_text())
            nodes = [node_index[n] for n in tour_file.tours[0]]
        except (KeyError, IndexError, ValueError) as exc:
            logger.warning("ignoring unreadable tour file %s: %s", candidate, exc)
            continue
        if not nodes:
            continue
        return tour_length(nodes + [nodes[0]], points)
    return None


def load_instance(path: Path, origin: Optional[int] = None) -> Instance:
    path = Path(path)
    problem = tsplib95.load(str(path))
    coords = problem.node_coords
    if not coords:
        raise InvalidInputError(f"{path} has no NODE_COORD_SECTION")
    nodes = sorted(coords)
    node_index = {n: i for i, n in enumerate(nodes)}
    points = PointSet.from_iterable(coords[n] for n in nodes)
    optimum = _load_optimum(path, node_index, points)
    return Instance(
        name=problem.name or path.stem,
        path=path,
        points=points,
        origin=resolve_origin(points, origin),
        optimum=optimum,
    )


def load_tsplib_instances(
    root: Path, max_nodes: Optional[int] = None, max_instances: Optional[int] = None
) -> List[Instance]:
    tsp_files = sorted(Path(root).glob("*.tsp"))
    instances: List[Instance] = []
    for p in tsp_files:
        if max_nodes is not None:
            dim = _read_dimension(p)
            if dim is not None and dim > max_nodes:
                continue
        try:
            instances.append(load_instance(p))
        except InvalidInputError as exc:
            logger.warning("skipping %s: %s", p.name, exc)
            continue
        if max_instances is not None and len(instances) >= max_instances:
            break
    return instances


def load_points(path: Path, origin: Optional[int] = None) -> Instance:
    """Load a TSPLIB ``.tsp`` file or a plain coordinate list, by suffix."""
    path = Path(path)
    if path.suffix.lower() == ".tsp":
        return load_instance(path, origin=origin)
    return load_coordinates(path, origin=origin)
