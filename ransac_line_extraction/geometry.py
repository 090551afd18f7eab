"""
Geometric primitives for line extraction.

This module provides the point and line model used by the RANSAC driver:
- Node: a scan point with Cartesian coordinates and polar bearing
- Line: a slope-intercept line
- squared_distance: perpendicular point-to-line distance (squared)
- fit_line: closed-form least-squares regression over a node range
"""

import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, NamedTuple, Optional, Tuple


NODE_DTYPE = np.dtype([('x', np.float64), ('y', np.float64), ('angle', np.float64)])


class Node(NamedTuple):
    """A scan point. The angle is only used to find angular neighbours."""
    x: float
    y: float
    angle: float


def make_nodes(nodes: Iterable[Tuple[float, float, float]]) -> np.ndarray:
    """
    Build a working array from (x, y, angle) triples.

    Args:
        nodes: Iterable of Node or (x, y, angle) tuples

    Returns:
        Structured array with dtype NODE_DTYPE
    """
    return np.array([tuple(n) for n in nodes], dtype=NODE_DTYPE)


def compute_raw_node(
    raw,
    to_cartesian: Callable[[object], Tuple[float, float]],
    to_angle: Callable[[object], float]
) -> Node:
    """
    Compute a Node from a raw sensor reading.

    Args:
        raw: Raw reading, opaque to this module
        to_cartesian: Function mapping the reading to (x, y)
        to_angle: Function mapping the reading to its polar angle

    Returns:
        Node for the reading
    """
    x, y = to_cartesian(raw)
    return Node(float(x), float(y), float(to_angle(raw)))


def nodes_from_raw(
    readings: Iterable,
    to_cartesian: Callable[[object], Tuple[float, float]],
    to_angle: Callable[[object], float]
) -> np.ndarray:
    """Convert raw readings and sort them by ascending angle."""
    nodes = make_nodes(compute_raw_node(r, to_cartesian, to_angle) for r in readings)
    if len(nodes) == 0:
        return nodes
    return nodes[np.argsort(nodes['angle'], kind='stable')]


@dataclass(frozen=True)
class Line:
    """
    Line in slope-intercept form: y = slope * x + intercept.
    """
    slope: float
    intercept: float

    def get_y(self, x: float) -> float:
        return self.slope * x + self.intercept

    def get_x(self, y: float) -> float:
        # A horizontal line has no x for a given y; 0.0 is kept for
        # compatibility with existing consumers.
        if self.slope == 0:
            return 0.0
        return (y - self.intercept) / self.slope


def squared_distance(line: Line, x, y):
    """
    Squared perpendicular distance from point(s) to a line.

    Args:
        line: Line to measure against
        x: X coordinate, scalar or numpy array
        y: Y coordinate, scalar or numpy array

    Returns:
        Squared distance with the same shape as x and y
    """
    numerator = np.abs(-line.slope * x + y - line.intercept)
    return (numerator * numerator) / (line.slope * line.slope + 1)


class FitStatus(Enum):
    """Outcome of a regression fit."""
    OK = 'ok'
    INSUFFICIENT_POINTS = 'insufficient_points'
    DEGENERATE = 'degenerate'


@dataclass(frozen=True)
class FitResult:
    """Result of fit_line. line is only set when status is OK."""
    status: FitStatus
    line: Optional[Line] = None

    @property
    def ok(self) -> bool:
        return self.status is FitStatus.OK


def fit_line(start: int, end: int, nodes: np.ndarray) -> FitResult:
    """
    Fit a least-squares regression line to nodes[start:end].

    Uses the normal equations directly. Vertical or single-x point sets
    have no slope-intercept solution and are reported as DEGENERATE.

    Args:
        start: First index (inclusive)
        end: Last index (exclusive)
        nodes: Structured array with dtype NODE_DTYPE

    Returns:
        FitResult with the fitted line or the failure status
    """
    n = end - start
    if n <= 0:
        return FitResult(FitStatus.INSUFFICIENT_POINTS)

    x = nodes['x'][start:end].astype(np.float64)
    y = nodes['y'][start:end].astype(np.float64)

    x_sum = x.sum()
    y_sum = y.sum()
    x2_sum = np.dot(x, x)
    xy_sum = np.dot(x, y)

    denom = n * x2_sum - x_sum * x_sum
    # Rounding can leave a tiny non-zero denominator for identical x values
    if denom == 0.0 or np.all(x == x[0]):
        return FitResult(FitStatus.DEGENERATE)

    slope = (n * xy_sum - x_sum * y_sum) / denom
    intercept = (y_sum * x2_sum - x_sum * xy_sum) / denom
    if not (np.isfinite(slope) and np.isfinite(intercept)):
        return FitResult(FitStatus.DEGENERATE)

    return FitResult(FitStatus.OK, Line(float(slope), float(intercept)))


def segment_endpoints(line: Line, nodes: np.ndarray) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """
    Get the extent of a line's members projected onto the line.

    Args:
        line: Fitted line
        nodes: Member nodes (dtype NODE_DTYPE), at least one

    Returns:
        ((x0, y0), (x1, y1)) endpoints on the line
    """
    direction = np.array([1.0, line.slope]) / np.hypot(1.0, line.slope)
    origin = np.array([0.0, line.intercept])

    points = np.column_stack([nodes['x'], nodes['y']])
    projections = np.dot(points - origin, direction)

    start = origin + projections.min() * direction
    end = origin + projections.max() * direction
    return (float(start[0]), float(start[1])), (float(end[0]), float(end[1]))
