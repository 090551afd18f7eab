"""
RANSAC Line Extraction - angular RANSAC line fitting for 2D range scans.

This package extracts straight lines from angle-sorted scan points using
sequential RANSAC with angular seed growth, and wires it into ROS2 for
LaserScan input.
"""

import logging

__version__ = '1.0.0'

from .geometry import (
    NODE_DTYPE,
    Node,
    Line,
    FitStatus,
    FitResult,
    make_nodes,
    compute_raw_node,
    nodes_from_raw,
    squared_distance,
    fit_line,
)
from .partition import pop_node, restore_trial
from .ransac_core import Ransac, RansacParams, TrialOutcome
from .laser_scan_handler import LaserScanHandler

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'NODE_DTYPE',
    'Node',
    'Line',
    'FitStatus',
    'FitResult',
    'make_nodes',
    'compute_raw_node',
    'nodes_from_raw',
    'squared_distance',
    'fit_line',
    'pop_node',
    'restore_trial',
    'Ransac',
    'RansacParams',
    'TrialOutcome',
    'LaserScanHandler',
]
