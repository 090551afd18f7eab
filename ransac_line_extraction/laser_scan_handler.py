"""
LaserScan Message Handler.

This module provides utilities for converting ROS2 LaserScan messages
to angle-sorted node arrays for RANSAC line extraction. Messages are
accessed by field name only, so any object with the LaserScan fields
can be converted.
"""

import numpy as np
from typing import Tuple

from .geometry import NODE_DTYPE, nodes_from_raw


class LaserScanHandler:
    """
    Handler for converting LaserScan messages into node arrays.
    """

    @staticmethod
    def to_cartesian(reading: Tuple[float, float]) -> Tuple[float, float]:
        """Convert a (range, bearing) reading to (x, y)."""
        r, theta = reading
        return r * np.cos(theta), r * np.sin(theta)

    @staticmethod
    def to_angle(reading: Tuple[float, float]) -> float:
        """Bearing of a (range, bearing) reading."""
        return reading[1]

    @staticmethod
    def scan_angles(msg) -> np.ndarray:
        """
        Bearing of every range measurement.

        Args:
            msg: LaserScan message

        Returns:
            Array of angles, one per entry in msg.ranges
        """
        num_readings = len(msg.ranges)
        return msg.angle_min + np.arange(num_readings) * msg.angle_increment

    @staticmethod
    def valid_readings(msg) -> Tuple[np.ndarray, np.ndarray]:
        """
        Filter out-of-range and non-finite measurements.

        Args:
            msg: LaserScan message

        Returns:
            Tuple of (ranges, angles) of the valid readings
        """
        ranges = np.asarray(msg.ranges, dtype=np.float64)
        angles = LaserScanHandler.scan_angles(msg)

        valid_mask = np.isfinite(ranges) & (ranges >= msg.range_min) & (ranges <= msg.range_max)
        return ranges[valid_mask], angles[valid_mask]

    @staticmethod
    def laserscan_to_nodes(msg) -> np.ndarray:
        """
        Convert a LaserScan message to a node array sorted by angle.

        Args:
            msg: LaserScan message

        Returns:
            Structured array with dtype NODE_DTYPE
        """
        ranges, angles = LaserScanHandler.valid_readings(msg)

        nodes = np.empty(len(ranges), dtype=NODE_DTYPE)
        nodes['x'] = ranges * np.cos(angles)
        nodes['y'] = ranges * np.sin(angles)
        nodes['angle'] = angles

        # Scans with a negative increment come in descending order
        return nodes[np.argsort(nodes['angle'], kind='stable')]

    @staticmethod
    def readings_to_nodes(readings) -> np.ndarray:
        """
        Convert (range, bearing) pairs to a node array sorted by angle.

        Args:
            readings: Iterable of (range, bearing) tuples

        Returns:
            Structured array with dtype NODE_DTYPE
        """
        return nodes_from_raw(
            readings,
            LaserScanHandler.to_cartesian,
            LaserScanHandler.to_angle
        )

    @staticmethod
    def filter_by_range(
        nodes: np.ndarray,
        min_range: float = 0.0,
        max_range: float = float('inf')
    ) -> np.ndarray:
        """
        Filter nodes by distance from origin.

        Args:
            nodes: Node array
            min_range: Minimum distance to keep
            max_range: Maximum distance to keep

        Returns:
            Nodes within [min_range, max_range], order preserved
        """
        distances = np.hypot(nodes['x'], nodes['y'])
        return nodes[(distances >= min_range) & (distances <= max_range)]
