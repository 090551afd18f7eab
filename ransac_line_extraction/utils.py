"""
Visualization utilities for extracted lines.
"""

import numpy as np
from typing import List, Sequence, Tuple
from geometry_msgs.msg import Point
from visualization_msgs.msg import Marker, MarkerArray
from std_msgs.msg import Header, ColorRGBA

from .geometry import Line, segment_endpoints


def create_line_marker_2d(
    line: Line,
    member_nodes: np.ndarray,
    header: Header,
    marker_id: int,
    z_height: float = 0.0,
    color: Tuple[float, float, float, float] = (1.0, 0.0, 0.0, 1.0),
    line_width: float = 0.05,
    namespace: str = "ransac_lines"
) -> Marker:
    """
    Create a visualization marker for an extracted line.

    The marker spans the projection of the line's member nodes.

    Args:
        line: Fitted line
        member_nodes: Nodes that support the line
        header: ROS2 Header
        marker_id: Unique ID for the marker
        z_height: Z coordinate for the line
        color: RGBA color tuple
        line_width: Width of the line marker
        namespace: Marker namespace

    Returns:
        Marker message
    """
    marker = Marker()
    marker.header = header
    marker.ns = namespace
    marker.id = marker_id
    marker.type = Marker.LINE_STRIP
    marker.action = Marker.ADD

    start, end = segment_endpoints(line, member_nodes)

    marker.points = [
        Point(x=start[0], y=start[1], z=z_height),
        Point(x=end[0], y=end[1], z=z_height)
    ]

    marker.scale.x = line_width  # Line width
    marker.color = ColorRGBA(r=color[0], g=color[1], b=color[2], a=color[3])

    return marker


def create_line_markers(
    lines: Sequence[Line],
    spans: Sequence[Tuple[int, int]],
    nodes: np.ndarray,
    header: Header,
    line_width: float = 0.05,
    namespace: str = "ransac_lines"
) -> MarkerArray:
    """
    Create markers for every line of a RANSAC run.

    The first marker clears markers left over from the previous scan.

    Args:
        lines: Accepted lines
        spans: Member index range of each line in nodes
        nodes: Working array after compute()
        header: ROS2 Header
        line_width: Width of the line markers
        namespace: Marker namespace

    Returns:
        MarkerArray message
    """
    marker_array = MarkerArray()

    clear_marker = Marker()
    clear_marker.header = header
    clear_marker.ns = namespace
    clear_marker.action = Marker.DELETEALL
    marker_array.markers.append(clear_marker)

    colors = get_distinct_colors(len(lines))
    for i, (line, (start, end)) in enumerate(zip(lines, spans)):
        marker_array.markers.append(create_line_marker_2d(
            line,
            nodes[start:end],
            header,
            marker_id=i,
            color=colors[i],
            line_width=line_width,
            namespace=namespace
        ))

    return marker_array


def get_distinct_colors(n: int) -> List[Tuple[float, float, float, float]]:
    """
    Generate n visually distinct colors.

    Args:
        n: Number of colors to generate

    Returns:
        List of RGBA tuples
    """
    colors = []
    for i in range(n):
        hue = i / n
        # Convert HSV to RGB (full saturation, full value)
        if hue < 1/6:
            r, g, b = 1.0, hue * 6, 0.0
        elif hue < 2/6:
            r, g, b = 1.0 - (hue - 1/6) * 6, 1.0, 0.0
        elif hue < 3/6:
            r, g, b = 0.0, 1.0, (hue - 2/6) * 6
        elif hue < 4/6:
            r, g, b = 0.0, 1.0 - (hue - 3/6) * 6, 1.0
        elif hue < 5/6:
            r, g, b = (hue - 4/6) * 6, 0.0, 1.0
        else:
            r, g, b = 1.0, 0.0, 1.0 - (hue - 5/6) * 6

        colors.append((r, g, b, 0.8))

    return colors
