"""
RANSAC Line Extraction ROS2 Node.

This node subscribes to LaserScan messages, extracts straight lines with
angular RANSAC and publishes them as visualization markers.
"""

import math

import rclpy
from rclpy.node import Node
from rclpy.qos import QoSProfile, ReliabilityPolicy, HistoryPolicy

from sensor_msgs.msg import LaserScan
from visualization_msgs.msg import MarkerArray
from std_msgs.msg import Header

from .ransac_core import Ransac
from .laser_scan_handler import LaserScanHandler
from .utils import create_line_markers


class RansacLineNode(Node):
    """
    ROS2 Node for RANSAC-based line extraction from 2D LiDAR scans.
    """

    def __init__(self):
        super().__init__('ransac_line_extraction_node')

        # Declare parameters
        self._declare_parameters()

        # Get parameters
        self.max_points = self.get_parameter('max_points').value
        self.max_trials = self.get_parameter('max_trials').value
        self.sample_size = self.get_parameter('sample_size').value
        self.sample_deviation = math.radians(self.get_parameter('sample_deviation_deg').value)
        self.proximity_epsilon = self.get_parameter('proximity_epsilon').value
        self.line_consensus = self.get_parameter('line_consensus').value
        self.min_range = self.get_parameter('min_range').value
        self.max_range = self.get_parameter('max_range').value
        self.line_width = self.get_parameter('line_width').value
        self.publish_visualization = self.get_parameter('publish_visualization').value

        random_seed = self.get_parameter('random_seed').value
        self.ransac = Ransac(
            max_nodes=self.max_points,
            max_trials=self.max_trials,
            sample_size=self.sample_size,
            sample_deviation=self.sample_deviation,
            proximity_epsilon=self.proximity_epsilon,
            line_consensus=self.line_consensus,
            random_seed=random_seed if random_seed >= 0 else None,
            logger=self.get_logger()
        )

        # QoS profile for sensor data
        sensor_qos = QoSProfile(
            reliability=ReliabilityPolicy.BEST_EFFORT,
            history=HistoryPolicy.KEEP_LAST,
            depth=1
        )

        self.laserscan_sub = self.create_subscription(
            LaserScan,
            'input/scan',
            self.laserscan_callback,
            sensor_qos
        )
        self.get_logger().info('Subscribed to input/scan')

        self.markers_pub = self.create_publisher(MarkerArray, 'ransac/lines', 10)

        self.get_logger().info(
            f'RANSAC Line Extraction Node initialized\n'
            f'  Max points: {self.max_points}\n'
            f'  Max trials: {self.max_trials}\n'
            f'  Sample size: {self.sample_size}\n'
            f'  Sample deviation: {self.sample_deviation:.4f} rad\n'
            f'  Proximity epsilon: {self.proximity_epsilon}\n'
            f'  Line consensus: {self.line_consensus}'
        )

    def _declare_parameters(self):
        """Declare ROS2 parameters."""
        self.declare_parameter('max_points', 2048)  # Capacity of the working array
        self.declare_parameter('max_trials', 200)
        self.declare_parameter('sample_size', 4)
        self.declare_parameter('sample_deviation_deg', 2.0)
        self.declare_parameter('proximity_epsilon', 0.05)
        self.declare_parameter('line_consensus', 10)
        self.declare_parameter('min_range', 0.0)
        self.declare_parameter('max_range', float('inf'))
        self.declare_parameter('random_seed', -1)  # -1: unseeded
        self.declare_parameter('line_width', 0.05)
        self.declare_parameter('publish_visualization', True)

    def laserscan_callback(self, msg: LaserScan):
        """
        Process incoming LaserScan message.

        Args:
            msg: LaserScan message
        """
        nodes = LaserScanHandler.laserscan_to_nodes(msg)
        nodes = LaserScanHandler.filter_by_range(nodes, self.min_range, self.max_range)

        if len(nodes) > self.max_points:
            self.get_logger().warn(
                f'Scan has {len(nodes)} valid points, only the first {self.max_points} are used'
            )
            nodes = nodes[:self.max_points]

        if len(nodes) < self.line_consensus:
            self.get_logger().debug('Not enough valid points in LaserScan')
            return

        lines = self.ransac.compute(nodes, len(nodes))

        self.get_logger().debug(
            f'Extracted {len(lines)} lines from {len(nodes)} points'
        )

        if not self.publish_visualization:
            return

        # Create header for output
        header = Header()
        header.stamp = msg.header.stamp
        header.frame_id = msg.header.frame_id

        marker_array = create_line_markers(
            lines,
            self.ransac.line_spans,
            nodes,
            header,
            line_width=self.line_width
        )
        self.markers_pub.publish(marker_array)


def main(args=None):
    """Main entry point."""
    rclpy.init(args=args)

    node = RansacLineNode()

    try:
        rclpy.spin(node)
    except KeyboardInterrupt:
        pass
    finally:
        node.destroy_node()
        rclpy.shutdown()


if __name__ == '__main__':
    main()
