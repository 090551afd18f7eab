"""
Demo Launch File with Test Publisher.

Launches both the RANSAC line extraction node and the synthetic
room scan publisher for demonstration without a real sensor.

Usage:
    ros2 launch ransac_line_extraction demo.launch.py
    ros2 launch ransac_line_extraction demo.launch.py noise_level:=0.02
"""

from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument, TimerAction
from launch.substitutions import LaunchConfiguration, PathJoinSubstitution
from launch_ros.actions import Node
from launch_ros.substitutions import FindPackageShare


def generate_launch_description():
    # Declare launch arguments
    noise_level_arg = DeclareLaunchArgument(
        'noise_level',
        default_value='0.01',
        description='Range noise of the synthetic scan (meters)'
    )

    publish_rate_arg = DeclareLaunchArgument(
        'publish_rate',
        default_value='10.0',
        description='Test data publish rate (Hz)'
    )

    # Get package share directory for config
    pkg_share = FindPackageShare('ransac_line_extraction')
    config_file = PathJoinSubstitution([pkg_share, 'config', 'ransac_params.yaml'])

    test_publisher = Node(
        package='ransac_line_extraction',
        executable='test_publisher',
        name='ransac_test_publisher',
        output='screen',
        parameters=[{
            'publish_rate': LaunchConfiguration('publish_rate'),
            'noise_level': LaunchConfiguration('noise_level'),
            'outlier_ratio': 0.05,
        }]
    )

    # Line extraction node (delayed to let test publisher start first)
    ransac_node = TimerAction(
        period=1.0,  # 1 second delay
        actions=[
            Node(
                package='ransac_line_extraction',
                executable='ransac_node',
                name='ransac_line_extraction_node',
                output='screen',
                parameters=[config_file]
            )
        ]
    )

    return LaunchDescription([
        noise_level_arg,
        publish_rate_arg,
        test_publisher,
        ransac_node,
    ])
