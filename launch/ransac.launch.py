"""
Main Launch File for RANSAC Line Extraction Node.

Usage:
    ros2 launch ransac_line_extraction ransac.launch.py
    ros2 launch ransac_line_extraction ransac.launch.py scan_topic:=/scan
    ros2 launch ransac_line_extraction ransac.launch.py proximity_epsilon:=0.03
"""

from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument
from launch.substitutions import LaunchConfiguration, PathJoinSubstitution
from launch_ros.actions import Node
from launch_ros.substitutions import FindPackageShare


def generate_launch_description():
    # Declare launch arguments
    proximity_epsilon_arg = DeclareLaunchArgument(
        'proximity_epsilon',
        default_value='0.05',
        description='Max distance of a point from its line (meters)'
    )

    max_trials_arg = DeclareLaunchArgument(
        'max_trials',
        default_value='200',
        description='RANSAC trials per scan'
    )

    line_consensus_arg = DeclareLaunchArgument(
        'line_consensus',
        default_value='10',
        description='Minimum number of points supporting a line'
    )

    scan_topic_arg = DeclareLaunchArgument(
        'scan_topic',
        default_value='/input/scan',
        description='Input LaserScan topic'
    )

    # Get package share directory for config
    pkg_share = FindPackageShare('ransac_line_extraction')
    config_file = PathJoinSubstitution([pkg_share, 'config', 'ransac_params.yaml'])

    ransac_node = Node(
        package='ransac_line_extraction',
        executable='ransac_node',
        name='ransac_line_extraction_node',
        output='screen',
        parameters=[
            config_file,
            {
                'proximity_epsilon': LaunchConfiguration('proximity_epsilon'),
                'max_trials': LaunchConfiguration('max_trials'),
                'line_consensus': LaunchConfiguration('line_consensus'),
            }
        ],
        remappings=[
            ('input/scan', LaunchConfiguration('scan_topic')),
        ]
    )

    return LaunchDescription([
        proximity_epsilon_arg,
        max_trials_arg,
        line_consensus_arg,
        scan_topic_arg,
        ransac_node,
    ])
