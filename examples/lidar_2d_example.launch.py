"""
2D LiDAR Example (RPLIDAR, SICK, Hokuyo).

This launch file starts a 2D LiDAR driver and the RANSAC line
extraction node to find walls in the laser scan.

The angular resolution differs between scanners, so the seed
neighbourhood (sample_deviation_deg) is chosen per LiDAR type.

Prerequisites (choose one):
    # For RPLIDAR
    sudo apt install ros-humble-rplidar-ros

    # For SICK
    sudo apt install ros-humble-sick-scan2

    # For Hokuyo
    sudo apt install ros-humble-urg-node

Usage:
    ros2 launch ransac_line_extraction lidar_2d_example.launch.py
    ros2 launch ransac_line_extraction lidar_2d_example.launch.py lidar_type:=rplidar
"""

from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument, OpaqueFunction
from launch.substitutions import LaunchConfiguration, PathJoinSubstitution
from launch_ros.actions import Node
from launch_ros.substitutions import FindPackageShare


# Seed neighbourhood per scanner, about two beams wide
SAMPLE_DEVIATION_DEG = {
    'rplidar': 2.0,
    'hokuyo': 0.75,
    'sick': 0.7,
    'demo': 2.5,
}


def driver_node(lidar_type):
    """Return (driver node, scan topic) for a LiDAR type."""
    if lidar_type == 'rplidar':
        return Node(
            package='rplidar_ros',
            executable='rplidar_node',
            name='rplidar_node',
            output='screen',
            parameters=[{
                'serial_port': '/dev/ttyUSB0',
                'serial_baudrate': 115200,
                'frame_id': 'laser_frame',
                'angle_compensate': True,
            }]
        ), '/scan'
    if lidar_type == 'hokuyo':
        return Node(
            package='urg_node',
            executable='urg_node_driver',
            name='urg_node',
            output='screen',
            parameters=[{
                'serial_port': '/dev/ttyACM0',
                'frame_id': 'laser_frame',
            }]
        ), '/scan'
    if lidar_type == 'sick':
        return Node(
            package='sick_scan2',
            executable='sick_generic_caller',
            name='sick_scan',
            output='screen',
            parameters=[{
                'scanner_type': 'sick_tim_5xx',
                'hostname': '192.168.0.1',
            }]
        ), '/scan'
    # Default: synthetic room scans
    return Node(
        package='ransac_line_extraction',
        executable='test_publisher',
        name='ransac_test_publisher',
        output='screen',
        parameters=[{'publish_rate': 10.0}]
    ), '/input/scan'


def launch_setup(context, *args, **kwargs):
    lidar_type = LaunchConfiguration('lidar_type').perform(context)
    proximity_epsilon = float(LaunchConfiguration('proximity_epsilon').perform(context))

    pkg_share = FindPackageShare('ransac_line_extraction')
    config_file = PathJoinSubstitution([pkg_share, 'config', 'ransac_params.yaml'])

    lidar_node, scan_topic = driver_node(lidar_type)

    ransac_node = Node(
        package='ransac_line_extraction',
        executable='ransac_node',
        name='ransac_line_extraction_node',
        output='screen',
        parameters=[
            config_file,
            {
                'proximity_epsilon': proximity_epsilon,
                'sample_deviation_deg': SAMPLE_DEVIATION_DEG.get(lidar_type, 2.0),
            }
        ],
        remappings=[
            ('input/scan', scan_topic),
        ]
    )

    return [lidar_node, ransac_node]


def generate_launch_description():
    lidar_type_arg = DeclareLaunchArgument(
        'lidar_type',
        default_value='demo',
        description='LiDAR type: rplidar, hokuyo, sick, or demo (test data)'
    )

    proximity_epsilon_arg = DeclareLaunchArgument(
        'proximity_epsilon',
        default_value='0.05',
        description='Max distance of a point from its line (meters)'
    )

    return LaunchDescription([
        lidar_type_arg,
        proximity_epsilon_arg,
        OpaqueFunction(function=launch_setup),
    ])
