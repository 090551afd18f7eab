from setuptools import find_packages, setup
import os
from glob import glob

package_name = 'ransac_line_extraction'

setup(
    name=package_name,
    version='1.0.0',
    packages=find_packages(exclude=['test']),
    data_files=[
        ('share/ament_index/resource_index/packages',
            ['resource/' + package_name]),
        ('share/' + package_name, ['package.xml']),
        # Include launch files
        (os.path.join('share', package_name, 'launch'), glob('launch/*.py')),
        # Include example launch files
        (os.path.join('share', package_name, 'examples'), glob('examples/*.py')),
        # Include config files
        (os.path.join('share', package_name, 'config'), glob('config/*.yaml')),
    ],
    install_requires=['setuptools', 'numpy'],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=True,
    maintainer='SAI ESWARA M',
    maintainer_email='saimurali2005@gmail.com',
    description='ROS2 angular RANSAC line extraction for 2D laser scans',
    license='MIT',
    tests_require=['pytest'],
    entry_points={
        'console_scripts': [
            'ransac_node = ransac_line_extraction.ransac_node:main',
            'test_publisher = ransac_line_extraction.test_publisher:main',
        ],
    },
)
