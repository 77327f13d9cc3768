# This file is part of ec2launch. See LICENSE file for license information.
"""EC2's __init__."""
from ec2launch.ec2.cloud import EC2
from ec2launch.ec2.instance import EC2Instance

__all__ = ["EC2", "EC2Instance"]
