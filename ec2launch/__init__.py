# This file is part of ec2launch. See LICENSE file for license information.
"""Main ec2launch module __init__."""

import logging

from ec2launch.ec2.cloud import EC2
from ec2launch.provision import Provisioner, ProvisionResult, Stage
from ec2launch.types import LaunchConfig

__all__ = [
    "EC2",
    "LaunchConfig",
    "Provisioner",
    "ProvisionResult",
    "Stage",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
