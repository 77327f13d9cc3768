# This file is part of ec2launch. See LICENSE file for license information.
"""Allow running ec2launch with python -m."""

import sys

from ec2launch.cli import main

sys.exit(main())
