#!/usr/bin/env python3
# This file is part of ec2launch. See LICENSE file for license information.
"""Basic example of provisioning an EC2 instance with ec2launch."""

import logging
import threading

import ec2launch
from ec2launch.errors import StageError


def provision(region="us-east-1"):
    """Launch an instance and print how to reach it.

    Credentials are determined by the AWS API libraries by looking at
    ~/.aws/credentials and ~/.aws/config.

    The run gives up if the instance status checks do not pass within
    ten minutes. Anything created by a failed run is removed again.
    """
    config = ec2launch.LaunchConfig(
        region=region,
        key_name="ec2launch-example",
        instance_type="t3.micro",
        wait_timeout=600,
        tag="ec2launch-example",
        cleanup_on_failure=True,
    )
    cancel = threading.Event()
    try:
        result = ec2launch.Provisioner(config, cancel=cancel).run()
    except StageError as error:
        print(error)
        return
    print("image:", result.image_id)
    print("instance:", result.instance_id)
    print(result.ssh_command)


def demo():
    """Show example of using ec2launch as a library."""
    logging.basicConfig(level=logging.DEBUG)
    provision()


if __name__ == "__main__":
    demo()
