# This file is part of ec2launch. See LICENSE file for license information.
"""This module contains types used by ec2launch."""

import os
from dataclasses import dataclass, fields
from typing import Optional

DEFAULT_REGION = "us-east-1"
DEFAULT_IMAGE_SEARCH = "ubuntu/images/hvm-ssd/ubuntu-xenial-16.04-amd64*"
DEFAULT_KEY_NAME = "aws-sdk-gov2-key"
DEFAULT_INSTANCE_TYPE = "t2.medium"


@dataclass
class LaunchConfig:
    """
    Dataclass holding everything a provisioning run needs to know.

    - region: AWS region the EC2 client is bound to.
    - image_search: glob matched against AMI names.
    - key_name: name of the EC2 key pair. The private key is written to
      `<key_dir>/<key_name>.pem`. A key pair with this name is replaced on
      every run.
    - instance_type: EC2 instance type to launch.
    - username: login user used in the printed SSH command.
    - wait_timeout / wait_delay: bound and poll interval, in seconds, of
      the wait for the instance status checks to pass. The delay is
      capped at the timeout.
    - tag: optional value of the `Name` tag put on the instance.
    - cleanup_on_failure: terminate the instance and delete the key pair
      created by a run that fails part way.
    """

    region: str = DEFAULT_REGION
    image_search: str = DEFAULT_IMAGE_SEARCH
    key_name: str = DEFAULT_KEY_NAME
    instance_type: str = DEFAULT_INSTANCE_TYPE
    username: str = "ubuntu"
    key_dir: str = "."
    wait_timeout: float = 900
    wait_delay: float = 15
    tag: Optional[str] = None
    cleanup_on_failure: bool = False
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None

    def __post_init__(self):
        """Post initialization checks for LaunchConfig."""
        for name in (
            "region",
            "image_search",
            "key_name",
            "instance_type",
            "username",
            "key_dir",
        ):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"Invalid {name} provided: {value!r}")
        if os.sep in self.key_name:
            raise ValueError(
                f"Invalid key_name provided (must not contain '{os.sep}')"
            )
        for name in ("wait_timeout", "wait_delay"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Invalid {name} provided (must be a number)")
            if value <= 0:
                raise ValueError(f"Invalid {name} provided (must be positive)")
        self.wait_delay = min(self.wait_delay, self.wait_timeout)
        if not isinstance(self.cleanup_on_failure, bool):
            raise ValueError(
                "Invalid cleanup_on_failure value provided (must be a boolean)"
            )

    @property
    def key_path(self) -> str:
        """Path of the private key file written for this key pair."""
        return os.path.normpath(
            os.path.join(os.path.expanduser(self.key_dir), self.key_name + ".pem")
        )

    @classmethod
    def field_names(cls):
        """Return the names of all configurable fields."""
        return [f.name for f in fields(cls)]
