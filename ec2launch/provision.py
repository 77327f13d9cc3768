# This file is part of ec2launch. See LICENSE file for license information.
"""Run the provisioning stages, from login to SSH command, in order."""

import enum
import logging
import threading
from typing import NamedTuple, Optional

import botocore

from ec2launch.ec2.cloud import EC2
from ec2launch.errors import (
    Ec2launchException,
    StageError,
    WaitCancelledError,
)
from ec2launch.types import LaunchConfig
from ec2launch.util import ssh_command


@enum.unique
class Stage(enum.Enum):
    """States a provisioning run goes through."""

    PENDING = "pending"
    AUTHENTICATING = "authenticating"
    LOCATING_IMAGE = "locating image"
    PROVISIONING_KEY = "provisioning key"
    LAUNCHING_INSTANCE = "launching instance"
    WAITING_HEALTHY = "waiting for instance"
    RESOLVING_ADDRESS = "resolving address"
    DONE = "done"
    FAILED = "failed"

    @property
    def description(self) -> str:
        """Return the stage name as used in messages."""
        return self.value.capitalize()

    def __str__(self):
        """Return the string representation of Stage enum."""
        return self.value


class ProvisionResult(NamedTuple):
    """Everything a successful run produced."""

    image_id: str
    instance_id: str
    public_ip: str
    key_path: str
    ssh_command: str


_RUN_ERRORS = (
    Ec2launchException,
    botocore.exceptions.ClientError,
    botocore.exceptions.BotoCoreError,
    ValueError,
)


class Provisioner:
    """Provision one instance reachable over SSH.

    Stages run strictly one after the other and nothing is retried. A
    failing stage aborts the run with a StageError naming it. Resources
    created before the failure are left behind unless the configuration
    asks for cleanup_on_failure.
    """

    def __init__(
        self,
        config: LaunchConfig,
        cloud: Optional[EC2] = None,
        cancel: Optional[threading.Event] = None,
    ):
        """Set up a run.

        Args:
            config: settings of the run
            cloud: EC2 object to use instead of logging in
            cancel: event that aborts the run when set
        """
        self._log = logging.getLogger(__name__)
        self.config = config
        self.cloud = cloud
        self.cancel = cancel or threading.Event()
        self.stage = Stage.PENDING
        self.failed_stage: Optional[Stage] = None

    def _enter(self, stage: Stage):
        self._log.debug("stage: %s -> %s", self.stage, stage)
        self.stage = stage
        if stage not in (Stage.DONE, Stage.FAILED) and self.cancel.is_set():
            raise WaitCancelledError(
                "Run cancelled before {} started".format(stage)
            )

    def _fail(self) -> Stage:
        """Move to FAILED, tearing down created resources if configured."""
        self.failed_stage = self.stage
        self._enter(Stage.FAILED)
        if self.config.cleanup_on_failure and self.cloud is not None:
            self._log.info("cleaning up after failed %s", self.failed_stage)
            self.cloud.clean()
        return self.failed_stage

    def run(self) -> ProvisionResult:
        """Provision the instance.

        The cancel event is honoured between stages and during the wait
        for the instance. A KeyboardInterrupt still tears down what was
        created when cleanup_on_failure is set, then propagates.

        Returns:
            ProvisionResult of the run

        Raises:
            StageError: a stage failed, wrapping the original error
        """
        try:
            result = self._run_stages()
        except _RUN_ERRORS as e:
            raise StageError(self._fail(), e) from e
        except KeyboardInterrupt:
            self._fail()
            raise
        self._enter(Stage.DONE)
        return result

    def _run_stages(self) -> ProvisionResult:
        config = self.config

        self._enter(Stage.AUTHENTICATING)
        if self.cloud is None:
            self.cloud = EC2(
                config.region,
                access_key_id=config.access_key_id,
                secret_access_key=config.secret_access_key,
            )

        self._enter(Stage.LOCATING_IMAGE)
        image_id = self.cloud.find_latest_image(config.image_search)

        self._enter(Stage.PROVISIONING_KEY)
        key_pair = self.cloud.provision_key(config.key_name, config.key_path)

        self._enter(Stage.LAUNCHING_INSTANCE)
        instance = self.cloud.launch(
            image_id,
            config.instance_type,
            key_name=key_pair.name,
            tag=config.tag,
        )

        self._enter(Stage.WAITING_HEALTHY)
        instance.wait_for_status_ok(
            config.wait_timeout, delay=config.wait_delay, cancel=self.cancel
        )

        self._enter(Stage.RESOLVING_ADDRESS)
        public_ip = instance.public_ip

        return ProvisionResult(
            image_id=image_id,
            instance_id=instance.id,
            public_ip=public_ip,
            key_path=key_pair.private_key_path,
            ssh_command=ssh_command(
                key_pair.private_key_path, config.username, public_ip
            ),
        )
