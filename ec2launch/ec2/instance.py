# This file is part of ec2launch. See LICENSE file for license information.
"""EC2 instance."""

import logging
import threading
import time
from typing import Optional

import botocore

from ec2launch.ec2.util import _cloud_error, _get_error_code
from ec2launch.errors import (
    AddressNotFoundError,
    LaunchTimeoutError,
    WaitCancelledError,
)

# Status checks of a freshly launched instance can lag behind
# run_instances, exactly like the instance_status_ok waiter tolerates.
_NOT_YET_VISIBLE = ("InvalidInstanceID.NotFound",)


class EC2Instance:
    """EC2 backed instance."""

    def __init__(self, client, instance_id: str, region: Optional[str] = None):
        """Set up instance.

        Args:
            client: boto3 client object
            instance_id: id of the launched instance
            region: region the instance lives in, used in messages
        """
        self._log = logging.getLogger(__name__)
        self._client = client
        self._id = instance_id
        self.region = region

    def __repr__(self):
        """Create string representation for class."""
        return "{}(client={}, instance_id={})".format(
            self.__class__.__name__, self._client, self._id
        )

    @property
    def id(self):
        """Return id of instance."""
        return self._id

    @property
    def public_ip(self) -> str:
        """Return the public IPv4 address of the instance.

        Raises:
            AddressNotFoundError: the instance is gone or has no public
                address
        """
        self._log.debug("looking up public IP of instance %s", self.id)
        try:
            response = self._client.describe_instances(InstanceIds=[self.id])
        except botocore.exceptions.ClientError as e:
            if _get_error_code(e) in _NOT_YET_VISIBLE:
                raise AddressNotFoundError(self.id) from e
            raise _cloud_error("describe instance " + self.id, e) from e

        reservations = response.get("Reservations") or []
        instances = reservations[0].get("Instances") if reservations else None
        if not instances:
            raise AddressNotFoundError(self.id, reason="instance not found")
        public_ip = instances[0].get("PublicIpAddress")
        if not public_ip:
            raise AddressNotFoundError(self.id, reason="no public IP assigned")
        return public_ip

    def status(self) -> Optional[str]:
        """Return the instance status check result.

        Returns:
            "ok", "impaired", "initializing", ... or None when EC2 does
            not report a status for the instance yet
        """
        try:
            response = self._client.describe_instance_status(
                InstanceIds=[self.id]
            )
        except botocore.exceptions.ClientError as e:
            if _get_error_code(e) in _NOT_YET_VISIBLE:
                return None
            raise _cloud_error("describe status of " + self.id, e) from e

        for status in response.get("InstanceStatuses", []):
            if status.get("InstanceId") == self.id:
                return status.get("InstanceStatus", {}).get("Status")
        return None

    def wait_for_status_ok(
        self,
        timeout: float,
        delay: float = 15,
        cancel: Optional[threading.Event] = None,
    ):
        """Block until EC2 reports the instance status checks as ok.

        Args:
            timeout: maximum number of seconds to wait
            delay: seconds between two status polls
            cancel: event that aborts the wait once set

        Raises:
            LaunchTimeoutError: the status did not become ok within timeout
            WaitCancelledError: cancel was set before the status became ok
        """
        cancel = cancel or threading.Event()
        deadline = time.monotonic() + timeout
        self._log.info("waiting for instance %s to pass status checks", self.id)
        while True:
            if cancel.is_set():
                raise WaitCancelledError(
                    "Wait for instance {} was cancelled".format(self.id)
                )
            status = self.status()
            if status == "ok":
                self._log.info("instance %s status is ok", self.id)
                return
            self._log.debug("instance %s status: %s", self.id, status)

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise LaunchTimeoutError(
                    "Instance {} in region {} did not pass status checks "
                    "after {} seconds".format(self.id, self.region, timeout)
                )
            cancel.wait(min(delay, remaining))

    def delete(self, wait=True):
        """Terminate the instance.

        Args:
            wait: wait for the instance to be terminated
        """
        self._log.debug("deleting instance %s", self.id)
        self._client.terminate_instances(InstanceIds=[self.id])
        if wait:
            waiter = self._client.get_waiter("instance_terminated")
            waiter.wait(InstanceIds=[self.id])
