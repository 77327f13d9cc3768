# This file is part of ec2launch. See LICENSE file for license information.
"""Module containing ec2launch errors.

Every stage of a provisioning run raises one of these. The command line
entry point is the only place that turns them into an exit code.
"""

import enum
from typing import List, Optional


class Ec2launchException(Exception):
    """Root ec2launch exception.

    This exception is not meant to be raised by ec2launch. The intention
    is that every custom ec2launch exception will inherit from this one,
    allowing client code to catch any exception by catching this one.
    """


class CloudSetupError(Ec2launchException):
    """Raised if credentials or region for the EC2 client are missing."""


class CloudError(Ec2launchException):
    """Represents errors coming from the AWS SDK."""


class ResourceType(enum.Enum):
    """Represent types of resources."""

    IMAGE = enum.auto()
    INSTANCE = enum.auto()
    ADDRESS = enum.auto()

    def __str__(self) -> str:  # noqa: D105
        if self == self.INSTANCE:
            return "instance"
        if self == self.IMAGE:
            return "image"
        if self == self.ADDRESS:
            return "public address"
        raise NotImplementedError


class ResourceNotFoundError(Ec2launchException):
    """Raised when a resource is not found.

    Examples:
    ---------
    >>> e = ResourceNotFoundError(ResourceType.IMAGE, "ami-123")
    >>> e.resource_id
    'ami-123'
    >>> raise e  # doctest: +ELLIPSIS
    Traceback (most recent call last):
        ...
    ec2launch.errors.ResourceNotFoundError: \
Could not locate the resource type `image`: id=ami-123
    """

    def __init__(
        self,
        resource_type: ResourceType,
        resource_id: Optional[str] = None,
        resource_name: Optional[str] = None,
        **kwargs,
    ):
        """Init method.

        :param resource_type: Instance of `ResourceType`
        :param resource_id: Resource's id
        :param resource_name: Resource's name
        """
        super().__init__()
        self.resource_type = resource_type
        self.resource_id = resource_id
        self.resource_name = resource_name
        self._extra_info = kwargs

    def __str__(self) -> str:  # noqa: D105
        resource_info = self.__render_resource()
        msg = f"Could not locate the resource type `{self.resource_type}`"
        if resource_info:
            msg += f": {resource_info}"
        return msg

    def __render_resource(self) -> str:
        parts = []
        if self.resource_id:
            parts.append(f"id={self.resource_id}")
        if self.resource_name:
            parts.append(f"name={self.resource_name}")
        parts.extend(f"{key}={value}" for key, value in self._extra_info.items())
        return ", ".join(parts)


class ImageNotFoundError(ResourceNotFoundError):
    """Specialized `ResourceNotFoundError` for images."""

    def __init__(self, *args, **kwargs):  # noqa: D107
        super().__init__(ResourceType.IMAGE, *args, **kwargs)


class InstanceNotFoundError(ResourceNotFoundError):
    """Specialized `ResourceNotFoundError` for instances."""

    def __init__(self, *args, **kwargs):  # noqa: D107
        super().__init__(ResourceType.INSTANCE, *args, **kwargs)


class AddressNotFoundError(ResourceNotFoundError):
    """Raised when an instance has no public address to connect to."""

    def __init__(self, *args, **kwargs):  # noqa: D107
        super().__init__(ResourceType.ADDRESS, *args, **kwargs)


class KeyFileError(Ec2launchException):
    """Raised when the private key cannot be written to disk."""


class LaunchTimeoutError(Ec2launchException):
    """Raised when an instance does not become healthy in time."""


class WaitCancelledError(Ec2launchException):
    """Raised when a wait is aborted through its cancel event."""


class StageError(Ec2launchException):
    """Wrap an error with the provisioning stage it happened in."""

    def __init__(self, stage, cause: Exception):
        """Init method.

        :param stage: the `ec2launch.provision.Stage` that failed
        :param cause: the underlying exception
        """
        super().__init__()
        self.stage = stage
        self.cause = cause

    def __str__(self) -> str:  # noqa: D105
        detail = " ".join(str(self.cause).split()) or type(self.cause).__name__
        return f"{self.stage.description} failed: {detail}"


class CleanupError(Ec2launchException):
    """Represents a list of exceptions that happen on resource cleanup.

    Don't be too eager to handle this one. If it gets caught and silently
    handled, you're likely to be leaking resources without realizing it.
    """

    def __init__(self, exceptions: List[Exception]):
        """Init method.

        :param exceptions: the exceptions collected during cleanup
        """
        super().__init__(exceptions)
        self.exceptions = exceptions
