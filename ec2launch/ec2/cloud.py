# This file is part of ec2launch. See LICENSE file for license information.
"""AWS EC2 Cloud type."""

import logging
from typing import List, Optional

import botocore

from ec2launch.ec2.images import newest_image_id
from ec2launch.ec2.instance import EC2Instance
from ec2launch.ec2.util import (
    _cloud_error,
    _get_session,
    _name_tag_specification,
)
from ec2launch.errors import (
    CleanupError,
    CloudSetupError,
    InstanceNotFoundError,
)
from ec2launch.key import KeyPair, write_private_key
from ec2launch.types import DEFAULT_INSTANCE_TYPE
from ec2launch.util import log_exception_list, rmfile


class EC2:
    """EC2 Cloud Class."""

    _type = "ec2"

    def __init__(
        self,
        region: Optional[str] = None,
        *,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
    ):
        """Initialize the connection to EC2.

        boto3 will read a users /home/$USER/.aws/* files if no
        arguments are provided here to find values.

        Args:
            region: region to login to
            access_key_id: user's access key ID
            secret_access_key: user's secret access key
        """
        self._log = logging.getLogger(__name__)
        self._log.debug("logging into EC2")

        try:
            session = _get_session(access_key_id, secret_access_key, region)
            self.client = session.client("ec2")
            self.region = session.region_name
        except botocore.exceptions.NoRegionError as e:
            raise CloudSetupError(
                "Please configure default region in $HOME/.aws/config"
            ) from e
        except botocore.exceptions.NoCredentialsError as e:
            raise CloudSetupError(
                "Please configure ec2 credentials in $HOME/.aws/credentials"
            ) from e
        except botocore.exceptions.ProfileNotFound as e:
            raise CloudSetupError(str(e)) from e

        self.key_pair: Optional[KeyPair] = None
        self.created_instances: List[EC2Instance] = []
        self.created_keys: List[str] = []
        self.created_key_files: List[str] = []

    def find_latest_image(self, search: str) -> str:
        """Find the id of the newest image whose name matches a pattern.

        Images carrying marketplace product codes are never returned.

        Args:
            search: glob matched against image names

        Returns:
            string, id of latest image

        Raises:
            ImageNotFoundError: nothing launchable matches the pattern
        """
        self._log.debug("finding latest image matching %s", search)
        try:
            response = self.client.describe_images(
                Filters=[{"Name": "name", "Values": [search]}]
            )
        except (
            botocore.exceptions.ClientError,
            botocore.exceptions.BotoCoreError,
        ) as e:
            raise _cloud_error("describe images", e) from e

        image_id = newest_image_id(response.get("Images", []), search)
        self._log.info("latest image matching %s is %s", search, image_id)
        return image_id

    def delete_key(self, name):
        """Delete an uploaded key.

        Args:
            name: The key name to delete.
        """
        self._log.debug("deleting SSH key %s", name)
        self.client.delete_key_pair(KeyName=name)

    def provision_key(self, name: str, private_key_path: str) -> KeyPair:
        """Replace the key pair called name and save its private key.

        Deleting the previous key pair is best effort: a missing key pair,
        or any other failure to delete it, is logged and otherwise
        ignored. Creation then fails on its own if the name is still
        taken.

        Args:
            name: name of the key pair in EC2
            private_key_path: where to write the private key

        Returns:
            KeyPair object of the new key

        Raises:
            CloudError: the key pair could not be created
            KeyFileError: the private key could not be written
        """
        try:
            self.delete_key(name)
        except (
            botocore.exceptions.ClientError,
            botocore.exceptions.BotoCoreError,
        ) as e:
            self._log.warning(
                "Ignoring failure to delete key pair %s: %s", name, e
            )

        self._log.debug("creating SSH key %s", name)
        try:
            response = self.client.create_key_pair(KeyName=name)
        except (
            botocore.exceptions.ClientError,
            botocore.exceptions.BotoCoreError,
        ) as e:
            raise _cloud_error("create key pair " + name, e) from e
        self.created_keys.append(name)

        write_private_key(private_key_path, response["KeyMaterial"])
        self.created_key_files.append(private_key_path)
        self.key_pair = KeyPair(
            name, private_key_path, response.get("KeyFingerprint")
        )
        self._log.info("using %s", self.key_pair)
        return self.key_pair

    def get_instance(self, instance_id) -> EC2Instance:
        """Get an instance by id.

        Args:
            instance_id: ID used to identify the instance

        Returns:
            An instance object to use to manipulate the instance further.

        """
        return EC2Instance(self.client, instance_id, region=self.region)

    def launch(
        self,
        image_id: str,
        instance_type: str = DEFAULT_INSTANCE_TYPE,
        *,
        key_name: Optional[str] = None,
        tag: Optional[str] = None,
        **kwargs,
    ) -> EC2Instance:
        """Launch a single instance on EC2.

        Args:
            image_id: string, AMI ID to use
            instance_type: string, instance type to launch
            key_name: key pair to install, defaults to the provisioned one
            tag: value of the Name tag of the instance
            kwargs: other named arguments to add to instance JSON

        Returns:
            EC2 Instance object
        Raises: ValueError on invalid image_id
        """
        if not image_id:
            raise ValueError(
                f"{self._type} launch requires image_id param."
                f" Found: {image_id}"
            )
        if key_name is None and self.key_pair:
            key_name = self.key_pair.name

        args = {
            "ImageId": image_id,
            "InstanceType": instance_type,
            "MaxCount": 1,
            "MinCount": 1,
        }
        if key_name:
            args["KeyName"] = key_name
        if tag:
            args["TagSpecifications"] = _name_tag_specification(
                "instance", tag
            )
        for key, value in kwargs.items():
            args[key] = value

        self._log.debug("launching %s instance from %s", instance_type, image_id)
        try:
            reservation = self.client.run_instances(**args)
        except (
            botocore.exceptions.ClientError,
            botocore.exceptions.BotoCoreError,
        ) as e:
            raise _cloud_error("run instance", e) from e

        instances = reservation.get("Instances") or []
        if not instances:
            raise InstanceNotFoundError(
                reason="run_instances returned no instance"
            )
        instance = self.get_instance(instances[0]["InstanceId"])
        self.created_instances.append(instance)
        self._log.info("launched instance %s", instance.id)
        return instance

    # pylint: disable=broad-except
    def clean(self) -> List[Exception]:
        """Cleanup ALL artifacts associated with this Cloud instance.

        Terminates every instance launched and deletes every key pair
        created through this object, and removes the private key files
        written for them. To ensure cleanup isn't interrupted,
        any exceptions raised during cleanup operations will be collected
        and returned.
        """
        exceptions: List[Exception] = []
        for instance in self.created_instances:
            try:
                instance.delete()
            except Exception as e:
                exceptions.append(e)
        self.created_instances = []

        for key in self.created_keys:
            try:
                self.delete_key(key)
            except Exception as e:
                exceptions.append(e)
        self.created_keys = []

        for path in self.created_key_files:
            try:
                rmfile(path)
            except Exception as e:
                exceptions.append(e)
        self.created_key_files = []

        log_exception_list(exceptions)
        return exceptions

    def __enter__(self):
        """Enter context manager for this class."""
        return self

    def __exit__(self, _type, _value, _traceback):
        """Cleanup context manager for this class."""
        exceptions = self.clean()
        if exceptions:
            raise CleanupError(exceptions)
