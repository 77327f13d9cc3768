# This file is part of ec2launch. See LICENSE file for license information.
"""EC2 Util Functions."""

import boto3
import botocore

from ec2launch.errors import CloudError


def _get_session(access_key_id, secret_access_key, region):
    """Get EC2 session.

    Any argument left as None is resolved by boto3 from the environment,
    ~/.aws/credentials, ~/.aws/config or the instance role.

    Args:
        access_key_id: user's access key ID
        secret_access_key: user's secret access key
        region: region to login to

    Returns:
        boto3 session object

    """
    return boto3.Session(
        aws_access_key_id=access_key_id,
        aws_secret_access_key=secret_access_key,
        region_name=region,
    )


def _get_error_code(error: botocore.exceptions.ClientError) -> str:
    """Return the AWS error code carried by a ClientError."""
    return error.response.get("Error", {}).get("Code", "")


def _cloud_error(action: str, error: Exception) -> CloudError:
    """Build a CloudError describing a failed EC2 call.

    Args:
        action: what was being attempted, e.g. "describe images"
        error: exception raised by botocore
    """
    return CloudError("Unable to {}: {}".format(action, error))


def _name_tag_specification(resource_type: str, tag_value: str):
    """Return TagSpecifications naming a resource on creation.

    This makes finding resources created by a run much easier.

    Args:
        resource_type: EC2 resource type, e.g. "instance"
        tag_value: string, what to tag the item with
    """
    return [
        {
            "ResourceType": resource_type,
            "Tags": [{"Key": "Name", "Value": tag_value}],
        }
    ]
