# This file is part of ec2launch. See LICENSE file for license information.
"""Pick the newest launchable image out of a describe_images response."""

import datetime
import logging
from typing import Dict, Iterable, List, NamedTuple

from ec2launch.errors import CloudError, ImageNotFoundError

log = logging.getLogger(__name__)


class ImageCandidate(NamedTuple):
    """An image that may be launched, with its creation time."""

    image_id: str
    creation_date: datetime.datetime


def parse_creation_date(value: str) -> datetime.datetime:
    """Parse the RFC 3339 CreationDate EC2 reports for an image.

    EC2 uses the form 2020-01-01T10:00:00.000Z. Values without an
    offset are taken to be UTC so candidates always compare.
    """
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    parsed = datetime.datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed


def launchable_candidates(images: Iterable[Dict]) -> List[ImageCandidate]:
    """Convert raw images, dropping those tied to marketplace products.

    Images with product codes cannot be launched without a marketplace
    subscription.

    Raises:
        CloudError: an image carries an unparsable CreationDate
    """
    candidates = []
    for image in images:
        image_id = image["ImageId"]
        if image.get("ProductCodes"):
            log.debug("Skipping image with product codes: %s", image_id)
            continue
        try:
            creation_date = parse_creation_date(image["CreationDate"])
        except (KeyError, TypeError, ValueError) as e:
            raise CloudError(
                "Image {} has an invalid CreationDate: {!r}".format(
                    image_id, image.get("CreationDate")
                )
            ) from e
        candidates.append(ImageCandidate(image_id, creation_date))
    return candidates


def newest_image_id(images: Iterable[Dict], search: str) -> str:
    """Return the id of the most recently created launchable image.

    Ties keep the order EC2 returned the images in.

    Args:
        images: the "Images" list of a describe_images response
        search: the name pattern used, for the error message

    Raises:
        ImageNotFoundError: no launchable image is left after filtering
    """
    candidates = sorted(
        launchable_candidates(images),
        key=lambda c: c.creation_date,
        reverse=True,
    )
    if not candidates:
        raise ImageNotFoundError(resource_name=search)
    return candidates[0].image_id
