# This file is part of ec2launch. See LICENSE file for license information.
"""Base Key Class."""

import logging
import os
from typing import Optional

from ec2launch.errors import KeyFileError
from ec2launch.util import rmfile

PRIVATE_KEY_MODE = 0o400

log = logging.getLogger(__name__)


class KeyPair:
    """Key Class."""

    def __init__(
        self,
        name: str,
        private_key_path: str,
        fingerprint: Optional[str] = None,
    ):
        """Initialize key class for a key pair created on the cloud.

        Args:
            name: Name the key pair is referenced by in the cloud
            private_key_path: Path the private key was written to
            fingerprint: Fingerprint reported by the cloud
        """
        self.name = name
        self.private_key_path = private_key_path
        self.fingerprint = fingerprint

    def __str__(self):
        """Create string representation of class."""
        return "KeyPair({}, name={}, fingerprint={})".format(
            self.private_key_path, self.name, self.fingerprint
        )


def write_private_key(path: str, material: str):
    """Write private key material readable by the owner only.

    A key file left over from an earlier run is removed first: it is
    read-only, so it cannot be opened for writing.

    Args:
        path: destination of the key file
        material: PEM encoded private key

    Raises:
        KeyFileError: the file could not be written
    """
    try:
        rmfile(path)
    except OSError as e:
        raise KeyFileError(
            "Could not remove existing key file {}: {}".format(path, e)
        ) from e

    try:
        fd = os.open(
            path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, PRIVATE_KEY_MODE
        )
    except OSError as e:
        raise KeyFileError(
            "Could not write private key to {}: {}".format(path, e)
        ) from e

    try:
        try:
            stream = os.fdopen(fd, "w", encoding="utf-8")
        except Exception:
            os.close(fd)
            raise
        with stream:
            stream.write(material)
        # umask may have cleared the owner read bit
        os.chmod(path, PRIVATE_KEY_MODE)
    except OSError as e:
        # never leave a truncated key behind
        rmfile(path)
        raise KeyFileError(
            "Could not write private key to {}: {}".format(path, e)
        ) from e
    log.debug("wrote private key to %s", path)
