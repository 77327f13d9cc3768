# This file is part of ec2launch. See LICENSE file for license information.
"""Helpers shared by the ec2launch modules."""

import logging
import os
import traceback
from errno import ENOENT
from typing import List

log = logging.getLogger(__name__)


def rmfile(path):
    """Delete a file.

    Args:
        path: run unlink on specific path
    """
    try:
        os.unlink(path)
    except OSError as error:
        if error.errno != ENOENT:
            raise error


def log_exception_list(exceptions: List[Exception]):
    """Log a list of exceptions (including traceback)."""
    if exceptions:
        log.error("Encountered exception(s) during cleanup!")
        for i, e in enumerate(exceptions, start=1):
            tb = traceback.format_exception(type(e), e, e.__traceback__)
            log.error("===== EXCEPTION %s =====\n%s", i, "".join(tb))


def ssh_command(key_path: str, username: str, ip: str) -> str:
    """Return the command line connecting to an instance over SSH."""
    return "ssh -i {} {}@{}".format(key_path, username, ip)
