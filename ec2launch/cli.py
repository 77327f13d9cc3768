# This file is part of ec2launch. See LICENSE file for license information.
"""Command line entry point of ec2launch."""

import argparse
import logging
import signal
import sys
import threading
from pathlib import Path

from ec2launch.config import load_launch_config
from ec2launch.errors import StageError
from ec2launch.provision import Provisioner

log = logging.getLogger(__name__)


def get_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Flags left unset fall back to the configuration file, then to the
    built-in defaults.
    """
    parser = argparse.ArgumentParser(
        prog="ec2launch",
        description=(
            "Launch an EC2 instance from the newest matching image and "
            "print the SSH command to reach it."
        ),
    )
    parser.add_argument(
        "-c", "--config", type=Path, help="path to an ec2launch.toml file"
    )
    parser.add_argument("--region", help="AWS region to launch in")
    parser.add_argument(
        "--image-search",
        dest="image_search",
        help="glob matched against image names",
    )
    parser.add_argument(
        "--key-name", dest="key_name", help="name of the EC2 key pair"
    )
    parser.add_argument(
        "--key-dir",
        dest="key_dir",
        help="directory the private key file is written to",
    )
    parser.add_argument(
        "--instance-type", dest="instance_type", help="EC2 instance type"
    )
    parser.add_argument(
        "--username", help="login user printed in the SSH command"
    )
    parser.add_argument(
        "--timeout",
        dest="wait_timeout",
        type=float,
        help="seconds to wait for the instance status checks",
    )
    parser.add_argument("--tag", help="Name tag put on the instance")
    parser.add_argument(
        "--cleanup-on-failure",
        dest="cleanup_on_failure",
        action="store_const",
        const=True,
        help="terminate the instance and delete the key pair on failure",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log debug messages"
    )
    return parser


def _install_cancel_handler(cancel: threading.Event):
    """Set cancel on SIGTERM so a pending wait stops."""

    def handler(signum, _frame):
        log.warning("Received signal %s, cancelling", signum)
        # Event.set takes a non-reentrant lock the interrupted code may hold
        threading.Thread(target=cancel.set, daemon=True).start()

    signal.signal(signal.SIGTERM, handler)


def main(argv=None) -> int:
    """Run ec2launch and return the process exit code."""
    args = get_parser().parse_args(argv)
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides = {
        name: getattr(args, name)
        for name in (
            "region",
            "image_search",
            "key_name",
            "key_dir",
            "instance_type",
            "username",
            "wait_timeout",
            "tag",
            "cleanup_on_failure",
        )
    }
    try:
        config = load_launch_config(args.config, **overrides)
    except ValueError as e:
        print("Invalid configuration: {}".format(e), file=sys.stderr)
        return 1

    cancel = threading.Event()
    _install_cancel_handler(cancel)
    provisioner = Provisioner(config, cancel=cancel)
    try:
        result = provisioner.run()
    except StageError as e:
        print(str(e), file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        stage = provisioner.failed_stage or provisioner.stage
        print("Interrupted while {}".format(stage), file=sys.stderr)
        return 1

    print(result.ssh_command)
    return 0


if __name__ == "__main__":
    sys.exit(main())
