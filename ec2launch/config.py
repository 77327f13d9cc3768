"""Deal with configuration file."""
import logging
import os
from io import StringIO
from pathlib import Path
from typing import Any, MutableMapping, Optional, Union

import toml

from ec2launch.types import LaunchConfig

# Order matters here. Local should take precedence over global.
CONFIG_PATHS = [
    Path("~/.config/ec2launch.toml").expanduser(),
    Path("/etc/ec2launch.toml"),
]
CONFIG_SECTION = "ec2"

ConfigFile = Union[Path, StringIO]
log = logging.getLogger(__name__)


class Config(dict):
    """Override dict to allow raising a more meaningful KeyError."""

    def __getitem__(self, key):
        """Provide more meaningful KeyError on access."""
        try:
            return super().__getitem__(key)
        except KeyError:
            raise KeyError(
                "{} must be defined in ec2launch.toml to make this "
                "call".format(key)
            ) from None


def parse_config(
    config_file: Optional[ConfigFile] = None,
) -> MutableMapping[str, Any]:
    """Find the relevant TOML, load, and return it.

    A file named by the argument or by $EC2LAUNCH_CONFIG must exist. The
    default locations are optional: every setting has a default, so
    finding none of them yields an empty Config.
    """
    explicit_configs = []
    if config_file:
        explicit_configs.append(config_file)
    if os.environ.get("EC2LAUNCH_CONFIG"):
        explicit_configs.append(Path(os.environ["EC2LAUNCH_CONFIG"]))
    possible_configs = explicit_configs + list(CONFIG_PATHS)
    for path in possible_configs:
        try:
            config = toml.load(path, _dict=Config)
            log.debug("Loaded configuration from %s", path)
            return config
        except FileNotFoundError as e:
            if path in explicit_configs:
                raise ValueError(
                    "Configuration file {} not found".format(path)
                ) from e
            continue
        except toml.TomlDecodeError as e:
            raise ValueError(
                "Could not parse configuration file pointed to by "
                "{}".format(path)
            ) from e
        except OSError as e:
            raise ValueError(
                "Could not read configuration file {}: {}".format(path, e)
            ) from e
    log.debug("No configuration file found, using defaults")
    return Config()


def load_launch_config(
    config_file: Optional[ConfigFile] = None, **overrides
) -> LaunchConfig:
    """Build the LaunchConfig for a run.

    Values come from the [ec2] table of the configuration file. Keyword
    arguments that are not None take precedence over the file.

    Raises:
        ValueError: unknown setting or invalid value
    """
    section = parse_config(config_file).get(CONFIG_SECTION, {})
    values = dict(section)
    values.update({k: v for k, v in overrides.items() if v is not None})

    unknown = sorted(set(values) - set(LaunchConfig.field_names()))
    if unknown:
        raise ValueError(
            "Unknown setting(s) in [{}]: {}".format(
                CONFIG_SECTION, ", ".join(unknown)
            )
        )
    return LaunchConfig(**values)
