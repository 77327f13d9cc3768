import logging

import botocore.exceptions
import pytest

logging.basicConfig(level=logging.NOTSET)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep configuration files of the machine running the tests out."""
    monkeypatch.delenv("EC2LAUNCH_CONFIG", raising=False)
    monkeypatch.setattr(
        "ec2launch.config.CONFIG_PATHS",
        [tmp_path / "home.toml", tmp_path / "etc.toml"],
    )


@pytest.fixture(name="client_error")
def client_error_fixture():
    """Return a factory of the ClientError botocore raises for an AWS code."""

    def _client_error(code, operation="Operation"):
        return botocore.exceptions.ClientError(
            {"Error": {"Code": code, "Message": code + " happened"}},
            operation,
        )

    return _client_error
