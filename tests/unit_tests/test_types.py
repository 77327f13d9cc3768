"""Test the types.py module."""

import pytest

from ec2launch.types import LaunchConfig


class TestLaunchConfig:
    """Tests covering LaunchConfig."""

    def test_defaults(self):
        config = LaunchConfig()
        assert "us-east-1" == config.region
        assert (
            "ubuntu/images/hvm-ssd/ubuntu-xenial-16.04-amd64*"
            == config.image_search
        )
        assert "aws-sdk-gov2-key" == config.key_name
        assert "t2.medium" == config.instance_type
        assert "ubuntu" == config.username
        assert config.cleanup_on_failure is False

    @pytest.mark.parametrize(
        "key_dir,expected",
        [
            (".", "test-key.pem"),
            ("keys", "keys/test-key.pem"),
            ("/tmp/keys/", "/tmp/keys/test-key.pem"),
        ],
    )
    def test_key_path(self, key_dir, expected):
        config = LaunchConfig(key_name="test-key", key_dir=key_dir)
        assert expected == config.key_path

    @pytest.mark.parametrize(
        "kwargs",
        [
            pytest.param({"region": ""}, id="empty-region"),
            pytest.param({"key_name": "  "}, id="blank-key-name"),
            pytest.param({"key_name": "a/b"}, id="key-name-with-separator"),
            pytest.param({"instance_type": None}, id="no-instance-type"),
            pytest.param({"wait_timeout": 0}, id="zero-timeout"),
            pytest.param({"wait_timeout": "10"}, id="string-timeout"),
            pytest.param({"wait_delay": -1}, id="negative-delay"),
            pytest.param({"wait_delay": True}, id="bool-delay"),
            pytest.param({"cleanup_on_failure": "yes"}, id="string-cleanup"),
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            LaunchConfig(**kwargs)

    @pytest.mark.parametrize(
        "kwargs,expected_delay",
        [
            ({"wait_timeout": 10}, 10),
            ({"wait_timeout": 5, "wait_delay": 10}, 5),
            ({"wait_timeout": 60, "wait_delay": 10}, 10),
        ],
    )
    def test_delay_capped_at_timeout(self, kwargs, expected_delay):
        config = LaunchConfig(**kwargs)
        assert kwargs["wait_timeout"] == config.wait_timeout
        assert expected_delay == config.wait_delay
