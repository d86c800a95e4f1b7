"""Pytest configuration and fixtures for ec2-dash tests."""

from collections.abc import Generator

import pytest

from ec2_dash.aws_api import ProviderError
from ec2_dash.models import InstanceRecord


@pytest.fixture
def aws_credentials(monkeypatch, tmp_path) -> Generator[None, None, None]:
    """Point boto3 at fake credentials and empty config files.

    Yields
    ------
    None
        Control back to the test with a deterministic AWS environment
    """
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "credentials"))
    monkeypatch.setenv("AWS_EC2_METADATA_DISABLED", "true")
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv("AWS_REGION", raising=False)
    yield


class FakeInventory:
    """In-memory stand-in for Ec2InventoryClient that records every call."""

    def __init__(self, instances: list[InstanceRecord] | None = None) -> None:
        self.instances = list(instances or [])
        self.calls: list[tuple[str, ...]] = []
        self.list_error: ProviderError | None = None
        self.start_error: ProviderError | None = None
        self.stop_error: ProviderError | None = None
        self.profile = "test"

    def list_instances(self) -> list[InstanceRecord]:
        self.calls.append(("list",))
        if self.list_error is not None:
            raise self.list_error
        return list(self.instances)

    def start_instance(self, instance_id: str) -> None:
        self.calls.append(("start", instance_id))
        if self.start_error is not None:
            raise self.start_error

    def stop_instance(self, instance_id: str) -> None:
        self.calls.append(("stop", instance_id))
        if self.stop_error is not None:
            raise self.stop_error


@pytest.fixture
def sample_instances() -> list[InstanceRecord]:
    return [
        InstanceRecord(
            instance_id="i-0aaa1111bbbb2222c",
            name="web-1",
            platform="None",
            public_ip="54.10.10.21",
            private_ip="10.0.1.21",
            security_group_ids=("sg-1", "sg-2"),
            state="running",
        ),
        InstanceRecord(
            instance_id="i-0ddd3333eeee4444f",
            name="db-1",
            platform="windows",
            private_ip="10.0.2.34",
            security_group_ids=("sg-3",),
            state="stopped",
        ),
        InstanceRecord(instance_id="i-0fff5555aaaa6666b", state="pending"),
    ]


@pytest.fixture
def fake_inventory(sample_instances) -> FakeInventory:
    return FakeInventory(sample_instances)
