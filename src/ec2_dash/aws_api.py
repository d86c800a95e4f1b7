from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError, NoRegionError, ProfileNotFound

from .models import InstanceRecord

logger = logging.getLogger(__name__)


class Ec2DashError(Exception):
    pass


class ConfigError(Ec2DashError):
    pass


class ProviderError(Ec2DashError):
    pass


class Ec2InventoryClient:
    def __init__(self, session: boto3.Session, ec2: Any) -> None:
        self._session = session
        self._ec2 = ec2

    @classmethod
    def from_profile(cls, profile: str | None = None) -> Ec2InventoryClient:
        try:
            session = boto3.Session(profile_name=profile or None)
            ec2 = session.client("ec2")
            credentials = session.get_credentials()
        except ProfileNotFound as error:
            raise ConfigError(f"AWS profile not found: {profile}") from error
        except NoRegionError as error:
            raise ConfigError(
                "No AWS region configured; set one in the profile or AWS_DEFAULT_REGION"
            ) from error
        except BotoCoreError as error:
            raise ConfigError(f"Unable to load AWS configuration: {error}") from error

        if credentials is None:
            raise ConfigError(f"Unable to locate AWS credentials for profile {session.profile_name}")
        return cls(session, ec2)

    @property
    def profile(self) -> str:
        return self._session.profile_name

    @property
    def region(self) -> str | None:
        return self._session.region_name

    def list_instances(self) -> list[InstanceRecord]:
        logger.debug("describe_instances profile=%s region=%s", self.profile, self.region)
        try:
            response = self._ec2.describe_instances()
        except (BotoCoreError, ClientError) as error:
            logger.warning("describe_instances failed: %s", error)
            raise ProviderError(str(error)) from error

        return [
            self._to_record(instance)
            for reservation in response.get("Reservations", [])
            for instance in reservation.get("Instances", [])
        ]

    def start_instance(self, instance_id: str) -> None:
        logger.debug("start_instances %s", instance_id)
        try:
            self._ec2.start_instances(InstanceIds=[instance_id])
        except (BotoCoreError, ClientError) as error:
            logger.warning("start_instances %s failed: %s", instance_id, error)
            raise ProviderError(str(error)) from error

    def stop_instance(self, instance_id: str) -> None:
        logger.debug("stop_instances %s", instance_id)
        try:
            self._ec2.stop_instances(InstanceIds=[instance_id])
        except (BotoCoreError, ClientError) as error:
            logger.warning("stop_instances %s failed: %s", instance_id, error)
            raise ProviderError(str(error)) from error

    @staticmethod
    def _to_record(instance: dict[str, Any]) -> InstanceRecord:
        return InstanceRecord(
            instance_id=instance["InstanceId"],
            name=_tag_value(instance.get("Tags", []), "Name"),
            platform=instance.get("Platform") or "None",
            public_ip=instance.get("PublicIpAddress") or "",
            private_ip=_first_private_ip(instance.get("NetworkInterfaces", [])),
            security_group_ids=tuple(group["GroupId"] for group in instance.get("SecurityGroups", [])),
            state=instance.get("State", {}).get("Name", ""),
        )


def _tag_value(tags: Iterable[dict[str, str]], key: str) -> str:
    for tag in tags:
        if tag.get("Key") == key:
            return tag.get("Value", "")
    return ""


def _first_private_ip(interfaces: list[dict[str, Any]]) -> str:
    if not interfaces:
        return ""
    return interfaces[0].get("PrivateIpAddress") or ""
