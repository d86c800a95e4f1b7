from __future__ import annotations

from dataclasses import dataclass

COLUMNS = ("GlobalIP", "InstanceId", "Name", "Platform", "PrivateIp", "SecurityGroupId", "State")

STATE_COLORS = {
    "running": "green",
    "stopped": "red",
    "pending": "yellow",
    "stopping": "yellow",
}


@dataclass(slots=True, frozen=True)
class InstanceRecord:
    instance_id: str
    name: str = ""
    platform: str = "None"
    public_ip: str = ""
    private_ip: str = ""
    security_group_ids: tuple[str, ...] = ()
    state: str = ""

    @property
    def security_groups(self) -> str:
        return ", ".join(self.security_group_ids)

    def display_cells(self) -> tuple[str, ...]:
        return (
            self.public_ip,
            self.instance_id,
            self.name,
            self.platform,
            self.private_ip,
            self.security_groups,
            self.state,
        )


def state_color(state: str) -> str | None:
    return STATE_COLORS.get(state)
