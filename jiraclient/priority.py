"""Issue priorities."""

from __future__ import annotations

from dataclasses import dataclass

from jiraclient.client import Client, _get_list, _json_field


@dataclass
class Priority:
    """A priority of a Jira issue, such as "Normal" or "Urgent"."""

    self_url: str = _json_field("self")
    icon_url: str = _json_field("iconUrl")
    name: str = ""
    id: str = ""
    status_color: str = _json_field("statusColor")
    description: str = ""


class PriorityService:
    """Reads the priorities of a Jira instance."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def get_list(self) -> list[Priority]:
        """Return all priorities."""
        return _get_list(self.client, "rest/api/2/priority", Priority)