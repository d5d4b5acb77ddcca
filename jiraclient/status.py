"""Workflow statuses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from jiraclient.client import Client
from jiraclient.statuscategory import StatusCategory


@dataclass
class Status:
    """A status of a Jira issue, such as "Open" or "Closed"."""

    self_url: str = ""
    description: str = ""
    icon_url: str = ""
    name: str = ""
    id: str = ""
    status_category: StatusCategory = field(default_factory=StatusCategory)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Status:
        return cls(
            self_url=data.get("self", ""),
            description=data.get("description", ""),
            icon_url=data.get("iconUrl", ""),
            name=data.get("name", ""),
            id=data.get("id", ""),
            status_category=StatusCategory.from_dict(data.get("statusCategory") or {}),
        )


class StatusService:
    """Reads the statuses used by workflows."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def get_all_statuses(self) -> list[Status]:
        """Return all statuses associated with workflows."""
        response = self.client.do(self.client.new_request("GET", "rest/api/2/status"))
        return [Status.from_dict(item) for item in response.json() or []]