"""Status categories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from jiraclient.client import Client

STATUS_CATEGORY_COMPLETE = "done"
STATUS_CATEGORY_IN_PROGRESS = "indeterminate"
STATUS_CATEGORY_TO_DO = "new"
STATUS_CATEGORY_UNDEFINED = "undefined"


@dataclass
class StatusCategory:
    """The category a status belongs to."""

    self_url: str = ""
    id: int = 0
    name: str = ""
    key: str = ""
    color_name: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StatusCategory:
        return cls(
            self_url=data.get("self", ""),
            id=data.get("id", 0),
            name=data.get("name", ""),
            key=data.get("key", ""),
            color_name=data.get("colorName", ""),
        )


class StatusCategoryService:
    """Reads the status categories of a Jira instance."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def get_list(self) -> list[StatusCategory]:
        """Return all status categories."""
        response = self.client.do(self.client.new_request("GET", "rest/api/2/statuscategory"))
        return [StatusCategory.from_dict(item) for item in response.json() or []]