"""Issue resolutions."""

from __future__ import annotations

from dataclasses import dataclass

from jiraclient.client import Client, _get_list, _json_field


@dataclass
class Resolution:
    """A resolution of a Jira issue, such as "Fixed" or "Won't Fix"."""

    self_url: str = _json_field("self")
    id: str = ""
    description: str = ""
    name: str = ""


class ResolutionService:
    """Reads the resolutions of a Jira instance."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def get_list(self) -> list[Resolution]:
        """Return all resolutions."""
        return _get_list(self.client, "rest/api/2/resolution", Resolution)