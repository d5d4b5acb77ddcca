"""Project release versions."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Mapping

from jiraclient.client import Client, JiraError

VERSION_ENDPOINT = "/rest/api/2/version"


@dataclass
class Version:
    """A single release version of a project."""

    self_url: str = ""
    id: str = ""
    name: str = ""
    description: str = ""
    archived: bool | None = None
    released: bool | None = None
    release_date: str = ""
    user_release_date: str = ""
    project_id: int = 0
    start_date: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Version:
        return cls(
            self_url=data.get("self", ""),
            id=data.get("id", ""),
            name=data.get("name", ""),
            description=data.get("description", ""),
            archived=data.get("archived"),
            released=data.get("released"),
            release_date=data.get("releaseDate", ""),
            user_release_date=data.get("userReleaseDate", ""),
            project_id=data.get("projectId", 0),
            start_date=data.get("startDate", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, leaving out empty fields and unset flags."""
        result: dict[str, Any] = {}
        for name, value in (
            ("self", self.self_url),
            ("id", self.id),
            ("name", self.name),
            ("description", self.description),
        ):
            if value:
                result[name] = value
        if self.archived is not None:
            result["archived"] = self.archived
        if self.released is not None:
            result["released"] = self.released
        for name, value in (
            ("releaseDate", self.release_date),
            ("userReleaseDate", self.user_release_date),
            ("projectId", self.project_id),
            ("startDate", self.start_date),
        ):
            if value:
                result[name] = value
        return result


class VersionService:
    """Reads, creates and updates project versions."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def get(self, version_id: int) -> Version:
        """Return the version with the given id."""
        response = self.client.do(self.client.new_request("GET", f"{VERSION_ENDPOINT}/{version_id}"))
        return Version.from_dict(response.json() or {})

    def create(self, version: Version) -> Version:
        """Create a version and return the version the server reports back."""
        response = self.client.do(
            self.client.new_request("POST", VERSION_ENDPOINT, version.to_dict())
        )
        try:
            data = response.json()
        except ValueError as exc:
            raise JiraError("could not unmarshall the data into struct", response) from exc
        if not isinstance(data, Mapping):
            raise JiraError("could not unmarshall the data into struct", response)
        return Version.from_dict(data)

    def update(self, version: Version) -> Version:
        """Update a version and return a copy of the version that was sent."""
        request = self.client.new_request(
            "PUT", f"rest/api/2/version/{version.id}", version.to_dict()
        )
        self.client.do(request)
        return dataclasses.replace(version)