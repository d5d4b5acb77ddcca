"""Project roles and their actors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from jiraclient.client import Client, JiraError, Response

ROLE_ENDPOINT = "rest/api/3/role"


def _decode(response: Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise JiraError(f"could not decode the response body: {exc}", response) from exc


@dataclass
class ActorUser:
    """The account id of an actor that is a user."""

    account_id: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ActorUser:
        return cls(account_id=data.get("accountId", ""))


@dataclass
class Actor:
    """A user or group that plays a role."""

    id: int = 0
    display_name: str = ""
    type: str = ""
    name: str = ""
    avatar_url: str = ""
    actor_user: ActorUser | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Actor:
        actor_user = data.get("actorUser")
        return cls(
            id=data.get("id", 0),
            display_name=data.get("displayName", ""),
            type=data.get("type", ""),
            name=data.get("name", ""),
            avatar_url=data.get("avatarUrl", ""),
            actor_user=ActorUser.from_dict(actor_user) if isinstance(actor_user, Mapping) else None,
        )


@dataclass
class Role:
    """A project role."""

    self_url: str = ""
    name: str = ""
    id: int = 0
    description: str = ""
    actors: list[Actor] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Role:
        return cls(
            self_url=data.get("self", ""),
            name=data.get("name", ""),
            id=data.get("id", 0),
            description=data.get("description", ""),
            actors=[Actor.from_dict(item) for item in data.get("actors") or []],
        )


class RoleService:
    """Reads the project roles of a Jira instance."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def get_list(self) -> list[Role]:
        """Return all project roles."""
        response = self.client.do(self.client.new_request("GET", ROLE_ENDPOINT))
        data = _decode(response)
        if not isinstance(data, list):
            raise JiraError("expected a JSON list of roles", response)
        return [Role.from_dict(item) for item in data]

    def get(self, role_id: int) -> Role:
        """Return the role with the given id."""
        response = self.client.do(self.client.new_request("GET", f"{ROLE_ENDPOINT}/{role_id}"))
        data = _decode(response)
        if not isinstance(data, Mapping):
            raise JiraError("expected a JSON object for a role", response)
        role = Role.from_dict(data)
        if not role.self_url:
            raise JiraError(f"no role with ID {role_id} found", response)
        return role