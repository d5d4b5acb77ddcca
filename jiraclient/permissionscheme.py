"""Permission schemes and the permissions they grant."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from jiraclient.client import Client, JiraError, Response

PERMISSION_SCHEME_ENDPOINT = "/rest/api/3/permissionscheme"


def _decode_object(response: Response) -> Mapping[str, Any]:
    """Return the JSON object in the response body or raise JiraError."""
    try:
        data = response.json()
    except ValueError as exc:
        raise JiraError(f"could not decode the response body: {exc}", response) from exc
    if not isinstance(data, Mapping):
        raise JiraError("expected a JSON object in the response body", response)
    return data


@dataclass
class Holder:
    """Who a permission is granted to."""

    type: str = ""
    parameter: str = ""
    expand: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Holder:
        return cls(
            type=data.get("type", ""),
            parameter=data.get("parameter", ""),
            expand=data.get("expand", ""),
        )


@dataclass
class Permission:
    """One permission granted by a scheme."""

    id: int = 0
    expand: str = ""
    holder: Holder = field(default_factory=Holder)
    name: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Permission:
        return cls(
            id=data.get("id", 0),
            expand=data.get("expand", ""),
            holder=Holder.from_dict(data.get("holder") or {}),
            name=data.get("permission", ""),
        )


@dataclass
class PermissionScheme:
    """A permission scheme, as attached to projects."""

    expand: str = ""
    self_url: str = ""
    id: int = 0
    name: str = ""
    description: str = ""
    permissions: list[Permission] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PermissionScheme:
        return cls(
            expand=data.get("expand", ""),
            self_url=data.get("self", ""),
            id=data.get("id", 0),
            name=data.get("name", ""),
            description=data.get("description", ""),
            permissions=[Permission.from_dict(item) for item in data.get("permissions") or []],
        )


@dataclass
class PermissionSchemes:
    """All permission schemes of an instance."""

    permission_schemes: list[PermissionScheme] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PermissionSchemes:
        return cls(
            permission_schemes=[
                PermissionScheme.from_dict(item) for item in data.get("permissionSchemes") or []
            ]
        )


class PermissionSchemeService:
    """Reads the permission schemes of a Jira instance."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def get_list(self) -> PermissionSchemes:
        """Return all permission schemes."""
        response = self.client.do(self.client.new_request("GET", PERMISSION_SCHEME_ENDPOINT))
        return PermissionSchemes.from_dict(_decode_object(response))

    def get(self, scheme_id: int) -> PermissionScheme:
        """Return the permission scheme with the given id."""
        response = self.client.do(
            self.client.new_request("GET", f"{PERMISSION_SCHEME_ENDPOINT}/{scheme_id}")
        )
        scheme = PermissionScheme.from_dict(_decode_object(response))
        if not scheme.self_url:
            raise JiraError(f"no permissionscheme with ID {scheme_id} found", response)
        return scheme