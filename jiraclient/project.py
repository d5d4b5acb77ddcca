"""Jira projects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from jiraclient.client import Client, JiraError, Response, add_options
from jiraclient.permissionscheme import PermissionScheme
from jiraclient.user import User
from jiraclient.version import Version

PROJECT_ENDPOINT = "rest/api/2/project"


def _decode(response: Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise JiraError(f"could not decode the response body: {exc}", response) from exc


def _decode_object(response: Response) -> Mapping[str, Any]:
    data = _decode(response)
    if not isinstance(data, Mapping):
        raise JiraError("expected a JSON object in the response body", response)
    return data


@dataclass
class ProjectCategory:
    """A project category."""

    self_url: str = ""
    id: str = ""
    name: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProjectCategory:
        return cls(
            self_url=data.get("self", ""),
            id=data.get("id", ""),
            name=data.get("name", ""),
            description=data.get("description", ""),
        )


@dataclass
class ProjectComponent:
    """A component of a project."""

    self_url: str = ""
    id: str = ""
    name: str = ""
    description: str = ""
    lead: User = field(default_factory=User)
    assignee_type: str = ""
    assignee: User = field(default_factory=User)
    real_assignee_type: str = ""
    real_assignee: User = field(default_factory=User)
    is_assignee_type_valid: bool = False
    project: str = ""
    project_id: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProjectComponent:
        return cls(
            self_url=data.get("self", ""),
            id=data.get("id", ""),
            name=data.get("name", ""),
            description=data.get("description", ""),
            lead=User.from_dict(data.get("lead") or {}),
            assignee_type=data.get("assigneeType", ""),
            assignee=User.from_dict(data.get("assignee") or {}),
            real_assignee_type=data.get("realAssigneeType", ""),
            real_assignee=User.from_dict(data.get("realAssignee") or {}),
            is_assignee_type_valid=bool(data.get("isAssigneeTypeValid", False)),
            project=data.get("project", ""),
            project_id=data.get("projectId", 0),
        )


@dataclass
class ProjectSummary:
    """A project as it appears in the list of all projects."""

    expand: str = ""
    self_url: str = ""
    id: str = ""
    key: str = ""
    name: str = ""
    avatar_urls: dict[str, str] = field(default_factory=dict)
    project_type_key: str = ""
    project_category: ProjectCategory = field(default_factory=ProjectCategory)
    issue_types: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProjectSummary:
        return cls(
            expand=data.get("expand", ""),
            self_url=data.get("self", ""),
            id=data.get("id", ""),
            key=data.get("key", ""),
            name=data.get("name", ""),
            avatar_urls=dict(data.get("avatarUrls") or {}),
            project_type_key=data.get("projectTypeKey", ""),
            project_category=ProjectCategory.from_dict(data.get("projectCategory") or {}),
            issue_types=[dict(item) for item in data.get("issueTypes") or []],
        )


@dataclass
class Project:
    """A full Jira project."""

    expand: str = ""
    self_url: str = ""
    id: str = ""
    key: str = ""
    description: str = ""
    lead: User = field(default_factory=User)
    components: list[ProjectComponent] = field(default_factory=list)
    issue_types: list[dict[str, Any]] = field(default_factory=list)
    url: str = ""
    email: str = ""
    assignee_type: str = ""
    versions: list[Version] = field(default_factory=list)
    name: str = ""
    roles: dict[str, str] = field(default_factory=dict)
    avatar_urls: dict[str, str] = field(default_factory=dict)
    project_category: ProjectCategory = field(default_factory=ProjectCategory)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Project:
        return cls(
            expand=data.get("expand", ""),
            self_url=data.get("self", ""),
            id=data.get("id", ""),
            key=data.get("key", ""),
            description=data.get("description", ""),
            lead=User.from_dict(data.get("lead") or {}),
            components=[ProjectComponent.from_dict(c) for c in data.get("components") or []],
            issue_types=[dict(item) for item in data.get("issueTypes") or []],
            url=data.get("url", ""),
            email=data.get("email", ""),
            assignee_type=data.get("assigneeType", ""),
            versions=[Version.from_dict(v) for v in data.get("versions") or []],
            name=data.get("name", ""),
            roles=dict(data.get("roles") or {}),
            avatar_urls=dict(data.get("avatarUrls") or {}),
            project_category=ProjectCategory.from_dict(data.get("projectCategory") or {}),
        )


class ProjectService:
    """Reads the projects of a Jira instance."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def get_list(self) -> list[ProjectSummary]:
        """Return all projects."""
        return self.list_with_options({})

    def list_with_options(self, options: Any) -> list[ProjectSummary]:
        """Return all projects, with query options such as {"expand": "issueTypes"}."""
        endpoint = add_options(PROJECT_ENDPOINT, options)
        response = self.client.do(self.client.new_request("GET", endpoint))
        data = _decode(response)
        if not isinstance(data, list):
            raise JiraError("expected a JSON list in the response body", response)
        return [ProjectSummary.from_dict(item) for item in data]

    def get(self, project_id: str) -> Project:
        """Return the project with the given id or key."""
        response = self.client.do(
            self.client.new_request("GET", f"{PROJECT_ENDPOINT}/{project_id}")
        )
        return Project.from_dict(_decode_object(response))

    def get_permission_scheme(self, project_id: str) -> PermissionScheme:
        """Return the permission scheme of the project with the given id or key."""
        response = self.client.do(
            self.client.new_request("GET", f"/{PROJECT_ENDPOINT}/{project_id}/permissionscheme")
        )
        return PermissionScheme.from_dict(_decode_object(response))