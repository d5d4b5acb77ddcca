"""Create and edit meta information for issues."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, TypeVar

from jiraclient.client import Client, _fetch_json, _from_json, _json_field, _list_of, add_options

CREATE_META_ENDPOINT = "rest/api/2/issue/createmeta"
DEFAULT_CREATE_META_EXPAND = "projects.issuetypes.fields"

_T = TypeVar("_T")


def _field_attribute(fields: Mapping[str, Any], key: str, attribute: str, kind: type) -> Any:
    """Return fields[key][attribute], checking that it exists and has the given type."""
    entry = fields.get(key)
    if not isinstance(entry, Mapping) or attribute not in entry:
        raise ValueError(f"{key}/{attribute} not found")
    value = entry[attribute]
    if not isinstance(value, kind):
        raise ValueError(f"{key}/{attribute} is not a {kind.__name__}")
    return value


def _find_casefold(items: Iterable[_T], attribute: str, wanted: str) -> _T | None:
    """Return the first item whose attribute equals wanted, ignoring case."""
    wanted = wanted.casefold()
    return next((item for item in items if getattr(item, attribute).casefold() == wanted), None)


def _as_dict(value: Any) -> dict[str, Any]:
    return dict(value or {})


@dataclass
class MetaIssueType:
    """An issue type of a project, with its field descriptions."""

    self_url: str = _json_field("self")
    id: str = ""
    description: str = ""
    icon_url: str = _json_field("iconUrl")
    name: str = ""
    subtasks: bool = _json_field("subtask", default=False, decode=bool)
    expand: str = ""
    fields: dict[str, Any] = _json_field(factory=dict, decode=_as_dict)

    def get_mandatory_fields(self) -> dict[str, str]:
        """Map the display name of every required field to its schema key."""
        return {
            _field_attribute(self.fields, key, "name", str): key
            for key in self.fields
            if _field_attribute(self.fields, key, "required", bool)
        }

    def get_all_fields(self) -> dict[str, str]:
        """Map the display name of every field to its schema key."""
        return {_field_attribute(self.fields, key, "name", str): key for key in self.fields}

    def check_complete_and_available(self, config: Mapping[str, Any]) -> bool:
        """Check that config holds every required field and only available ones."""
        mandatory = self.get_mandatory_fields()
        available = self.get_all_fields()
        if any(name not in config for name in mandatory):
            raise ValueError(
                "required field not found in provided jira.fields. "
                f"Required are: {list(mandatory)!r}"
            )
        if any(name not in available for name in config):
            raise ValueError(
                "fields in jira.fields are not available in jira. "
                f"Available are: {list(available)!r}"
            )
        return True


@dataclass
class MetaProject:
    """A project as described by the create meta information."""

    expand: str = ""
    self_url: str = _json_field("self")
    id: str = ""
    key: str = ""
    name: str = ""
    issue_types: list[MetaIssueType] = _json_field(
        "issuetypes", factory=list, decode=_list_of(MetaIssueType)
    )

    def get_issue_type_with_name(self, name: str) -> MetaIssueType | None:
        """Return the issue type with the given name, compared case-insensitively."""
        return _find_casefold(self.issue_types, "name", name)


@dataclass
class CreateMetaInfo:
    """Fields and their attributes needed to create an issue."""

    expand: str = ""
    projects: list[MetaProject] = _json_field(factory=list, decode=_list_of(MetaProject))

    def get_project_with_name(self, name: str) -> MetaProject | None:
        """Return the project with the given name, compared case-insensitively."""
        return _find_casefold(self.projects, "name", name)

    def get_project_with_key(self, key: str) -> MetaProject | None:
        """Return the project with the given key, compared case-insensitively."""
        return _find_casefold(self.projects, "key", key)


@dataclass
class EditMetaInfo:
    """Fields and their attributes available when editing an issue."""

    fields: dict[str, Any] = field(default_factory=dict, metadata={"decode": _as_dict})


class MetaIssueService:
    """Fetches create and edit meta information for issues."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def get_create_meta(self, project_keys: str) -> CreateMetaInfo:
        """Fetch the create meta information for the given project keys."""
        options = {"expand": DEFAULT_CREATE_META_EXPAND}
        if project_keys:
            options["projectKeys"] = project_keys
        return self.get_create_meta_with_options(options)

    def get_create_meta_with_options(self, options: Any) -> CreateMetaInfo:
        """Fetch the create meta information with the given query options."""
        data = _fetch_json(self.client, add_options(CREATE_META_ENDPOINT, options))
        return _from_json(CreateMetaInfo, data)

    def get_edit_meta(self, issue_key: str) -> EditMetaInfo:
        """Fetch the edit meta information for one issue."""
        data = _fetch_json(self.client, f"/rest/api/2/issue/{issue_key}/editmeta")
        return _from_json(EditMetaInfo, data)