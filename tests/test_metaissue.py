from urllib.parse import parse_qs, urlsplit

import pytest
import requests
import responses

from jiraclient.client import Client, JiraError
from jiraclient.metaissue import (
    CreateMetaInfo,
    MetaIssueService,
    MetaIssueType,
    MetaProject,
)

BASE = "https://jira.example.com/"
CREATE_META_URL = BASE + "rest/api/2/issue/createmeta"
EDIT_META_URL = BASE + "rest/api/2/issue/PROJ-9001/editmeta"


def _field(name, required, **extra):
    return {
        "required": required,
        "schema": {"type": "string"},
        "name": name,
        "hasDefaultValue": False,
        "operations": ["set"],
        **extra,
    }


CREATE_META = {
    "expand": "projects",
    "projects": [
        {
            "expand": "issuetypes",
            "self": "https://my.jira.example.com/rest/api/2/project/11300",
            "id": "11300",
            "key": "SPN",
            "name": "Super Project Name",
            "issuetypes": [
                {
                    "self": "https://my.jira.example.com/rest/api/2/issuetype/6",
                    "id": "6",
                    "description": "An issue which ideally should be able to be completed in one step",
                    "iconUrl": "https://my.jira.example.com/secure/viewavatar?avatarId=14006",
                    "name": "Request",
                    "subtask": False,
                    "expand": "fields",
                    "fields": {
                        "summary": _field("Summary", True),
                        "issuetype": _field(
                            "Issue Type", True, allowedValues=[{"id": "6", "name": "Request"}]
                        ),
                        "components": _field(
                            "Component/s",
                            True,
                            allowedValues=[
                                {"id": "14144", "name": "Build automation"},
                                {"id": "14149", "name": "Caches and noSQL"},
                            ],
                        ),
                        "attachment": _field("Attachment", False),
                        "duedate": _field("Due Date", False),
                        "description": _field("Description", False),
                        "customfield_10806": _field("Epic Link", False),
                        "project": _field("Project", True),
                        "assignee": _field("Assignee", True),
                        "priority": _field("Priority", False),
                        "labels": _field("Labels", False),
                    },
                }
            ],
        }
    ],
}

EDIT_META = {
    "fields": {
        "summary": _field("Summary", True),
        "attachment": _field("Attachment", False),
    }
}


@pytest.fixture
def mock():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def service():
    return MetaIssueService(Client(BASE))


def _count_required(fields):
    return sum(1 for value in fields.values() if value.get("required") is True)


def test_get_create_meta_success(mock, service):
    mock.add(responses.GET, CREATE_META_URL, json=CREATE_META)
    meta = service.get_create_meta("SPN")
    assert len(meta.projects) == 1
    project = meta.projects[0]
    assert len(project.issue_types) == 1
    assert _count_required(project.issue_types[0].fields) == 5
    request = mock.calls[0].request
    assert request.method == "GET"
    parts = urlsplit(request.url)
    assert parts.path == "/rest/api/2/issue/createmeta"
    assert parse_qs(parts.query) == {
        "expand": ["projects.issuetypes.fields"],
        "projectKeys": ["SPN"],
    }


def test_get_create_meta_with_options(mock, service):
    mock.add(responses.GET, CREATE_META_URL, json=CREATE_META)
    meta = service.get_create_meta_with_options({"expand": "projects.issuetypes.fields"})
    assert len(meta.projects) == 1
    issue_type = meta.projects[0].issue_types[0]
    assert _count_required(issue_type.fields) == 5
    assert issue_type.name == "Request"
    assert issue_type.icon_url.endswith("avatarId=14006")
    query = parse_qs(urlsplit(mock.calls[0].request.url).query)
    assert query == {"expand": ["projects.issuetypes.fields"]}


def test_create_meta_mandatory_fields_from_response(mock, service):
    mock.add(responses.GET, CREATE_META_URL, json=CREATE_META)
    meta = service.get_create_meta("SPN")
    issue_type = meta.get_project_with_key("spn").get_issue_type_with_name("request")
    assert issue_type.get_mandatory_fields() == {
        "Summary": "summary",
        "Issue Type": "issuetype",
        "Component/s": "components",
        "Project": "project",
        "Assignee": "assignee",
    }
    assert len(issue_type.get_all_fields()) == 11


def test_get_create_meta_server_error(mock, service):
    mock.add(responses.GET, CREATE_META_URL, status=500)
    with pytest.raises(JiraError):
        service.get_create_meta("SPN")


def test_get_edit_meta_success(mock, service):
    mock.add(responses.GET, EDIT_META_URL, json=EDIT_META)
    edit_meta = service.get_edit_meta("PROJ-9001")
    assert mock.calls[0].request.method == "GET"
    assert urlsplit(mock.calls[0].request.url).path == "/rest/api/2/issue/PROJ-9001/editmeta"
    assert edit_meta.fields["summary"]["required"] is True
    assert edit_meta.fields["attachment"]["required"] is False
    assert _count_required(edit_meta.fields) == 1


def test_get_edit_meta_fail(mock, service):
    with pytest.raises(requests.ConnectionError):
        service.get_edit_meta("PROJ-9001")


def test_get_mandatory_fields():
    meta = MetaIssueType(
        fields={
            "summary": {"required": True, "name": "Summary"},
            "components": {"required": True, "name": "Components"},
            "epicLink": {"required": False, "name": "Epic Link"},
        }
    )
    mandatory = meta.get_mandatory_fields()
    assert len(mandatory) == 2
    assert mandatory == {"Summary": "summary", "Components": "components"}


def test_get_mandatory_fields_non_existent_required_key_fail():
    meta = MetaIssueType(fields={"summary": {"name": "Summary"}})
    with pytest.raises(ValueError):
        meta.get_mandatory_fields()


def test_get_mandatory_fields_non_existent_name_key_fail():
    meta = MetaIssueType(fields={"summary": {"required": True}})
    with pytest.raises(ValueError):
        meta.get_mandatory_fields()


def test_get_all_fields():
    meta = MetaIssueType(
        fields={
            "summary": {"required": True, "name": "Summary"},
            "components": {"required": True, "name": "Components"},
            "epicLink": {"required": False, "name": "Epic Link"},
        }
    )
    all_fields = meta.get_all_fields()
    assert len(all_fields) == 3
    assert all_fields["Epic Link"] == "epicLink"


def test_get_all_fields_non_existing_name_key_fail():
    meta = MetaIssueType(fields={"summary": {"required": True}})
    with pytest.raises(ValueError):
        meta.get_all_fields()


def test_check_complete_and_available_mandatory_missing():
    meta = MetaIssueType(
        fields={
            "summary": {"required": True, "name": "Summary"},
            "someKey": {"required": False, "name": "SomeKey"},
        }
    )
    with pytest.raises(ValueError, match="required field not found"):
        meta.check_complete_and_available({"SomeKey": "somevalue"})


def test_check_complete_and_available_not_available():
    meta = MetaIssueType(fields={"summary": {"required": True, "name": "Summary"}})
    with pytest.raises(ValueError, match="not available"):
        meta.check_complete_and_available({"Summary": "Issue Summary", "SomeKey": "somevalue"})


def test_check_complete_and_available_success():
    meta = MetaIssueType(
        fields={
            "summary": {"required": True, "name": "Summary"},
            "someKey": {"required": False, "name": "SomeKey"},
        }
    )
    config = {"SomeKey": "somevalue", "Summary": "Issue summary"}
    assert meta.check_complete_and_available(config) is True


def test_get_project_with_name_success():
    info = CreateMetaInfo(projects=[MetaProject(name="SPN")])
    project = info.get_project_with_name("SPN")
    assert project is info.projects[0]


def test_get_issue_type_with_name_case_mismatch_success():
    project = MetaProject(issue_types=[MetaIssueType(name="Bug")])
    issue_type = project.get_issue_type_with_name("BUG")
    assert issue_type is project.issue_types[0]


def test_get_project_with_key_success():
    info = CreateMetaInfo(projects=[MetaProject(key="SPNKEY")])
    assert info.get_project_with_key("SPNKEY") is info.projects[0]


def test_get_project_with_key_none_for_non_existent():
    info = CreateMetaInfo(projects=[MetaProject(key="SPNKEY")])
    assert info.get_project_with_key("SPN") is None


def test_get_issue_type_with_name_none_for_non_existent():
    project = MetaProject(issue_types=[MetaIssueType(name="Bug")])
    assert project.get_issue_type_with_name("Story") is None