import json

import pytest
import responses

from jiraclient.client import Client, JiraError
from jiraclient.sprint import SprintService

BASE = "https://jira.example.com/"
SPRINT_ISSUES_URL = BASE + "rest/agile/1.0/sprint/123/issue"
ISSUE_URL = BASE + "rest/agile/1.0/issue/PROJ-1"


@pytest.fixture
def rsps():
    with responses.RequestsMock() as mock:
        yield mock


@pytest.fixture
def service():
    return SprintService(Client(BASE))


def test_move_issues_to_sprint_sends_issue_ids(rsps, service):
    rsps.add(responses.POST, SPRINT_ISSUES_URL, status=204)
    issue_ids = ["PROJ-1", "PROJ-2"]
    response = service.move_issues_to_sprint(123, issue_ids)
    assert response.status_code == 204
    request = rsps.calls[0].request
    assert request.method == "POST"
    assert json.loads(request.body) == {"issues": issue_ids}


def test_move_issues_to_sprint_error(rsps, service):
    rsps.add(responses.POST, SPRINT_ISSUES_URL, status=400)
    with pytest.raises(JiraError):
        service.move_issues_to_sprint(123, ["PROJ-1"])


def test_get_issues_for_sprint(rsps, service):
    issues = [{"id": "10001", "key": "PROJ-1"}, {"id": "10002", "key": "PROJ-2"}]
    rsps.add(responses.GET, SPRINT_ISSUES_URL, json={"issues": issues})
    result = service.get_issues_for_sprint(123)
    assert result == issues
    assert rsps.calls[0].request.method == "GET"


def test_get_issues_for_sprint_rejects_non_object(rsps, service):
    rsps.add(responses.GET, SPRINT_ISSUES_URL, json=[1, 2])
    with pytest.raises(JiraError):
        service.get_issues_for_sprint(123)


def test_get_issue_without_options(rsps, service):
    body = {"id": "10001", "key": "PROJ-1"}
    rsps.add(responses.GET, ISSUE_URL, json=body)
    assert service.get_issue("PROJ-1") == body
    assert rsps.calls[0].request.url == ISSUE_URL


def test_get_issue_with_options(rsps, service):
    body = {"id": "10001", "key": "PROJ-1"}
    rsps.add(responses.GET, ISSUE_URL, json=body)
    issue = service.get_issue("PROJ-1", {"expand": "changelog"})
    assert issue["key"] == "PROJ-1"
    assert rsps.calls[0].request.url == ISSUE_URL + "?expand=changelog"


def test_get_issue_not_found(rsps, service):
    rsps.add(responses.GET, ISSUE_URL, status=404)
    with pytest.raises(JiraError):
        service.get_issue("PROJ-1")