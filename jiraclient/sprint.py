"""Sprints of the agile API."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from jiraclient.client import Client, JiraError, Response, add_options

SPRINT_ENDPOINT = "rest/agile/1.0/sprint"
AGILE_ISSUE_ENDPOINT = "rest/agile/1.0/issue"


def _decode_object(response: Response) -> Mapping[str, Any]:
    try:
        data = response.json()
    except ValueError as exc:
        raise JiraError(f"could not decode the response body: {exc}", response) from exc
    if not isinstance(data, Mapping):
        raise JiraError("expected a JSON object in the response body", response)
    return data


class SprintService:
    """Moves issues into sprints and reads the issues of a sprint."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def move_issues_to_sprint(self, sprint_id: int, issue_ids: Iterable[str]) -> Response:
        """Move issues to an open or active sprint; at most 50 at a time."""
        request = self.client.new_request(
            "POST",
            f"{SPRINT_ENDPOINT}/{sprint_id}/issue",
            {"issues": list(issue_ids)},
        )
        return self.client.do(request)

    def get_issues_for_sprint(self, sprint_id: int) -> list[dict[str, Any]]:
        """Return the issues of a sprint that the user may see, ordered by rank."""
        response = self.client.do(
            self.client.new_request("GET", f"{SPRINT_ENDPOINT}/{sprint_id}/issue")
        )
        data = _decode_object(response)
        return [dict(issue) for issue in data.get("issues") or []]

    def get_issue(self, issue_id: str, options: Any = None) -> dict[str, Any]:
        """Return the issue with the given id or key, with options as query string."""
        endpoint = add_options(f"{AGILE_ISSUE_ENDPOINT}/{issue_id}", options)
        response = self.client.do(self.client.new_request("GET", endpoint))
        return dict(_decode_object(response))