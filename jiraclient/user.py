"""Jira users and user search."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from jiraclient.client import Client, JiraError, Response

USER_ENDPOINT = "/rest/api/2/user"

SearchParams = list[tuple[str, str]]
SearchTweak = Callable[[SearchParams], SearchParams]


@dataclass
class User:
    """A Jira user. The password is sent nowhere and never read back."""

    self_url: str = ""
    account_id: str = ""
    account_type: str = ""
    name: str = ""
    key: str = ""
    password: str = field(default="", repr=False)
    email_address: str = ""
    avatar_urls: dict[str, str] = field(default_factory=dict)
    display_name: str = ""
    active: bool = False
    time_zone: str = ""
    locale: str = ""
    application_keys: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> User:
        return cls(
            self_url=data.get("self", ""),
            account_id=data.get("accountId", ""),
            account_type=data.get("accountType", ""),
            name=data.get("name", ""),
            key=data.get("key", ""),
            email_address=data.get("emailAddress", ""),
            avatar_urls=dict(data.get("avatarUrls") or {}),
            display_name=data.get("displayName", ""),
            active=bool(data.get("active", False)),
            time_zone=data.get("timeZone", ""),
            locale=data.get("locale", ""),
            application_keys=list(data.get("applicationKeys") or []),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, leaving out empty fields and the password."""
        candidates = {
            "self": self.self_url,
            "accountId": self.account_id,
            "accountType": self.account_type,
            "name": self.name,
            "key": self.key,
            "emailAddress": self.email_address,
            "avatarUrls": dict(self.avatar_urls),
            "displayName": self.display_name,
            "active": self.active,
            "timeZone": self.time_zone,
            "locale": self.locale,
            "applicationKeys": list(self.application_keys),
        }
        return {name: value for name, value in candidates.items() if value}


@dataclass
class UserGroup:
    """A group a user belongs to."""

    self_url: str = ""
    name: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UserGroup:
        return cls(self_url=data.get("self", ""), name=data.get("name", ""))


def with_max_results(max_results: int) -> SearchTweak:
    """Limit the number of users a search returns."""
    return lambda params: [*params, ("maxResults", str(max_results))]


def with_start_at(start_at: int) -> SearchTweak:
    """Start a search at the given index."""
    return lambda params: [*params, ("startAt", str(start_at))]


def with_active(active: bool) -> SearchTweak:
    """Include or exclude active users in a search."""
    return lambda params: [*params, ("includeActive", "true" if active else "false")]


def with_inactive(inactive: bool) -> SearchTweak:
    """Include or exclude inactive users in a search."""
    return lambda params: [*params, ("includeInactive", "true" if inactive else "false")]


class UserService:
    """Reads, creates, deletes and searches Jira users."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def _get(self, endpoint: str) -> Any:
        return self.client.do(self.client.new_request("GET", endpoint)).json()

    def get(self, account_id: str) -> User:
        """Return the user with the given account id."""
        return User.from_dict(self._get(f"{USER_ENDPOINT}?accountId={account_id}") or {})

    def get_by_account_id(self, account_id: str) -> User:
        """Return the user with the given account id."""
        return self.get(account_id)

    def create(self, user: User) -> User:
        """Create a user and return the user the server reports back."""
        response = self.client.do(self.client.new_request("POST", USER_ENDPOINT, user.to_dict()))
        try:
            data = response.json()
        except ValueError as exc:
            raise JiraError("could not unmarshall the data into struct", response) from exc
        if not isinstance(data, Mapping):
            raise JiraError("could not unmarshall the data into struct", response)
        return User.from_dict(data)

    def delete(self, account_id: str) -> Response:
        """Delete the user with the given account id."""
        request = self.client.new_request("DELETE", f"{USER_ENDPOINT}?accountId={account_id}")
        return self.client.do(request)

    def get_groups(self, account_id: str) -> list[UserGroup]:
        """Return the groups the user belongs to."""
        data = self._get(f"{USER_ENDPOINT}/groups?accountId={account_id}") or []
        return [UserGroup.from_dict(item) for item in data]

    def get_self(self) -> User:
        """Return the user that is logged in."""
        return User.from_dict(self._get("rest/api/2/myself") or {})

    def find(self, property: str, *args: SearchTweak) -> list[User]:
        """Search users by e-mail address or display name."""
        params: SearchParams = [("query", property)]
        for tweak in args:
            params = tweak(params)
        query = "&".join(f"{name}={value}" for name, value in params)
        data = self._get(f"{USER_ENDPOINT}/search?{query}") or []
        return [User.from_dict(item) for item in data]