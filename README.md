# jiraclient

A Python client for the Jira REST API. It covers projects, users,
versions, priorities, resolutions, statuses, status categories, roles,
permission schemes and issue create/edit metadata from the platform API,
and sprints from the Agile API.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Connecting

`jiraclient.client.Client` takes the base URL of your Jira instance and
an optional `requests.Session` that carries the requests. A trailing
slash is added to the base URL when missing, and relative API paths are
resolved against it.

```python
from jiraclient.client import BasicAuthTransport, Client

password = "password"
session = BasicAuthTransport(username="admin", password=password).client()

client = Client("https://jira.example.com", session)
print(client.base_url())  # https://jira.example.com/
```

`Client.new_request` builds a request with a JSON-encoded body,
`Client.new_raw_request` sends a body unchanged, and
`Client.new_multipart_request` sends a ready-made multipart form with the
`X-Atlassian-Token: nocheck` header. `Client.do` sends a request and
returns a `Response`; calling `Response.json()` decodes the body and fills
in `start_at`, `max_results` and `total` when the body carries them.

`add_options(url, options)` replaces the query string of a URL with the
given options (a mapping or a dataclass), keys sorted and `None` values
left out.

### Authentication helpers

`jiraclient.client` provides `requests` auth objects that sign every
request:

- `BasicAuthTransport(username, password)` — HTTP Basic authentication.
- `CookieAuthTransport(username, password, auth_url)` — on first use,
  posts the credentials to `auth_url` and replays the returned session
  cookies (those with a value) on every request.
- `JWTAuthTransport(secret, issuer)` — signs each request with an HS256
  JWT that is valid for 59 seconds and carries the `qsh` query string
  hash Jira expects from marketplace add-ons.
  `create_query_string_hash` and `canonicalize_request` are public if you
  need the hash yourself.

Each has a `client()` method returning a `requests.Session` that uses it.

## Services

Every service is built from a `Client`:

```python
from jiraclient.project import ProjectService
from jiraclient.user import UserService, with_max_results, with_start_at

projects = ProjectService(client)
everything = projects.get_list()
with_types = projects.list_with_options({"expand": "issueTypes"})
one = projects.get("12310505")

users = UserService(client)
found = users.find("fred@example.com", with_start_at(100), with_max_results(1000))
```

| Module | Service | Operations |
| --- | --- | --- |
| `jiraclient.project` | `ProjectService` | `get_list`, `list_with_options`, `get`, `get_permission_scheme` |
| `jiraclient.user` | `UserService` | `get`, `get_by_account_id`, `create`, `delete`, `get_groups`, `get_self`, `find` |
| `jiraclient.version` | `VersionService` | `get`, `create`, `update` |
| `jiraclient.priority` | `PriorityService` | `get_list` |
| `jiraclient.resolution` | `ResolutionService` | `get_list` |
| `jiraclient.status` | `StatusService` | `get_all_statuses` |
| `jiraclient.statuscategory` | `StatusCategoryService` | `get_list` |
| `jiraclient.role` | `RoleService` | `get_list`, `get` |
| `jiraclient.permissionscheme` | `PermissionSchemeService` | `get_list`, `get` |
| `jiraclient.metaissue` | `MetaIssueService` | `get_create_meta`, `get_create_meta_with_options`, `get_edit_meta` |
| `jiraclient.sprint` | `SprintService` | `move_issues_to_sprint`, `get_issues_for_sprint`, `get_issue` |

Results come back as dataclasses (`Project`, `ProjectSummary`, `User`,
`Version`, `Role`, `PermissionScheme`, ...). Sprint issues are returned as
plain dictionaries of the decoded JSON.

User searches take the tweaks `with_max_results`, `with_start_at`,
`with_active` and `with_inactive`, appended to the query in the order
given. `jiraclient.statuscategory` defines the keys of the default status
categories: `STATUS_CATEGORY_COMPLETE`, `STATUS_CATEGORY_IN_PROGRESS`,
`STATUS_CATEGORY_TO_DO` and `STATUS_CATEGORY_UNDEFINED`.

`VersionService.update` returns a copy of the version it sent, not the
server's reply. `RoleService.get` and `PermissionSchemeService.get` raise
`JiraError` when the server answers with an object that has no `self`
link.

## Create metadata

`MetaIssueType` helps prepare an issue before creating it: it lists the
mandatory fields and all available fields by display name, and
`check_complete_and_available` checks a mapping of field names against
both, raising `ValueError` if a required field is missing or an unknown
one is given. Project, key and issue type lookups ignore case.

```python
from jiraclient.metaissue import MetaIssueService

meta = MetaIssueService(client).get_create_meta("SPN")
project = meta.get_project_with_key("SPN")
request_type = project.get_issue_type_with_name("request")
request_type.check_complete_and_available({"Summary": "Disk full"})
```

## Errors

A response with a status outside 200–299 raises `jiraclient.client.JiraError`,
which keeps the response in its `response` attribute so the body can be
inspected. A body that cannot be decoded into the expected shape also
raises `JiraError`. Transport failures from `requests` are passed through
unchanged.

## What is not covered

The package has no Service Desk support: organizations, their properties
and users, and service desk organization membership cannot be managed
with it. There is no single object bundling all services; build each
service from a `Client` yourself. It also does not create, search or edit
issues, and has no services for boards, groups, fields, components or
filters.