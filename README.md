# humioapi

A Python client for administering a Humio server through its GraphQL and
REST APIs. It covers views, parsers, alerts, users, groups, organizations,
roles, uploaded files, packages, feature flags, the installed licence and
server health.

## Installation

```
pip install humioapi
```

## Connecting

```python
from humioapi.client import Client, Config

config = Config(address="https://humio.example.com/", token="token")
client = Client(config)
```

`Config` also takes `ca_certificate_pem` (a PEM CA bundle to verify the
server with), `insecure` (turns certificate verification off),
`proxy_organization` and `user_agent`. When a token is set, every request
carries an `Authorization: Bearer ...` header. A trailing slash is added to
the address if it lacks one, and requests time out after 30 seconds.

`Client.query` and `Client.mutate` send a GraphQL document with optional
variables and return the `data` object; `Client.http_request` sends a plain
HTTP request and leaves the status code to the caller.

## Modules

| Module | Contents |
| --- | --- |
| `humioapi.client` | `Config`, `Client`, `default_config`, `new_http_session` |
| `humioapi.errors` | `HumioError`, `GraphQLError`, `HTTPStatusError`, `EntityNotFound`, `EntityType` |
| `humioapi.health` | `health`, `health_string`, `status`, `Health`, `HealthCheck`, `StatusResponse` |
| `humioapi.featureflags` | `FeatureFlags` |
| `humioapi.accounts` | `Users`, `Groups`, `Organizations`, `Viewer` and their data classes |
| `humioapi.roles` | `Roles`, `Role` |
| `humioapi.license` | `Licenses`, `OnPremLicense` |
| `humioapi.alerts` | `Alerts`, `Alert` |
| `humioapi.parsers` | `Parsers`, `Parser`, `ParserListItem` |
| `humioapi.files` | `Files`, `File` |
| `humioapi.views` | `Views`, `View`, `ViewConnection`, `ViewListItem` |
| `humioapi.packages` | `Packages`, `ValidationResponse`, `InstalledPackage`, `create_zip_from_folder` |

## Examples

Check the server:

```python
from humioapi.health import health, status

print(status(client).is_down())
report = health(client)
for name, check in report.checks_map().items():
    print(name, check.status)
```

Create a view over two repositories:

```python
from humioapi.views import Views

views = Views(client)
views.create("all-web", "Web traffic", {"web-logs": "*", "proxy-logs": "host=web"})
for item in views.list():
    print(item.name)
```

Install a parser and an alert:

```python
from humioapi.alerts import Alert, Alerts
from humioapi.parsers import Parser, Parsers

Parsers(client).add("web-logs", Parser(name="nginx", script="parseJson()"), force=True)

alert = Alert(name="errors", query_string="status=500", query_start="1h", enabled=True)
created = Alerts(client).add("web-logs", alert)
print(created.id)
```

Manage users and feature flags:

```python
from humioapi.accounts import UserChangeSet, Users
from humioapi.featureflags import FeatureFlags

user = Users(client).add("alice@example.com", UserChangeSet(full_name="Alice"))

flags = FeatureFlags(client)
print(flags.supported_flags())
flags.enable_for_user(user.id, "SomeFlag")
```

Upload and download a lookup file:

```python
from humioapi.files import Files

files = Files(client)
files.upload("web-logs", "hosts.csv", b"host,owner\nweb1,ops\n")
print(files.download("web-logs", "hosts.csv"))
```

Bundle and install a package from a directory (files and folders whose
names start with `.` or `_` are left out of the archive):

```python
from humioapi.packages import Packages

packages = Packages(client)
report = packages.install_from_directory("./my-package", "web-logs")
print(report.is_valid())
```

## Errors

Failures raise exceptions from `humioapi.errors`, all derived from
`HumioError`: `GraphQLError` when the server answers with GraphQL errors,
`HTTPStatusError` for an unexpected HTTP status code, and `EntityNotFound`
when a named parser or alert does not exist. `humioapi.accounts` raises
`UserNotFoundError` and `humioapi.packages` raises `PackageInstallError`;
invalid arguments raise `ValueError`. Network failures surface as
`requests` exceptions.

## What this package does not do

It has no command-line program; it is a library only. It does not manage
repositories or their retention, ingest tokens, cluster nodes or partitions,
and it does not run search query jobs. Actions can be named in alerts by
their IDs, but there is no API here for listing or creating actions.

## Running the tests

```
pip install -e ".[test]"
pytest
```