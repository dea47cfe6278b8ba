# kumaclient

Typed Python models for the objects an Uptime Kuma server exchanges with its
clients: monitors, notification providers and proxies. Each model reads the
JSON the server sends and writes the JSON the server expects back. The package
has no dependencies outside the standard library.

## Installation

```
pip install kumaclient
```

For running the test suite:

```
pip install "kumaclient[test]"
pytest
```

## Monitors

`kumaclient.monitor.base.MonitorBase` holds the fields every monitor shares:
id, name, description, path name, parent, proxy id, intervals, retries,
notification ids, tags and the active flag. It is built with
`MonitorBase.from_json` or `MonitorBase.from_dict`; `type()` returns the
monitor type found in the data, and `as_type(cls)` decodes the same document
as one of the concrete monitor classes below.

Concrete monitors pair a `base` with their own details:

- `kumaclient.monitor.http_monitors`: `HTTPMonitor`, `HTTPJSONQueryMonitor`,
  `HTTPKeywordMonitor`, with `HTTPDetails`, `HTTPJSONQueryDetails`,
  `HTTPKeywordDetails` and the `AuthMethod` enum
- `kumaclient.monitor.probes`: `DNSMonitor` (with `DNSDetails` and the
  `DNSResolveType` enum), `PingMonitor`, `TCPPortMonitor`,
  `GrpcKeywordMonitor`
- `kumaclient.monitor.services`: `GroupMonitor`, `PostgresMonitor`,
  `PushMonitor`, `RealBrowserMonitor`, `RedisMonitor`

```python
from kumaclient.monitor.base import MonitorBase
from kumaclient.monitor.http_monitors import HTTPMonitor

base = MonitorBase.from_json(payload)      # any monitor, type kept
print(base.type())                         # e.g. "http"
http = base.as_type(HTTPMonitor)           # full HTTP view of the same data
print(http)                                # "id: 2, name: ..., type: http, url: ..."
body = http.to_json()                      # ready to send back
```

`MonitorBase.to_json` works only on a monitor that was read from JSON: it
keeps every field of the original document and overwrites the shared ones.
The concrete monitors build their document from their own fields instead;
they leave out `pathName`, which the server derives, and always send an empty
`conditions` list. Monitors without HTTP settings also send an empty
`accepted_statuscodes` list. JSON output has its keys sorted.

## Notifications

`kumaclient.notification.core.NotificationBase` reads a notification record,
whose provider settings the server stores as a JSON string in `config`; a
`config` without a string `type` is rejected. Provider models live in
`kumaclient.notification.providers` (`Ntfy`, `Slack`, `Teams`, `Webhook`, each
with a matching `...Details` class), and
`kumaclient.notification.generic.GenericNotification` covers any provider as
a plain dictionary of settings.

```python
from kumaclient.notification.core import NotificationBase
from kumaclient.notification.providers import Ntfy

note = NotificationBase.from_json(payload)
if note.type() == "ntfy":
    ntfy = note.as_type(Ntfy)
    print(ntfy.to_json())
```

`to_json` produces the flat form the server accepts: base attributes and
provider settings in one object. Webhook headers are kept as a dictionary;
`encode_headers` and `decode_headers` convert them to and from the JSON string
the server stores.

## Proxies

`kumaclient.proxy.Proxy` mirrors a proxy record: flags arrive as 0/1 and are
exposed as booleans, and `createdDate` (RFC 3339 or `YYYY-MM-DD HH:MM:SS`)
becomes a `datetime`. `ProxyConfig` is the payload for creating or updating a
proxy; empty id, username and password are left out of its JSON.

```python
from kumaclient.proxy import Proxy, ProxyConfig

proxy = Proxy.from_json(payload)
print(proxy)          # a non-empty password is shown as "***"
config = ProxyConfig(protocol="http", host="proxy.example.com", port=8080)
print(config.to_json())
```

## Errors

Malformed data raises `kumaclient.monitor.base.MonitorError`,
`kumaclient.notification.core.NotificationError` or, for proxies,
`ValueError`. Both error classes derive from `ValueError`.

## What this package does not do

It only models and serialises data. It does not connect to a server, log in,
keep a cache of monitors, or send create, update or delete requests; sending
the JSON it produces is left to the caller. Status pages, incidents, settings
and tags are not modelled (monitor tags are kept as plain dictionaries).