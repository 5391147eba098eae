# ns1api

Plain Python data models for a managed DNS platform's REST API. The package
builds, validates and converts to and from JSON-ready dictionaries a set of
the resources the API works with: metadata tables, filter chains, data
sources and feeds, IPAM addresses, Pulsar applications and jobs, and
monitoring jobs with their notification lists.

It has no runtime dependencies and talks to no network; pair it with the HTTP
client of your choice.

## Installation

```
pip install ns1api
```

## Modules

| Module            | Contents                                                             |
|-------------------|----------------------------------------------------------------------|
| `ns1api.meta`     | `Meta`, `FeedPtr`, `PulsarMeta`, `parse_type`, `format_interface`, `meta_from_map`, `geo_key_string` |
| `ns1api.filters`  | `Filter` and constructors such as `new_up`, `new_sel_first_n`, `new_shed_load` |
| `ns1api.data`     | `Source`, `Feed`, `Destination`, `Region`, `new_source`, `new_feed`, `new_destination` |
| `ns1api.ipam`     | `Address`, `AddrStatus`                                              |
| `ns1api.pulsar`   | `Application`, `PulsarJob`, `JobConfig`, `new_application`, `new_js_pulsar_job`, `new_bb_pulsar_job` |
| `ns1api.monitor`  | `Job`, `StatusLog`, `NotifyList`, `Notification`, config and notification constructors |
| `ns1api.strcase`  | `to_camel`                                                           |

Most classes are dataclasses with a `to_dict()` method that gives the API's
JSON shape and a `from_dict()` class method that reads it back.

## Metadata

```python
from ns1api.meta import Meta, FeedPtr, meta_from_map

meta = meta_from_map({"up": "true", "latitude": "0.50", "asn": "1,2,3"})
flat = meta.string_map()       # {"up": "1", "latitude": "0.5", "asn": "1,2,3"}
errors = meta.validate()       # a list of MetaValidationError, empty when valid

meta = Meta(priority=1, up=FeedPtr(feed_id="feed1_id"))
meta.to_dict()                 # {"up": {"feed": "feed1_id"}, "priority": 1}
```

`validate()` checks value types, positive numbers, latitude/longitude ranges,
georegion names, two-letter country/state/province codes, note length, CIDR
prefixes and Pulsar job ids.

## Filters

```python
from ns1api.filters import new_up, new_sel_first_n

chain = [new_up(), new_sel_first_n(1)]
chain[1].to_dict()             # {"filter": "select_first_n", "config": {"N": 1}}
chain[0].disable()
```

## Data sources and feeds

```python
from ns1api.data import new_source, new_feed, Region
from ns1api.meta import Meta

source = new_source("my api source", "nsone_v1")
feed = new_feed("London Feed", {"label": "London-UK"})
regions = {"some_region": Region(meta=Meta(up=False))}
```

## Monitoring

```python
from ns1api.monitor import Job, new_ping_config, new_notify_list, new_email_notification

job = Job(name="ping", job_type="ping", config=new_ping_config("1.2.3.4", 1000, 3, 100))
job.activate()
alerts = new_notify_list("ops", new_email_notification("ops@example.com"))
```

## Pulsar

```python
from ns1api.pulsar import new_application, new_js_pulsar_job

app = new_application("app_name")
job = new_js_pulsar_job("latency job", "my_app_id", "example.com", "/pixel.gif")
```

## What the package does not do

It does not model DNS zones, records, answers, DNSSEC or TSIG keys, account
users, teams, API keys and permissions, or DHCP scopes, reservations and
option definitions. It has no HTTP client and sends no requests.

## Running the tests

```
pip install ns1api[test]
pytest
```