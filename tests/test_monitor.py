import json
from datetime import timedelta

import pytest

from ns1api.monitor import (
    Job,
    Notification,
    NotifyList,
    Rule,
    Status,
    StatusLog,
    new_dns_config,
    new_email_notification,
    new_feed_notification,
    new_hip_chat_notification,
    new_http_config,
    new_http_v3_config,
    new_notify_list,
    new_pager_duty_notification,
    new_ping_config,
    new_slack_notification,
    new_tcp_config,
    new_user_notification,
    new_web_notification,
)

JOBS = """[
  {
    "id": "52a27d4397d5f07003fdbe7b",
    "config": {"host": "1.2.3.4"},
    "status": {
      "lga": {"since": 1389407609, "status": "up"},
      "global": {"since": 1389407609, "status": "up"},
      "sjc": {"since": 1389404014, "status": "up"}
    },
    "rules": [{"key": "rtt", "value": 100, "comparison": "<"}],
    "job_type": "ping",
    "regions": ["lga", "sjc"],
    "active": true,
    "frequency": 60,
    "policy": "quorum",
    "region_scope": "fixed"
  }
]"""


def test_unmarshal_jobs():
    jobs = [Job.from_dict(item) for item in json.loads(JOBS)]
    assert len(jobs) == 1
    j = jobs[0]
    assert j.id == "52a27d4397d5f07003fdbe7b"
    assert j.config["host"] == "1.2.3.4"
    assert j.status["global"].since == 1389407609
    assert j.status["global"].status == "up"
    assert j.status["sjc"].since == 1389404014
    assert j.status["sjc"].status == "up"
    rule = j.rules[0]
    assert rule.key == "rtt"
    assert rule.value == 100
    assert rule.comparison == "<"
    assert j.job_type == "ping"
    assert j.regions[0] == "lga"
    assert j.active is True
    assert j.frequency == 60
    assert j.policy == "quorum"
    assert j.region_scope == "fixed"


def test_unmarshal_status_log():
    log = StatusLog.from_dict(
        json.loads(
            '{"status": "down", "region": "lga", "since": 1488297041,'
            ' "job": "58b364c09825e00001e2af80", "until": 1488297042}'
        )
    )
    assert log.job == "58b364c09825e00001e2af80"
    assert log.status == "down"
    assert log.region == "lga"
    assert log.since == 1488297041
    assert log.until == 1488297042


def test_unmarshal_status_log_most_recent():
    log = StatusLog.from_dict(
        json.loads(
            '{"status": "down", "region": "lga", "since": 1488297041,'
            ' "job": "58b364c09825e00001e2af80", "until": null}'
        )
    )
    assert log.job == "58b364c09825e00001e2af80"
    assert log.status == "down"
    assert log.region == "lga"
    assert log.since == 1488297041
    assert log.until == 0


def test_unmarshal_status_logs():
    entries = []
    for status, since, until in (
        ("up", 1488297044, None),
        ("down", 1488297043, 1488297044),
        ("up", 1488297042, 1488297043),
    ):
        for region in ("satellite", "master", "global"):
            entries.append(
                {
                    "status": status,
                    "region": region,
                    "since": since,
                    "job": "58b364c09825e00001e2af80",
                    "until": until,
                }
            )
    logs = [StatusLog.from_dict(item) for item in json.loads(json.dumps(entries))]
    assert len(logs) == 9
    assert logs[0].until == 0
    assert logs[3].until == 1488297044


def test_activate_and_deactivate():
    job = Job()
    job.activate()
    assert job.active is True
    job.deactivate()
    assert job.active is False


def test_job_round_trip():
    job = Job(
        id="job1",
        notify_list_id="list1",
        job_type="tcp",
        config=new_tcp_config("1.2.3.4", 443, 2000, 5, "", True),
        status={"lga": Status(since=10, status="up")},
        rules=[Rule(key="connect", value=200, comparison="<")],
        regions=["lga"],
        active=True,
        frequency=30,
        policy="all",
        region_scope="fixed",
        notes="check it",
        name="tcp job",
        notify_repeat=60,
        mute=True,
    )
    assert Job.from_dict(json.loads(json.dumps(job.to_dict()))) == job


def test_job_to_dict_omits_empty_optional_fields():
    out = Job(name="n").to_dict()
    assert "id" not in out
    assert "status" not in out
    assert "rules" not in out
    assert "notes" not in out
    assert out["regions"] == []
    assert out["name"] == "n"


def test_job_from_non_mapping_raises():
    with pytest.raises(TypeError):
        Job.from_dict(["not", "a", "job"])


def test_http_config():
    assert new_http_config("https://example.com", "GET", "agent", "Bearer token", 5) == {
        "url": "https://example.com",
        "method": "GET",
        "user_agent": "agent",
        "authorization": "Bearer token",
        "connect_timeout": 5,
    }


def test_http_v3_config_converts_idle_timeout():
    cfg = new_http_v3_config(
        "https://example.com", "HEAD", "agent", "", 5, timedelta(seconds=2), True, "vhost", False, True
    )
    assert cfg["idle_timeout"] == 2_000_000_000
    assert cfg["require_ipv4"] is True
    assert cfg["virtual_host"] == "vhost"
    assert cfg["tls_skip_verify"] is False
    assert cfg["follow_redirect"] is True


def test_dns_and_ping_config():
    assert new_dns_config("8.8.8.8", "example.com", 53, "A", 1000) == {
        "host": "8.8.8.8",
        "domain": "example.com",
        "port": 53,
        "type": "A",
        "response_timeout": 1000,
    }
    assert new_ping_config("1.2.3.4", 100, 4, 10) == {
        "host": "1.2.3.4",
        "timeout": 100,
        "count": 4,
        "interval": 10,
    }


def test_notification_constructors():
    assert new_user_notification("bob") == Notification("user", {"user": "bob"})
    assert new_email_notification("bob@example.com").config == {"email": "bob@example.com"}
    assert new_feed_notification("src").notification_type == "datafeed"
    assert new_web_notification("https://example.com").notification_type == "webhook"
    assert new_pager_duty_notification("placeholder").config == {"service_key": "placeholder"}
    assert new_hip_chat_notification("token", "room").config == {"token": "token", "room": "room"}
    assert new_slack_notification("https://example.com", "bob", "#ops").config == {
        "url": "https://example.com",
        "username": "bob",
        "channel": "#ops",
    }


def test_new_notify_list_without_notifications():
    nl = new_notify_list("empty")
    assert nl.name == "empty"
    assert nl.notifications == []
    assert nl.to_dict() == {"name": "empty"}


def test_notify_list_round_trip():
    nl = new_notify_list(
        "ops", new_email_notification("ops@example.com"), new_user_notification("bob")
    )
    nl.id = "list1"
    out = nl.to_dict()
    assert out["notify_list"][0] == {"type": "email", "config": {"email": "ops@example.com"}}
    assert NotifyList.from_dict(json.loads(json.dumps(out))) == nl