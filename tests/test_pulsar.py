import pytest

from ns1api.pulsar import (
    Application,
    BlendMetricWeights,
    DefaultConfig,
    JobConfig,
    PulsarJob,
    Weights,
    new_application,
    new_bb_pulsar_job,
    new_js_pulsar_job,
)


def test_new_application():
    app = new_application("app_name")
    assert app.name == "app_name"


def test_new_bb_pulsar_job():
    job = new_bb_pulsar_job("myBBPulsarJob", "myAppId")
    assert job.type_id == "custom"
    assert job.name == "myBBPulsarJob"
    assert job.app_id == "myAppId"
    assert job.config is None


def test_new_js_pulsar_job():
    job = new_js_pulsar_job("myJSPulsarJob", "myAppId", "myHost", "myURLPath")
    assert job.type_id == "latency"
    assert job.name == "myJSPulsarJob"
    assert job.app_id == "myAppId"
    assert job.config.host == "myHost"
    assert job.config.url_path == "myURLPath"


def test_bb_job_to_dict():
    out = new_bb_pulsar_job("myBBPulsarJob", "myAppId").to_dict()
    assert out == {
        "typeid": "custom",
        "name": "myBBPulsarJob",
        "appid": "myAppId",
        "active": False,
        "shared": False,
    }


def test_js_job_config_to_dict_keeps_host_and_path_only():
    out = new_js_pulsar_job("j", "a", "myHost", "myURLPath").to_dict()
    assert out["config"] == {"host": "myHost", "url_path": "myURLPath"}


def test_job_config_emits_null_host_and_path():
    assert JobConfig().to_dict() == {"host": None, "url_path": None}


def test_pulsar_job_round_trip():
    job = PulsarJob(
        customer=12,
        type_id="latency",
        name="job",
        community=True,
        job_id="jid",
        app_id="aid",
        active=True,
        shared=True,
        config=JobConfig(
            host="myHost",
            url_path="/p",
            http=True,
            request_timeout_millis=100,
            blend_metric_weights=BlendMetricWeights(
                timestamp=5,
                weights=[Weights(name="w", weight=3, default_value=0.5, maximize=True)],
            ),
        ),
    )
    out = job.to_dict()
    assert out["jobid"] == "jid"
    assert out["community"] is True
    assert PulsarJob.from_dict(out) == job


def test_application_round_trip_and_appid_omission():
    assert "appid" not in new_application("x").to_dict()
    app = Application(
        id="aid",
        name="x",
        active=True,
        browser_wait_millis=10,
        jobs_per_transaction=2,
        default_config=DefaultConfig(http=True, job_timeout_millis=500),
    )
    out = app.to_dict()
    assert out["appid"] == "aid"
    assert Application.from_dict(out) == app


def test_from_non_mapping_raises():
    with pytest.raises(TypeError):
        PulsarJob.from_dict(["job"])
    with pytest.raises(TypeError):
        Application.from_dict("app")