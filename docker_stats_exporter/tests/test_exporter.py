import requests
from fastapi.testclient import TestClient

from docker_stats_exporter.collector import ContainerCollector
from docker_stats_exporter.exporter import create_app
from docker_stats_exporter.fetcher import StatsFetcher
from docker_stats_exporter.labels import LabelSpec
from fakes import NGINX, NGINX_ID, NGINX_STATS, REDIS, FakeRuntime


def make_client(runtime):
    collector = ContainerCollector(StatsFetcher(runtime), LabelSpec())
    return TestClient(create_app(collector))


def test_metrics():
    client = make_client(FakeRuntime([NGINX, REDIS], stats={NGINX_ID: NGINX_STATS}))
    resp = client.get("/metrics")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    assert 'docker_container_info{name="redis"} 1.0' in resp.text
    assert 'docker_container_cpu_seconds_total{name="nginx"} 138.186' in resp.text
    assert 'docker_container_pids{name="nginx"} 5.0' in resp.text


def test_metrics_enumeration_failure():
    runtime = FakeRuntime([], list_error=requests.exceptions.ConnectionError("down"))
    resp = make_client(runtime).get("/metrics")

    assert resp.status_code == 500
    assert "docker_container_" not in resp.text


def test_metrics_json():
    client = make_client(FakeRuntime([REDIS]))
    resp = client.get("/metrics.json")

    assert resp.status_code == 200
    assert resp.json() == [{
        "name": "docker_container_info",
        "kind": "gauge",
        "labels": {"name": "redis"},
        "value": 1,
    }]


def test_metrics_json_enumeration_failure():
    runtime = FakeRuntime([], list_error=requests.exceptions.ConnectionError("down"))
    assert make_client(runtime).get("/metrics.json").status_code == 500


def test_index_redirects():
    client = make_client(FakeRuntime([]))
    resp = client.get("/", follow_redirects=False)

    assert resp.status_code == 301
    assert resp.headers["location"] == "/metrics"
