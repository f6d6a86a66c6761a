import pytest
from jinja2 import TemplateSyntaxError

from docker_stats_exporter.config import Config, parse_addr
from docker_stats_exporter.utils import ConfigError


@pytest.mark.parametrize("addr, expected", [
    (":9338", ("0.0.0.0", 9338)),
    ("127.0.0.1:9000", ("127.0.0.1", 9000)),
    ("[::1]:9338", ("::1", 9338)),
    ("exporter.local:80", ("exporter.local", 80)),
])
def test_parse_addr(addr, expected):
    assert parse_addr(addr) == expected


@pytest.mark.parametrize("addr", ["9338", "localhost:http", ":0", ":70000"])
def test_parse_addr_invalid(addr):
    with pytest.raises(ConfigError):
        parse_addr(addr)


def test_defaults():
    config = Config.from_env({})
    assert (config.host, config.port) == ("0.0.0.0", 9338)
    assert config.docker_timeout == 10
    assert config.label_spec.label_names == ("name",)
    assert not config.verbose


def test_from_env():
    config = Config.from_env({
        "ADDR": "127.0.0.1:9100",
        "DOCKER_TIMEOUT": "5",
        "VERBOSE": "yes",
        "LABEL_image": "{{ container.Image }}",
    })
    assert (config.host, config.port) == ("127.0.0.1", 9100)
    assert config.docker_timeout == 5
    assert config.verbose
    assert config.label_spec.label_names == ("name", "image")


def test_invalid_timeout():
    with pytest.raises(ConfigError):
        Config.from_env({"DOCKER_TIMEOUT": "soon"})


def test_invalid_label_template_is_fatal():
    with pytest.raises(TemplateSyntaxError):
        Config.from_env({"LABEL_image": "{{ container.Image"})
