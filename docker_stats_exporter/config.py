"""Exporter configuration from environment variables"""
from docker_stats_exporter.labels import LabelSpec
from docker_stats_exporter.utils import ConfigError

DEFAULT_ADDR = ":9338"
# Prometheus default scrape_timeout
DEFAULT_DOCKER_TIMEOUT = 10


def parse_addr(addr):
    """
    Split "host:port" into (host, port). Empty host listens on all
    interfaces, IPv6 hosts are written as "[::1]:9338".
    """
    host, sep, port = addr.rpartition(":")
    if not sep:
        raise ConfigError("invalid listen address %r, expected host:port" % addr)

    host = host.strip("[]") or "0.0.0.0"
    try:
        port = int(port)
    except ValueError:
        raise ConfigError("invalid port in listen address %r" % addr) from None

    if not 0 < port < 65536:
        raise ConfigError("port out of range in listen address %r" % addr)

    return host, port


# noqa # pylint: disable=too-few-public-methods
class Config:
    """Settings read once at startup"""
    def __init__(self, addr=DEFAULT_ADDR, label_spec=None,
                 docker_timeout=DEFAULT_DOCKER_TIMEOUT, verbose=False):
        self.host, self.port = parse_addr(addr)
        self.label_spec = label_spec if label_spec is not None else LabelSpec()
        self.docker_timeout = docker_timeout
        self.verbose = verbose

    @classmethod
    def from_env(cls, environ):
        """
        ADDR, DOCKER_TIMEOUT, VERBOSE and LABEL_* variables. Raises
        ConfigError or jinja2.TemplateSyntaxError.
        """
        timeout = environ.get("DOCKER_TIMEOUT") or DEFAULT_DOCKER_TIMEOUT
        try:
            timeout = int(timeout)
        except ValueError:
            raise ConfigError("invalid DOCKER_TIMEOUT %r" % timeout) from None

        return cls(
            addr=environ.get("ADDR") or DEFAULT_ADDR,
            label_spec=LabelSpec.from_env(environ),
            docker_timeout=timeout,
            verbose=environ.get("VERBOSE", "no") == "yes"
        )
