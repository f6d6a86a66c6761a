"""
Exporter serves the resource usage of all containers of the Docker host
as Prometheus metrics at /metrics (and as JSON at /metrics.json).
Listens on ADDR, default ":9338".
"""
import logging
import os
import sys

import docker
import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse, RedirectResponse, Response
from jinja2 import TemplateSyntaxError
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from docker_stats_exporter.collector import ContainerCollector
from docker_stats_exporter.config import Config
from docker_stats_exporter.fetcher import DockerRuntime, StatsFetcher
from docker_stats_exporter.utils import (ConfigError, EnumerationFailure,
                                         logf, logging_setup)


def create_app(collector):
    """FastAPI app exposing the collector"""
    registry = CollectorRegistry()
    registry.register(collector)

    metrics_app = FastAPI()

    @metrics_app.get("/metrics")
    def metrics():
        """ Collect all containers and return Prometheus text format """
        try:
            content = generate_latest(registry)
        except EnumerationFailure as err:
            logging.error(logf("Scrape failed", error=err))
            return PlainTextResponse(str(err), status_code=500)

        return Response(content, media_type=CONTENT_TYPE_LATEST)

    @metrics_app.get("/metrics.json")
    def metrics_json():
        """ Return collected samples in JSON format """
        try:
            samples = collector.scrape()
        except EnumerationFailure as err:
            logging.error(logf("Scrape failed", error=err))
            return PlainTextResponse(str(err), status_code=500)

        return [sample._asdict() for sample in samples]

    @metrics_app.get("/")
    def index():
        return RedirectResponse("/metrics", status_code=301)

    return metrics_app


def main():
    """Validate configuration, connect to Docker and start serving"""
    logging_setup()

    try:
        config = Config.from_env(os.environ)
    except TemplateSyntaxError as err:
        logging.error(logf("Invalid label template", template=err.name, error=err))
        sys.exit(1)
    except ConfigError as err:
        logging.error(logf("Invalid configuration", error=err))
        sys.exit(1)

    try:
        runtime = DockerRuntime.from_env(timeout=config.docker_timeout)
    except docker.errors.DockerException as err:
        logging.error(logf("Cannot create docker client", error=err))
        sys.exit(1)

    collector = ContainerCollector(StatsFetcher(runtime), config.label_spec)

    logging.info(logf(
        "Started metrics exporter",
        address="http://%s:%d/metrics" % (config.host, config.port),
        custom_labels=len(config.label_spec)
    ))

    uvicorn.run(create_app(collector), host=config.host, port=config.port,
                log_level="debug" if config.verbose else "info")


if __name__ == "__main__":
    main()
