"""
Reads container metadata and resource usage from the Docker daemon
"""
import logging
from contextlib import contextmanager

import docker
import requests
from docker.utils import version_lt

from docker_stats_exporter.utils import (EnumerationFailure,
                                         MetadataUnavailable,
                                         StatsUnavailable, logf)

STATE_RUNNING = "running"
ONE_SHOT_MIN_VERSION = "1.41"

DOCKER_ERRORS = (docker.errors.DockerException,
                 requests.exceptions.RequestException)


class DockerRuntime:
    """Container runtime queries on top of the Docker SDK APIClient"""
    def __init__(self, api):
        self.api = api

    @classmethod
    def from_env(cls, timeout):
        """
        Connect using DOCKER_HOST, DOCKER_TLS_VERIFY and DOCKER_CERT_PATH,
        negotiating the API version with the daemon
        """
        client = docker.from_env(version="auto", timeout=timeout)
        return cls(client.api)

    def list_containers(self):
        """All containers, including stopped ones"""
        return self.api.containers(all=True)

    def inspect_container(self, container_id):
        """Full container metadata"""
        return self.api.inspect_container(container_id)

    @contextmanager
    def stats_stream(self, container_id):
        """
        Opens a single stats sample response. The response is closed
        when the block exits, including on errors.
        """
        params = {"stream": False}
        # one-shot skips the precpu sample, daemons older than 1.41
        # don't know it
        if not version_lt(self.api.api_version, ONE_SHOT_MIN_VERSION):
            params["one-shot"] = True

        # noqa # pylint: disable=protected-access
        response = self.api._get(
            self.api._url("/containers/{0}/stats", container_id),
            params=params,
            stream=True
        )
        try:
            yield response
        finally:
            response.close()


class StatsFetcher:
    """Fetches metadata and one usage snapshot per container"""
    def __init__(self, runtime):
        self.runtime = runtime

    def list_containers(self):
        """List containers or raise EnumerationFailure"""
        try:
            return self.runtime.list_containers()
        except DOCKER_ERRORS as err:
            raise EnumerationFailure("cannot list containers: %s" % err) from err

    def inspect(self, container_id):
        """Inspected metadata or raise MetadataUnavailable"""
        try:
            return self.runtime.inspect_container(container_id)
        except DOCKER_ERRORS as err:
            raise MetadataUnavailable(container_id, "cannot inspect: %s" % err) from err

    def snapshot(self, container_id):
        """Decoded stats document or raise StatsUnavailable"""
        try:
            with self.runtime.stats_stream(container_id) as response:
                response.raise_for_status()
                try:
                    stats = response.json()
                except ValueError as err:
                    raise StatsUnavailable(
                        container_id, "cannot decode stats: %s" % err
                    ) from err
        except DOCKER_ERRORS as err:
            raise StatsUnavailable(container_id, "cannot get stats: %s" % err) from err

        if not isinstance(stats, dict):
            raise StatsUnavailable(container_id, "unexpected stats document")

        logging.debug(logf("Fetched stats", container_id=container_id))
        return stats

    def fetch(self, container):
        """
        Returns (metadata, stats), stats only for running containers and
        None otherwise. A StatsUnavailable raised here carries the
        metadata that was already fetched.
        """
        container_id = container["Id"]
        metadata = self.inspect(container_id)
        if container.get("State") != STATE_RUNNING:
            return metadata, None

        try:
            return metadata, self.snapshot(container_id)
        except StatsUnavailable as err:
            err.metadata = metadata
            raise
