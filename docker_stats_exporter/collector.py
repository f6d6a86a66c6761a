"""
Prometheus collector gathering the metrics of all containers on every
scrape. One worker thread is started per container, a failing container
only loses its own samples.
"""
import logging
import queue
from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor

from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily

from docker_stats_exporter.derive import derive_metrics
from docker_stats_exporter.labels import TemplateContext, container_name
from docker_stats_exporter.metrics import COUNTER, METRICS, metric_name
from docker_stats_exporter.utils import (MetadataUnavailable,
                                         StatsUnavailable, logf)

Sample = namedtuple("Sample", ["name", "kind", "labels", "value"])


class ContainerCollector:
    """Custom collector, registered once and read on every scrape"""
    def __init__(self, fetcher, label_spec):
        self.fetcher = fetcher
        self.label_spec = label_spec

    def _families(self):
        families = {}
        for metric in METRICS:
            name = metric_name(metric.suffix)
            family_cls = GaugeMetricFamily
            if metric.kind == COUNTER:
                family_cls = CounterMetricFamily

            families[name] = family_cls(
                name, metric.documentation,
                labels=self.label_spec.label_names
            )
        return families

    def describe(self):
        """Metric families without samples, avoids a scrape on register"""
        return list(self._families().values())

    def collect(self):
        """Called by the registry for every scrape"""
        families = self._families()
        for sample in self.scrape():
            families[sample.name].add_metric(
                list(sample.labels.values()), sample.value
            )

        yield from families.values()

    def scrape(self):
        """
        Collect samples of all containers. Raises EnumerationFailure
        if the containers can't be listed.
        """
        containers = self.fetcher.list_containers()
        if not containers:
            return []

        sink = queue.SimpleQueue()
        with ThreadPoolExecutor(max_workers=len(containers),
                                thread_name_prefix="collect") as pool:
            for container in containers:
                pool.submit(self.collect_container, container, sink)

        samples = []
        while not sink.empty():
            samples.append(sink.get())

        logging.debug(logf("Scrape completed",
                           containers=len(containers),
                           samples=len(samples)))
        return samples

    def collect_container(self, container, sink):
        """Worker for one container, errors are logged and not raised"""
        container_id = container["Id"]
        name = container_name(container)
        try:
            self._collect_container(container, sink)
        except MetadataUnavailable as err:
            logging.error(logf(
                "Cannot collect container",
                container_id=container_id,
                name=name,
                error=err
            ))
        # Workers never raise, their futures are not inspected
        # noqa # pylint: disable=broad-except
        except Exception as err:
            logging.exception(logf(
                "Unexpected error while collecting container",
                container_id=container_id,
                name=name,
                error=err
            ))

    def _collect_container(self, container, sink):
        container_id = container["Id"]
        stats_error = None
        try:
            metadata, stats = self.fetcher.fetch(container)
        except StatsUnavailable as err:
            metadata, stats, stats_error = err.metadata, None, err

        context = TemplateContext(container, metadata, stats)
        labels = dict(zip(self.label_spec.label_names,
                          self.label_spec.evaluate(context)))

        try:
            values = derive_metrics(stats)
        except (AttributeError, TypeError, ValueError) as err:
            stats_error = StatsUnavailable(
                container_id, "cannot derive metrics: %s" % err
            )
            values = derive_metrics(None)

        for value in values:
            sink.put(Sample(metric_name(value.suffix), value.kind,
                            labels, value.value))

        if stats_error is not None:
            logging.error(logf(
                "Cannot collect container stats, only info is exported",
                container_id=container_id,
                name=context.name,
                error=stats_error
            ))
