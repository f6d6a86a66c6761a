"""Metrics exported for every container"""
from collections import namedtuple

METRIC_PREFIX = "docker_container_"

GAUGE = "gauge"
COUNTER = "counter"

MetricDef = namedtuple("MetricDef", ["suffix", "kind", "documentation"])

# Emission order
METRICS = (
    MetricDef("info", GAUGE, "Docker Container Info"),
    MetricDef("cpu_seconds_total", COUNTER, "Docker Container CPU Time in Seconds"),
    MetricDef("memory_usage_bytes", GAUGE, "Docker Container Memory Usage in Bytes, excluding inactive page cache"),
    MetricDef("memory_limit_bytes", GAUGE, "Docker Container Memory Limit in Bytes"),
    MetricDef("network_rx_bytes_total", COUNTER, "Docker Container Network Received Bytes"),
    MetricDef("network_tx_bytes_total", COUNTER, "Docker Container Network Transmitted Bytes"),
    MetricDef("blkio_read_bytes_total", COUNTER, "Docker Container Block I/O Read Bytes"),
    MetricDef("blkio_write_bytes_total", COUNTER, "Docker Container Block I/O Written Bytes"),
    MetricDef("pids", GAUGE, "Docker Container Number Of Processes And Threads"),
)


def metric_name(suffix):
    """Full exposition name of a metric"""
    return METRIC_PREFIX + suffix
