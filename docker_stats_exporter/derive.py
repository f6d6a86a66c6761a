"""
Turns a Docker stats document into metric values.

The input is the JSON document returned by
``GET /containers/{id}/stats?stream=false&one-shot=true``, or None when
the container is not running (or its stats could not be fetched), in
which case only the info metric is produced.
"""
from collections import namedtuple

from docker_stats_exporter.metrics import COUNTER, GAUGE

NANOSECONDS_PER_SECOND = 1e9

# cgroup v1 reports the hierarchical total, cgroup v2 has no "total_" keys
CACHE_KEY_CGROUP_V1 = "total_inactive_file"
CACHE_KEY_CGROUP_V2 = "inactive_file"

DerivedValue = namedtuple("DerivedValue", ["suffix", "kind", "value"])


def ns_to_s(nanoseconds):
    """Nanoseconds to Seconds"""
    return nanoseconds / NANOSECONDS_PER_SECOND


def _section(data, key):
    # Docker sends null for sections it cannot fill (eg. blkio on some
    # cgroup v2 hosts)
    value = data.get(key)
    if value is None:
        return {}
    return value


def memory_usage_bytes(memory_stats):
    """
    Memory usage excluding the inactive page cache, same as
    what `docker stats` shows.
    """
    usage = memory_stats.get("usage", 0)
    breakdown = _section(memory_stats, "stats")

    cache_key = CACHE_KEY_CGROUP_V1
    if cache_key not in breakdown:
        cache_key = CACHE_KEY_CGROUP_V2

    if cache_key not in breakdown:
        return usage

    return max(0, usage - breakdown[cache_key])


def network_bytes(networks):
    """Received and Transmitted bytes summed across all interfaces"""
    rx_bytes = 0
    tx_bytes = 0
    for iface in networks.values():
        rx_bytes += iface.get("rx_bytes", 0)
        tx_bytes += iface.get("tx_bytes", 0)

    return rx_bytes, tx_bytes


def blkio_bytes(blkio_stats):
    """Read and Written bytes summed across all block devices"""
    read_bytes = 0
    write_bytes = 0
    for record in blkio_stats.get("io_service_bytes_recursive") or []:
        # Op is matched exactly, "Read"/"Total"/"Async" are not counted
        if record.get("op") == "read":
            read_bytes += record.get("value", 0)
        elif record.get("op") == "write":
            write_bytes += record.get("value", 0)

    return read_bytes, write_bytes


def derive_metrics(stats):
    """
    Returns the ordered list of DerivedValue for one container.
    No rates are computed, counters are reported as cumulative totals.
    """
    values = [DerivedValue("info", GAUGE, 1)]
    if stats is None:
        return values

    cpu_usage = _section(_section(stats, "cpu_stats"), "cpu_usage")
    memory_stats = _section(stats, "memory_stats")
    rx_bytes, tx_bytes = network_bytes(_section(stats, "networks"))
    read_bytes, write_bytes = blkio_bytes(_section(stats, "blkio_stats"))

    values.extend([
        DerivedValue("cpu_seconds_total", COUNTER,
                     ns_to_s(cpu_usage.get("total_usage", 0))),
        DerivedValue("memory_usage_bytes", GAUGE,
                     memory_usage_bytes(memory_stats)),
        DerivedValue("memory_limit_bytes", GAUGE,
                     memory_stats.get("limit", 0)),
        DerivedValue("network_rx_bytes_total", COUNTER, rx_bytes),
        DerivedValue("network_tx_bytes_total", COUNTER, tx_bytes),
        DerivedValue("blkio_read_bytes_total", COUNTER, read_bytes),
        DerivedValue("blkio_write_bytes_total", COUNTER, write_bytes),
        DerivedValue("pids", GAUGE,
                     _section(stats, "pids_stats").get("current", 0)),
    ])
    return values
