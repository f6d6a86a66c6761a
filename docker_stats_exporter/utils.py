"""Utility functions"""

import logging
import os
import sys


class ExporterError(Exception):
    """Base class for exporter errors"""


class ConfigError(ExporterError):
    """Invalid startup configuration"""


class EnumerationFailure(ExporterError):
    """Unable to list containers, the whole scrape fails"""


class ContainerError(ExporterError):
    """Failure scoped to a single container"""
    def __init__(self, container_id, msg):
        self.container_id = container_id
        super().__init__("%s: %s" % (container_id, msg))


class MetadataUnavailable(ContainerError):
    """Container inspect failed"""


class StatsUnavailable(ContainerError):
    """Stats request or its decoding failed"""
    def __init__(self, container_id, msg, metadata=None):
        self.metadata = metadata
        super().__init__(container_id, msg)


class LabelRenderError(ContainerError):
    """Custom label template failed to render"""
    def __init__(self, container_id, label, err):
        self.label = label
        super().__init__(container_id,
                         "cannot render label %s: %s" % (label, err))


def logf(msg, **kwargs):
    """Formats message for Logging"""
    if kwargs:
        msg += "\t"

    for msg_key, msg_value in kwargs.items():
        msg += " %s=%s" % (msg_key, msg_value)

    return msg


def logging_setup(verbose=None):
    """Logging Setup"""
    if verbose is None:
        verbose = os.environ.get("VERBOSE", "no") == "yes"

    level = logging.DEBUG if verbose else logging.INFO
    root = logging.getLogger()
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    formatter = logging.Formatter("[%(asctime)s] %(levelname)s "
                                  "[%(module)s - %(lineno)s:%(funcName)s] "
                                  "- %(message)s")
    handler.setFormatter(formatter)
    root.addHandler(handler)
