"""
Custom labels

Every environment variable LABEL_<name>=<template> adds a label <name>
to all exported metrics. Templates are Jinja2 expressions evaluated for
each container on every scrape, for example:

    LABEL_image='{{ container.Image }}'
    LABEL_project='{{ container.Labels["com.docker.compose.project"] }}'
    LABEL_health='{{ container_json.State.Health.Status }}'

Missing fields render as an empty string.
"""
import logging
import re

from jinja2 import ChainableUndefined, TemplateSyntaxError
from jinja2.sandbox import SandboxedEnvironment

from docker_stats_exporter.utils import ConfigError, LabelRenderError, logf

LABEL_ENV_PREFIX = "LABEL_"
NAME_LABEL = "name"

LABEL_NAME_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

_env = SandboxedEnvironment(undefined=ChainableUndefined, autoescape=False)


def container_name(container):
    """First container name without the leading slash"""
    names = container.get("Names") or []
    if not names:
        return container["Id"][:12]

    return names[0].lstrip("/")


# noqa # pylint: disable=too-few-public-methods
class TemplateContext:
    """Fields available to label templates"""
    __slots__ = ("id", "name", "state", "container", "container_json", "stats")

    def __init__(self, container, container_json, stats=None):
        self.id = container["Id"]
        self.name = container_name(container)
        self.state = container.get("State", "")
        self.container = container
        self.container_json = container_json
        self.stats = stats

    def template_vars(self):
        """Variables passed to the template"""
        return {
            "id": self.id,
            "name": self.name,
            "state": self.state,
            "container": self.container,
            "container_json": self.container_json,
            "stats": self.stats,
        }


def validate_label_name(label):
    """Raise ConfigError if label can't be used as Prometheus label"""
    if not LABEL_NAME_RE.match(label) or label.startswith("__"):
        raise ConfigError("invalid label name %r" % label)

    if label == NAME_LABEL:
        raise ConfigError("label %r is reserved" % NAME_LABEL)


class LabelSpec:
    """
    Ordered, read-only set of custom label templates. Built once at
    startup, jinja2.TemplateSyntaxError is raised for invalid templates.
    """
    def __init__(self, templates=None):
        templates = templates or {}
        compiled = []
        for label in sorted(templates):
            validate_label_name(label)
            try:
                template = _env.from_string(templates[label])
            except TemplateSyntaxError as err:
                raise TemplateSyntaxError(err.message, err.lineno,
                                          name=label) from err

            compiled.append((label, template))

        self._templates = tuple(compiled)
        self.label_names = (NAME_LABEL,) + tuple(
            label for label, _ in self._templates
        )

    @classmethod
    def from_env(cls, environ):
        """Collect LABEL_* variables"""
        templates = {}
        for key, value in environ.items():
            if key.startswith(LABEL_ENV_PREFIX):
                templates[key[len(LABEL_ENV_PREFIX):]] = value

        return cls(templates)

    def __len__(self):
        return len(self._templates)

    def render(self, label, template, context):
        """Render one label, raises LabelRenderError"""
        try:
            return template.render(context.template_vars())
        # Filters and user expressions can raise anything
        # noqa # pylint: disable=broad-except
        except Exception as err:
            raise LabelRenderError(context.id, label, err) from err

    def evaluate(self, context):
        """
        Label values in the order of label_names. A label that fails to
        render is logged and set to an empty string.
        """
        values = [context.name]
        for label, template in self._templates:
            try:
                values.append(self.render(label, template, context))
            except LabelRenderError as err:
                logging.warning(logf(
                    "Failed to render label, using empty value",
                    container_id=context.id,
                    name=context.name,
                    label=label,
                    error=err
                ))
                values.append("")

        return tuple(values)
