"""Event catalog: the universe of events and properties a query may reference."""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from typelytics.errors import ConfigurationError, UnknownEventError

logger = structlog.get_logger()

PropertyType = Literal["DateTime", "String", "Numeric", "Boolean"] | None


class EventProperty(BaseModel):
    """A typed property carried by an event.

    Attributes:
        name: Property key as sent by the instrumentation (e.g. "$browser").
        type: Value type reported by PostHog, or None when unknown.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    type: PropertyType = None


class EventDescriptor(BaseModel):
    """An event name and the ordered list of properties it declares."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    properties: tuple[EventProperty, ...] = ()

    def property_names(self) -> frozenset[str]:
        """Return the set of declared property names."""
        return frozenset(p.name for p in self.properties)

    def has_property(self, name: str) -> bool:
        return name in self.property_names()


class EventCatalog(BaseModel):
    """Immutable mapping from event name to its descriptor.

    The catalog is supplied once when the client is constructed and bounds
    which series names and filter properties a builder chain accepts.
    """

    model_config = ConfigDict(frozen=True)

    events: dict[str, EventDescriptor] = Field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EventCatalog":
        """Build a catalog from a plain ``{event_name: descriptor}`` mapping.

        Descriptors may omit ``name``; the mapping key is used instead.

        Args:
            data: Mapping of event names to descriptor dicts or models.

        Returns:
            Validated catalog.
        """
        events: dict[str, EventDescriptor] = {}
        for key, raw in data.items():
            if isinstance(raw, EventDescriptor):
                events[key] = raw
                continue
            payload = dict(raw or {})
            payload.setdefault("name", key)
            events[key] = EventDescriptor.model_validate(payload)
        return cls(events=events)

    @classmethod
    def from_file(cls, path: Path) -> "EventCatalog":
        """Load a catalog from a YAML (or JSON) document.

        The document is either the event mapping itself or a mapping with a
        top-level ``events`` key holding it.

        Args:
            path: Path to the catalog file.

        Returns:
            Validated catalog.

        Raises:
            ConfigurationError: If the file cannot be read or is invalid.
        """
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(
                f"Failed to read event catalog: {path}", "events_file"
            ) from e

        try:
            data = yaml.safe_load(raw) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in event catalog: {path}", "events_file"
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Event catalog must be a mapping: {path}", "events_file"
            )
        if isinstance(data.get("events"), dict):
            data = data["events"]

        try:
            catalog = cls.from_mapping(data)
        except (ValidationError, TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid event catalog: {path}", "events_file"
            ) from e

        logger.info("event_catalog_loaded", path=str(path), events=len(catalog))
        return catalog

    def __contains__(self, name: object) -> bool:
        return name in self.events

    def __len__(self) -> int:
        return len(self.events)

    def get(self, name: str) -> EventDescriptor:
        """Look up an event descriptor.

        Args:
            name: Event name.

        Returns:
            The descriptor registered under ``name``.

        Raises:
            UnknownEventError: If the event is not in the catalog.
        """
        try:
            return self.events[name]
        except KeyError:
            raise UnknownEventError(
                f"Event '{name}' is not defined in the event catalog", event=name
            ) from None

    def names(self) -> list[str]:
        """Return the event names in declaration order."""
        return list(self.events)

    def all_property_names(self) -> frozenset[str]:
        """Union of the property names declared by every event."""
        names: set[str] = set()
        for descriptor in self.events.values():
            names.update(descriptor.property_names())
        return frozenset(names)
