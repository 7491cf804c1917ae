"""Property filters, filter groups and their wire representation."""

from collections.abc import Iterable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

FilterLogicalOperator = Literal["AND", "OR"]
MatchMode = Literal["all", "any"]

PropertyOperator = Literal[
    "exact",
    "is_not",
    "icontains",
    "not_icontains",
    "regex",
    "not_regex",
    "gt",
    "gte",
    "lt",
    "lte",
    "is_set",
    "is_not_set",
    "is_date_exact",
    "is_date_before",
    "is_date_after",
    "between",
    "not_between",
    "min",
    "max",
]

PropertyFilterValue = str | int | float | list[str | int | float] | None


class PropertyFilter(BaseModel):
    """A single condition on an event property.

    Attributes:
        property: Property key; must be declared in the event catalog.
        compare: Comparison operator.
        value: Operand; lists are used by range and membership operators.
    """

    model_config = ConfigDict(frozen=True)

    property: str
    compare: PropertyOperator
    value: PropertyFilterValue = None

    def to_wire(self) -> dict[str, Any]:
        """Render as an event property leaf of the filter tree."""
        return {
            "key": self.property,
            "operator": self.compare,
            "value": self.value,
            "type": "event",
        }


class FilterGroup(BaseModel):
    """Filters combined with ALL (AND) or ANY (OR) semantics."""

    model_config = ConfigDict(frozen=True)

    match: MatchMode = "all"
    filters: tuple[PropertyFilter, ...] = Field(min_length=1)

    @field_validator("filters", mode="before")
    @classmethod
    def _wrap_single(cls, value: Any) -> Any:
        if isinstance(value, (PropertyFilter, dict)):
            return (value,)
        return value

    @property
    def operator(self) -> FilterLogicalOperator:
        return "AND" if self.match == "all" else "OR"

    def property_names(self) -> frozenset[str]:
        return frozenset(f.property for f in self.filters)

    def to_wire(self) -> dict[str, Any]:
        """Render as a nested AND/OR node of the filter tree."""
        return {
            "type": self.operator,
            "values": [f.to_wire() for f in self.filters],
        }


def build_property_tree(
    groups: Iterable[FilterGroup],
    operator: FilterLogicalOperator = "AND",
) -> dict[str, Any]:
    """Combine filter groups under a top-level logical operator.

    Args:
        groups: Filter groups in the order they were added.
        operator: Operator joining the groups.

    Returns:
        Two-level filter tree in the shape the trend endpoint expects.
    """
    return {
        "type": operator,
        "values": [group.to_wire() for group in groups],
    }
