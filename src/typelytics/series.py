"""Series definitions and sampling selectors."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from typelytics.filters import FilterGroup, build_property_tree

PropertyMathType = Literal[
    "avg",
    "sum",
    "min",
    "max",
    "median",
    "p90",
    "p95",
    "p99",
]

CountMathType = Literal[
    "total",
    "dau",
    "weekly_active",
    "monthly_active",
    "unique_group",
    "unique_session",
    "min_count_per_actor",
    "max_count_per_actor",
    "avg_count_per_actor",
    "median_count_per_actor",
    "p90_count_per_actor",
    "p95_count_per_actor",
    "p99_count_per_actor",
]

Sampling = PropertyMathType | CountMathType

PROPERTY_MATH_TYPES: frozenset[str] = frozenset(
    {"avg", "sum", "min", "max", "median", "p90", "p95", "p99"}
)


def is_property_math(sampling: str) -> bool:
    """Whether the selector aggregates a numeric property of the event."""
    return sampling in PROPERTY_MATH_TYPES


class Series(BaseModel):
    """One requested metric.

    Attributes:
        name: Event name; must exist in the event catalog.
        label: Display label used as the column or slice name.
        where: Filter groups restricting which occurrences count.
        sampling: Aggregation applied to the event.
        math_property: Numeric property aggregated by statistical selectors.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    label: str | None = None
    where: tuple[FilterGroup, ...] = ()
    sampling: Sampling = "total"
    math_property: str | None = None

    @field_validator("where", mode="before")
    @classmethod
    def _wrap_single(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, (FilterGroup, dict)):
            return (value,)
        return value

    def property_names(self) -> frozenset[str]:
        """Every property this series references."""
        names = {p for group in self.where for p in group.property_names()}
        if self.math_property:
            names.add(self.math_property)
        return frozenset(names)

    def to_wire(self, order: int) -> dict[str, Any]:
        """Render as an entry of the ``events`` request parameter.

        Args:
            order: Position of the series in the builder chain.

        Returns:
            Event request entry; ``math_property`` only for statistical math.
        """
        entry: dict[str, Any] = {
            "id": self.name,
            "name": self.name,
            "order": order,
            "type": "events",
            "math": self.sampling,
        }
        if is_property_math(self.sampling):
            entry["math_property"] = self.math_property
        if self.where:
            entry["properties"] = build_property_tree(self.where)
        return entry
