"""
A small typed builder for DynamoDB filter expressions.

Conditions are built as a tree and only rendered to DynamoDB's expression
syntax when a request is made. Attribute names are always referenced through
``#name`` placeholders and literal values through ``:value`` placeholders,
so no literal ever appears inside the expression string::

    condition = Attr("purchaseDate").between(
        Bind(":startDate", "2024-01-01T00:00:00.000000Z"),
        Bind(":endDate", "2024-01-31T23:59:59.999999Z"),
    )
    rendered = render_condition(condition)
    rendered.expression  # '#purchaseDate BETWEEN :startDate AND :endDate'
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Tuple, Union

_COMPARISON_OPERATORS = ("=", "<>", "<", "<=", ">", ">=")
_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_]")


def to_attribute_value(value: Any) -> Dict[str, Any]:
    """
    Convert a Python literal to a typed DynamoDB attribute value.

    Args:
        value: A str, bool, int or Decimal. An already typed attribute value
            (e.g. ``{"S": "x"}``) is passed through unchanged.

    Returns:
        A DynamoDB value in the format {"S": "value"} or {"N": "123"}

    Raises:
        ValueError: For floats and other unsupported types.
    """
    if isinstance(value, dict) and len(value) == 1:
        return value
    if isinstance(value, str):
        return {"S": value}
    # Check bool before int since bool is a subclass of int in Python
    if isinstance(value, bool):
        return {"BOOL": value}
    if isinstance(value, (int, Decimal)):
        return {"N": str(value)}
    raise ValueError(
        f"Unsupported filter value type: {type(value).__name__}"
    )


@dataclass(frozen=True)
class Bind:
    """A literal value bound to an explicit ``:placeholder`` name."""

    name: str
    value: Any

    def __post_init__(self) -> None:
        if not self.name.startswith(":") or len(self.name) < 2:
            raise ValueError("placeholder names must look like ':name'")


class Condition:
    """Base class for nodes of a filter expression tree."""

    def __and__(self, other: "Condition") -> "And":
        return And((self, other))


@dataclass(frozen=True)
class Attr:
    """Reference to an item attribute by name."""

    name: str

    def between(self, low: Any, high: Any) -> "Between":
        """Closed range: both ``low`` and ``high`` match."""
        return Between(self, low, high)

    def eq(self, value: Any) -> "Compare":
        return Compare(self, "=", value)

    def lt(self, value: Any) -> "Compare":
        return Compare(self, "<", value)

    def lte(self, value: Any) -> "Compare":
        return Compare(self, "<=", value)

    def gt(self, value: Any) -> "Compare":
        return Compare(self, ">", value)

    def gte(self, value: Any) -> "Compare":
        return Compare(self, ">=", value)


@dataclass(frozen=True)
class Compare(Condition):
    attr: Attr
    operator: str
    value: Any

    def __post_init__(self) -> None:
        if self.operator not in _COMPARISON_OPERATORS:
            raise ValueError(
                f"operator must be one of: {', '.join(_COMPARISON_OPERATORS)}"
            )


@dataclass(frozen=True)
class Between(Condition):
    attr: Attr
    low: Any
    high: Any


@dataclass(frozen=True)
class And(Condition):
    conditions: Tuple[Condition, ...]

    def __post_init__(self) -> None:
        if len(self.conditions) < 2:
            raise ValueError("And needs at least two conditions")

    def __and__(self, other: Condition) -> "And":
        return And(self.conditions + (other,))


@dataclass
class RenderedExpression:
    """A condition rendered to DynamoDB request parameters."""

    expression: str
    names: Dict[str, str] = field(default_factory=dict)
    values: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def as_filter(self) -> Dict[str, Any]:
        """Returns the keyword arguments for a ``scan`` or ``query`` call."""
        return {
            "FilterExpression": self.expression,
            "ExpressionAttributeNames": self.names,
            "ExpressionAttributeValues": self.values,
        }


class _Renderer:
    def __init__(self) -> None:
        self.names: Dict[str, str] = {}
        self.values: Dict[str, Dict[str, Any]] = {}
        self._counter = 0

    def name(self, attr: Attr) -> str:
        placeholder = "#" + _UNSAFE_NAME_CHARS.sub("_", attr.name)
        existing = self.names.get(placeholder)
        if existing is not None and existing != attr.name:
            placeholder = f"{placeholder}_{len(self.names)}"
        self.names[placeholder] = attr.name
        return placeholder

    def value(self, value: Union[Bind, Any]) -> str:
        if isinstance(value, Bind):
            placeholder, literal = value.name, value.value
        else:
            placeholder, literal = f":v{self._counter}", value
            self._counter += 1
        if placeholder in self.values:
            raise ValueError(f"placeholder {placeholder} is bound twice")
        self.values[placeholder] = to_attribute_value(literal)
        return placeholder

    def render(self, condition: Condition) -> str:
        if isinstance(condition, Between):
            return (
                f"{self.name(condition.attr)} BETWEEN "
                f"{self.value(condition.low)} AND {self.value(condition.high)}"
            )
        if isinstance(condition, Compare):
            return (
                f"{self.name(condition.attr)} {condition.operator} "
                f"{self.value(condition.value)}"
            )
        if isinstance(condition, And):
            return " AND ".join(
                f"({self.render(part)})" for part in condition.conditions
            )
        raise ValueError(
            f"Unsupported condition type: {type(condition).__name__}"
        )


def render_condition(condition: Condition) -> RenderedExpression:
    """Renders a condition tree to an expression and its placeholders."""
    renderer = _Renderer()
    expression = renderer.render(condition)
    return RenderedExpression(
        expression=expression,
        names=renderer.names,
        values=renderer.values,
    )
