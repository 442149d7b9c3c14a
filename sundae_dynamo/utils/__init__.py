"""Converters and expression helpers for the receipts table."""

from .date_converter import format_purchase_date, parse_purchase_date
from .expressions import (
    And,
    Attr,
    Between,
    Bind,
    Compare,
    RenderedExpression,
    render_condition,
)
from .sundae_converter import decode_sundaes, encode_sundaes

__all__ = [
    "And",
    "Attr",
    "Between",
    "Bind",
    "Compare",
    "RenderedExpression",
    "decode_sundaes",
    "encode_sundaes",
    "format_purchase_date",
    "parse_purchase_date",
    "render_condition",
]
