from decimal import Decimal

import pytest

from sundae_dynamo.utils.expressions import (
    And,
    Attr,
    Between,
    Bind,
    Compare,
    render_condition,
    to_attribute_value,
)


@pytest.mark.unit
def test_between_builds_tree():
    condition = Attr("purchaseDate").between("a", "b")
    assert condition == Between(Attr("purchaseDate"), "a", "b")


@pytest.mark.unit
def test_render_between_with_bound_placeholders():
    rendered = render_condition(
        Attr("purchaseDate").between(
            Bind(":startDate", "2024-01-01T00:00:00.000000Z"),
            Bind(":endDate", "2024-01-31T23:59:59.999999Z"),
        )
    )
    assert rendered.expression == (
        "#purchaseDate BETWEEN :startDate AND :endDate"
    )
    assert rendered.names == {"#purchaseDate": "purchaseDate"}
    assert rendered.values == {
        ":startDate": {"S": "2024-01-01T00:00:00.000000Z"},
        ":endDate": {"S": "2024-01-31T23:59:59.999999Z"},
    }


@pytest.mark.unit
def test_render_comparison_generates_placeholders():
    rendered = render_condition(Attr("salesTotal").gte(Decimal("5.00")))
    assert rendered.expression == "#salesTotal >= :v0"
    assert rendered.values == {":v0": {"N": "5.00"}}


@pytest.mark.unit
def test_render_and_reuses_attribute_names():
    condition = Attr("customerId").eq("customer-1") & Attr("salesTotal").lt(3)
    condition = condition & Attr("customerId").eq("customer-2")
    assert isinstance(condition, And)
    assert len(condition.conditions) == 3

    rendered = render_condition(condition)
    assert rendered.expression == (
        "(#customerId = :v0) AND (#salesTotal < :v1) AND (#customerId = :v2)"
    )
    assert rendered.names == {
        "#customerId": "customerId",
        "#salesTotal": "salesTotal",
    }
    assert rendered.values[":v2"] == {"S": "customer-2"}


@pytest.mark.unit
def test_literals_never_appear_in_expression():
    hostile = "x' OR customerId <> '"
    rendered = render_condition(Attr("customerId").eq(hostile))
    assert hostile not in rendered.expression
    assert rendered.values == {":v0": {"S": hostile}}


@pytest.mark.unit
def test_attribute_names_are_sanitized():
    rendered = render_condition(Attr("sales-total").lte(1))
    assert rendered.expression == "#sales_total <= :v0"
    assert rendered.names == {"#sales_total": "sales-total"}


@pytest.mark.unit
def test_as_filter():
    rendered = render_condition(Attr("customerId").eq("customer-1"))
    assert rendered.as_filter() == {
        "FilterExpression": "#customerId = :v0",
        "ExpressionAttributeNames": {"#customerId": "customerId"},
        "ExpressionAttributeValues": {":v0": {"S": "customer-1"}},
    }


@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [
        ("text", {"S": "text"}),
        (True, {"BOOL": True}),
        (12, {"N": "12"}),
        (Decimal("1.50"), {"N": "1.50"}),
        ({"S": "typed"}, {"S": "typed"}),
    ],
)
def test_to_attribute_value(value, expected):
    assert to_attribute_value(value) == expected


@pytest.mark.unit
def test_to_attribute_value_rejects_float():
    with pytest.raises(ValueError, match="Unsupported filter value type"):
        to_attribute_value(1.5)


@pytest.mark.unit
def test_invalid_trees():
    with pytest.raises(ValueError, match="operator must be one of"):
        Compare(Attr("a"), "LIKE", "x")
    with pytest.raises(ValueError, match="at least two conditions"):
        And((Attr("a").eq(1),))
    with pytest.raises(ValueError, match="placeholder names"):
        Bind("startDate", "x")
    with pytest.raises(ValueError, match="bound twice"):
        render_condition(Attr("a").between(Bind(":x", 1), Bind(":x", 2)))
