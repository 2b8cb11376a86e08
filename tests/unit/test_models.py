from __future__ import annotations

import json

from fluentcheck.validators.models import ValidationMap


def test_record_appends_in_order() -> None:
    report = ValidationMap()
    assert report.is_empty()

    report.record("Order.code", "may not be shorter than 3")
    report.record("Order.code", "may not be longer or shorter than 5")
    report.record("Order.code", "may not be shorter than 3")

    assert not report.is_empty()
    assert report["Order.code"] == [
        "may not be shorter than 3",
        "may not be longer or shorter than 5",
        "may not be shorter than 3",
    ]
    assert len(report) == 1
    assert "Order.code" in report
    assert "Order.amount" not in report
    assert report.get("Order.amount") is None


def test_merge_concatenates_on_collision() -> None:
    report = ValidationMap({"Order.code": ["first"]})
    other = ValidationMap({"Order.code": ["second"], "Order.amount": ["may not be null"]})

    report.merge(other)

    assert report.as_dict() == {
        "Order.code": ["first", "second"],
        "Order.amount": ["may not be null"],
    }
    assert other.as_dict() == {"Order.code": ["second"], "Order.amount": ["may not be null"]}


def test_copy_is_independent() -> None:
    report = ValidationMap({"Order.code": ["first"]})
    snapshot = report.copy()

    report.record("Order.code", "second")
    snapshot.record("Order.amount", "may not be null")

    assert report.as_dict() == {"Order.code": ["first", "second"]}
    assert snapshot.as_dict() == {"Order.code": ["first"], "Order.amount": ["may not be null"]}


def test_render_sorts_keys() -> None:
    report = ValidationMap()
    report.record("b.field", "x")
    report.record("a.field", "y")

    rendered = report.render()
    assert list(json.loads(rendered)) == ["a.field", "b.field"]
    assert rendered.index("a.field") < rendered.index("b.field")
    assert str(report) == report.render()
    assert report.render() == ValidationMap({"a.field": ["y"], "b.field": ["x"]}).render()


def test_render_parse_round_trip() -> None:
    report = ValidationMap()
    report.record("Order.lines.null", "may not be null")
    report.record("Order.lines.null", "may not be empty")
    report.record("Order.amount", "may not be null")

    parsed = ValidationMap.parse(str(report))

    assert set(parsed.keys()) == set(report.keys())
    assert parsed.as_dict() == report.as_dict()


def test_iteration_and_items() -> None:
    report = ValidationMap({"x": ["1"], "y": ["2"]})
    assert sorted(report) == ["x", "y"]
    assert dict(report.items()) == {"x": ["1"], "y": ["2"]}
    assert repr(report) == 'ValidationMap({"x": ["1"], "y": ["2"]})'
