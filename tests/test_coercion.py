from __future__ import annotations

import math
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from bson import ObjectId

from docmapper.coercion import coerce, to_boolean, to_float, to_integer, to_string, to_time


@pytest.mark.parametrize("declared", [str, int, bool, float, datetime, ObjectId, dict, None])
def test_none_stays_none_for_every_type(declared):
    assert coerce(None, declared) is None


def test_string_coercion():
    assert to_string(1234) == "1234"
    assert to_string("John") == "John"
    assert to_string(b"caf\xc3\xa9") == "café"
    assert coerce(12.5, str) == "12.5"


def test_integer_coercion_from_strings_and_numbers():
    assert coerce("27", int) == 27
    assert coerce(" 42 ", int) == 42
    assert coerce(40, int) == 40
    assert coerce(27.9, int) == 27
    assert coerce(-3.5, int) == -3
    assert coerce("27.5", int) == 27
    assert coerce(Decimal("8"), int) == 8
    assert coerce(True, int) == 1


@pytest.mark.parametrize("raw", ["", "   ", "abc", "12abc", float("nan"), float("inf"), [1, 2]])
def test_integer_coercion_of_garbage_is_none(raw):
    assert to_integer(raw) is None


def test_signaling_nan_decimal_is_none():
    assert to_integer(Decimal("sNaN")) is None
    assert to_integer(Decimal("NaN")) is None
    assert to_float(Decimal("sNaN")) is None


def test_boolean_coercion():
    for raw in ("true", "TRUE", " yes ", "1", "on", "t", 1, True):
        assert to_boolean(raw) is True
    for raw in ("false", "No", "0", "off", "f", 0, False):
        assert to_boolean(raw) is False
    assert to_boolean("") is None
    assert to_boolean("maybe") is None
    assert to_boolean(2) is None


def test_float_coercion():
    assert coerce("1.5", float) == 1.5
    assert coerce(3, float) == 3.0
    assert isinstance(coerce(3, float), float)
    assert coerce(True, float) == 1.0
    assert to_float("") is None
    assert to_float("one point five") is None


def test_time_coercion():
    assert to_time("2009-05-10T12:30:00") == datetime(2009, 5, 10, 12, 30)
    assert to_time(date(2009, 5, 10)) == datetime(2009, 5, 10)
    aware = to_time("2009-05-10T12:30:00Z")
    assert aware is not None and aware.utcoffset() is not None
    assert aware == datetime(2009, 5, 10, 12, 30, tzinfo=timezone.utc)
    now = datetime.now()
    assert to_time(now) is now
    assert to_time("") is None
    assert to_time("not a date") is None


def test_identifier_coercion():
    oid = ObjectId()
    assert coerce(oid, ObjectId) == str(oid)
    assert len(coerce(oid, ObjectId)) == 24
    assert coerce(1, ObjectId) == 1
    assert coerce("custom-id", ObjectId) == "custom-id"


def test_unknown_types_pass_values_through():
    payload = {"nested": [1, 2]}
    assert coerce(payload, dict) is payload
    assert coerce("27", None) == "27"
    assert coerce(math.pi, object) == math.pi
