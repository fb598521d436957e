"""Tests for cloning, safe JSON rendering and timestamps."""

import json
import uuid
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from bson import ObjectId

from request_snapshot.utils.serialization import (
    CIRCULAR_VALUE,
    clone,
    epoch_to_iso_string,
    json_round_trip,
    safe_stringify,
    to_iso_string,
)


class TestSafeStringify:
    """Tests for safe_stringify function."""

    def test_compact_output(self):
        """Test that JSON is rendered without whitespace."""
        assert safe_stringify({"a": 1, "b": [1, 2]}) == '{"a":1,"b":[1,2]}'

    def test_unicode_is_kept(self):
        """Test that non-ASCII characters are not escaped."""
        assert safe_stringify({"name": "Zoë"}) == '{"name":"Zoë"}'

    def test_circular_reference(self):
        """Test that cycles are replaced instead of raising."""
        value = {"name": "loop"}
        value["self"] = value

        assert json.loads(safe_stringify(value)) == {"name": "loop", "self": CIRCULAR_VALUE}

    def test_shared_reference_is_not_circular(self):
        """Test that a value referenced twice is rendered twice."""
        shared = [1]
        assert safe_stringify({"a": shared, "b": shared}) == '{"a":[1],"b":[1]}'

    def test_special_values(self):
        """Test that common non-JSON types get a string form."""
        object_id = ObjectId("542f9cabed89afee4aaf2e61")
        user_id = uuid.UUID("c51c80c2-66a1-442a-91e2-4f55b4256a72")
        value = {
            "when": datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
            "day": date(2020, 1, 2),
            "oid": object_id,
            "uid": user_id,
            "amount": Decimal("1.50"),
            "tags": {"x"},
            "raw": b"abc",
        }

        assert json.loads(safe_stringify(value)) == {
            "when": "2020-01-02T03:04:05.000Z",
            "day": "2020-01-02",
            "oid": "542f9cabed89afee4aaf2e61",
            "uid": "c51c80c2-66a1-442a-91e2-4f55b4256a72",
            "amount": "1.50",
            "tags": ["x"],
            "raw": "abc",
        }

    def test_unknown_objects_use_repr(self):
        """Test that arbitrary objects never make rendering fail."""

        class Opaque:
            def __repr__(self):
                return "<Opaque>"

        assert safe_stringify({"o": Opaque()}) == '{"o":"<Opaque>"}'

    def test_non_string_keys(self):
        """Test that keys JSON cannot hold are stringified."""
        assert json.loads(safe_stringify({(1, 2): "pair", 3: "three"})) == {
            "(1, 2)": "pair",
            "3": "three",
        }


class TestJsonRoundTrip:
    """Tests for json_round_trip function."""

    def test_round_trip_produces_plain_data(self):
        """Test that the result only holds JSON types."""
        value = {"when": datetime(2020, 1, 1, tzinfo=timezone.utc), "items": (1, 2)}
        assert json_round_trip(value) == {"when": "2020-01-01T00:00:00.000Z", "items": [1, 2]}


class TestClone:
    """Tests for clone function."""

    def test_clone_is_deep(self):
        """Test that nested containers are copied."""
        value = {"a": {"b": [1]}}
        copied = clone(value)
        copied["a"]["b"].append(2)
        assert value == {"a": {"b": [1]}}


class TestIsoStrings:
    """Tests for timestamp rendering."""

    def test_milliseconds_and_suffix(self):
        """Test millisecond precision with a Z suffix."""
        moment = datetime(2020, 1, 2, 3, 4, 5, 678900, tzinfo=timezone.utc)
        assert to_iso_string(moment) == "2020-01-02T03:04:05.678Z"

    def test_offset_is_converted_to_utc(self):
        """Test that aware datetimes are shifted to UTC."""
        moment = datetime(2020, 1, 1, 12, tzinfo=timezone(timedelta(hours=2)))
        assert to_iso_string(moment) == "2020-01-01T10:00:00.000Z"

    def test_naive_is_treated_as_utc(self):
        """Test that naive datetimes are rendered as-is."""
        assert to_iso_string(datetime(2020, 1, 1, 12)) == "2020-01-01T12:00:00.000Z"

    def test_epoch_seconds(self):
        """Test rendering of epoch seconds."""
        assert epoch_to_iso_string(0) == "1970-01-01T00:00:00.000Z"
        assert epoch_to_iso_string(1.5) == "1970-01-01T00:00:01.500Z"
