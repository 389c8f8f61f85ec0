"""Unit tests for the standard converters and date pattern translation."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Any

import pytest

from row_mapper import converters
from row_mapper.converters import basic_converter, nullable_converter, to_strptime
from row_mapper.core.exceptions import ConversionError
from row_mapper.core.row import DictRow

NO_ATTRS: dict[str, Any] = {}


class SpyRow(DictRow):
    """DictRow recording which typed getters were called."""

    def __init__(self, values: dict[str, Any]) -> None:
        super().__init__(values)
        self.calls: list[str] = []

    def get_string(self, label: str) -> str | None:
        self.calls.append("get_string")
        return super().get_string(label)

    def get_date(self, label: str) -> date | None:
        self.calls.append("get_date")
        return super().get_date(label)


class TestBasicConverters:
    def test_string(self) -> None:
        assert converters.STRING(DictRow({"a": "x"}), "a", NO_ATTRS) == "x"
        assert converters.STRING(DictRow({"a": None}), "a", NO_ATTRS) is None

    def test_object_returns_raw_value(self) -> None:
        value = object()
        assert converters.OBJECT(DictRow({"a": value}), "a", NO_ATTRS) is value

    def test_decimal(self) -> None:
        assert converters.DECIMAL(DictRow({"a": "10.50"}), "a", NO_ATTRS) == Decimal("10.50")
        assert converters.DECIMAL(DictRow({"a": None}), "a", NO_ATTRS) is None

    def test_custom_basic_converter(self) -> None:
        upper = basic_converter(lambda row, column: row.get_string(column).upper())
        assert upper(DictRow({"a": "abc"}), "a", NO_ATTRS) == "ABC"


class TestNullAwareConverters:
    @pytest.mark.parametrize(
        ("converter", "zero"),
        [(converters.INTEGER, 0), (converters.FLOAT, 0.0), (converters.BOOLEAN, False)],
    )
    def test_null_is_none_not_zero(self, converter: Any, zero: Any) -> None:
        assert converter(DictRow({"a": None}), "a", NO_ATTRS) is None

    @pytest.mark.parametrize(
        ("converter", "zero"),
        [(converters.INTEGER, 0), (converters.FLOAT, 0.0), (converters.BOOLEAN, False)],
    )
    def test_zero_is_kept(self, converter: Any, zero: Any) -> None:
        assert converter(DictRow({"a": zero}), "a", NO_ATTRS) == zero

    def test_integer_from_string(self) -> None:
        assert converters.INTEGER(DictRow({"a": "42"}), "a", NO_ATTRS) == 42

    def test_boolean_from_int(self) -> None:
        assert converters.BOOLEAN(DictRow({"a": 1}), "a", NO_ATTRS) is True

    def test_custom_nullable_converter(self) -> None:
        cents = nullable_converter(lambda row, column: row.get_int(column) * 100)
        assert cents(DictRow({"a": 3}), "a", NO_ATTRS) == 300
        assert cents(DictRow({"a": None}), "a", NO_ATTRS) is None

    def test_accessor_errors_propagate(self) -> None:
        with pytest.raises(ValueError):
            converters.INTEGER(DictRow({"a": "abc"}), "a", NO_ATTRS)
        with pytest.raises(KeyError):
            converters.INTEGER(DictRow({"a": 1}), "b", NO_ATTRS)


class TestTemporalConverters:
    def test_date_with_java_pattern(self) -> None:
        row = DictRow({"d": "15/10/2023"})
        result = converters.DATE(row, "d", {"format": "dd/MM/yyyy"})
        assert result == date(2023, 10, 15)

    def test_date_with_strptime_pattern(self) -> None:
        row = DictRow({"d": "15/10/2023"})
        assert converters.DATE(row, "d", {"format": "%d/%m/%Y"}) == date(2023, 10, 15)

    def test_format_reads_string(self) -> None:
        row = SpyRow({"d": "15/10/2023"})
        converters.DATE(row, "d", {"format": "dd/MM/yyyy"})
        assert row.calls == ["get_string"]

    def test_no_format_reads_native_value(self) -> None:
        row = SpyRow({"d": date(2023, 10, 15)})
        assert converters.DATE(row, "d", NO_ATTRS) == date(2023, 10, 15)
        assert row.calls == ["get_date"]

    def test_date_native_from_datetime(self) -> None:
        row = DictRow({"d": datetime(2023, 10, 15, 9, 30)})
        assert converters.DATE(row, "d", NO_ATTRS) == date(2023, 10, 15)

    def test_null_with_and_without_format(self) -> None:
        row = DictRow({"d": None})
        assert converters.DATE(row, "d", NO_ATTRS) is None
        assert converters.DATE(row, "d", {"format": "dd/MM/yyyy"}) is None

    def test_malformed_value_raises_conversion_error(self) -> None:
        row = DictRow({"d": "2023-10-15"})
        with pytest.raises(ConversionError) as exc_info:
            converters.DATE(row, "d", {"format": "dd/MM/yyyy"})
        assert exc_info.value.column_name == "d"
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_unsupported_pattern_raises_conversion_error(self) -> None:
        row = DictRow({"d": "2023"})
        with pytest.raises(ConversionError):
            converters.DATE(row, "d", {"format": "QQQ"})

    def test_datetime_with_pattern(self) -> None:
        row = DictRow({"t": "2023-10-15 13:45:00"})
        result = converters.DATETIME(row, "t", {"format": "yyyy-MM-dd HH:mm:ss"})
        assert result == datetime(2023, 10, 15, 13, 45)

    def test_datetime_native_from_iso_string(self) -> None:
        row = DictRow({"t": "2023-10-15T13:45:00"})
        assert converters.DATETIME(row, "t", NO_ATTRS) == datetime(2023, 10, 15, 13, 45)

    def test_time_with_pattern(self) -> None:
        row = DictRow({"t": "08:30"})
        assert converters.TIME(row, "t", {"format": "HH:mm"}) == time(8, 30)

    def test_aware_parsed_value_normalised_to_utc(self) -> None:
        row = DictRow({"t": "2023-10-15T12:00:00+02:00"})
        result = converters.AWARE_DATETIME(row, "t", {"format": "yyyy-MM-dd'T'HH:mm:ssXXX"})
        assert result == datetime(2023, 10, 15, 10, 0, tzinfo=timezone.utc)
        assert result.tzinfo == timezone.utc

    def test_aware_parse_without_offset_fails(self) -> None:
        row = DictRow({"t": "2023-10-15 12:00:00"})
        with pytest.raises(ConversionError):
            converters.AWARE_DATETIME(row, "t", {"format": "yyyy-MM-dd HH:mm:ss"})

    def test_aware_native_naive_taken_as_utc(self) -> None:
        row = DictRow({"t": datetime(2023, 10, 15, 12, 0)})
        result = converters.AWARE_DATETIME(row, "t", NO_ATTRS)
        assert result == datetime(2023, 10, 15, 12, 0, tzinfo=timezone.utc)

    def test_aware_native_offset_converted(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        row = DictRow({"t": datetime(2023, 10, 15, 12, 0, tzinfo=plus_two)})
        result = converters.AWARE_DATETIME(row, "t", NO_ATTRS)
        assert result.tzinfo == timezone.utc
        assert result.hour == 10


class TestPatternTranslation:
    @pytest.mark.parametrize(
        ("pattern", "expected"),
        [
            ("dd/MM/yyyy", "%d/%m/%Y"),
            ("yy-M-d", "%y-%m-%d"),
            ("yyyy-MM-dd'T'HH:mm:ss.SSSXXX", "%Y-%m-%dT%H:%M:%S.%f%z"),
            ("hh:mm a", "%I:%M %p"),
            ("dd MMM yyyy", "%d %b %Y"),
            ("EEEE, MMMM d", "%A, %B %d"),
            ("HH 'h' mm", "%H h %M"),
            ("HH''mm", "%H'%M"),
            ("%Y-%m-%d", "%Y-%m-%d"),
        ],
    )
    def test_translation(self, pattern: str, expected: str) -> None:
        assert to_strptime(pattern) == expected

    def test_unsupported_letter(self) -> None:
        with pytest.raises(ValueError, match="Unsupported"):
            to_strptime("yyyy QQ")

    def test_unterminated_quote(self) -> None:
        with pytest.raises(ValueError, match="Unterminated"):
            to_strptime("yyyy 'at")
