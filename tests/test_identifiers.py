"""Tests for identifier validation and placeholder binding."""

import pytest

from db_mirror.errors import InvalidIdentifierError, MirrorError
from db_mirror.schema.identifiers import (
    bind_not_in,
    bind_placeholders,
    qualified,
    validate_identifier,
)
from db_mirror.schema.models import TableRef


class TestValidateIdentifier:
    """Allow-list checks before identifiers are interpolated into SQL."""

    @pytest.mark.parametrize("name", ["SALES", "orders", "_TMP", "SYS$UMF", "A_B#1"])
    def test_accepts_plain_identifiers(self, name):
        assert validate_identifier(name) == name

    @pytest.mark.parametrize(
        "name",
        ["", "1ABC", "A-B", "A B", "A;DROP TABLE X", 'A"B', "A.B", "ORDERS\n"],
    )
    def test_rejects_unsafe_identifiers(self, name):
        with pytest.raises(InvalidIdentifierError):
            validate_identifier(name)

    def test_rejects_non_string(self):
        with pytest.raises(InvalidIdentifierError):
            validate_identifier(None)

    def test_error_is_value_error_and_mirror_error(self):
        with pytest.raises(ValueError):
            validate_identifier("bad name")
        with pytest.raises(MirrorError):
            validate_identifier("bad name")


class TestQualified:
    def test_schema_dot_table(self):
        assert qualified(TableRef(schema_name="SALES", name="ORDERS")) == "SALES.ORDERS"

    def test_invalid_part_rejected(self):
        with pytest.raises(InvalidIdentifierError):
            qualified(TableRef(schema_name="SALES", name="ORDERS; --"))


class TestBindPlaceholders:
    """Values are bound, never interpolated."""

    def test_ordered_placeholders(self):
        placeholders, params = bind_placeholders(["a", "b", "c"])
        assert placeholders == ":p0, :p1, :p2"
        assert params == {"p0": "a", "p1": "b", "p2": "c"}

    def test_custom_prefix(self):
        placeholders, params = bind_placeholders([1], prefix="x")
        assert placeholders == ":x0"
        assert params == {"x0": 1}

    def test_empty(self):
        assert bind_placeholders([]) == ("", {})

    def test_values_with_quotes_stay_in_params(self):
        placeholders, params = bind_placeholders(["O'BRIEN"])
        assert "O'BRIEN" not in placeholders
        assert params["p0"] == "O'BRIEN"


class TestBindNotIn:
    def test_sorted_values(self):
        clause, params = bind_not_in("USERNAME", {"SYSTEM", "SYS"})
        assert clause == "USERNAME NOT IN (:x0, :x1)"
        assert params == {"x0": "SYS", "x1": "SYSTEM"}

    def test_empty_values_give_empty_clause(self):
        assert bind_not_in("USERNAME", []) == ("", {})

    def test_column_validated(self):
        with pytest.raises(InvalidIdentifierError):
            bind_not_in("USERNAME OR 1=1", ["SYS"])
