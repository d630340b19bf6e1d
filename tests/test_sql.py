"""
Tests for the SQL fragment builders in app.core.sql.
"""

import pytest

from app.core.exceptions import InvalidInputError
from app.core.sql import (
    COMPANY_FILTERS,
    JOB_FILTERS,
    ensure_ordered_range,
    sql_for_partial_update,
    sql_for_query_filter,
    sql_where_clause,
)


COMPANY_COLUMNS = {"nameLike": "name", "minEmployees": "num_employees", "maxEmployees": "num_employees"}


class TestPartialUpdate:
    """Tests for sql_for_partial_update"""

    def test_no_data(self):
        with pytest.raises(InvalidInputError, match="No data"):
            sql_for_partial_update({}, {"firstName": "first_name"})

    def test_single_field(self):
        fragment = sql_for_partial_update({"firstName": "Alice"}, {"firstName": "first_name"})

        assert fragment.sql == '"first_name"=$1'
        assert fragment.values == ["Alice"]

    def test_two_fields(self):
        fragment = sql_for_partial_update(
            {"firstName": "Alice", "age": 32},
            {"firstName": "first_name", "age": "age"},
        )

        assert fragment.sql == '"first_name"=$1, "age"=$2'
        assert fragment.values == ["Alice", 32]

    def test_unmapped_field_passes_through(self):
        fragment = sql_for_partial_update({"lastName": "Smith", "email": "a@b.com"}, {"lastName": "last_name"})

        assert fragment.sql == '"last_name"=$1, "email"=$2'
        assert fragment.values == ["Smith", "a@b.com"]

    def test_null_value_is_bound(self):
        fragment = sql_for_partial_update({"logoUrl": None}, {"logoUrl": "logo_url"})

        assert fragment.sql == '"logo_url"=$1'
        assert fragment.values == [None]

    def test_placeholders_follow_key_order(self):
        data = {"c": 3, "a": 1, "b": 2}
        fragment = sql_for_partial_update(data, {})

        assert fragment.sql == '"c"=$1, "a"=$2, "b"=$3'
        assert fragment.values == [3, 1, 2]
        assert len(fragment.values) == len(data)

    def test_start_offsets_placeholders(self):
        fragment = sql_for_partial_update({"name": "New"}, {}, start=2)

        assert fragment.sql == '"name"=$2'
        assert fragment.values == ["New"]

    def test_bind_uses_named_parameters(self):
        fragment = sql_for_partial_update(
            {"numEmployees": 10, "logoUrl": "http://new.img"},
            {"numEmployees": "num_employees", "logoUrl": "logo_url"},
        )

        text, params = fragment.bind("postgresql")

        assert text == '"num_employees"=:p1, "logo_url"=:p2'
        assert params == {"p1": 10, "p2": "http://new.img"}

    def test_same_input_same_output(self):
        data = {"firstName": "Alice", "age": 32}
        columns = {"firstName": "first_name"}

        first = sql_for_partial_update(data, columns)
        second = sql_for_partial_update(data, columns)

        assert first.sql == second.sql
        assert first.values == second.values
        assert first == second


class TestQueryFilter:
    """Tests for sql_for_query_filter and sql_where_clause"""

    def test_no_data(self):
        with pytest.raises(InvalidInputError, match="No data"):
            sql_for_query_filter({}, COMPANY_COLUMNS)

    def test_name_like_wraps_wildcards(self):
        fragment = sql_for_query_filter({"nameLike": "c"}, {"nameLike": "name"})

        assert fragment.sql == "name ILIKE $1 ESCAPE '\\'"
        assert fragment.values == ["%c%"]

    def test_min_and_max(self):
        fragment = sql_for_query_filter({"minEmployees": 0, "maxEmployees": 3}, COMPANY_COLUMNS)

        assert fragment.sql == "num_employees >= $1 AND num_employees <= $2"
        assert fragment.values == [0, 3]

    def test_all_filters_in_input_order(self):
        fragment = sql_for_query_filter(
            {"maxEmployees": 300, "nameLike": "net", "minEmployees": 10},
            COMPANY_COLUMNS,
        )

        assert fragment.sql == "num_employees <= $1 AND name ILIKE $2 ESCAPE '\\' AND num_employees >= $3"
        assert fragment.values == [300, "%net%", 10]

    def test_unknown_filter_rejected(self):
        with pytest.raises(InvalidInputError, match="Unknown filter: handle"):
            sql_for_query_filter({"nameLike": "a", "handle": "c1"}, COMPANY_COLUMNS)

    def test_job_vocabulary(self):
        fragment = sql_for_query_filter(
            {"title": "eng", "minSalary": 5000},
            {"title": "title", "minSalary": "salary"},
            JOB_FILTERS,
        )

        assert fragment.sql == "title ILIKE $1 ESCAPE '\\' AND salary >= $2"
        assert fragment.values == ["%eng%", 5000]

    def test_company_keys_not_valid_for_jobs(self):
        with pytest.raises(InvalidInputError):
            sql_for_query_filter({"nameLike": "eng"}, {}, JOB_FILTERS)

    def test_range_conflict_not_checked(self):
        fragment = sql_for_query_filter({"minEmployees": 10, "maxEmployees": 1}, COMPANY_COLUMNS)

        assert fragment.values == [10, 1]

    def test_bind_on_sqlite_uses_like(self):
        fragment = sql_for_query_filter({"nameLike": "c", "maxEmployees": 2}, COMPANY_COLUMNS)

        text, params = fragment.bind("sqlite")

        assert text == "name LIKE :p1 ESCAPE '\\' AND num_employees <= :p2"
        assert params == {"p1": "%c%", "p2": 2}

    def test_bind_on_postgres_keeps_ilike(self):
        text, _ = sql_for_query_filter({"nameLike": "c"}, COMPANY_COLUMNS).bind("postgresql")

        assert text == "name ILIKE :p1 ESCAPE '\\'"

    def test_where_clause_prefix(self):
        fragment = sql_where_clause({"nameLike": "c", "minEmployees": 2}, COMPANY_COLUMNS, COMPANY_FILTERS)

        assert fragment.sql == "WHERE name ILIKE $1 ESCAPE '\\' AND num_employees >= $2"
        assert fragment.values == ["%c%", 2]

    def test_where_clause_empty(self):
        fragment = sql_where_clause({}, COMPANY_COLUMNS)

        assert fragment.sql == ""
        assert fragment.values == []
        assert fragment.bind("sqlite") == ("", {})
        assert not fragment

    def test_name_like_escapes_wildcards(self):
        fragment = sql_for_query_filter({"nameLike": "100%_a\\b"}, COMPANY_COLUMNS)

        assert fragment.values == ["%100\\%\\_a\\\\b%"]

    def test_pre_wrapped_value_is_literal(self):
        fragment = sql_for_query_filter({"nameLike": "%c%"}, COMPANY_COLUMNS)

        assert fragment.values == ["%\\%c\\%%"]

    def test_query_filter_same_input_same_output(self):
        filters = {"nameLike": "net", "minEmployees": 1, "maxEmployees": 9}

        first = sql_for_query_filter(filters, COMPANY_COLUMNS)
        second = sql_for_query_filter(filters, COMPANY_COLUMNS)

        assert first.sql == second.sql
        assert first.values == second.values
        assert first.bind("postgresql") == second.bind("postgresql")
        assert first.bind("sqlite") == second.bind("sqlite")

    def test_where_clause_same_input_same_output(self):
        filters = {"title": "eng", "maxSalary": 100}
        columns = {"maxSalary": "salary"}

        first = sql_where_clause(filters, columns, JOB_FILTERS)
        second = sql_where_clause(filters, columns, JOB_FILTERS)

        assert first.sql == second.sql
        assert first.values == second.values
        assert first.bind("postgresql") == second.bind("postgresql")
        assert first == second


class TestOrderedRange:
    """Tests for ensure_ordered_range"""

    def test_min_greater_than_max(self):
        with pytest.raises(InvalidInputError):
            ensure_ordered_range({"minEmployees": 5, "maxEmployees": 1}, "minEmployees", "maxEmployees")

    @pytest.mark.parametrize("filters", [
        {},
        {"minEmployees": 5},
        {"maxEmployees": 1},
        {"minEmployees": 1, "maxEmployees": 1},
        {"minEmployees": 0, "maxEmployees": 3},
    ])
    def test_valid_ranges(self, filters):
        ensure_ordered_range(filters, "minEmployees", "maxEmployees")
