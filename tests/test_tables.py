from app.client.tables import filter_rows, next_sort_direction, sort_rows


ROWS = [
    {"name": "Summit Capital", "budget": 2000000, "status": "active"},
    {"name": "Northwind", "budget": None, "status": "evaluating"},
    {"name": "Granite Holdings", "budget": 750000, "status": "active"},
]


def test_sort_direction_cycles():
    assert next_sort_direction(None, None, "name") == "asc"
    assert next_sort_direction("name", "asc", "name") == "desc"
    assert next_sort_direction("name", "desc", "name") is None
    assert next_sort_direction("name", "desc", "budget") == "asc"


def test_filter_rows_is_case_insensitive_and_combined():
    assert [r["name"] for r in filter_rows(ROWS, {"name": "CAP"})] == ["Summit Capital"]
    assert [r["name"] for r in filter_rows(ROWS, {"status": "active", "name": "gran"})] == ["Granite Holdings"]
    assert len(filter_rows(ROWS, {"name": ""})) == 3


def test_filter_rows_with_value_getter():
    rows = [{"party": {"name": "Summit"}}, {"party": {"name": "Granite"}}]
    kept = filter_rows(rows, {"party": "sum"}, values={"party": lambda row: row["party"]["name"]})
    assert kept == [rows[0]]


def test_sort_rows_puts_missing_values_last():
    assert [r["budget"] for r in sort_rows(ROWS, "budget", "asc")] == [750000, 2000000, None]
    assert [r["budget"] for r in sort_rows(ROWS, "budget", "desc")] == [2000000, 750000, None]
    assert sort_rows(ROWS, "budget", None) == ROWS
