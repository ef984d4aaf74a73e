import math

import pytest

from lineSearchAPP.core.functions import FUNCTIONS_1D
from lineSearchAPP.core.quadratic_line_search import QuadraticLineSearch
from lineSearchAPP.core.results_summary import ResultsSummary


def _run(key, **options):
    target = FUNCTIONS_1D[key]
    search = QuadraticLineSearch.from_options(target.lower_bound, target.upper_bound, options)
    return search.minimize(target.func)


@pytest.fixture
def summary() -> ResultsSummary:
    summary = ResultsSummary()
    summary.add_run("q1", _run("q1"))
    summary.add_run("q3", _run("q3"))
    summary.add_run("q4", _run("q4", function_tolerance=3.0))
    return summary


def test_rows_have_one_entry_per_run(summary):
    rows = summary.as_rows()

    assert [row["function"] for row in rows] == ["q1", "q3", "q4"]
    assert [row["status"] for row in rows] == ["success", "outside_bounds", "success"]
    assert rows[0]["estimate"] == pytest.approx(2.0)
    assert math.isnan(rows[1]["estimate"])
    assert rows[0]["func_evals"] == 5
    assert set(rows[0]) == {"function", "estimate", "value", "status", "iterations", "func_evals"}


def test_best_by_value_skips_failures(summary):
    key, result = summary.best_by_value()

    assert key == "q1"
    assert result.value == pytest.approx(0.0)


def test_best_by_value_without_successes():
    summary = ResultsSummary()
    summary.add_run("q3", _run("q3"))

    assert summary.best_by_value() is None


def test_format_table_lists_every_run(summary):
    table = summary.format_table()

    assert table.splitlines()[0].startswith("function")
    for key in ("q1", "q3", "q4"):
        assert key in table
    assert "outside_bounds" in table


def test_to_dataframe(summary):
    pytest.importorskip("pandas")

    df = summary.to_dataframe()

    assert df.shape == (3, 6)
    assert list(df["function"]) == ["q1", "q3", "q4"]
