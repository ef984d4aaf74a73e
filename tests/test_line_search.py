import math

import numpy as np
import pytest

from lineSearchAPP.core.functions import f8
from lineSearchAPP.core.line_search import (
    LINE_SEARCH_QUADRATIC,
    directional_phi,
    line_search_1d,
    line_search_along,
)
from lineSearchAPP.core.quadratic_line_search import SearchStatus


def test_line_search_1d_finds_step():
    result = line_search_1d(lambda a: (a - 0.5) ** 2, 0.0, 1.0)

    assert result.success
    assert result.alpha == 0.5
    assert result.phi_value == 0.0
    assert result.iterations == 1
    assert result.func_evals == 4
    assert result.meta["method"] == LINE_SEARCH_QUADRATIC
    assert result.meta["status"] is SearchStatus.SUCCESS
    assert result.meta["interval"] == (0.0, 1.0)


def test_line_search_1d_rejects_empty_interval():
    with pytest.raises(ValueError):
        line_search_1d(lambda a: a * a, 1.0, 1.0)


def test_line_search_1d_tol_wider_than_interval():
    result = line_search_1d(lambda a: (a - 0.2) ** 2, 0.0, 1.0, tol=10.0)

    assert result.success
    assert result.alpha == 0.5
    assert result.iterations == 0


def test_line_search_1d_reports_failure():
    result = line_search_1d(lambda a: (a - 3.0) ** 2, 0.0, 1.0)

    assert not result.success
    assert math.isnan(result.alpha)
    assert result.meta["stopped_by"] == "outside_bounds"


def test_line_search_1d_expands_with_options():
    result = line_search_1d(
        lambda a: (a - 3.0) ** 2, 0.0, 1.0,
        options={"exit_if_outside_bounds": False},
    )

    assert result.success
    assert result.alpha == pytest.approx(3.0)
    assert result.iterations == 3


def test_line_search_1d_forwards_callback(recorder):
    line_search_1d(lambda a: (a - 0.5) ** 2, 0.0, 1.0, callback=recorder)

    assert len(recorder) == 1
    assert recorder.records[0].bracket == (0.0, 0.5, 1.0)


def test_directional_phi_restricts_function_to_line():
    phi = directional_phi(f8, np.array([0.0, 0.0]), np.array([8.0, 8.0]))

    assert phi(0.0) == pytest.approx(32.0)
    assert phi(0.25) == pytest.approx(8.0)


def test_line_search_along_descent_direction():
    x_k = np.array([0.0, 0.0])
    p_k = np.array([8.0, 8.0])

    result = line_search_along(f8, x_k, p_k)

    assert result.success
    assert result.alpha == 0.5
    np.testing.assert_allclose(result.meta["x_new"], [4.0, 4.0])


def test_line_search_along_failure_has_no_new_point():
    result = line_search_along(f8, np.array([0.0, 0.0]), np.array([8.0, 8.0]), b=0.1)

    assert not result.success
    assert "x_new" not in result.meta
