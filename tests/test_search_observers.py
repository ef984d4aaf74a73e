import io
import logging

import numpy as np
import pytest

from lineSearchAPP.core.functions import q1, q3
from lineSearchAPP.core.quadratic_line_search import QuadraticLineSearch, SearchStatus
from lineSearchAPP.core.search_observers import SearchIteration, TqdmProgress, TraceLogger


def test_recorder_sees_initial_bracket_and_each_update(q1_search, recorder):
    q1_search.set_callback(recorder).minimize(q1)

    assert len(recorder) == 2

    initial, first = recorder.records
    assert initial.index == 0
    assert initial.bracket == (-5.0, 0.0, 5.0)
    assert initial.values == (49.0, 4.0, 9.0)
    assert initial.candidate is None

    assert first.index == 1
    assert first.bracket == (0.0, 2.0, 5.0)
    assert first.values == (4.0, 0.0, 9.0)
    assert first.candidate == 2.0
    assert first.candidate_value == 0.0

    np.testing.assert_allclose(recorder.widths(), [10.0, 5.0])
    np.testing.assert_allclose(recorder.candidates(), [[2.0, 0.0]])


def test_recorder_clear(q1_search, recorder):
    q1_search.set_callback(recorder).minimize(q1)
    recorder.clear()

    assert len(recorder) == 0
    assert recorder.candidates().shape == (0, 2)


def test_progress_called_once_per_completed_iteration(q1_search):
    calls = []
    q1_search.set_message("q1").set_progress(lambda label, k: calls.append((label, k)))

    q1_search.minimize(q1)

    assert calls == [("q1", 1)]


def test_progress_not_called_when_search_fails_immediately():
    calls = []
    QuadraticLineSearch(-1.0, 1.0, progress=lambda label, k: calls.append(k)).minimize(q3)

    assert calls == []


def test_verbose_matches_minimize_and_logs_trace(q1_search, caplog):
    caplog.set_level(logging.INFO, logger="lineSearchAPP.core.search_observers")

    plain = q1_search.minimize(q1)
    traced = q1_search.verbose(q1)

    assert traced == plain
    messages = [r.getMessage() for r in caplog.records]
    assert any("l=-5" in msg for msg in messages)
    assert any("success" in msg for msg in messages)


def test_verbose_keeps_configured_callback(q1_search, recorder):
    q1_search.set_callback(recorder).verbose(q1)

    assert len(recorder) == 2


def test_trace_logger_uses_given_logger(caplog):
    log = logging.getLogger("tests.trace")
    caplog.set_level(logging.DEBUG, logger="tests.trace")
    tracer = TraceLogger(log=log, level=logging.DEBUG)

    tracer(SearchIteration(index=3, bracket=(0.0, 1.0, 2.0), values=(4.0, 1.0, 2.0),
                           candidate=1.0, candidate_value=1.0))

    assert len(caplog.records) == 3
    assert all(r.name == "tests.trace" for r in caplog.records)
    assert all(r.levelno == logging.DEBUG for r in caplog.records)
    assert "Ітерація 3" in caplog.records[0].getMessage()


def test_search_iteration_width():
    rec = SearchIteration(index=0, bracket=(-1.0, 0.5, 3.0), values=(0.0, 0.0, 0.0))

    assert rec.width == pytest.approx(4.0)


def test_tqdm_progress_tracks_iterations(q1_search):
    with TqdmProgress(total=q1_search.max_iterations, file=io.StringIO()) as progress:
        q1_search.set_message("q1").set_progress(progress)
        result = q1_search.minimize(q1)

        assert result.status is SearchStatus.SUCCESS
        assert progress.bar is not None
        assert progress.bar.n == 1
        assert progress.bar.desc.startswith("q1")

    assert progress.bar is None


def test_tqdm_progress_restarts_for_next_run(q1_search):
    with TqdmProgress(total=q1_search.max_iterations, file=io.StringIO()) as progress:
        q1_search.set_message("q1").set_progress(progress)
        q1_search.minimize(q1)
        bar = progress.bar

        q1_search.set_message("q1 again").minimize(q1)

        assert progress.bar is bar
        assert progress.bar.n == 1
        assert progress.bar.desc.startswith("q1 again")
