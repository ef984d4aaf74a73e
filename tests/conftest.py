import pytest

from lineSearchAPP.core.functions import FUNCTIONS_1D
from lineSearchAPP.core.quadratic_line_search import QuadraticLineSearch
from lineSearchAPP.core.search_observers import TraceRecorder


@pytest.fixture
def q1_search() -> QuadraticLineSearch:
    """Пошук на рідній дужці q1: [-5, 5]."""
    target = FUNCTIONS_1D["q1"]
    return QuadraticLineSearch(target.lower_bound, target.upper_bound)


@pytest.fixture
def recorder() -> TraceRecorder:
    return TraceRecorder()
