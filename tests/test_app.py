import pytest

from lineSearchAPP.app import build_parser, create_search, main
from lineSearchAPP.core.functions import FUNCTIONS_1D


def test_single_function_success(capsys):
    code = main(["--function", "q1"])

    out = capsys.readouterr().out
    assert code == 0
    assert "status    : success" in out
    assert "estimate  : 2" in out


def test_single_function_failure_exit_code(capsys):
    code = main(["--function", "q3"])

    assert code == 1
    assert "outside_bounds" in capsys.readouterr().out


def test_expand_flag_moves_bracket(capsys):
    code = main(["--function", "q2", "--expand"])

    assert code == 0
    assert "estimate  : 12" in capsys.readouterr().out


def test_invalid_bounds_exit_code(capsys):
    code = main(["--function", "q1", "--lower", "5", "--upper", "-5"])

    assert code == 2
    assert "Помилка" in capsys.readouterr().err


def test_unknown_function_is_rejected_by_parser():
    with pytest.raises(SystemExit) as excinfo:
        main(["--function", "nope"])

    assert excinfo.value.code == 2


def test_all_functions_summary(capsys):
    code = main(["--all"])

    out = capsys.readouterr().out
    assert code == 0
    for key in FUNCTIONS_1D:
        assert key in out
    assert "Найменше значення" in out


def test_verbose_and_progress_run(capsys):
    assert main(["--function", "q1", "--verbose", "--progress"]) == 0


def test_plot_option_saves_file(tmp_path, capsys):
    pytest.importorskip("matplotlib")
    path = tmp_path / "q1.png"

    assert main(["--function", "q1", "--plot", str(path)]) == 0
    assert path.exists()


def test_create_search_applies_overrides():
    args = build_parser().parse_args(
        ["--function", "q1", "--lower", "-1", "--value-tol", "0.5",
         "--max-iter", "3", "--function-tol", "0.1", "--expand"]
    )

    cfg = create_search(FUNCTIONS_1D["q1"], args).config()

    assert cfg.lower_bound == -1.0
    assert cfg.upper_bound == 5.0
    assert cfg.init_estimate == 2.0
    assert cfg.value_tolerance == 0.5
    assert cfg.max_iterations == 3
    assert cfg.function_tolerance == 0.1
    assert cfg.exit_if_outside_bounds is False
    assert cfg.message == FUNCTIONS_1D["q1"].name
