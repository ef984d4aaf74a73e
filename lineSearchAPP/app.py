"""
app.py

Консольний контролер для квадратичного лінійного пошуку.

Зв'язує:
    - core.functions.FUNCTIONS_1D (тестові функції та їх дужки)
    - core.quadratic_line_search.QuadraticLineSearch
    - core.search_observers (траса, діагностичний лог, tqdm-прогрес)
    - core.results_summary.ResultsSummary
    - ui.plot_view (графік траси у файл)

Функціонал:
    - запуск пошуку для однієї функції (--function) або для всіх (--all);
    - перевизначення дужки й налаштувань пошуку з командного рядка;
    - діагностичний режим (--verbose) та індикатор прогресу (--progress);
    - збереження графіка траси (--plot).

Коди виходу:
    0 – SUCCESS (для --all завжди 0), 1 – інший статус,
    2 – невідома функція або некоректні межі.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .core.functions import FUNCTIONS_1D, TargetFunction1D
from .core.quadratic_line_search import QuadraticLineSearch, QuadraticSearchResult
from .core.results_summary import ResultsSummary
from .core.search_observers import TqdmProgress, TraceRecorder

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Розбір аргументів
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linesearch",
        description="Квадратичний лінійний пошук мінімуму функції однієї змінної.",
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--function", "-f", default="q1", choices=sorted(FUNCTIONS_1D),
                        help="ключ тестової функції (default: q1)")
    target.add_argument("--all", action="store_true",
                        help="запустити пошук для всіх зареєстрованих функцій")

    parser.add_argument("--lower", type=float, help="нижня межа дужки")
    parser.add_argument("--upper", type=float, help="верхня межа дужки")
    parser.add_argument("--estimate", type=float, help="початкова оцінка (середня точка)")
    parser.add_argument("--value-tol", type=float, help="поріг ширини дужки")
    parser.add_argument("--function-tol", type=float, help="поріг відносної пласкості f")
    parser.add_argument("--max-iter", type=int, help="ліміт ітерацій (default: 50)")
    parser.add_argument("--expand", action="store_true",
                        help="розширювати дужку замість помилки OUTSIDE_BOUNDS")

    parser.add_argument("--verbose", "-v", action="store_true",
                        help="діагностичний режим: позиції та значення на кожній ітерації")
    parser.add_argument("--progress", action="store_true", help="показувати індикатор прогресу")
    parser.add_argument("--plot", metavar="PATH", help="зберегти графік траси у файл")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


# ---------------------------------------------------------------------------
# Фабрика пошуку
# ---------------------------------------------------------------------------

def create_search(target: TargetFunction1D, args: argparse.Namespace) -> QuadraticLineSearch:
    """Створити QuadraticLineSearch для функції з урахуванням аргументів CLI."""
    lower = args.lower if args.lower is not None else target.lower_bound
    upper = args.upper if args.upper is not None else target.upper_bound

    options = {
        "init_estimate": args.estimate,
        "value_tolerance": args.value_tol,
        "exit_if_outside_bounds": not args.expand,
        "message": target.name,
    }
    if args.function_tol is not None:
        options["function_tolerance"] = args.function_tol
    if args.max_iter is not None:
        options["max_iterations"] = args.max_iter

    return QuadraticLineSearch.from_options(lower, upper, options)


def run_single(target: TargetFunction1D, args: argparse.Namespace) -> QuadraticSearchResult:
    search = create_search(target, args)
    recorder = TraceRecorder()
    search.set_callback(recorder)

    progress = TqdmProgress(total=search.max_iterations, leave=False) if args.progress else None
    search.set_progress(progress)
    try:
        result = search.verbose(target.func) if args.verbose else search.minimize(target.func)
    finally:
        if progress is not None:
            progress.close()

    if args.plot:
        from .ui.plot_view import save_search_trace

        save_search_trace(args.plot, recorder.records, target.func)
        logger.info("Графік траси збережено у %s", args.plot)

    return result


# ---------------------------------------------------------------------------
# Точка входу
# ---------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.all:
        summary = ResultsSummary()
        for key, target in FUNCTIONS_1D.items():
            try:
                summary.add_run(key, run_single(target, args))
            except ValueError as exc:
                logger.error("%s: %s", key, exc)
        print(summary.format_table())
        best = summary.best_by_value()
        if best is not None:
            print(f"\nНайменше значення: {best[0]} (f = {best[1].value:.6g})")
        return 0

    target = FUNCTIONS_1D[args.function]
    try:
        result = run_single(target, args)
    except ValueError as exc:
        print(f"Помилка: {exc}", file=sys.stderr)
        return 2

    print(target.name)
    print(f"status    : {result.status.value}")
    print(f"estimate  : {result.estimate:.10g}")
    print(f"value     : {result.value:.10g}")
    print(f"iterations: {result.iterations}")
    print(f"func_evals: {result.func_evals}")

    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
