import io

import pytest

from raylab.utils import (
    clamp,
    get_random_float,
    progress_bar,
    solve_quadratic,
    update_progress,
)


def test_clamp_inside_and_outside_range():
    assert clamp(0.0, 1.0, 0.5) == 0.5
    assert clamp(0.0, 1.0, -2.0) == 0.0
    assert clamp(0.0, 1.0, 3.0) == 1.0


@pytest.mark.parametrize("a,b,c", [(1.0, -3.0, 2.0), (2.0, 5.0, -3.0), (-1.0, 0.0, 4.0)])
def test_solve_quadratic_roots_satisfy_equation(a, b, c):
    roots = solve_quadratic(a, b, c)
    x0, x1 = roots
    assert x0 < x1
    for x in roots:
        assert a * x * x + b * x + c == pytest.approx(0.0, abs=1e-9)
    assert x0 * x1 == pytest.approx(c / a)


def test_solve_quadratic_double_root():
    x0, x1 = solve_quadratic(1.0, -2.0, 1.0)
    assert x0 == x1
    assert x0 * x0 - 2 * x0 + 1 == pytest.approx(0.0)


def test_solve_quadratic_no_real_roots():
    assert solve_quadratic(1.0, 0.0, 1.0) is None


def test_random_float_in_unit_interval():
    samples = [get_random_float() for _ in range(500)]
    assert all(0.0 <= s < 1.0 for s in samples)
    assert len(set(samples)) > 1


def test_progress_bar_empty():
    assert progress_bar(0.0) == "[>" + " " * 69 + "] 0 %"


def test_progress_bar_full():
    assert progress_bar(1.0) == "[" + "=" * 70 + "] 100 %"


def test_progress_bar_half():
    bar = progress_bar(0.5)
    assert bar.endswith("] 50 %")
    assert bar.index(">") == 1 + bar.count("=")
    assert len(bar) == len(progress_bar(0.0)) + 1


def test_update_progress_writes_bar_and_carriage_return():
    stream = io.StringIO()
    update_progress(0.25, stream)
    assert stream.getvalue() == progress_bar(0.25) + "\r"