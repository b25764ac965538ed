from __future__ import annotations

import pytest

from integration_viz.style import FunctionViewStyle


def test_line_width_is_clamped_relative_width() -> None:
    style = FunctionViewStyle()
    assert style.line_width(100) == 1.5
    assert style.line_width(400) == pytest.approx(2.4)
    assert style.line_width(2000) == 3.5
    assert style.knob_diameter(400) == pytest.approx(9.6)


def test_fill_color_uses_integral_color_with_opacity() -> None:
    assert FunctionViewStyle().fill_color == "rgba(88, 86, 214, 0.3)"
    assert FunctionViewStyle(integral_color="#000000", fill_opacity=1).fill_color == "rgba(0, 0, 0, 1)"


@pytest.mark.parametrize("kwargs", [{"fill_opacity": 1.5}, {"fill_opacity": -0.1}, {"frame_interval_s": 0}])
def test_invalid_values_fail_fast(kwargs) -> None:
    with pytest.raises(ValueError):
        FunctionViewStyle(**kwargs)
