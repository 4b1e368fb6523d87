"""
Tests for the graphical range gauge
"""

import pytest

from hpascale.gauge import END_MARK, GaugeConfig, GaugeRenderer, Mark


@pytest.fixture
def renderer():
    """Renderer with a 20 cell gauge"""
    return GaugeRenderer(GaugeConfig(width=20))


def test_leading_padding_and_mark():
    """Test a mark at the leading value sits right after the padding"""
    gauge = GaugeRenderer().render(100, 50, [Mark("X", 50)])
    width = GaugeConfig().width

    assert len(gauge) == width + 2
    assert gauge == "|" + " " * (width // 2) + "X" + "." * (width // 2 - 1) + "|"


def test_mark_after_filler(renderer):
    gauge = renderer.render(10, 0, [Mark("A", 5)])
    assert gauge == "|" + "." * 9 + "A" + "." * 10 + "|"


def test_out_of_range_mark_absent(renderer):
    """Test marks above the maximum are not drawn"""
    gauge = renderer.render(10, 0, [Mark("A", 5), Mark("Z", 11)])
    assert "Z" not in gauge
    assert len(gauge) == 22


def test_marks_sorted_by_position(renderer):
    gauge = renderer.render(10, 0, [Mark("B", 8), Mark("A", 2)])
    assert gauge.index("A") < gauge.index("B")


def test_end_mark_appends_maximum(renderer):
    """Test the end mark closes the gauge with the numeric maximum"""
    gauge = renderer.render(10, 2, [END_MARK, Mark("|", 6), Mark("4", 4)])
    assert gauge == "|    ...4...|........| 10"


def test_without_end_mark_no_label(renderer):
    gauge = renderer.render(10, 0, [Mark("A", 5)])
    assert gauge.endswith(".|")


def test_colliding_marks_keep_first(renderer):
    """Test only the first of two marks at the same column is drawn"""
    gauge = renderer.render(10, 0, [Mark("A", 5), Mark("B", 5)])
    assert gauge == "|" + "." * 9 + "A" + "." * 10 + "|"


def test_first_mark_inside_padding_still_drawn(renderer):
    gauge = renderer.render(10, 5, [Mark("AB", 2)])
    assert gauge == "|" + " " * 10 + "AB" + "." * 8 + "|"


def test_mark_at_zero(renderer):
    gauge = renderer.render(10, 0, [Mark("0", 0)])
    assert gauge == "|0" + "." * 19 + "|"


def test_mark_at_maximum(renderer):
    gauge = renderer.render(10, 0, [Mark("M", 10)])
    assert gauge == "|" + "." * 19 + "M|"


def test_long_labels_do_not_underflow():
    """Test labels wider than the remaining space just extend the gauge"""
    gauge = GaugeRenderer(GaugeConfig(width=10)).render(10, 0, [Mark("LONGLABEL", 9)])
    assert gauge == "|" + "." * 8 + "LONGLABEL|"


def test_empty_marks(renderer):
    assert renderer.render(10, 0, []) == "|" + "." * 20 + "|"


def test_zero_maximum_rejected(renderer):
    with pytest.raises(ValueError):
        renderer.render(0, 0, [Mark("X", 0)])


def test_input_marks_not_reordered(renderer):
    marks = [Mark("B", 8), Mark("A", 2)]
    renderer.render(10, 0, marks)
    assert marks[0].label == "B"


def test_widths_are_independent():
    """Test two renderers with different widths do not interfere"""
    narrow = GaugeRenderer(GaugeConfig(width=10))
    wide = GaugeRenderer(GaugeConfig(width=30))

    assert len(narrow.render(10, 0, [Mark("X", 5)])) == 12
    assert len(wide.render(10, 0, [Mark("X", 5)])) == 32
    assert len(narrow.render(10, 0, [Mark("X", 5)])) == 12


def test_custom_characters():
    renderer = GaugeRenderer(GaugeConfig(width=10, filler="-", blank="_", border="#"))
    assert renderer.render(10, 2, [Mark("X", 6)]) == "#__---X----#"


def test_render_percentage(renderer):
    """Test the single-marker gauge"""
    assert renderer.render_percentage(5, 0, 10) == "|" + "." * 9 + "X" + "." * 10 + "|"
    assert renderer.render_percentage(5, 5, 10) == "|" + " " * 10 + "X" + "." * 9 + "|"
