"""
Tests for size expression parsing
"""

import pytest

from hpascale.expressions import ExpressionError, ExpressionKind, SizeExpression, parse_expression


class TestParseExpression:
    """Test the three accepted shapes"""

    def test_absolute(self):
        expression = parse_expression("10")
        assert expression == SizeExpression(ExpressionKind.ABSOLUTE, 10)
        assert isinstance(expression.value, int)

    def test_percentage(self):
        assert parse_expression("50%") == SizeExpression(ExpressionKind.PERCENTAGE, 50.0)

    def test_multiplier(self):
        assert parse_expression("2x") == SizeExpression(ExpressionKind.MULTIPLIER, 2.0)

    def test_decimal_payloads(self):
        assert parse_expression("1.5x").value == 1.5
        assert parse_expression("12.5%").value == 12.5
        assert parse_expression("0.5x").value == 0.5

    def test_zero_values(self):
        assert parse_expression("0").value == 0
        assert parse_expression("0%").value == 0.0
        assert parse_expression("0x").value == 0.0

    def test_surrounding_whitespace_ignored(self):
        assert parse_expression(" 10 ") == SizeExpression(ExpressionKind.ABSOLUTE, 10)


class TestNoChangeRequested:
    """Empty input means no change, not an error"""

    def test_empty_string(self):
        assert parse_expression("") is None

    def test_none(self):
        assert parse_expression(None) is None

    def test_whitespace_only(self):
        assert parse_expression("   ") is None


class TestInvalidExpressions:
    """Malformed input is rejected"""

    @pytest.mark.parametrize("text", [
        "abc",
        "-5",
        "2X",
        "5 x",
        "%",
        "x",
        "10%x",
        "1e3",
        "50 %",
    ])
    def test_unknown_shape(self, text):
        with pytest.raises(ExpressionError):
            parse_expression(text)

    @pytest.mark.parametrize("text", ["1.2.3%", ".%", "..x", "1..5x", "9" * 400 + "%", "9" * 400 + "x"])
    def test_unconvertible_number(self, text):
        with pytest.raises(ExpressionError, match="Invalid number"):
            parse_expression(text)

    def test_expression_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_expression("abc")


def test_str_round_trips_to_canonical_form():
    """Test expressions render back for logs"""
    assert str(parse_expression("10")) == "10"
    assert str(parse_expression("50%")) == "50%"
    assert str(parse_expression("2x")) == "2x"
    assert str(parse_expression("1.5x")) == "1.5x"
