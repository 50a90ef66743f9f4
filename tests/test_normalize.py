"""Unit tests for token text normalization."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from conftest import make_token

from table_wizard.reconstruction.normalize import normalize_text, normalize_token


class TestNormalizeText:

    def test_no_break_space(self):
        assert normalize_text("Unit\u00a0Price") == "Unit Price"

    def test_em_and_ideographic_spaces(self):
        assert normalize_text("\u2003Total\u3000") == "Total"

    def test_narrow_and_math_spaces(self):
        assert normalize_text("1\u202f000\u205fkg") == "1 000 kg"

    def test_control_characters_removed(self):
        assert normalize_text("A\u0000B\u0007C") == "ABC"

    def test_c1_control_characters_removed(self):
        assert normalize_text("Net\u0085 Amount\u009f") == "Net Amount"

    def test_placeholder_box_becomes_space(self):
        assert normalize_text("Qty\u25a1Unit") == "Qty Unit"

    def test_whitespace_runs_collapsed(self):
        assert normalize_text("  many    spaces   here ") == "many spaces here"

    def test_empty_input(self):
        assert normalize_text("") == ""

    def test_whitespace_only_becomes_empty(self):
        assert normalize_text("  \u25a1 ") == ""

    def test_clean_text_unchanged(self):
        assert normalize_text("Invoice 2024-01") == "Invoice 2024-01"

    def test_zero_width_no_break_space(self):
        assert normalize_text("A\ufeffB") == "A B"

    def test_byte_order_mark_only_becomes_empty(self):
        assert normalize_text("\ufeff") == ""


class TestNormalizeToken:

    def test_returns_new_token_with_clean_text(self):
        original = make_token("  Unit\u00a0Price ", 10, 100)
        cleaned = normalize_token(original)
        assert cleaned.text == "Unit Price"
        assert cleaned is not original

    def test_original_left_untouched(self):
        original = make_token("  A  ", 10, 100)
        normalize_token(original)
        assert original.text == "  A  "

    def test_geometry_preserved(self):
        original = make_token(" B ", 12.5, 80, width=7, height=9, font_name="Helvetica-Bold")
        cleaned = normalize_token(original)
        assert (cleaned.x, cleaned.y, cleaned.width, cleaned.height) == (12.5, 80, 7, 9)
        assert cleaned.font_name == "Helvetica-Bold"

    def test_already_clean_token_returned_as_is(self):
        original = make_token("A", 10, 100)
        assert normalize_token(original) is original
