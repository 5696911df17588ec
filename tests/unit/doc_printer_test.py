"""Unit tests for the layout document algebra and its printer."""

import pytest

from java_layout.doc import (
    BREAK_PARENT,
    HARDLINE,
    LINE,
    LITERALLINE,
    SOFTLINE,
    Concat,
    Doc,
    concat,
    conditional_group,
    dump_doc,
    fill,
    group,
    indent,
    is_empty,
    join,
    line_suffix,
    lines,
    render,
)
from java_layout.doc.printer import propagate_breaks
from java_layout.models import FormatOptions


def _render(doc: Doc, width: int = 80, tab_width: int = 2) -> str:
    return render(doc, FormatOptions(print_width=width, tab_width=tab_width))


class TestBuilders:
    def test_concat_flattens_and_drops_empty_strings(self) -> None:
        doc = concat("a", "", concat("b", "c"))
        assert doc == Concat(("a", "b", "c"))

    def test_concat_of_single_part_is_the_part(self) -> None:
        assert concat("", "a") == "a"

    def test_join(self) -> None:
        assert _render(join(", ", ["a", "b", "c"])) == "a, b, c"

    def test_is_empty(self) -> None:
        assert is_empty("")
        assert is_empty(concat())
        assert not is_empty("x")

    def test_lines_without_newline_is_plain_text(self) -> None:
        assert lines("abc") == "abc"


class TestGroups:
    def test_group_stays_flat_when_it_fits(self) -> None:
        doc = group("[", indent(SOFTLINE, "a,", LINE, "b"), SOFTLINE, "]")
        assert _render(doc) == "[a, b]"

    def test_group_breaks_when_too_wide(self) -> None:
        doc = group("[", indent(SOFTLINE, "aaaa,", LINE, "bbbb"), SOFTLINE, "]")
        assert _render(doc, width=8) == "[\n  aaaa,\n  bbbb\n]"

    def test_text_exactly_at_width_fits(self) -> None:
        doc = group("abc", LINE, "def")
        assert _render(doc, width=7) == "abc def"
        assert _render(doc, width=6) == "abc\ndef"

    def test_outer_group_breaks_inner_group_may_stay_flat(self) -> None:
        inner = group("(", indent(SOFTLINE, "x"), SOFTLINE, ")")
        doc = group("call", indent(LINE, inner, LINE, "tail-that-is-long"))
        assert _render(doc, width=12) == "call\n  (x)\n  tail-that-is-long"

    def test_hardline_breaks_enclosing_groups(self) -> None:
        doc = group("a", LINE, group("b", HARDLINE, "c"))
        assert _render(doc) == "a\nb\nc"

    def test_propagate_breaks_marks_ancestors(self) -> None:
        inner = group("b", HARDLINE)
        outer = group("a", inner)
        other = group("c", LINE, "d")
        broken = propagate_breaks(concat(outer, other))
        assert id(inner) in broken
        assert id(outer) in broken
        assert id(other) not in broken

    def test_break_parent_forces_break(self) -> None:
        doc = group("a", LINE, "b", BREAK_PARENT)
        assert _render(doc) == "a\nb"

    def test_rest_of_line_counts_towards_fit(self) -> None:
        doc = concat(group("a", LINE, "b"), "cccccc")
        assert _render(doc, width=8) == "a\nbcccccc"


class TestConditionalGroup:
    def test_first_state_that_fits_is_used(self) -> None:
        doc = concat("ab", conditional_group("cdefg", concat("c", HARDLINE, "d")))
        assert _render(doc) == "abcdefg"

    def test_last_state_is_used_when_nothing_fits(self) -> None:
        doc = concat("ab", conditional_group("cdefg", concat("c", HARDLINE, "d")))
        assert _render(doc, width=5) == "abc\nd"

    def test_state_fits_up_to_its_first_forced_break(self) -> None:
        hugged = concat("(", group("x {", HARDLINE, "}"), ")")
        expanded = concat("(", indent(HARDLINE, "x {", HARDLINE, "}"), HARDLINE, ")")
        assert _render(concat("f", conditional_group(hugged, expanded)), width=6) == "f(x {\n})"


class TestIndentation:
    @pytest.mark.parametrize("tab_width", [2, 4], ids=["two", "four"])
    def test_indent_uses_tab_width(self, tab_width: int) -> None:
        doc = concat("{", indent(HARDLINE, "x"), HARDLINE, "}")
        assert _render(doc, tab_width=tab_width) == "{\n" + " " * tab_width + "x\n}"

    def test_trailing_spaces_are_trimmed_on_blank_lines(self) -> None:
        doc = concat("{", indent(HARDLINE, "a", HARDLINE, HARDLINE, "b"), HARDLINE, "}")
        assert _render(doc) == "{\n  a\n\n  b\n}"

    def test_literal_line_ignores_indentation(self) -> None:
        doc = indent("x", HARDLINE, lines('"""\nraw\n  text"""'))
        assert _render(doc) == 'x\n  """\nraw\n  text"""'

    def test_literalline_constant(self) -> None:
        assert _render(indent("a", LITERALLINE, "b")) == "a\nb"


class TestLineSuffix:
    def test_suffix_is_flushed_before_next_newline(self) -> None:
        doc = concat("a", line_suffix(" // note"), ";", HARDLINE, "b")
        assert _render(doc) == "a; // note\nb"

    def test_suffix_is_flushed_at_end_of_document(self) -> None:
        assert _render(concat("a", line_suffix(" // end"), ";")) == "a; // end"


class TestFill:
    def test_fill_packs_items_per_line(self) -> None:
        items = ["1", "22", "333", "4", "55"]
        parts = []
        for i, item in enumerate(items):
            if i:
                parts.append(concat(",", LINE))
            parts.append(item)
        assert _render(fill(parts), width=8) == "1, 22,\n333, 4,\n55"

    def test_fill_flat_when_everything_fits(self) -> None:
        assert _render(fill(["a", LINE, "b", LINE, "c"])) == "a b c"


class TestDumpDoc:
    def test_names_lines(self) -> None:
        text = dump_doc(group("a", LINE, "b", SOFTLINE, HARDLINE))
        assert "group(" in text
        assert "line" in text
        assert "softline" in text
        assert "hardline" in text

    def test_nested_indentation(self) -> None:
        assert dump_doc(indent("x")) == "indent(\n  'x'\n)"

    def test_conditional_group_lists_its_states(self) -> None:
        assert dump_doc(conditional_group("a", "b")) == "conditional_group[\n  'a',\n  'b'\n]"

    def test_rejects_non_document(self) -> None:
        with pytest.raises(TypeError):
            dump_doc(42)  # type: ignore[arg-type]
