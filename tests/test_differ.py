"""
Frozen-mode differ tests

Tests line splitting, three-way classification and the numbered report.
"""

import pytest

from mdsh.lib.differ import FrozenCheck, lines_diff, lines_split, report_render
from mdsh.lib.errors import FrozenMismatchError
from mdsh.lib.lexer import MdshDiffLexer, report_highlight
from mdsh.models.diff import DiffTag
from pygments.token import Generic, Number


class TestLineSplitting:
    """Test lines_split()"""

    def test_trailing_newline(self):
        assert lines_split("a\nb\n") == ["a", "b"]

    def test_no_trailing_newline(self):
        assert lines_split("a\nb") == ["a", "b"]

    def test_carriage_returns_dropped(self):
        assert lines_split("a\r\nb\r\n") == ["a", "b"]

    def test_empty(self):
        assert lines_split("") == []

    def test_blank_lines_kept(self):
        assert lines_split("a\n\nb\n") == ["a", "", "b"]


class TestClassification:
    """Test lines_diff()"""

    def test_identical(self):
        diff = lines_diff("a\nb\n", "a\nb\n")
        assert [d.tag for d in diff] == [DiffTag.BOTH, DiffTag.BOTH]

    def test_changed_line(self):
        """Removed lines come before added lines"""
        diff = lines_diff("a\nb\nd\n", "a\nc\nd\n")
        assert [(d.tag, d.text) for d in diff] == [
            (DiffTag.BOTH, "a"),
            (DiffTag.LEFT, "b"),
            (DiffTag.RIGHT, "c"),
            (DiffTag.BOTH, "d"),
        ]


class TestReport:
    """Test the numbered report"""

    def test_changed_line(self):
        """The counter tracks the original document"""
        report = report_render(lines_diff("a\nb\nd\n", "a\nc\nd\n"))
        assert report == ["2- b", "2+ c"]

    def test_added_at_end(self):
        report = report_render(lines_diff("a\n", "a\nb\nc\n"))
        assert report == ["1+ b", "1+ c"]

    def test_removed_first_line(self):
        report = report_render(lines_diff("x\na\n", "a\n"))
        assert report == ["1- x"]

    def test_added_at_start(self):
        report = report_render(lines_diff("a\n", "new\na\n"))
        assert report == ["0+ new"]

    def test_regenerated_block(self):
        """Stale command output shows up against the original line numbers"""
        original = "`$ echo hi`\n```\nbye\n```\nend\n"
        regenerated = "`$ echo hi`\n```\nhi\n```\nend\n"

        assert FrozenCheck(original, regenerated).report() == ["3- bye", "3+ hi"]


class TestFrozenCheck:
    """Test FrozenCheck"""

    def test_consistent(self):
        check = FrozenCheck(original="same\n", regenerated="same\n")

        assert check.consistent
        assert check.report() == []
        check.verify()

    def test_mismatch_raises(self):
        check = FrozenCheck(original="a\n", regenerated="b\n")

        with pytest.raises(FrozenMismatchError) as excinfo:
            check.verify()

        assert excinfo.value.report == ["1- a", "1+ b"]
        assert str(excinfo.value) == "--frozen: input is not the same"


class TestHighlighting:
    """Test the Pygments lexer for reports"""

    def test_tokens(self):
        tokens = list(MdshDiffLexer().get_tokens("3- old\n3+ new\n"))

        assert (Number, "3") in tokens
        assert (Generic.Deleted, "old") in tokens
        assert (Generic.Inserted, "new") in tokens

    def test_terminal_colours(self):
        text = report_highlight("Found differences in output:\n1- a\n1+ b\n")

        assert "\x1b[" in text
        assert "a" in text and "b" in text


class TestRepeatedLines:
    """Reports stay complete when lines repeat"""

    def test_change_after_repeated_run(self):
        report = report_render(lines_diff("x\ny\nx\ny\n", "x\ny\nx\nz\n"))
        assert report == ["4- y", "4+ z"]

    def test_every_changed_line_reported(self):
        """Whatever alignment is chosen, each differing line shows up"""
        original = "-\n-\na\n-\n-\nb\n-\n"
        regenerated = "-\n-\nA\n-\n-\nB\n-\n"
        diff = lines_diff(original, regenerated)

        removed = {entry.text for entry in diff if entry.tag is DiffTag.LEFT}
        added = {entry.text for entry in diff if entry.tag is DiffTag.RIGHT}
        assert {"a", "b"} <= removed
        assert {"A", "B"} <= added
