"""
Grammar tests - directive lines and managed pairs

Tests recognition of the four directive forms and the pairing of a
directive with a block in either delimiter style.
"""

import pytest

from mdsh.lib.grammar import (
    directive_fromMatch,
    directive_pattern,
    directives_find,
    grammar_get,
    pair_next,
    pairs_find,
)
from mdsh.models.directives import BlockStyle, DirectiveKind, spec_get


class TestDirectiveForms:
    """Test the four directive line forms"""

    def test_all_four_forms(self):
        """Each form is recognised with its kind, style and payload"""
        doc = (
            "`$ ls`\n"
            "\n"
            "[$ a.txt](a.txt)\n"
            "\n"
            "`> echo hi`\n"
            "\n"
            "[> b.md](docs/b.md)\n"
        )
        found = directives_find(doc)

        assert [(d.spec.kind, d.spec.style) for d in found] == [
            (DirectiveKind.COMMAND, BlockStyle.FENCE),
            (DirectiveKind.LINK, BlockStyle.FENCE),
            (DirectiveKind.COMMAND, BlockStyle.MARKDOWN),
            (DirectiveKind.LINK, BlockStyle.MARKDOWN),
        ]
        assert [d.payload for d in found] == ["ls", "a.txt", "echo hi", "docs/b.md"]
        assert found[3].description == "b.md"

    def test_trailing_whitespace_allowed(self):
        """Whitespace after the directive is still a directive"""
        found = directives_find("`$ ls`   \nafter\n")
        assert len(found) == 1
        assert found[0].payload == "ls"

    def test_not_at_line_start(self):
        """Inline code in prose is not a directive"""
        assert directives_find("see `$ ls` here\n") == []

    def test_trailing_text_rejected(self):
        """The directive must be alone on its line"""
        assert directives_find("`$ ls` and more\n") == []
        assert directives_find("[$ a](a.txt) and more\n") == []

    def test_plain_link_ignored(self):
        """Ordinary markdown links are left alone"""
        assert directives_find("[docs](docs/index.md)\n") == []

    def test_directive_from_match(self):
        """A single pattern match is described the same way directives_find() does"""
        spec = spec_get(DirectiveKind.LINK, BlockStyle.FENCE)
        match = directive_pattern(DirectiveKind.LINK, BlockStyle.FENCE).search("intro\n[$ Setup](docs/setup.md)\n")

        directive = directive_fromMatch(spec, match)

        assert directive.spec is spec
        assert directive.payload == "docs/setup.md"
        assert directive.description == "Setup"
        assert directive.text == "[$ Setup](docs/setup.md)\n"
        assert directive.span == (6, 31)

    def test_notice_text(self):
        """Notices mirror the directive sigil"""
        found = directives_find("`> date`\n[$ x](x.txt)\n")
        assert found[0].spec.notice_make(found[0].payload) == "> date"
        assert found[1].spec.notice_make(found[1].description) == "[$ x]"


class TestPairs:
    """Test directive + block pairing"""

    def test_native_fence_block(self):
        """`$` directive followed by a fenced block"""
        pair = pair_next("`$ ls`\n```\nold\n```\n", 0, BlockStyle.FENCE)

        assert pair is not None
        assert pair.directive == "`$ ls`"
        assert pair.block_style is BlockStyle.FENCE
        assert pair.is_native

    def test_foreign_block_style(self):
        """`$` directive followed by a markdown comment block"""
        doc = "`$ ls`\n<!-- BEGIN mdsh -->\nold\n<!-- END mdsh -->\n"
        pair = pair_next(doc, 0, BlockStyle.FENCE)

        assert pair is not None
        assert pair.block_style is BlockStyle.MARKDOWN
        assert not pair.is_native

    def test_markdown_directive_with_fence(self):
        """`>` directive followed by a fenced block"""
        pair = pair_next("`> ls`\n```\nx\n```", 0, BlockStyle.MARKDOWN)

        assert pair is not None
        assert pair.directive_style is BlockStyle.MARKDOWN
        assert pair.block_style is BlockStyle.FENCE

    def test_link_pair(self):
        """Link directives pair the same way"""
        pair = pair_next("[$ a.txt](a.txt)\n```\nold\n```\n", 0, BlockStyle.FENCE)

        assert pair is not None
        assert pair.directive == "[$ a.txt](a.txt)"

    def test_no_block(self):
        """A directive without a block is not a pair"""
        assert pair_next("`$ ls`\n\ntext\n", 0, BlockStyle.FENCE) is None

    def test_adjacent_pairs_not_merged(self):
        """Blocks end at the first closing delimiter"""
        doc = "`$ a`\n```\n1\n```\n`$ b`\n```\n2\n```\n"
        pairs = list(pairs_find(doc, BlockStyle.FENCE))

        assert [p.directive for p in pairs] == ["`$ a`", "`$ b`"]
        assert doc[pairs[0].span[0]:pairs[0].span[1]] == "`$ a`\n```\n1\n```"

    def test_mixed_styles_in_order(self):
        """Earliest pair wins whatever its block style"""
        doc = (
            "`$ a`\n<!-- BEGIN mdsh -->\n1\n<!-- END mdsh -->\n"
            "`$ b`\n```\n2\n```\n"
        )
        pairs = list(pairs_find(doc, BlockStyle.FENCE))

        assert [(p.directive, p.block_style) for p in pairs] == [
            ("`$ a`", BlockStyle.MARKDOWN),
            ("`$ b`", BlockStyle.FENCE),
        ]

    def test_other_sigil_ignored(self):
        """Scanning for `$` pairs skips `>` directives"""
        assert pair_next("`> ls`\n```\nx\n```\n", 0, BlockStyle.FENCE) is None


class TestGrammarCache:
    """Test one-time compilation"""

    def test_compiled_once(self):
        """The grammar is built once and shared"""
        assert grammar_get() is grammar_get()

    @pytest.mark.parametrize("directive_style", list(BlockStyle))
    def test_pair_patterns_for_both_block_styles(self, directive_style):
        """Every directive style has a pattern for each block style"""
        grammar = grammar_get()
        for block_style in BlockStyle:
            assert (directive_style, block_style) in grammar.pairs


def pairs_stepwise(text, style):
    """Reference scan: restart pair_next() after every pair"""
    pairs = []
    pos = 0
    pair = pair_next(text, pos, style)
    while pair is not None:
        pairs.append(pair)
        pos = pair.span[1]
        pair = pair_next(text, pos, style)
    return pairs


class TestPairScanning:
    """pairs_find() reuses matches but finds the same pairs as pair_next()"""

    FENCE_PAIR = "`$ f{0}`\n```\n{0}\n```\n"
    COMMENT_PAIR = "`$ c{0}`\n<!-- BEGIN mdsh -->\n{0}\n<!-- END mdsh -->\n"

    def test_many_native_pairs(self):
        doc = "".join(self.FENCE_PAIR.format(i) + "prose\n" for i in range(50))
        pairs = list(pairs_find(doc, BlockStyle.FENCE))

        assert len(pairs) == 50
        assert pairs == pairs_stepwise(doc, BlockStyle.FENCE)
        assert all(pair.is_native for pair in pairs)

    def test_interleaved_block_styles(self):
        """Each style's cached match is used once the other style's pairs are passed"""
        doc = "".join(
            (self.COMMENT_PAIR if i % 3 == 0 else self.FENCE_PAIR).format(i)
            for i in range(30)
        )
        pairs = list(pairs_find(doc, BlockStyle.FENCE))

        assert len(pairs) == 30
        assert pairs == pairs_stepwise(doc, BlockStyle.FENCE)
        assert [pair.block_style for pair in pairs[:4]] == [
            BlockStyle.MARKDOWN,
            BlockStyle.FENCE,
            BlockStyle.FENCE,
            BlockStyle.MARKDOWN,
        ]

    def test_cached_match_inside_consumed_pair(self):
        """A match that starts inside an earlier pair is searched again"""
        doc = (
            "`$ a`\n"
            "```\n"
            "`$ b`\n"
            "<!-- BEGIN mdsh -->\n"
            "x\n"
            "<!-- END mdsh -->\n"
            "```\n"
            "tail\n"
        )
        pairs = list(pairs_find(doc, BlockStyle.FENCE))

        assert [(p.directive, p.block_style) for p in pairs] == [("`$ a`", BlockStyle.FENCE)]
        assert pairs == pairs_stepwise(doc, BlockStyle.FENCE)

    def test_markdown_directives(self):
        doc = (
            "`> a`\n<!-- BEGIN mdsh -->\n1\n<!-- END mdsh -->\n"
            "[> b](b.md)\n```\n2\n```\n"
            "`> c`\n<!-- BEGIN mdsh -->\n3\n<!-- END mdsh -->\n"
        )
        pairs = list(pairs_find(doc, BlockStyle.MARKDOWN))

        assert [p.directive for p in pairs] == ["`> a`", "[> b](b.md)", "`> c`"]
        assert pairs == pairs_stepwise(doc, BlockStyle.MARKDOWN)

    def test_empty_document(self):
        assert list(pairs_find("", BlockStyle.FENCE)) == []
