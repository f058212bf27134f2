# SPDX-License-Identifier: Apache-2.0
"""Tests for the HTML block splitter."""

from __future__ import annotations

import time

import pytest

from html_translator.core import BLOCK_TAGS, Block, Raw, join_segments, split_blocks


class TestSplitBlocks:
    """Tests for split_blocks."""

    def test_mixed_blocks_and_raw(self) -> None:
        """Blocks and the text between them become separate segments."""
        segments = split_blocks("<p>Hello</p> world <li>Bye</li>")
        assert segments == [
            Block("p", "<p>", "Hello", "</p>"),
            Raw(" world "),
            Block("li", "<li>", "Bye", "</li>"),
        ]

    def test_no_recognized_tags(self) -> None:
        """Input without block tags is one Raw segment."""
        assert split_blocks("just text") == [Raw("just text")]

    def test_empty_input(self) -> None:
        """Empty input yields no segments."""
        assert split_blocks("") == []

    def test_adjacent_blocks_have_no_raw_between(self) -> None:
        """Adjacent blocks produce no empty Raw segment."""
        segments = split_blocks("<h1>A</h1><h2>B</h2>")
        assert segments == [
            Block("h1", "<h1>", "A", "</h1>"),
            Block("h2", "<h2>", "B", "</h2>"),
        ]

    def test_leading_and_trailing_raw(self) -> None:
        """Content before the first and after the last block is kept."""
        segments = split_blocks("<div><p>x</p></div>")
        assert segments == [
            Raw("<div>"),
            Block("p", "<p>", "x", "</p>"),
            Raw("</div>"),
        ]

    def test_attributes_kept_in_open_tag(self) -> None:
        """Opening tag keeps its attributes verbatim."""
        segments = split_blocks('<p class="lead" id=intro>Text</p>')
        assert segments == [
            Block("p", '<p class="lead" id=intro>', "Text", "</p>"),
        ]

    def test_case_insensitive_match_preserves_casing(self) -> None:
        """Upper-case tags match; tag_name is lower-cased, tags are not."""
        segments = split_blocks("<BLOCKQUOTE>Quote</blockquote>")
        assert len(segments) == 1
        block = segments[0]
        assert isinstance(block, Block)
        assert block.tag_name == "blockquote"
        assert block.open_tag == "<BLOCKQUOTE>"
        assert block.close_tag == "</blockquote>"

    def test_inline_markup_stays_in_text(self) -> None:
        """Inline tags inside a block are part of its text."""
        segments = split_blocks("<p>Hi <b>there</b></p>")
        assert segments == [Block("p", "<p>", "Hi <b>there</b>", "</p>")]

    def test_multiline_inner_content(self) -> None:
        """Inner content may span lines."""
        segments = split_blocks("<p>one\ntwo</p>")
        assert segments == [Block("p", "<p>", "one\ntwo", "</p>")]

    @pytest.mark.parametrize("tag", sorted(BLOCK_TAGS))
    def test_every_block_tag_recognized(self, tag: str) -> None:
        """Each whitelisted tag becomes a Block."""
        segments = split_blocks(f"<{tag}>x</{tag}>")
        assert segments == [Block(tag, f"<{tag}>", "x", f"</{tag}>")]

    @pytest.mark.parametrize(
        "html",
        [
            "<pre>code</pre>",
            "<link rel=x><header>h</header>",
            "<h7>nope</h7>",
            "<div>plain</div>",
        ],
    )
    def test_similar_tag_names_not_matched(self, html: str) -> None:
        """Tags that only start like a block tag are left raw."""
        assert split_blocks(html) == [Raw(html)]

    def test_unclosed_block_falls_through_to_raw(self) -> None:
        """A block without its closing tag is not matched."""
        html = "<p>never closed <span>x</span>"
        assert split_blocks(html) == [Raw(html)]

    def test_mismatched_close_tag_not_matched(self) -> None:
        """A closing tag of a different name does not end the block."""
        html = "<h1>Title</h2>"
        assert split_blocks(html) == [Raw(html)]

    def test_nested_same_tag_is_not_supported(self) -> None:
        """The first closing tag of the same name ends the block.

        Nested same-name blocks are a known boundary of the scanner: the
        outer close tag ends up in a Raw segment.
        """
        segments = split_blocks("<li>a<li>b</li></li>")
        assert segments == [
            Block("li", "<li>", "a<li>b", "</li>"),
            Raw("</li>"),
        ]

    def test_different_nested_block_is_inner_text(self) -> None:
        """A <p> inside a <blockquote> is part of the quote's text."""
        segments = split_blocks("<blockquote><p>q</p></blockquote>")
        assert segments == [
            Block("blockquote", "<blockquote>", "<p>q</p>", "</blockquote>"),
        ]

    def test_close_tag_with_whitespace(self) -> None:
        """Closing tags may contain trailing whitespace."""
        segments = split_blocks("<p>x</p >")
        assert segments == [Block("p", "<p>", "x", "</p >")]

    def test_empty_block(self) -> None:
        """An empty block is still a Block."""
        assert split_blocks("<p></p>") == [Block("p", "<p>", "", "</p>")]


class TestLargeInput:
    """Unclosed tags must not make splitting quadratic."""

    @pytest.mark.parametrize(
        "html",
        [
            "<p>" * 20000,
            "<li>" * 20000 + "<p>x</p>",
            "<p" * 20000 + ">",
            "<p><h1><li><blockquote>" * 5000,
            "<p>a</p><li>" * 10000,
        ],
    )
    def test_unclosed_tags_split_quickly(self, html: str) -> None:
        start = time.perf_counter()
        segments = split_blocks(html)
        elapsed = time.perf_counter() - start

        assert join_segments(segments) == html
        assert elapsed < 2.0

    def test_unclosed_tags_are_raw(self) -> None:
        html = "<p>" * 20000
        assert split_blocks(html) == [Raw(html)]

    def test_block_after_many_unclosed_tags(self) -> None:
        """A closed block after unclosed ones of another name still matches."""
        segments = split_blocks("<li>" * 1000 + "<p>x</p>")
        assert segments == [Raw("<li>" * 1000), Block("p", "<p>", "x", "</p>")]

    def test_close_tag_reused_by_later_opening(self) -> None:
        """Unclosed earlier tags fold into the first block that closes."""
        segments = split_blocks("<p>a <p>b</p>")
        assert segments == [Block("p", "<p>", "a <p>b", "</p>")]

    def test_open_tag_cannot_contain_angle_bracket(self) -> None:
        """An opening tag ends at the next "<", so it is not matched."""
        html = '<p title="a<b">x</p>'
        assert split_blocks(html) == [Raw(html)]


class TestJoinSegments:
    """Split followed by join reproduces the input."""

    @pytest.mark.parametrize(
        "html",
        [
            "",
            "just text",
            "<p>Hello</p> world <li>Bye</li>",
            '<article>\n  <h1 class="t">Title</h1>\n  <p>Body <a href="/x">link</a></p>\n</article>',
            "<ul><li>one</li><li>two</li></ul>",
            "<p>unclosed <P>Upper</P> tail",
            "<li>a<li>b</li></li>",
            "<!-- <p>comment</p> --><script>var p = '<p>';</script>",
        ],
    )
    def test_round_trip(self, html: str) -> None:
        """Concatenated segments equal the original input."""
        assert join_segments(split_blocks(html)) == html


class TestBlockModel:
    """Tests for the Block model."""

    def test_rejects_unknown_tag(self) -> None:
        """Block tag_name must be a recognized block tag."""
        with pytest.raises(ValueError):
            Block("div", "<div>", "x", "</div>")

    def test_render_with_replacement(self) -> None:
        """render() wraps replacement text in the original tags."""
        block = Block("p", '<p class="a">', "hi", "</p>")
        assert block.render() == '<p class="a">hi</p>'
        assert block.render("salut") == '<p class="a">salut</p>'
