"""Unit tests for content_review.block_parser module."""

import pytest

from src.content_review.block_parser import BlockParser, classify
from src.content_review.models import BlockKind
from src.content_review.text_utils import normalize_text
from tests.fixtures.sample_posts import SAMPLE_POST_SIMPLE, SAMPLE_POST_WITH_EMBEDS

from bs4 import BeautifulSoup


class TestBlockParser:
    """Test cases for BlockParser class."""

    @pytest.fixture
    def parser(self):
        """Create BlockParser instance."""
        return BlockParser()

    # ===== Structural blocks =====

    def test_parse_splits_paragraphs_and_headings(self, parser):
        """parse should emit one block per paragraph and heading."""
        blocks = parser.parse("<h1>Title here</h1><p>First paragraph</p><p>Second paragraph</p>")

        assert [b.tag for b in blocks] == ["h1", "p", "p"]
        assert all(b.kind == BlockKind.STRUCTURAL for b in blocks)
        assert blocks[1].markup == "<p>First paragraph</p>"

    def test_parse_keeps_blocks_in_document_order(self, parser):
        """Block indexes follow document order."""
        blocks = parser.parse(SAMPLE_POST_SIMPLE)

        assert [b.index for b in blocks] == list(range(len(blocks)))
        assert [b.tag for b in blocks] == ["h1", "p", "h2", "p", "ul", "h2", "p"]

    def test_parse_does_not_descend_into_structural_blocks(self, parser):
        """A list is one block, its items are not split out."""
        blocks = parser.parse("<ul><li>One item</li><li>Two items</li></ul>")

        assert len(blocks) == 1
        assert blocks[0].tag == "ul"
        assert blocks[0].markup == "<ul><li>One item</li><li>Two items</li></ul>"

    def test_parse_keeps_nested_paragraph_inside_div(self, parser):
        """A div with paragraphs is emitted whole, never split."""
        blocks = parser.parse("<div><p>Inner one</p><p>Inner two</p></div>")

        assert len(blocks) == 1
        assert blocks[0].tag == "div"

    def test_parse_orphan_list_item_is_structural(self, parser):
        """A list item outside any list is still its own block."""
        blocks = parser.parse("<li>Stray list item</li>")

        assert len(blocks) == 1
        assert blocks[0].kind == BlockKind.STRUCTURAL
        assert blocks[0].tag == "li"

    # ===== Inline text =====

    def test_parse_inline_wrappers_are_transparent(self, parser):
        """em/strong/span/a never form their own block."""
        blocks = parser.parse("Intro text <em>emphasised words</em> <p>Para</p>")

        assert [b.kind for b in blocks] == [
            BlockKind.INLINE_TEXT,
            BlockKind.INLINE_TEXT,
            BlockKind.STRUCTURAL,
        ]
        assert blocks[0].markup == "Intro text"
        assert blocks[1].markup == "emphasised words"
        assert blocks[0].tag is None

    def test_parse_inline_text_is_escaped(self, parser):
        """Bare text keeps its entities escaped so it stays valid markup."""
        blocks = parser.parse("Fish &amp; chips &lt;today&gt;")

        assert len(blocks) == 1
        assert blocks[0].markup == "Fish &amp; chips &lt;today&gt;"

    def test_parse_drops_whitespace_and_comments(self, parser):
        """Whitespace-only text and comments produce no blocks."""
        blocks = parser.parse("\n   <!-- editor note -->\n<p>Only block</p>\n\n")

        assert len(blocks) == 1
        assert blocks[0].markup == "<p>Only block</p>"

    # ===== Protected media =====

    @pytest.mark.parametrize("markup", [
        '<table><tr><td>1</td></tr></table>',
        '<iframe src="https://example.com/embed"></iframe>',
        '<img src="photo.png"/>',
        '<figure><img src="photo.png"/><figcaption>Caption</figcaption></figure>',
        '<script>window.x = 1;</script>',
        '<video src="clip.mp4"></video>',
        '<form action="/subscribe"><input name="email"/></form>',
    ])
    def test_parse_media_tags_are_protected(self, parser, markup):
        """Media tags become protected blocks with their markup intact."""
        blocks = parser.parse(markup)

        assert len(blocks) == 1
        assert blocks[0].kind == BlockKind.PROTECTED_MEDIA
        assert blocks[0].markup == markup

    @pytest.mark.parametrize("markup", [
        '<div class="info-widget hidden"><p>Widget</p></div>',
        '<div class="w-embed"><p>Embed</p></div>',
        '<div class="pricing-w-widget">Embed</div>',
        '<div data-w-id="abc-123">Animated</div>',
        '<section data-widget-type="cta">Call to action</section>',
    ])
    def test_parse_widget_attributes_are_protected(self, parser, markup):
        """Widget class names and data attributes mark a block protected."""
        blocks = parser.parse(markup)

        assert len(blocks) == 1
        assert blocks[0].kind == BlockKind.PROTECTED_MEDIA

    def test_parse_paragraph_with_image_is_protected(self, parser):
        """Media nested inside a structural block protects the whole block."""
        blocks = parser.parse('<p>Look at this <img src="chart.png"/> chart</p>')

        assert len(blocks) == 1
        assert blocks[0].kind == BlockKind.PROTECTED_MEDIA

    def test_parse_widget_span_is_protected(self, parser):
        """A non-structural element with widget classes is kept whole."""
        blocks = parser.parse('<span class="w-embed">Embedded counter</span>')

        assert len(blocks) == 1
        assert blocks[0].kind == BlockKind.PROTECTED_MEDIA
        assert blocks[0].tag == "span"

    def test_parse_embeds_fixture(self, parser):
        """Fixture post yields three protected blocks between text blocks."""
        blocks = parser.parse(SAMPLE_POST_WITH_EMBEDS)

        kinds = [b.kind for b in blocks]
        assert kinds.count(BlockKind.PROTECTED_MEDIA) == 3
        assert kinds.count(BlockKind.STRUCTURAL) == 3

    # ===== Edge cases =====

    @pytest.mark.parametrize("html", ["", "   ", "\n\t\n", None])
    def test_parse_empty_input_returns_no_blocks(self, parser, html):
        """Empty or whitespace-only input is an empty document."""
        assert parser.parse(html) == []

    def test_parse_malformed_html_does_not_raise(self, parser):
        """Unclosed and stray tags are recovered, not reported."""
        blocks = parser.parse("<p>Unclosed <b>bold</p></div><p>Next paragraph")

        assert len(blocks) >= 1
        assert "Unclosed" in blocks[0].markup

    def test_parse_deep_nesting_does_not_recurse(self, parser):
        """Thousands of nested inline wrappers do not hit the recursion limit."""
        depth = 1500
        html = "<span>" * depth + "deep text" + "</span>" * depth

        blocks = parser.parse(html)

        assert len(blocks) == 1
        assert blocks[0].markup == "deep text"

    def test_concatenated_markup_reproduces_blocks(self, parser):
        """Re-parsing the joined markup gives the same blocks back."""
        blocks = parser.parse(SAMPLE_POST_SIMPLE)
        joined = "".join(b.markup for b in blocks)

        reparsed = parser.parse(joined)

        assert [b.markup for b in reparsed] == [b.markup for b in blocks]


class TestClassify:
    """Test cases for the classify lookup."""

    def _tag(self, markup):
        return BeautifulSoup(markup, "html.parser").find()

    def test_transparent_tags_return_none(self):
        """Inline formatting tags are not blocks."""
        for markup in ["<span>x</span>", "<em>x</em>", "<strong>x</strong>", '<a href="#">x</a>']:
            assert classify(self._tag(markup)) is None

    def test_table_is_protected_not_structural(self):
        """Tags in both sets are protected."""
        assert classify(self._tag("<table></table>")) == BlockKind.PROTECTED_MEDIA
        assert classify(self._tag("<figure></figure>")) == BlockKind.PROTECTED_MEDIA

    def test_heading_levels_are_structural(self):
        """h1-h6 are all structural."""
        for level in range(1, 7):
            assert classify(self._tag(f"<h{level}>x</h{level}>")) == BlockKind.STRUCTURAL


class TestNormalizedText:
    """Test cases for block normalized text."""

    def test_normalized_text_strips_markup_punctuation_and_case(self):
        """Tags, punctuation and case do not reach the comparison key."""
        assert normalize_text("<p>Hello, <strong>World</strong>!</p>") == "hello world"

    def test_normalized_text_decodes_entities(self):
        """Entities are decoded before punctuation is removed."""
        assert normalize_text("<p>Fish&nbsp;&amp;&nbsp;chips</p>") == "fish chips"

    def test_normalized_text_collapses_whitespace(self):
        """Runs of whitespace collapse to one space."""
        assert normalize_text("<p>  one \n\n two\tthree  </p>") == "one two three"

    def test_normalized_text_tag_boundaries_separate_words(self):
        """Adjacent blocks inside one element do not glue words together."""
        assert normalize_text("<ul><li>first</li><li>second</li></ul>") == "first second"

    def test_normalized_text_is_cached_on_block(self):
        """Blocks compute their key once."""
        block = BlockParser().parse("<p>Cached Value Here</p>")[0]

        assert block.normalized_text == "cached value here"
        assert block.__dict__["normalized_text"] == "cached value here"

    def test_normalized_text_empty_markup(self):
        """Empty markup normalizes to an empty key."""
        assert normalize_text("") == ""
        assert normalize_text("<p>!!! ...</p>") == ""
