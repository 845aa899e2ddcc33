"""Tests for manual override marker extraction."""

from manual_markers import MarkedText, OverrideRegion, extract_override_regions, marker_mode
from quantity_models import OverrideMode


class TestExtraction:

    def test_plain_text_untouched(self):
        marked = extract_override_regions("2 cups flour")
        assert marked.text == "2 cups flour"
        assert marked.regions == ()

    def test_no_parse_marker(self):
        marked = extract_override_regions("<span data-qty-no-parse>2 cups</span> flour")
        assert marked.text == "2 cups flour"
        assert marked.regions == (OverrideRegion(0, 6, OverrideMode.FORCE_SKIP),)

    def test_parse_marker(self):
        marked = extract_override_regions("Serves <span data-qty-parse>4</span> people")
        assert marked.text == "Serves 4 people"
        assert marked.regions == (OverrideRegion(7, 8, OverrideMode.FORCE_PARSE),)

    def test_marker_with_other_attributes(self):
        marked = extract_override_regions('<span class="q" data-qty-parse="">4</span>')
        assert marked.text == "4"
        assert marked.regions[0].mode is OverrideMode.FORCE_PARSE

    def test_nested_markers_outer_wins(self):
        marked = extract_override_regions(
            "<span data-qty-no-parse>a <span data-qty-parse>2</span> cups</span>"
        )
        assert marked.text == "a 2 cups"
        assert marked.regions == (OverrideRegion(0, 8, OverrideMode.FORCE_SKIP),)

    def test_ordinary_span_outside_marker_kept(self):
        text = '<span class="qty">2 cups</span>'
        marked = extract_override_regions(text)
        assert marked.text == text
        assert marked.regions == ()

    def test_ordinary_span_inside_marker_kept(self):
        marked = extract_override_regions(
            '<span data-qty-no-parse>keep <span class="x">2</span></span> after'
        )
        assert marked.text == 'keep <span class="x">2</span> after'
        assert marked.regions == (OverrideRegion(0, 29, OverrideMode.FORCE_SKIP),)

    def test_unterminated_marker_runs_to_end(self):
        marked = extract_override_regions("<span data-qty-no-parse>2 cups flour")
        assert marked.text == "2 cups flour"
        assert marked.regions == (OverrideRegion(0, 12, OverrideMode.FORCE_SKIP),)

    def test_empty_marker_produces_no_region(self):
        marked = extract_override_regions("<span data-qty-parse></span>2 cups")
        assert marked.text == "2 cups"
        assert marked.regions == ()

    def test_stray_closing_tag_is_text(self):
        marked = extract_override_regions("</span>2 cups")
        assert marked.text == "</span>2 cups"

    def test_two_markers(self):
        marked = extract_override_regions(
            "<span data-qty-parse>1</span> and <span data-qty-no-parse>2</span>"
        )
        assert marked.text == "1 and 2"
        assert [r.mode for r in marked.regions] == [OverrideMode.FORCE_PARSE, OverrideMode.FORCE_SKIP]
        assert [(r.start, r.end) for r in marked.regions] == [(0, 1), (6, 7)]


class TestMarkerMode:

    def test_attribute_names(self):
        test_cases = [
            (" data-qty-parse", OverrideMode.FORCE_PARSE),
            (" data-qty-no-parse", OverrideMode.FORCE_SKIP),
            (' DATA-QTY-PARSE="true"', OverrideMode.FORCE_PARSE),
            (" data-qty-parsed", None),
            (' class="data-qty"', None),
            ("", None),
        ]
        for attrs, expected in test_cases:
            assert marker_mode(attrs) is expected, f"Failed for '{attrs}'"


class TestMarkedText:

    def test_segments_between_regions(self):
        marked = MarkedText("1 and 2", (OverrideRegion(0, 1, OverrideMode.FORCE_PARSE),
                                        OverrideRegion(6, 7, OverrideMode.FORCE_SKIP)))
        assert [(s.start, s.end, s.mode) for s in marked.segments()] == [
            (0, 1, OverrideMode.FORCE_PARSE),
            (1, 6, OverrideMode.NONE),
            (6, 7, OverrideMode.FORCE_SKIP),
        ]

    def test_segments_cover_text(self):
        marked = MarkedText("ab 2 cd", (OverrideRegion(3, 4, OverrideMode.FORCE_PARSE),))
        segments = marked.segments()
        assert [(s.start, s.end, s.mode) for s in segments] == [
            (0, 3, OverrideMode.NONE),
            (3, 4, OverrideMode.FORCE_PARSE),
            (4, 7, OverrideMode.NONE),
        ]

    def test_segments_of_empty_text(self):
        assert MarkedText("").segments() == [OverrideRegion(0, 0, OverrideMode.NONE)]
