"""End-to-end tests for the scaling pipeline."""

from fractions import Fraction

import pytest
from prometheus_client import REGISTRY

from scaling_errors import ScaleFactorError
from scaling_pipeline import QuantityScalingPipeline, scale_recipe_lines, scale_text


class TestScaling:
    """Whole-block scaling scenarios."""

    @pytest.mark.parametrize("text, factor, expected", [
        ("180 grams chicken", 2, "360 grams chicken"),
        ("½ cup sugar", 2.5, "1¼ cup sugar"),
        ("1 1/2 cups flour", 2, "3 cups flour"),
        ("1.5 cups milk", 2, "3 cups milk"),
        ("2-3 cloves garlic", 2, "4-6 cloves garlic"),
        ("125 g butter", "0.3", "37.5 g butter"),
        ("3 eggs", Fraction(1, 2), "1½ eggs"),
        ("1¾kg potatoes", 1, "1¾ kg potatoes"),
        ("1 cup stock", Fraction(1, 3), "⁵⁄₁₆ cup stock"),
        ("1 tsp salt", Fraction(1, 16), "¹⁄₁₆ tsp salt"),
        ("Step 1: mix 2 cups flour", 2, "Step 1: mix 4 cups flour"),
        ("Bake for 20 minutes at 180 C", 2, "Bake for 20 minutes at 180 C"),
        ("2 tbsp. oil, 1 T. butter", 2, "4 tbsp. oil, 2 T. butter"),
    ])
    def test_scenarios(self, pipeline, text, factor, expected):
        assert pipeline.process(text, factor).rendered_text == expected

    @pytest.mark.parametrize("text", [
        "450 g", "3.5 cups", "1/4 tsp", "¾ cup", "2 3/4 cups", "1¾ cups", "1-1/4 oz.",
        "⅕ cup", "⅒ l", "⅐ cup", "⅑ cup", "1/5 tsp", "2 3/10 cups", "1⅐ cups", "1-1/3 cups",
    ])
    def test_identity_preserves_every_format(self, pipeline, ascii_pipeline, text):
        for scaler in (pipeline, ascii_pipeline):
            result = scaler.process(text, 1)
            token = result.tokens[0]
            assert token.scaled_value == token.value
            assert token.changed is False
            reparsed = scaler.process(result.rendered_text, 1).tokens[0]
            assert reparsed.value == token.value, f"'{text}' rendered as '{result.rendered_text}'"

    @pytest.mark.parametrize("text, unicode_text, ascii_text", [
        ("450 g", "450 g", "450 g"),
        ("3.5 cups", "3.5 cups", "3.5 cups"),
        ("1/4 tsp", "¼ tsp", "1/4 tsp"),
        ("½ cup", "½ cup", "1/2 cup"),
        ("2 3/4 cups", "2¾ cups", "2 3/4 cups"),
        ("1 ¾ cups", "1¾ cups", "1 3/4 cups"),
        ("1-1/4 oz.", "1¼ oz.", "1 1/4 oz."),
        ("⅕ cup", "⅕ cup", "1/5 cup"),
        ("2 3/10 cups", "2³⁄₁₀ cups", "2 3/10 cups"),
    ])
    def test_identity_only_normalizes_notation(self, pipeline, ascii_pipeline, text, unicode_text, ascii_text):
        assert pipeline.process(text, 1).rendered_text == unicode_text
        assert ascii_pipeline.process(text, 1).rendered_text == ascii_text

    def test_dash_mixed_renders_as_glyph(self, pipeline):
        assert pipeline.process("1-1/4 oz. cheese", 1).rendered_text == "1¼ oz. cheese"

    def test_fraction_scenario(self, pipeline, ascii_pipeline):
        assert pipeline.process("1/4 tsp salt", 3).rendered_text == "¾ tsp salt"
        assert ascii_pipeline.process("1/4 tsp salt", 3).rendered_text == "3/4 tsp salt"
        assert ascii_pipeline.process("1 cup", Fraction(7, 4)).rendered_text == "1 3/4 cup"

    def test_identity_keeps_values(self, pipeline):
        result = pipeline.process("2 3/4 sticks butter", 1)
        assert result.rendered_text == "2¾ sticks butter"
        assert result.tokens[0].changed is False
        assert result.changed_spans == []

    def test_unit_gap_normalized_to_one_space(self, pipeline):
        assert pipeline.process("2cups", 1).rendered_text == "2 cups"
        assert pipeline.process("2\u00a0cups", 1).rendered_text == "2 cups"

    def test_text_without_quantities_unchanged(self, pipeline):
        text = "Season to taste and serve warm."
        result = pipeline.process(text, 3)
        assert result.rendered_text == text
        assert result.tokens == []

    def test_empty_text(self, pipeline):
        result = pipeline.process("", 2)
        assert result.rendered_text == ""
        assert result.tokens == []

    def test_pipeline_reusable(self, pipeline):
        assert pipeline.process("1 cup", 2).rendered_text == "2 cup"
        assert pipeline.process("1 cup", 3).rendered_text == "3 cup"

    def test_scale_text_helper(self, ascii_settings):
        assert scale_text("1/2 cup", 3, ascii_settings).rendered_text == "1 1/2 cup"

    def test_invalid_factor_raises(self, pipeline):
        with pytest.raises(ScaleFactorError):
            pipeline.process("2 cups", "two")


class TestMarkers:

    def test_no_parse_marker_stripped_and_untouched(self, pipeline):
        result = pipeline.process("<span data-qty-no-parse>2 cups</span> flour, 1 cup water", 2)
        assert result.rendered_text == "2 cups flour, 2 cup water"

    def test_parse_marker_forces_quantity(self, pipeline):
        result = pipeline.process("Serves <span data-qty-parse>4</span> people", 2)
        assert result.rendered_text == "Serves 8 people"

    def test_ordinary_markup_kept(self, pipeline):
        result = pipeline.process('<span class="qty">2 cups</span> flour', 2)
        assert result.rendered_text == '<span class="qty">4 cups</span> flour'


class TestSpans:

    def test_output_spans(self, pipeline):
        result = pipeline.process("Mix 2 cups flour and ½ cup sugar", 2.5)
        assert result.rendered_text == "Mix 5 cups flour and 1¼ cup sugar"
        assert [t.span for t in result.tokens] == [(4, 5), (21, 23)]
        for token in result.tokens:
            start, end = token.span
            assert result.rendered_text[start:end] in ("5", "1¼")

    def test_spans_after_marker_stripping(self, pipeline):
        result = pipeline.process("<span data-qty-parse>4</span> servings", 2)
        assert result.rendered_text == "8 servings"
        assert result.tokens[0].span == (0, 1)
        assert result.tokens[0].source_span == (0, 1)

    def test_to_dict(self, pipeline):
        data = pipeline.process("½ cup sugar", 2).to_dict()
        assert data["rendered_text"] == "1 cup sugar"
        token = data["tokens"][0]
        assert token["span"] == [0, 1]
        assert token["value"] == "1/2"
        assert token["scaled_value"] == "1"
        assert token["format_kind"] == "UnicodeFraction"
        assert token["unit_text"] == "cup"
        assert token["changed"] is True


class TestRecipeLines:

    def test_list_prefixes_kept(self, pipeline):
        lines = ["- 2 cups flour", "- [ ] 3 eggs", "1. 1/2 tsp salt", "4 servings"]
        reports = scale_recipe_lines(pipeline, lines, 2)
        assert [r["rendered_text"] for r in reports] == [
            "- 4 cups flour", "- [ ] 6 eggs", "1. 1 tsp salt", "4 servings",
        ]
        assert reports[0]["tokens"][0]["span"] == [2, 3]

    def test_all_lines(self, pipeline):
        reports = scale_recipe_lines(pipeline, ["4 servings"], 2, all_lines=True)
        assert reports[0]["rendered_text"] == "8 servings"


def _sample(name, labels=None):
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_metrics_recorded():
    pipeline = QuantityScalingPipeline()
    detected = _sample('recipe_quantities_detected_total', {'format_kind': 'MixedTextNumber'})
    changed = _sample('recipe_quantities_changed_total')

    pipeline.process("2 3/4 cups flour", 2)

    assert _sample('recipe_quantities_detected_total', {'format_kind': 'MixedTextNumber'}) == detected + 1
    assert _sample('recipe_quantities_changed_total') == changed + 1
