"""Unit tests for the gb4e and plain text formatters.

WHY: The LaTeX is copied straight into papers; a stray space or a missing
\\\\ breaks gb4e alignment or compilation. Exact strings are asserted.

HOW: FormattedResult objects are built by hand so each line builder can
be tested without the resolver and aligner.
"""

import pytest

from gloss_converter.core.ir import AlignedWord, FormattedResult, TierValue
from gloss_converter.formatters import FORMATTERS
from gloss_converter.formatters.gb4e import (
    Gb4eFormatter,
    citation_line,
    convert_to_latex,
    gloss_line,
    is_bound_morph,
    render_gloss_token,
    translation_line,
    word_and_morpheme_lines,
)
from gloss_converter.formatters.plain_text import PlainTextFormatter


@pytest.fixture
def demo_result():
    return FormattedResult(
        story_id="demo_story",
        title="Demo",
        sentence_url="http://example.org/story/demo?3",
        words=(AlignedWord(index=0, word="cats", morphs=("cat", "-s"), glosses=("cat", "-PL")),),
        sentence_translation=(TierValue(value="cats"),),
    )


@pytest.fixture
def kofan_words():
    return (
        AlignedWord(index=0, word="cundyi'je'fa", morphs=("cundyi", "-'je", "='fa"), glosses=("go", "-PST", "=REP")),
        AlignedWord(index=1, word="tsampi", morphs=("tsampi",), glosses=("forest",)),
    )


class TestBoundMorphClassifier:
    @pytest.mark.parametrize("token", ["-PST", "=REP", "RUN", "-pst", "3"])
    def test_bound_morphs(self, token):
        assert is_bound_morph(token)

    @pytest.mark.parametrize("token", ["dog", "Undefined", "go"])
    def test_stems(self, token):
        assert not is_bound_morph(token)

    def test_bound_morph_rendered_small_caps_lower(self):
        assert render_gloss_token("-PST") == "\\textsc{-pst}"
        assert render_gloss_token("RUN") == "\\textsc{run}"

    def test_stem_rendered_verbatim(self):
        assert render_gloss_token("dog") == "dog"


class TestLineBuilders:
    def test_word_and_morpheme_lines(self, kofan_words):
        assert word_and_morpheme_lines(kofan_words) == (
            "cundyi'je'fa tsampi \n  \\gll cundyi-'je='fa tsampi \\\\ \n  "
        )

    def test_gloss_line(self, kofan_words):
        assert gloss_line(kofan_words) == (
            "go\\textsc{-pst}\\textsc{=rep} forest \\\\ \n  "
        )

    def test_gloss_phrase_spaces_joined(self):
        words = (AlignedWord(index=0, word="x", morphs=("x",), glosses=("go up",)),)
        assert gloss_line(words) == "go\\_up \\\\ \n  "

    def test_empty_words(self):
        assert word_and_morpheme_lines(()) == " \n  \\gll \\\\ \n  "
        assert gloss_line(()) == "\\\\ \n  "

    def test_translation_uses_first_value_only(self):
        line = translation_line((TierValue(value="first"), TierValue(value="second")))
        assert line == "\\glt `first' \\\\ \n  "

    def test_missing_translation_placeholder(self):
        assert translation_line(()) == "\\glt `Undefined' \\\\ \n  "
        assert translation_line((TierValue(value=None),)) == "\\glt `Undefined' \\\\ \n  "

    def test_citation_escapes_title_underscores(self):
        assert citation_line("http://x/s?1", "Going_to_the_forest") == (
            "\\href{http://x/s?1}{(Going\\_to\\_the\\_forest)} \n"
        )

    def test_citation_has_no_newline_inside_parentheses(self):
        line = citation_line("http://x/s?1", "Demo")
        assert "(Demo)}" in line
        assert line.count("\n") == 1
        assert line.endswith("} \n")


class TestGb4eFormatter:
    def test_demo_example(self, demo_result, demo_latex):
        assert convert_to_latex(demo_result) == demo_latex

    def test_output_metadata(self, demo_result, demo_latex):
        outputs = Gb4eFormatter().format(demo_result)
        assert len(outputs) == 1
        assert outputs[0].suffix == "-gb4e.tex"
        assert outputs[0].media_type == "application/x-tex"
        assert outputs[0].content == demo_latex

    def test_deterministic(self, demo_result):
        assert convert_to_latex(demo_result) == convert_to_latex(demo_result)


class TestPlainTextFormatter:
    def test_columns_aligned(self, kofan_words):
        result = FormattedResult(
            story_id="kofan_07",
            title="Going_to_the_forest",
            sentence_url="http://x/s?42000",
            words=kofan_words,
            sentence_translation=(TierValue(value="He went to the forest, they say."),),
        )
        content = PlainTextFormatter().format(result)[0].content
        lines = content.split("\n")

        assert lines[0] == "cundyi'je'fa    tsampi"
        assert lines[1] == "cundyi-'je='fa  tsampi"
        assert lines[2] == "go-PST=REP      forest"
        assert lines[3] == "'He went to the forest, they say.'"
        assert lines[4] == "(Going_to_the_forest) http://x/s?42000"
        assert content.endswith("\n")

    def test_decomposed_accents_do_not_widen_columns(self):
        result = FormattedResult(
            story_id="kofan_07",
            title="T",
            sentence_url="u",
            words=(
                AlignedWord(index=0, word="cofa\u0301n", morphs=("cofa\u0301n",), glosses=("people",)),
                AlignedWord(index=1, word="tsampi", morphs=("tsampi",), glosses=("forest",)),
            ),
        )
        lines = PlainTextFormatter().format(result)[0].content.split("\n")

        assert lines[0] == "cof\u00e1n   tsampi"
        assert lines[1] == "cof\u00e1n   tsampi"
        assert lines[2] == "people  forest"

    def test_no_trailing_whitespace(self, demo_result):
        content = PlainTextFormatter().format(demo_result)[0].content
        for line in content.split("\n"):
            assert line == line.rstrip()


class TestRegistry:
    def test_registered_formatters(self):
        assert set(FORMATTERS) == {"gb4e", "plain_text"}
        for formatter_cls in FORMATTERS.values():
            assert formatter_cls().name
