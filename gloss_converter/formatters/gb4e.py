"""gb4e / gb4e-modified LaTeX interlinear example formatter.

WHY: This is the output linguists paste into their papers. gb4e aligns
the \\gll line and the line beneath it word by word on spaces, so each
word's morphs (and glosses) must be glued into one space-free chunk.

HOW: The example is built from fixed pieces:
  \\begin{exe} \\ex \\label{example}
  word line           the words, space-joined
  \\gll morph line     per word, its morph tokens concatenated
  gloss line          per word, its classified gloss tokens concatenated
  \\glt translation    first value of the translation tier, `quoted'
  \\href citation      sentence permalink and (title)
  \\end{exe}

RULES:
- Bound morphs (leading "=" / "-", or ALL-CAPS) → \\textsc{lower-cased}
- Stems are rendered verbatim
- Spaces inside a word's gloss chunk become "\\_" so gb4e keeps it together
- Only sentence_translation[0] is used; missing → "Undefined"
- "_" in the title is escaped as "\\_"
- Output suffix: "-gb4e.tex", media type "application/x-tex"
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from gloss_converter.config import UNDEFINED_TOKEN
from gloss_converter.core.ir import AlignedWord, FormattedResult, TierValue
from gloss_converter.formatters.base import BaseFormatter, FormatterOutput

EXAMPLE_BEGIN = "\\begin{exe} \n  \\ex \\label{example} \n  "
EXAMPLE_END = "\\end{exe} \n"
LINE_BREAK = "\\\\ \n  "
MORPHEME_START = "\\gll"
TRANSLATION_START = "\\glt `"
TRANSLATION_END = "' " + LINE_BREAK


def is_bound_morph(token: str) -> bool:
    """True for suffixes, clitics, and all-caps grammatical glosses."""
    return token.startswith("=") or token.startswith("-") or token == token.upper()


def render_gloss_token(token: str) -> str:
    if is_bound_morph(token):
        return "\\textsc{" + token.lower() + "}"
    return token


def escape_underscores(text: str) -> str:
    return text.replace("_", "\\_")


def word_and_morpheme_lines(words: Sequence[AlignedWord]) -> str:
    """The plain word line followed by the \\gll morpheme line."""
    word_line = " ".join(w.word for w in words)
    morpheme_parts = [MORPHEME_START]
    morpheme_parts.extend("".join(w.morphs) for w in words)
    morpheme_parts.append(LINE_BREAK)
    return word_line + " \n  " + " ".join(morpheme_parts)


def gloss_line(words: Sequence[AlignedWord]) -> str:
    parts: List[str] = []
    for w in words:
        chunk = "".join(render_gloss_token(g) for g in w.glosses)
        parts.append(chunk.replace(" ", "\\_"))
    parts.append(LINE_BREAK)
    return " ".join(parts)


def translation_line(sentence_translation: Sequence[TierValue]) -> str:
    sentence = UNDEFINED_TOKEN
    if sentence_translation and sentence_translation[0].value:
        sentence = sentence_translation[0].value
    return TRANSLATION_START + sentence + TRANSLATION_END


def citation_line(sentence_url: str, title: str) -> str:
    # No newline inside the parentheses; the line ends after "} ".
    return "\\href{" + sentence_url + "}{(" + escape_underscores(title) + ")} \n"


def convert_to_latex(result: FormattedResult) -> str:
    """Render the complete gb4e example for one sentence."""
    pieces: Iterable[str] = (
        EXAMPLE_BEGIN,
        word_and_morpheme_lines(result.words),
        gloss_line(result.words),
        translation_line(result.sentence_translation),
        citation_line(result.sentence_url, result.title),
        EXAMPLE_END,
    )
    return "".join(pieces)


class Gb4eFormatter(BaseFormatter):
    """Formatter that produces a gb4e interlinear example."""

    @property
    def name(self) -> str:
        return "gb4e LaTeX"

    def format(self, result: FormattedResult) -> List[FormatterOutput]:
        return [
            FormatterOutput(
                suffix="-gb4e.tex",
                content=convert_to_latex(result),
                media_type="application/x-tex",
            )
        ]
