"""Interlinear Gloss Converter: annotated sentences to gb4e LaTeX examples.

WHY: Linguists reading an annotated story want to quote a sentence in a
paper. Retyping the word, morpheme, gloss, and translation lines by hand is
slow and error-prone. This package aligns the annotation tiers of one
sentence and renders them as a gb4e / gb4e-modified interlinear example
with a citation back to the sentence.

HOW: Three-stage pipeline: resolve (match selected tier names to the
sentence's tiers), align (split morphemes and pair them with glosses per
word), format (pluggable formatters over the FormattedResult IR). A
presenter writes the result into an injected render target.

RULES:
- All formatters consume the same FormattedResult IR
- The pipeline never raises on misaligned data; it shows "Undefined"
- Host concerns (current page URL, display container) are injected
"""

__version__ = "0.1.0"
