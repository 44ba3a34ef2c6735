"""Column-aligned plain text interlinear gloss.

WHY: Not every reader has LaTeX at hand. E-mail, issue trackers, and
terminals need the same interlinear block as monospaced text, with each
word's morphs and glosses lined up under it.

HOW: For every aligned word, the word, its morph chunk, and its gloss
chunk form one column padded to the widest of the three. Columns are
separated by two spaces. The translation follows in single quotes, then
the citation.

RULES:
- Glosses are printed verbatim (no small-caps conversion)
- No trailing whitespace on any line
- Cells are NFC-normalized before padding
- Missing translation → 'Undefined'
- Output suffix: "-gloss.txt", media type "text/plain"
"""

from __future__ import annotations

import unicodedata
from typing import List, Tuple

from gloss_converter.config import UNDEFINED_TOKEN
from gloss_converter.core.ir import AlignedWord, FormattedResult
from gloss_converter.formatters.base import BaseFormatter, FormatterOutput

_COLUMN_GAP = "  "


def _column(word: AlignedWord) -> Tuple[str, str, str]:
    cells = (word.word, "".join(word.morphs), "".join(word.glosses))
    # NFC so combining accents do not count towards the column width
    return tuple(unicodedata.normalize("NFC", cell) for cell in cells)


def _aligned_rows(words: List[AlignedWord]) -> List[str]:
    columns = [_column(w) for w in words]
    widths = [max(len(cell) for cell in col) for col in columns]
    rows = []
    for row_index in range(3):
        cells = [col[row_index].ljust(width) for col, width in zip(columns, widths)]
        rows.append(_COLUMN_GAP.join(cells).rstrip())
    return rows


class PlainTextFormatter(BaseFormatter):
    """Formatter that produces a monospaced interlinear block."""

    @property
    def name(self) -> str:
        return "Plain Text"

    def format(self, result: FormattedResult) -> List[FormatterOutput]:
        lines = _aligned_rows(list(result.words))

        translation = UNDEFINED_TOKEN
        if result.sentence_translation and result.sentence_translation[0].value:
            translation = result.sentence_translation[0].value
        lines.append("'{}'".format(translation))
        lines.append("({}) {}".format(result.title, result.sentence_url))

        return [
            FormatterOutput(
                suffix="-gloss.txt",
                content="\n".join(lines) + "\n",
                media_type="text/plain",
            )
        ]
