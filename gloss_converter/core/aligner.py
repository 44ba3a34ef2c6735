"""Word/morpheme alignment: segment morpheme strings and pair them with glosses.

WHY: The morpheme and gloss tiers are annotated per morpheme chunk, often
a whole word like "cundyi-'je='fa" with a gloss "go-PST=REP". gb4e needs,
for every word of the word tier, the list of its atomic morphs and the
list of their glosses, side by side.

HOW: A single forward fold over the word tier carries a cursor into the
morpheme tier. For each word, morphemes are consumed from the cursor while
their slot span lies inside the word's span. Each consumed morpheme and
the gloss at the same index are split on clitic (=) and affix (-)
boundaries into atomic tokens.

RULES:
- Containment is inclusive: m.start_slot >= w.start_slot and
  m.end_slot <= w.end_slot; an entry without slots is never contained
- The cursor never moves back and never skips ahead; the first entry that
  fails containment ends the current word
- The gloss for morpheme i is glosses[i]; a missing entry or value shows
  up as "Undefined", as does a morpheme without a value
- Splitting inserts a space before every "=" and "-", splits on spaces,
  and drops empty pieces, so boundary markers stay as token prefixes
- Morphemes after the last word are ignored
"""

from __future__ import annotations

import logging
import re
from functools import reduce
from typing import List, Sequence, Tuple

from gloss_converter.config import UNDEFINED_TOKEN
from gloss_converter.core.ir import AlignedWord, TierValue

logger = logging.getLogger(__name__)

# Clitic and affix boundary markers; a space is inserted before each.
_BOUNDARY_RE = re.compile(r"([=-])")

# Fold state: (cursor into the morpheme tier, words aligned so far)
_FoldState = Tuple[int, Tuple[AlignedWord, ...]]


def split_morphs(value: str) -> List[str]:
    """Split a morpheme or gloss string into atomic root/clitic/affix tokens.

    >>> split_morphs("cundyi-'je='fa")
    ['cundyi', "-'je", "='fa"]
    """
    spaced = _BOUNDARY_RE.sub(r" \1", value)
    return [piece for piece in spaced.split(" ") if piece != ""]


def is_contained(entry: TierValue, word: TierValue) -> bool:
    """True if entry's slot span lies within word's span (inclusive)."""
    if None in (entry.start_slot, entry.end_slot, word.start_slot, word.end_slot):
        return False
    return entry.start_slot >= word.start_slot and entry.end_slot <= word.end_slot


def _value_or_undefined(values: Sequence[TierValue], index: int) -> str:
    if index >= len(values):
        return UNDEFINED_TOKEN
    return values[index].value or UNDEFINED_TOKEN


def _consumed_count(morphemes: Sequence[TierValue], cursor: int, word: TierValue) -> int:
    """Number of consecutive morphemes from cursor that fit inside word."""
    count = 0
    while cursor + count < len(morphemes) and is_contained(morphemes[cursor + count], word):
        count += 1
    return count


def align_words(
    words: Sequence[TierValue],
    morphemes: Sequence[TierValue],
    glosses: Sequence[TierValue],
) -> Tuple[AlignedWord, ...]:
    """Align morph and gloss tokens to each word of the word tier.

    Args:
        words: The word tier values, in order.
        morphemes: The morpheme tier values, offset-sorted, non-overlapping.
        glosses: The gloss tier values, index-parallel to morphemes.

    Returns:
        One AlignedWord per word, in word-tier order.
    """
    if len(glosses) < len(morphemes):
        logger.warning(
            "Gloss tier has %d entries for %d morphemes; padding with %r",
            len(glosses), len(morphemes), UNDEFINED_TOKEN,
        )

    def step(state: _FoldState, indexed_word: Tuple[int, TierValue]) -> _FoldState:
        cursor, aligned = state
        index, word = indexed_word
        taken = range(cursor, cursor + _consumed_count(morphemes, cursor, word))
        morphs = tuple(
            token
            for i in taken
            for token in split_morphs(_value_or_undefined(morphemes, i))
        )
        word_glosses = tuple(
            token
            for i in taken
            for token in split_morphs(_value_or_undefined(glosses, i))
        )
        entry = AlignedWord(
            index=index,
            word=word.value or "",
            morphs=morphs,
            glosses=word_glosses,
        )
        return cursor + len(taken), aligned + (entry,)

    initial: _FoldState = (0, ())
    cursor, aligned = reduce(step, enumerate(words), initial)

    if cursor < len(morphemes):
        logger.debug("%d morphemes fall outside the word tier", len(morphemes) - cursor)
    return aligned
