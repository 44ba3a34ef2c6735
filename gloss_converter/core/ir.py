"""Intermediate representation dataclasses for annotated sentences.

WHY: The hosting UI hands over loosely-shaped JSON: a sentence with a
list of dependent tiers, a tier map, and story metadata. The resolver,
aligner, and formatters need typed, predictable structures, and the
formatters need a single aligned product to render. The IR provides both
the typed input side and the FormattedResult output side.

HOW: Input dataclasses mirror the host JSON:
  TierValue        one token with its slot span
  Tier             a named annotation channel over the sentence
  Sentence         the dependents plus permalink fields
  StoryMetadata    title per locale, story ID, timed flag
Output dataclasses are frozen:
  AlignedWord       one word with its morph and gloss tokens
  FormattedResult   everything the formatters and presenter consume

RULES:
- from_dict factories accept the host's key names ("tier", "story ID")
- Missing values/slots stay None; the aligner decides what that means
- Non-string values are converted with str()
- AlignedWord and FormattedResult are immutable and rebuilt every pass
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


def _as_text(value: Any) -> Optional[str]:
    """Tier values are text; numbers from loosely-typed hosts are stringified."""
    return None if value is None else str(value)


@dataclass
class TierValue:
    """A token occupying a slot range within its tier.

    RULES:
    - value is None when the host omitted it
    - start_slot/end_slot are None on tiers without slot alignment
      (sentence translations usually carry only a value)
    """

    value: str | None = None
    start_slot: int | None = None
    end_slot: int | None = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TierValue:
        return cls(
            value=_as_text(data.get("value")),
            start_slot=data.get("start_slot"),
            end_slot=data.get("end_slot"),
        )


@dataclass
class Tier:
    """A named annotation channel; values are ordered by start_slot."""

    name: str
    values: List[TierValue] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Tier:
        return cls(
            name=data["tier"],
            values=[TierValue.from_dict(v) for v in data.get("values", [])],
        )


@dataclass
class Sentence:
    """One sentence of a story with all of its dependent tiers.

    RULES:
    - dependents order is irrelevant except for duplicate tier names,
      where the resolver lets the last one win
    - sentence_id and start_time_ms are only used for the permalink
    """

    dependents: List[Tier] = field(default_factory=list)
    sentence_id: Optional[Any] = None
    start_time_ms: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Sentence:
        return cls(
            dependents=[Tier.from_dict(t) for t in data.get("dependents", [])],
            sentence_id=data.get("sentence_id"),
            start_time_ms=data.get("start_time_ms"),
        )


@dataclass
class StoryMetadata:
    """Story-level metadata used for the header blocks and citation."""

    title: Dict[str, str]
    story_id: Any
    timed: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> StoryMetadata:
        return cls(
            title=data["title"],
            story_id=data["story ID"],
            timed=bool(data.get("timed", False)),
        )


@dataclass(frozen=True)
class AlignedWord:
    """One word of the word tier with its segmented morphs and glosses.

    WHY: gb4e aligns the \\gll and gloss lines word by word, so every word
    needs its own morph and gloss token lists, side by side.

    RULES:
    - index is the word's position in the word tier (words may repeat)
    - morphs and glosses have equal length for well-formed input
    - missing glosses/morphs appear as the "Undefined" sentinel
    """

    index: int
    word: str
    morphs: Tuple[str, ...] = ()
    glosses: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FormattedResult:
    """The complete aligned product of one formatting pass.

    WHY: This is the container that formatters and the presenter receive.
    It holds the aligned words, the sentence translation, and the story
    metadata needed for the citation.

    RULES:
    - words are in word-tier order
    - sentence_translation keeps the whole tier; formatters read only [0]
    - title/story_id/sentence_url are raw (unescaped) strings
    """

    story_id: str
    title: str
    sentence_url: str
    words: Tuple[AlignedWord, ...] = ()
    sentence_translation: Tuple[TierValue, ...] = ()

    @property
    def morphemes_by_word(self) -> Dict[int, Dict[str, List[str]]]:
        """Word index → {word → morph tokens}."""
        return {w.index: {w.word: list(w.morphs)} for w in self.words}

    @property
    def gloss_by_word(self) -> Dict[int, Dict[str, List[str]]]:
        """Word index → {word → gloss tokens}."""
        return {w.index: {w.word: list(w.glosses)} for w in self.words}
