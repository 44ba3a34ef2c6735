"""Sentence processing: resolve tiers, align words, gather metadata.

WHY: Callers (CLI, HTTP API, tests) should not have to know the order in
which the resolver, aligner, and metadata extractor run. This module is
the single entry point that turns host input into the FormattedResult IR.

HOW: resolve_tiers picks the four value lists, align_words folds them
into AlignedWords, and the metadata helpers add title, story ID, and the
sentence permalink. process_request does the same starting from the raw
host JSON dicts.

RULES:
- Pure computation: no I/O, no shared state, same input → same output
- Misaligned or missing tiers degrade to empty lines / "Undefined"
"""

from __future__ import annotations

from typing import Any, Dict

from gloss_converter.core.aligner import align_words
from gloss_converter.core.ir import FormattedResult, Sentence, StoryMetadata
from gloss_converter.core.metadata import (
    UrlProvider,
    default_url_provider,
    get_sentence_url,
    get_story_id,
    get_title,
)
from gloss_converter.core.resolver import resolve_tiers


def process_sentence(
    sentence: Sentence,
    tier_map: Dict[str, str],
    metadata: StoryMetadata,
    url_provider: UrlProvider = default_url_provider,
) -> FormattedResult:
    """Build the FormattedResult for one sentence.

    Args:
        sentence: The sentence with its dependent tiers.
        tier_map: Logical section name → escaped tier name.
        metadata: Story metadata (title, story ID, timed flag).
        url_provider: Returns the URL of the page the sentence is shown on.

    Returns:
        The aligned words, translation tier, and citation metadata.
    """
    tiers = resolve_tiers(tier_map, sentence.dependents)
    words = align_words(tiers.words, tiers.morphemes, tiers.glosses)

    return FormattedResult(
        story_id=get_story_id(metadata),
        title=get_title(metadata),
        sentence_url=get_sentence_url(sentence, metadata, url_provider),
        words=words,
        sentence_translation=tiers.translation,
    )


def process_request(
    request: Dict[str, Any],
    url_provider: UrlProvider = default_url_provider,
) -> FormattedResult:
    """Build the FormattedResult from a host request dict.

    The dict carries "sentence", "tierMap", and "metadata" as the host UI
    sends them.
    """
    return process_sentence(
        Sentence.from_dict(request["sentence"]),
        dict(request["tierMap"]),
        StoryMetadata.from_dict(request["metadata"]),
        url_provider,
    )
