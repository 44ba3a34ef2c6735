"""Story metadata extraction and sentence permalink construction.

WHY: The formatted example cites its source: the story title and a link
straight to the sentence. The link depends on the page the user is on,
which is host state, so the current URL is injected as a provider instead
of read from a global.

HOW: Title and story ID are plain field lookups. The permalink index is
start_time_ms - 1 for time-aligned stories (the player seeks to that
time) and the sentence ID otherwise. The page URL loses its query string
and gains "?<index>".

RULES:
- Missing metadata fields are caller errors and raise KeyError
- Everything after the first "?" of the current URL is dropped
- UrlProvider is any zero-argument callable returning the current URL
"""

from __future__ import annotations

import re
from typing import Any, Callable

from gloss_converter.config import DEFAULT_TITLE_LOCALE, GLOSS_PAGE_URL
from gloss_converter.core.ir import Sentence, StoryMetadata

UrlProvider = Callable[[], str]

_QUERY_RE = re.compile(r"\?.*$")


def static_url(url: str) -> UrlProvider:
    """Build a UrlProvider that always returns url."""
    return lambda: url


def default_url_provider() -> str:
    """Current page URL from configuration (GLOSS_PAGE_URL)."""
    return GLOSS_PAGE_URL


def get_title(metadata: StoryMetadata) -> str:
    """Story title in the default locale."""
    return metadata.title[DEFAULT_TITLE_LOCALE]


def get_story_id(metadata: StoryMetadata) -> str:
    return str(metadata.story_id)


def get_sentence_index(sentence: Sentence, metadata: StoryMetadata) -> Any:
    """Index used in the permalink query string.

    Timed stories are addressed by playback position, untimed ones by
    sentence ID.
    """
    if metadata.timed:
        if sentence.start_time_ms is None:
            raise KeyError("start_time_ms")
        return sentence.start_time_ms - 1
    return sentence.sentence_id


def build_sentence_url(current_url: str, index: Any) -> str:
    """Replace the query string of current_url with "?<index>"."""
    return "{}?{}".format(_QUERY_RE.sub("", current_url), index)


def get_sentence_url(
    sentence: Sentence,
    metadata: StoryMetadata,
    url_provider: UrlProvider = default_url_provider,
) -> str:
    """Permalink to the sentence on the current page."""
    return build_sentence_url(url_provider(), get_sentence_index(sentence, metadata))
