"""Display of a formatting result as preformatted text blocks.

WHY: The user copies the LaTeX out of a result panel that also shows
which story and sentence it came from. Where that panel lives (a web
page, a terminal, an HTTP response) is host business, so the presenter
writes into an injected render target instead of touching any global
display state.

HOW: build_display_blocks produces the six blocks in fixed order.
display_result looks up the container for a sentence ID on the target
and appends the blocks. ResultBoard.publish swaps in a filled container
under its lock for concurrent writers. close resets the target,
discarding everything shown. Two targets are provided:
  ResultBoard    in-memory containers keyed by sentence ID (HTTP API)
  StreamTarget   writes blocks to a text stream (CLI)

RULES:
- Block order: header, title, story ID, URL, library note, LaTeX
- Title: "_" → " "; story ID and URL: "_" → "\\_"
- A missing container is a caller error → ContainerNotFoundError
- ResultBoard is thread-safe; mounting a sentence ID again replaces its
  container (last writer wins)
"""

from __future__ import annotations

import html
import logging
import threading
from typing import Dict, List, Optional, Protocol, TextIO

from gloss_converter.config import LATEX_LIBRARY_NOTE, RESULT_HEADER
from gloss_converter.core.ir import FormattedResult

logger = logging.getLogger(__name__)


class ContainerNotFoundError(LookupError):
    """No result container is mounted for the requested sentence ID."""


class ResultContainer(Protocol):
    def append(self, block: str) -> None:
        ...


class RenderTarget(Protocol):
    def find_container(self, sentence_id: str) -> Optional[ResultContainer]:
        ...

    def reset(self) -> None:
        ...


def build_display_blocks(result: FormattedResult, latex: str) -> List[str]:
    """The preformatted blocks shown for one result, in display order."""
    return [
        RESULT_HEADER,
        "Story title: " + result.title.replace("_", " ") + "\n",
        "Story ID: " + result.story_id.replace("_", "\\_") + "\n",
        "Sentence URL: " + result.sentence_url.replace("_", "\\_") + "\n",
        LATEX_LIBRARY_NOTE,
        latex,
    ]


def display_result(
    target: RenderTarget,
    sentence_id: str,
    result: FormattedResult,
    latex: str,
) -> List[str]:
    """Append the display blocks to the container for sentence_id.

    Returns:
        The blocks that were appended.

    Raises:
        ContainerNotFoundError: if the target has no such container.
    """
    container = target.find_container(str(sentence_id))
    if container is None:
        raise ContainerNotFoundError(
            "No result container for sentence {}".format(sentence_id)
        )
    blocks = build_display_blocks(result, latex)
    for block in blocks:
        container.append(block)
    return blocks


def close(target: RenderTarget) -> None:
    """Close action: discard all displayed formatting state."""
    target.reset()


class BlockContainer:
    """A list of preformatted blocks belonging to one sentence."""

    def __init__(self, sentence_id: str) -> None:
        self.sentence_id = sentence_id
        self.blocks: List[str] = []

    def append(self, block: str) -> None:
        self.blocks.append(block)

    def to_html(self) -> str:
        """Render as a formatResultContainer div of <pre> elements."""
        pres = "".join(
            "<pre>{}</pre>".format(html.escape(block, quote=False))
            for block in self.blocks
        )
        return '<div class="formatResultContainer" sentenceId="{}">{}</div>'.format(
            html.escape(self.sentence_id), pres,
        )


class ResultBoard:
    """Thread-safe in-memory render target keyed by sentence ID.

    WHY: The HTTP API needs somewhere to "display" results so that a
    browser can fetch them later, and concurrent requests must not corrupt
    each other's containers.

    RULES:
    - mount() creates an empty container, replacing any previous one
    - publish() installs a filled container atomically (last writer wins)
    - find_container() returns None for unknown sentence IDs
    - reset() discards every container
    """

    def __init__(self) -> None:
        self._containers: Dict[str, BlockContainer] = {}
        self._lock = threading.Lock()

    def mount(self, sentence_id: str) -> BlockContainer:
        container = BlockContainer(str(sentence_id))
        with self._lock:
            self._containers[str(sentence_id)] = container
        return container

    def publish(self, sentence_id: str, blocks: List[str]) -> BlockContainer:
        """Install a filled container for sentence_id in one step.

        The container is built outside the lock and swapped in whole, so a
        concurrent mount, publish, or reset never sees it half filled.
        """
        container = BlockContainer(str(sentence_id))
        container.blocks.extend(blocks)
        with self._lock:
            self._containers[str(sentence_id)] = container
        return container

    def find_container(self, sentence_id: str) -> Optional[BlockContainer]:
        with self._lock:
            return self._containers.get(str(sentence_id))

    def reset(self) -> None:
        with self._lock:
            count = len(self._containers)
            self._containers.clear()
        logger.info("Result board reset (%d containers discarded)", count)

    def sentence_ids(self) -> List[str]:
        with self._lock:
            return list(self._containers)


class StreamTarget:
    """Render target that writes blocks straight to a text stream.

    Every sentence ID maps to the same stream; each block is followed by
    a newline.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def find_container(self, sentence_id: str) -> StreamTarget:
        return self

    def append(self, block: str) -> None:
        self._stream.write(block + "\n")

    def reset(self) -> None:
        self._stream.flush()
