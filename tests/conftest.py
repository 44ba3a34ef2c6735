"""Shared test fixtures for the gloss_converter test suite.

WHY: Most test modules need the same annotated sentences: the minimal
"cats" example and a Kofán sentence with clitics and affixes. Keeping
them here means every module agrees on the expected alignment.

HOW: Plain dicts in the host UI's JSON shape, plus fixtures that return
fresh copies (so a test mutating its request cannot leak into another).

RULES:
- DEMO_REQUEST is the single-word "cats" example (title "Demo")
- KOFAN_REQUEST has two words, a compound morpheme, and tier names that
  need HTML escaping
- PAGE_URL carries a query string so tests see it stripped
"""

import copy
from typing import Any, Dict

import pytest

PAGE_URL = "http://example.org/story/demo?view=full"

DEMO_REQUEST: Dict[str, Any] = {
    "sentence": {
        "dependents": [
            {"tier": "words", "values": [{"value": "cats", "start_slot": 0, "end_slot": 4}]},
            {"tier": "morphs", "values": [{"value": "cat-s", "start_slot": 0, "end_slot": 4}]},
            {"tier": "glosses", "values": [{"value": "cat-PL", "start_slot": 0, "end_slot": 4}]},
            {"tier": "free", "values": [{"value": "cats"}]},
        ],
        "sentence_id": 3,
        "start_time_ms": 1500,
    },
    "tierMap": {
        "original sentence": "words",
        "morphemes": "morphs",
        "morpheme translations": "glosses",
        "sentence translation": "free",
    },
    "metadata": {"title": {"_default": "Demo"}, "story ID": "demo_story", "timed": False},
    "sentenceId": 3,
}

DEMO_LATEX = (
    "\\begin{exe} \n  \\ex \\label{example} \n  "
    "cats \n  "
    "\\gll cat-s \\\\ \n  "
    "cat\\textsc{-pl} \\\\ \n  "
    "\\glt `cats' \\\\ \n  "
    "\\href{http://example.org/story/demo?3}{(Demo)} \n"
    "\\end{exe} \n"
)

KOFAN_REQUEST: Dict[str, Any] = {
    "sentence": {
        "dependents": [
            {"tier": "Kofán free translation", "values": [{"value": "He went to the forest, they say."}]},
            {"tier": "Kofán words", "values": [
                {"value": "cundyi'je'fa", "start_slot": 0, "end_slot": 12},
                {"value": "tsampi", "start_slot": 13, "end_slot": 19},
            ]},
            {"tier": "morphemes <seg>", "values": [
                {"value": "cundyi-'je='fa", "start_slot": 0, "end_slot": 12},
                {"value": "tsampi", "start_slot": 13, "end_slot": 19},
            ]},
            {"tier": "gloss 'eng'", "values": [
                {"value": "go-PST=REP", "start_slot": 0, "end_slot": 12},
                {"value": "forest", "start_slot": 13, "end_slot": 19},
            ]},
        ],
        "sentence_id": 17,
        "start_time_ms": 42001,
    },
    "tierMap": {
        "original sentence": "Kofán words",
        "morphemes": "morphemes &lt;seg&gt;",
        "morpheme translations": "gloss &#39;eng&#39;",
        "sentence translation": "Kofán free translation",
    },
    "metadata": {"title": {"_default": "Going_to_the_forest"}, "story ID": "kofan_07", "timed": True},
    "sentenceId": 17,
}


@pytest.fixture
def demo_request():
    """The single-word "cats" request."""
    return copy.deepcopy(DEMO_REQUEST)


@pytest.fixture
def kofan_request():
    """The two-word Kofán request with escaped tier names."""
    return copy.deepcopy(KOFAN_REQUEST)


@pytest.fixture
def demo_latex():
    """Expected gb4e output for DEMO_REQUEST shown on PAGE_URL."""
    return DEMO_LATEX


@pytest.fixture
def page_url():
    """Current page URL, with a query string the permalink must drop."""
    return PAGE_URL
