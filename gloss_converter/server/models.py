"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation. The host UI
sends its sentence, tier map, and metadata as JSON with its own key names
("tierMap", "story ID", "sentenceId"); the models accept those names and
the snake_case ones.

HOW: Request models mirror the host JSON. FormatRequest.to_host_dict()
dumps them back under the host's key names, which is what the core
pipeline's from_dict factories read.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Aliases carry the host key names; populate_by_name allows snake_case
- Unknown fields on host objects are ignored
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class TierValueModel(BaseModel):
    """One token of a tier with its slot span."""

    value: Optional[str] = Field(default=None, description="Token text.")
    start_slot: Optional[int] = Field(default=None, description="First slot of the token.")
    end_slot: Optional[int] = Field(default=None, description="Last slot of the token.")


class TierModel(BaseModel):
    """A named annotation tier of the sentence."""

    tier: str = Field(description="Raw (unescaped) tier name.")
    values: List[TierValueModel] = Field(
        default_factory=list,
        description="Tier values ordered by start_slot.",
    )


class SentenceModel(BaseModel):
    """The sentence to format, with its dependent tiers."""

    dependents: List[TierModel] = Field(
        default_factory=list,
        description="All annotation tiers of the sentence.",
    )
    sentence_id: Optional[Union[int, str]] = Field(
        default=None,
        description="Sentence ID, used in the permalink of untimed stories.",
    )
    start_time_ms: Optional[int] = Field(
        default=None,
        description="Start time in ms, used in the permalink of timed stories.",
    )


class MetadataModel(BaseModel):
    """Story metadata needed for the header and citation."""

    model_config = {"populate_by_name": True}

    title: Dict[str, str] = Field(description="Story title per locale; '_default' is required.")
    story_id: Union[str, int] = Field(alias="story ID", description="Story identifier.")
    timed: bool = Field(default=False, description="Whether the story is time-aligned.")


class FormatRequest(BaseModel):
    """Everything the host UI supplies for one formatting request."""

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "sentence": {
                        "dependents": [
                            {"tier": "words", "values": [{"value": "cats", "start_slot": 0, "end_slot": 4}]},
                            {"tier": "morphs", "values": [{"value": "cat-s", "start_slot": 0, "end_slot": 4}]},
                            {"tier": "glosses", "values": [{"value": "cat-PL", "start_slot": 0, "end_slot": 4}]},
                            {"tier": "free", "values": [{"value": "cats"}]},
                        ],
                        "sentence_id": 3,
                    },
                    "tierMap": {
                        "original sentence": "words",
                        "morphemes": "morphs",
                        "morpheme translations": "glosses",
                        "sentence translation": "free",
                    },
                    "metadata": {"title": {"_default": "Demo"}, "story ID": "demo_1", "timed": False},
                    "sentenceId": 3,
                }
            ]
        },
    }

    sentence: SentenceModel = Field(description="The sentence to format.")
    tier_map: Dict[str, str] = Field(
        alias="tierMap",
        description="Logical section name → escaped tier name.",
    )
    metadata: MetadataModel = Field(description="Story metadata.")
    sentence_id: Union[int, str] = Field(
        alias="sentenceId",
        description="ID of the result container to display into.",
    )
    page_url: Optional[str] = Field(
        default=None,
        description="URL of the page showing the story. Defaults to the Referer header.",
    )
    formats: Optional[List[str]] = Field(
        default=None,
        description="Formatter keys to run. Defaults to all available formats.",
    )

    def to_host_dict(self) -> Dict[str, Any]:
        """Dump under the host's key names for the core pipeline."""
        return self.model_dump(by_alias=True, exclude={"page_url", "formats"})


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class FormatOutputModel(BaseModel):
    """The rendered output of one formatter."""

    format: str = Field(description="Formatter key.")
    name: str = Field(description="Human-readable format name.")
    suffix: str = Field(description="File suffix for saving the output.")
    media_type: str = Field(description="MIME type of the content.")
    content: str = Field(description="Rendered text.")


class FormatResponse(BaseModel):
    """Result of a formatting request."""

    sentence_id: str = Field(description="ID of the container the result was displayed in.")
    story_id: str = Field(description="Story identifier.")
    title: str = Field(description="Story title (default locale).")
    sentence_url: str = Field(description="Permalink to the sentence.")
    latex: str = Field(description="The gb4e interlinear example.")
    blocks: List[str] = Field(description="Preformatted display blocks, in order.")
    outputs: List[FormatOutputModel] = Field(description="Outputs of the requested formatters.")


class FormatInfo(BaseModel):
    """Description of an available output format."""

    key: str = Field(description="Format identifier used in API requests.")
    name: str = Field(description="Human-readable format name.")
    suffix: str = Field(description="File suffix produced (e.g. '-gb4e.tex').")


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error description.")


class UnprocessableResponse(BaseModel):
    """422 body: a message for malformed metadata, or FastAPI's list of
    validation errors when the request does not match the schema."""

    detail: Union[str, List[Dict[str, Any]]] = Field(
        description="Error message, or a list of validation errors.",
    )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
