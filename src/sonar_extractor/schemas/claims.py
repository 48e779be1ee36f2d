"""Pydantic schemas for the claim extraction pipeline.

Defines ParsedPayload (validated model output), ClaimRow and SourceRef
(normalized, display-ready rows) and Citation (flat response-level sources).
All models are frozen: a new model response replaces the dataset wholesale.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


class PayloadMetadata(BaseModel):
    """Opaque metadata block from the model. Unknown keys are kept."""
    model_config = ConfigDict(frozen=True, extra="allow")

    topic_summary: Optional[Any] = None
    total_claims: Optional[Any] = None
    extraction_date: Optional[Any] = None


class ParsedPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    metadata: PayloadMetadata
    claims: Tuple[Any, ...] = ()
    document: Dict[str, Any] = Field(default_factory=dict, description="The full parsed JSON object.")


class ResolvedUrl(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    domain: str


class SourceRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    domain: str
    title: Optional[str] = None
    date: Optional[str] = None


class ClaimRow(BaseModel):
    """One claim, ready for table/card display and export."""
    model_config = ConfigDict(frozen=True)

    id: str
    claim: str = ""
    category: str = "General"
    context: str = ""
    sources: Tuple[SourceRef, ...] = ()
    # Passed through unmodified from the raw entry, for export only
    keywords: Optional[Any] = None


class Citation(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=1)
    url: str
    domain: str
