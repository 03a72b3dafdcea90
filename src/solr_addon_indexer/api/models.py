"""
API Models

Pydantic response models for the addon and indexing endpoints.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict


class AddonSummary(BaseModel):
    """
    Public view of one configured addon.
    """
    name: str
    table: str
    result_type: Optional[str] = None
    tagged: bool = False
    title_field: Optional[str] = None
    parent: Optional[str] = None
    fields: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class PreviewResponse(BaseModel):
    """
    Documents an addon would produce, without sending them to Solr.
    """
    addon: str
    count: int = Field(..., ge=0)
    documents: List[Dict[str, Any]] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class ReindexResponse(BaseModel):
    status: str = "ok"
    total: int = Field(..., ge=0)
    addons: Dict[str, int] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")
