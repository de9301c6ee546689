"""
Candidate data models.

This module contains the Pydantic model for one comparable option supplied by
the host at the start of a session.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from .signals import TasteAxes


PAIRED_WITH_KEY = "paired_with"


class Candidate(BaseModel):
    """One comparable option (e.g. a designer mood board or an experience)."""
    id: str = Field(min_length=1, description="Stable identifier")
    cluster: str = Field(description="Categorical grouping used for diversity sampling")
    tags: List[str] = Field(default_factory=list, description="Tags that become preference signals")
    category: Optional[str] = Field(default=None, description="Optional category label for positive signals")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Opaque key/value bag; may hold 'paired_with'")
    axes: Optional[TasteAxes] = Field(default=None, description="Precomputed axis coordinates, only used to build an axis lookup")

    @property
    def paired_with(self) -> Optional[str]:
        """Id of the candidate this one forms a natural dimension pair with."""
        value = self.metadata.get(PAIRED_WITH_KEY)
        return str(value) if value else None
