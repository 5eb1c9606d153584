# backend/modules/analytics/schemas/assistant_schemas.py

"""
Schemas for the analytics assistant endpoint.
"""

from pydantic import BaseModel, Field


class AssistantQuery(BaseModel):
    """Free-text business question"""

    query: str = Field(..., min_length=1, strict=True, description="Question to answer")


class AssistantAnswer(BaseModel):
    """Markdown-like answer text (headings, bold, bullet lists)"""

    answer: str
