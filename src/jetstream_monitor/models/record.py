"""
Records nested inside commits, decoded lazily by the handler for their collection.
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class Subject(BaseModel):
    """Strong reference to another record."""
    uri: str = ""
    cid: str = ""


class PostRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Optional[str] = Field(default=None, alias="$type")
    text: str = ""
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    embed: Optional[Any] = None  # Opaque; passed through unexamined


class SubjectRecord(BaseModel):
    """like, repost, follow and block records."""
    model_config = ConfigDict(populate_by_name=True)

    type: Optional[str] = Field(default=None, alias="$type")
    subject: Subject
    created_at: Optional[str] = Field(default=None, alias="createdAt")
