"""
Pydantic models for user data.

A user owns an ordered list of series.  The list is read-only through
the user schemas; series are added through the series endpoints.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .series import SeriesRead


class UserCreate(BaseModel):
    """Schema for registering a user."""

    name: Optional[str] = Field(None, examples=["Alice"])
    username: str = Field(..., examples=["alice"])


class UserUpdate(BaseModel):
    """Schema for renaming a user.

    ``name`` is stored exactly as given, including ``None`` or an empty
    string.
    """

    name: Optional[str] = Field(None, examples=["Alice Liddell"])


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: str
    name: Optional[str] = None
    username: str
    series: List[SeriesRead] = Field(default_factory=list)

    model_config = {
        "from_attributes": True,
    }
