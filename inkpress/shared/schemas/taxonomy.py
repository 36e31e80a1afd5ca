"""
Category and tag schemas.
"""

from typing import Optional

from pydantic import Field

from inkpress.shared.schemas.common import BaseSchema, RequestSchema


class CategoryCreate(RequestSchema):
    """Request to create a category."""

    name: str = Field(min_length=1, max_length=200)
    slug: Optional[str] = Field(default=None, max_length=200)
    description: str = ""
    parent: int = Field(default=0, ge=0, description="Parent category id, 0 for root")


class CategoryUpdate(RequestSchema):
    """Request to update a category; omitted fields are kept."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    slug: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    parent: Optional[int] = Field(default=None, ge=0)


class TagCreate(RequestSchema):
    """Request to create a tag (returns the existing tag for a known slug)."""

    name: str = Field(min_length=1, max_length=200)
    slug: Optional[str] = Field(default=None, max_length=200)
    description: str = ""


class TagUpdate(RequestSchema):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    slug: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None


class TermResponse(BaseSchema):
    """
    A category or tag binding.

    id is the term_taxonomy id, the value posts reference.
    """

    id: int
    term_id: int
    name: str
    slug: str
    description: str
    parent: int
    count: int
