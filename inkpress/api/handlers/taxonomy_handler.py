"""
Taxonomy Handler

Category and tag administration endpoints. Both routers share the same
service; ids in paths are term_taxonomy ids, the values posts reference.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from inkpress.api.dependencies import get_taxonomy_service
from inkpress.shared.models.enums import TaxonomyKind
from inkpress.shared.schemas.taxonomy import (
    CategoryCreate,
    CategoryUpdate,
    TagCreate,
    TagUpdate,
    TermResponse,
)
from inkpress.shared.services.taxonomy_service import TaxonomyService


categories_router = APIRouter()
tags_router = APIRouter()


# ═══════════════════════════════════════════════════════════════════════════════
# CATEGORIES
# ═══════════════════════════════════════════════════════════════════════════════


@categories_router.get("", response_model=list[TermResponse])
async def list_categories(
    search: Optional[str] = Query(None, description="Substring of name or slug"),
    taxonomy_service: TaxonomyService = Depends(get_taxonomy_service),
):
    """List categories ordered by name."""
    bindings = await taxonomy_service.list_terms(TaxonomyKind.CATEGORY, search=search)
    return [TermResponse.model_validate(b) for b in bindings]


@categories_router.post("", response_model=TermResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    taxonomy_service: TaxonomyService = Depends(get_taxonomy_service),
):
    """Create a category (409 when the slug is taken, 400 for a bad parent)."""
    binding = await taxonomy_service.create_category(data)
    return TermResponse.model_validate(binding)


@categories_router.get("/{term_taxonomy_id}", response_model=TermResponse)
async def get_category(
    term_taxonomy_id: int,
    taxonomy_service: TaxonomyService = Depends(get_taxonomy_service),
):
    binding = await taxonomy_service.get_term(TaxonomyKind.CATEGORY, term_taxonomy_id)
    return TermResponse.model_validate(binding)


@categories_router.patch("/{term_taxonomy_id}", response_model=TermResponse)
async def update_category(
    term_taxonomy_id: int,
    data: CategoryUpdate,
    taxonomy_service: TaxonomyService = Depends(get_taxonomy_service),
):
    binding = await taxonomy_service.update_category(term_taxonomy_id, data)
    return TermResponse.model_validate(binding)


@categories_router.delete("/{term_taxonomy_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    term_taxonomy_id: int,
    taxonomy_service: TaxonomyService = Depends(get_taxonomy_service),
):
    """Delete a category; its children move to the root."""
    await taxonomy_service.delete_category(term_taxonomy_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ═══════════════════════════════════════════════════════════════════════════════
# TAGS
# ═══════════════════════════════════════════════════════════════════════════════


@tags_router.get("", response_model=list[TermResponse])
async def list_tags(
    search: Optional[str] = Query(None, description="Substring of name or slug"),
    taxonomy_service: TaxonomyService = Depends(get_taxonomy_service),
):
    """List tags ordered by name."""
    bindings = await taxonomy_service.list_terms(TaxonomyKind.TAG, search=search)
    return [TermResponse.model_validate(b) for b in bindings]


@tags_router.post("", response_model=TermResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    data: TagCreate,
    taxonomy_service: TaxonomyService = Depends(get_taxonomy_service),
):
    """Create a tag, or return the existing one with the same slug."""
    binding = await taxonomy_service.create_tag(data)
    return TermResponse.model_validate(binding)


@tags_router.get("/{term_taxonomy_id}", response_model=TermResponse)
async def get_tag(
    term_taxonomy_id: int,
    taxonomy_service: TaxonomyService = Depends(get_taxonomy_service),
):
    binding = await taxonomy_service.get_term(TaxonomyKind.TAG, term_taxonomy_id)
    return TermResponse.model_validate(binding)


@tags_router.patch("/{term_taxonomy_id}", response_model=TermResponse)
async def update_tag(
    term_taxonomy_id: int,
    data: TagUpdate,
    taxonomy_service: TaxonomyService = Depends(get_taxonomy_service),
):
    binding = await taxonomy_service.update_tag(term_taxonomy_id, data)
    return TermResponse.model_validate(binding)


@tags_router.delete("/{term_taxonomy_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    term_taxonomy_id: int,
    taxonomy_service: TaxonomyService = Depends(get_taxonomy_service),
):
    await taxonomy_service.delete_tag(term_taxonomy_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
