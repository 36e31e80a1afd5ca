"""
Listing query dependency.
"""
from typing import Literal, Optional

from fastapi import Query

from inkpress.shared.schemas.post import PostListParams
from inkpress.shared.utils.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


async def get_post_list_params(
    q: Optional[str] = Query(None, description="Substring of title or content"),
    status: Literal["all", "publish", "draft", "pending", "future", "trash"] = Query("all"),
    author_id: Optional[int] = Query(None, ge=1),
    category_id: Optional[int] = Query(None, ge=1, description="Category term_taxonomy id"),
    category_slug: Optional[str] = Query(None),
    year_month: Optional[str] = Query(None, pattern=r"^\d{4}-(0[1-9]|1[0-2])$"),
    slug: Optional[str] = Query(None, description="Exact slug"),
    order_by: Literal["date", "title"] = Query("date"),
    order: Literal["asc", "desc"] = Query("desc"),
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    per_page: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Items per page"),
) -> PostListParams:
    """Post listing parameters dependency."""
    return PostListParams(
        q=q,
        status=status,
        author_id=author_id,
        category_id=category_id,
        category_slug=category_slug,
        year_month=year_month,
        slug=slug,
        order_by=order_by,
        order=order,
        page=page,
        per_page=per_page,
    )
