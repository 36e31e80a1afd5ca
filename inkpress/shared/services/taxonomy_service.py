"""
Taxonomy Service

Category and tag administration. Post-side relationship sync lives in
TaxonomyRepository; this service manages the terms and bindings themselves.

Rules:
======
- Categories form a tree through TermTaxonomy.parent (0 = root). A parent
  must be an existing category, and a category can never end up below
  itself.
- Category slugs are unique among categories: creating a second category
  with the same slug is a conflict (409).
- Tag creation is an upsert: asking for a tag whose slug exists returns it.
- A term is shared by slug across kinds. A category created with a slug a
  tag already uses gets a category binding on that same term, so it keeps
  the term's existing name, and renaming either binding renames both.
- Deleting a category moves its children to the root. Deleting either kind
  removes its relationships and, when no other binding uses it, its term.

Usage:
======
    service = TaxonomyService(db)
    news = await service.create_category(CategoryCreate(name="News"))
    local = await service.create_category(CategoryCreate(name="Local", parent=news.id))
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from inkpress.shared.core.exceptions import (
    ConflictError,
    InvalidCategoryError,
    TermNotFoundError,
    ValidationError,
)
from inkpress.shared.core.logging import get_logger
from inkpress.shared.db.session import unit_of_work
from inkpress.shared.models.enums import TaxonomyKind
from inkpress.shared.models.taxonomy import TermTaxonomy
from inkpress.shared.repositories.taxonomy_repository import TaxonomyRepository
from inkpress.shared.schemas.taxonomy import CategoryCreate, CategoryUpdate, TagCreate, TagUpdate
from inkpress.shared.utils.slugify import slugify


logger = get_logger("inkpress.taxonomy")


def term_slug(slug: Optional[str], name: str) -> str:
    """Slug for a term: from the explicit slug or the name, Bengali kept."""
    return slugify(slug or name, keep_unicode=True) or name.strip()


class TaxonomyService:
    """Service for category and tag management."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.taxonomy_repo = TaxonomyRepository(session)

    # ═══════════════════════════════════════════════════════════════════════════
    # READ
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_terms(self, kind: TaxonomyKind, search: Optional[str] = None) -> list[TermTaxonomy]:
        return await self.taxonomy_repo.list_bindings(kind, search=search)

    async def get_term(self, kind: TaxonomyKind, term_taxonomy_id: int) -> TermTaxonomy:
        """
        Get a binding of the given kind.

        Raises:
            TermNotFoundError: If no such binding exists
        """
        binding = await self.taxonomy_repo.get_binding(term_taxonomy_id, kind)
        if binding is None:
            raise TermNotFoundError(self._label(kind), term_taxonomy_id)
        return binding

    # ═══════════════════════════════════════════════════════════════════════════
    # CATEGORIES
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_category(self, data: CategoryCreate) -> TermTaxonomy:
        """
        Create a category.

        When a tag already owns the slug, the category binds to that term and
        shows the term's current name rather than data.name.

        Raises:
            InvalidCategoryError: If the parent is not an existing category
            ConflictError: If a category with the same slug exists
        """
        name = data.name.strip()
        if not name:
            raise ValidationError("Name must not be empty")
        slug = term_slug(data.slug, name)

        async with unit_of_work(self.session):
            await self._check_parent(data.parent)
            await self._check_slug_free(TaxonomyKind.CATEGORY, slug)

            term_id = await self.taxonomy_repo.ensure_term(name, slug)
            ttid = await self.taxonomy_repo.ensure_binding(
                term_id,
                TaxonomyKind.CATEGORY,
                parent=data.parent,
                description=data.description,
            )
            binding = await self.get_term(TaxonomyKind.CATEGORY, ttid)

        logger.info("Category created", term_taxonomy_id=ttid, slug=slug, parent=data.parent)
        return binding

    async def update_category(self, term_taxonomy_id: int, data: CategoryUpdate) -> TermTaxonomy:
        """
        Update a category's name, slug, description or parent.

        Raises:
            TermNotFoundError: If the category does not exist
            InvalidCategoryError: If the new parent is missing or would make
                the category its own ancestor
            ConflictError: If the new slug belongs to another term
        """
        async with unit_of_work(self.session):
            binding = await self.get_term(TaxonomyKind.CATEGORY, term_taxonomy_id)

            if data.parent is not None:
                await self._check_parent(data.parent, child_id=term_taxonomy_id)
                binding.parent = data.parent
            if data.description is not None:
                binding.description = data.description
            await self._apply_term_fields(binding, data.name, data.slug)

            await self.session.flush()
            binding = await self.get_term(TaxonomyKind.CATEGORY, term_taxonomy_id)

        logger.info("Category updated", term_taxonomy_id=term_taxonomy_id)
        return binding

    async def delete_category(self, term_taxonomy_id: int) -> None:
        """
        Delete a category; its children move to the root.

        Raises:
            TermNotFoundError: If the category does not exist
        """
        async with unit_of_work(self.session):
            binding = await self.get_term(TaxonomyKind.CATEGORY, term_taxonomy_id)
            await self.taxonomy_repo.reparent_children(term_taxonomy_id, TaxonomyKind.CATEGORY)
            await self.taxonomy_repo.delete_binding(binding)

        logger.info("Category deleted", term_taxonomy_id=term_taxonomy_id)

    # ═══════════════════════════════════════════════════════════════════════════
    # TAGS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_tag(self, data: TagCreate) -> TermTaxonomy:
        """Create a tag, or return the existing tag with the same slug."""
        name = data.name.strip()
        if not name:
            raise ValidationError("Name must not be empty")
        slug = term_slug(data.slug, name)

        async with unit_of_work(self.session):
            term_id = await self.taxonomy_repo.ensure_term(name, slug)
            ttid = await self.taxonomy_repo.ensure_binding(
                term_id, TaxonomyKind.TAG, description=data.description
            )
            binding = await self.get_term(TaxonomyKind.TAG, ttid)

        logger.info("Tag ensured", term_taxonomy_id=ttid, slug=slug)
        return binding

    async def update_tag(self, term_taxonomy_id: int, data: TagUpdate) -> TermTaxonomy:
        """
        Update a tag's name, slug or description.

        Raises:
            TermNotFoundError: If the tag does not exist
            ConflictError: If the new slug belongs to another term
        """
        async with unit_of_work(self.session):
            binding = await self.get_term(TaxonomyKind.TAG, term_taxonomy_id)
            if data.description is not None:
                binding.description = data.description
            await self._apply_term_fields(binding, data.name, data.slug)

            await self.session.flush()
            binding = await self.get_term(TaxonomyKind.TAG, term_taxonomy_id)

        logger.info("Tag updated", term_taxonomy_id=term_taxonomy_id)
        return binding

    async def delete_tag(self, term_taxonomy_id: int) -> None:
        """
        Delete a tag and its relationships.

        Raises:
            TermNotFoundError: If the tag does not exist
        """
        async with unit_of_work(self.session):
            binding = await self.get_term(TaxonomyKind.TAG, term_taxonomy_id)
            await self.taxonomy_repo.delete_binding(binding)

        logger.info("Tag deleted", term_taxonomy_id=term_taxonomy_id)

    # ═══════════════════════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def _label(kind: TaxonomyKind) -> str:
        return "category" if kind == TaxonomyKind.CATEGORY else "tag"

    async def _check_parent(self, parent: int, child_id: Optional[int] = None) -> None:
        """Parent must be 0 or an existing category that is not below child_id."""
        if parent == 0:
            return
        if child_id is not None and parent == child_id:
            raise InvalidCategoryError(
                "A category cannot be its own parent",
                details={"parent": parent},
            )

        seen: set[int] = set()
        current = parent
        while current and current not in seen:
            seen.add(current)
            node = await self.taxonomy_repo.get_binding(current, TaxonomyKind.CATEGORY)
            if node is None:
                raise InvalidCategoryError(details={"parent": parent})
            if child_id is not None and node.parent == child_id:
                raise InvalidCategoryError(
                    "A category cannot be moved below its own descendant",
                    details={"parent": parent},
                )
            current = node.parent

    async def _check_slug_free(self, kind: TaxonomyKind, slug: str) -> None:
        term = await self.taxonomy_repo.get_term_by_slug(slug)
        if term is not None and await self.taxonomy_repo.binding_for_term(term.id, kind) is not None:
            raise ConflictError(
                f"A {self._label(kind)} with this slug already exists",
                details={"slug": slug},
            )

    async def _apply_term_fields(
        self,
        binding: TermTaxonomy,
        name: Optional[str],
        slug: Optional[str],
    ) -> None:
        term = binding.term
        if name is not None:
            term.name = name.strip()
        if slug is not None:
            new_slug = term_slug(slug, term.name)
            if new_slug != term.slug:
                owner = await self.taxonomy_repo.get_term_by_slug(new_slug)
                if owner is not None and owner.id != term.id:
                    raise ConflictError("Slug already in use", details={"slug": new_slug})
                term.slug = new_slug
