"""
Taxonomy Repository

The taxonomy synchronizer: relationship replacement with denormalized count
maintenance, on-demand tag creation, and term/binding lookups.

Relationship Replacement:
=========================
┌─────────────────────────────────────────────────────────────────────────────┐
│  replace_relationships(post_id=42, kind=category, ids=[7])                  │
├─────────────────────────────────────────────────────────────────────────────┤
│  1. previous = {5, 7}           ← current bindings of that kind             │
│  2. target   = [7]              ← de-duplicated, positive ids only          │
│  3. DELETE edges (42, kind)                                                 │
│  4. INSERT edges (42, 7)        ← skipped when target is empty              │
│  5. recount {5, 7}              ← union: removed AND added bindings         │
│        UPDATE term_taxonomy tt SET count =                                  │
│          (SELECT COUNT(*) FROM term_relationships tr                        │
│            WHERE tr.term_taxonomy_id = tt.term_taxonomy_id)                 │
│        WHERE tt.term_taxonomy_id IN (5, 7)                                  │
└─────────────────────────────────────────────────────────────────────────────┘

Every statement runs on the caller's session, so the recount sees the
deletes and inserts of the same transaction.

Tag Creation:
=============
get_or_create_tag() is "insert, ignore duplicate, then look up", keyed by the
unique term slug and the unique (term_id, taxonomy) pair. Two concurrent
callers introducing the same new tag both end up with the same binding
instead of creating duplicate terms.
"""

from typing import Iterable, Optional, Sequence

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from inkpress.shared.core.exceptions import ValidationError
from inkpress.shared.core.logging import get_logger
from inkpress.shared.models.enums import TaxonomyKind
from inkpress.shared.models.taxonomy import Term, TermRelationship, TermTaxonomy
from inkpress.shared.repositories.base import BaseRepository
from inkpress.shared.utils.slugify import slugify


logger = get_logger("inkpress.taxonomy")


def normalize_ids(ids: Optional[Iterable[object]]) -> list[int]:
    """
    Keep positive integer ids, de-duplicated, in first-seen order.

    >>> normalize_ids([5, "7", 5, 0, -1, "x", None])
    [5, 7]
    """
    seen: dict[int, None] = {}
    for raw in ids or ():
        if isinstance(raw, bool):
            continue
        try:
            value = int(raw)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            continue
        if value > 0:
            seen.setdefault(value, None)
    return list(seen)


class TaxonomyRepository(BaseRepository[TermTaxonomy]):
    """
    Repository for terms, taxonomy bindings and relationships.

    The repository's model is TermTaxonomy (the binding posts reference);
    Term and TermRelationship are reached through explicit statements.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(TermTaxonomy, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIP SYNC
    # ═══════════════════════════════════════════════════════════════════════════

    async def relationship_ids(self, post_id: int, kind: TaxonomyKind) -> list[int]:
        """Binding ids of the given kind currently attached to a post."""
        result = await self.session.execute(
            select(TermRelationship.term_taxonomy_id)
            .join(TermTaxonomy, TermTaxonomy.id == TermRelationship.term_taxonomy_id)
            .where(TermRelationship.object_id == post_id, TermTaxonomy.taxonomy == kind)
            .order_by(TermRelationship.term_taxonomy_id)
        )
        return list(result.scalars().all())

    async def replace_relationships(
        self,
        post_id: int,
        kind: TaxonomyKind,
        term_taxonomy_ids: Optional[Iterable[object]],
    ) -> list[int]:
        """
        Replace the full set of a post's relationships of one kind.

        Args:
            post_id: Post whose edges are replaced
            kind: category or post_tag
            term_taxonomy_ids: Target binding ids (invalid/duplicate ids dropped)

        Returns:
            The normalized target ids now attached
        """
        previous = await self.relationship_ids(post_id, kind)
        target = normalize_ids(term_taxonomy_ids)

        kind_bindings = select(TermTaxonomy.id).where(TermTaxonomy.taxonomy == kind)
        await self.session.execute(
            delete(TermRelationship).where(
                TermRelationship.object_id == post_id,
                TermRelationship.term_taxonomy_id.in_(kind_bindings),
            ).execution_options(synchronize_session=False)
        )

        if target:
            await self.session.execute(
                insert(TermRelationship),
                [{"object_id": post_id, "term_taxonomy_id": ttid, "term_order": 0} for ttid in target],
            )

        await self.recount(set(previous) | set(target))

        logger.debug(
            "Relationships replaced",
            post_id=post_id,
            taxonomy=kind.value,
            previous=previous,
            current=target,
        )
        return target

    async def recount(self, term_taxonomy_ids: Iterable[int]) -> None:
        """Recompute denormalized counts from the relationship table."""
        ids = sorted(set(term_taxonomy_ids))
        if not ids:
            return

        live_count = (
            select(func.count())
            .select_from(TermRelationship)
            .where(TermRelationship.term_taxonomy_id == TermTaxonomy.id)
            .correlate(TermTaxonomy)
            .scalar_subquery()
        )
        await self.session.execute(
            update(TermTaxonomy)
            .where(TermTaxonomy.id.in_(ids))
            .values(count=live_count)
            .execution_options(synchronize_session=False)
        )

    async def delete_for_post(self, post_id: int) -> list[int]:
        """
        Remove every relationship of a post and recount the bindings it used.

        Returns:
            Binding ids that were detached
        """
        result = await self.session.execute(
            select(TermRelationship.term_taxonomy_id).where(TermRelationship.object_id == post_id)
        )
        detached = list(result.scalars().all())
        await self.session.execute(
            delete(TermRelationship).where(TermRelationship.object_id == post_id)
            .execution_options(synchronize_session=False)
        )
        await self.recount(detached)
        return detached

    async def delete_for_binding(self, term_taxonomy_id: int) -> None:
        """Remove every relationship pointing at a binding."""
        await self.session.execute(
            delete(TermRelationship).where(TermRelationship.term_taxonomy_id == term_taxonomy_id)
            .execution_options(synchronize_session=False)
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # TAG CREATION
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_or_create_tag(self, name: str) -> int:
        """
        Resolve a tag name to its binding id, creating term and binding if needed.

        Args:
            name: Human tag name (trimmed; must not be blank)

        Returns:
            term_taxonomy_id of the post_tag binding

        Raises:
            ValidationError: If the name is blank
        """
        clean = (name or "").strip()
        if not clean:
            raise ValidationError("Tag name must not be empty")

        term_id = await self.ensure_term(clean, slugify(clean, keep_unicode=True) or clean)
        return await self.ensure_binding(term_id, TaxonomyKind.TAG)

    async def ensure_term(self, name: str, slug: str) -> int:
        """Insert a term unless its slug exists; return the term id either way."""
        stmt = (
            self.dialect_insert(Term)
            .values(name=name, slug=slug, term_group=0)
            .on_conflict_do_nothing(index_elements=[Term.slug])
        )
        await self.session.execute(stmt)
        result = await self.session.execute(select(Term.id).where(Term.slug == slug))
        return result.scalar_one()

    async def ensure_binding(
        self,
        term_id: int,
        kind: TaxonomyKind,
        parent: int = 0,
        description: str = "",
    ) -> int:
        """Insert a binding unless (term, kind) exists; return its id either way."""
        stmt = (
            self.dialect_insert(TermTaxonomy)
            .values(term_id=term_id, taxonomy=kind, description=description, parent=parent, count=0)
            .on_conflict_do_nothing(index_elements=[TermTaxonomy.term_id, TermTaxonomy.taxonomy])
        )
        await self.session.execute(stmt)
        result = await self.session.execute(
            select(TermTaxonomy.id).where(
                TermTaxonomy.term_id == term_id,
                TermTaxonomy.taxonomy == kind,
            )
        )
        return result.scalar_one()

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUPS
    # ═══════════════════════════════════════════════════════════════════════════

    async def existing_ids(self, kind: TaxonomyKind, ids: Sequence[int]) -> set[int]:
        """Subset of ids that are bindings of the given kind."""
        if not ids:
            return set()
        result = await self.session.execute(
            select(TermTaxonomy.id).where(TermTaxonomy.id.in_(ids), TermTaxonomy.taxonomy == kind)
        )
        return set(result.scalars().all())

    async def get_binding(self, term_taxonomy_id: int, kind: TaxonomyKind) -> Optional[TermTaxonomy]:
        """Binding of the given kind with its term loaded, or None."""
        result = await self.session.execute(
            select(TermTaxonomy)
            .where(TermTaxonomy.id == term_taxonomy_id, TermTaxonomy.taxonomy == kind)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_bindings(
        self,
        kind: TaxonomyKind,
        search: Optional[str] = None,
    ) -> list[TermTaxonomy]:
        """All bindings of a kind, ordered by term name."""
        query = (
            select(TermTaxonomy)
            .join(Term, Term.id == TermTaxonomy.term_id)
            .where(TermTaxonomy.taxonomy == kind)
            .order_by(Term.name, TermTaxonomy.id)
            .execution_options(populate_existing=True)
        )
        if search:
            like = f"%{search}%"
            query = query.where(Term.name.ilike(like) | Term.slug.ilike(like))
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def bindings_for_post(self, post_id: int, kind: TaxonomyKind) -> list[TermTaxonomy]:
        """Bindings of one kind attached to a post, ordered by term name."""
        result = await self.session.execute(
            select(TermTaxonomy)
            .join(TermRelationship, TermRelationship.term_taxonomy_id == TermTaxonomy.id)
            .join(Term, Term.id == TermTaxonomy.term_id)
            .where(TermRelationship.object_id == post_id, TermTaxonomy.taxonomy == kind)
            .order_by(Term.name)
        )
        return list(result.scalars().unique().all())

    async def get_term_by_slug(self, slug: str) -> Optional[Term]:
        result = await self.session.execute(
            select(Term).where(Term.slug == slug).execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def binding_for_term(self, term_id: int, kind: TaxonomyKind) -> Optional[int]:
        result = await self.session.execute(
            select(TermTaxonomy.id).where(TermTaxonomy.term_id == term_id, TermTaxonomy.taxonomy == kind)
        )
        return result.scalar_one_or_none()

    async def names_for_posts(self, post_ids: Sequence[int]) -> dict[int, dict[TaxonomyKind, list[str]]]:
        """
        Category and tag names attached to each post, sorted by name.

        Returns:
            {post_id: {TaxonomyKind.CATEGORY: [...], TaxonomyKind.TAG: [...]}}
        """
        if not post_ids:
            return {}
        result = await self.session.execute(
            select(TermRelationship.object_id, TermTaxonomy.taxonomy, Term.name)
            .join(TermTaxonomy, TermTaxonomy.id == TermRelationship.term_taxonomy_id)
            .join(Term, Term.id == TermTaxonomy.term_id)
            .where(TermRelationship.object_id.in_(post_ids))
            .order_by(Term.name)
        )
        names: dict[int, dict[TaxonomyKind, list[str]]] = {}
        for post_id, kind, name in result.all():
            bucket = names.setdefault(post_id, {}).setdefault(kind, [])
            if name not in bucket:
                bucket.append(name)
        return names

    # ═══════════════════════════════════════════════════════════════════════════
    # TERM MAINTENANCE
    # ═══════════════════════════════════════════════════════════════════════════

    async def reparent_children(self, parent_id: int, kind: TaxonomyKind) -> None:
        """Move every child of a binding to the root."""
        await self.session.execute(
            update(TermTaxonomy)
            .where(TermTaxonomy.parent == parent_id, TermTaxonomy.taxonomy == kind)
            .values(parent=0)
            .execution_options(synchronize_session=False)
        )

    async def delete_binding(self, binding: TermTaxonomy) -> None:
        """
        Delete a binding, its relationships, and its term if nothing else uses it.
        """
        term_id = binding.term_id
        await self.delete_for_binding(binding.id)
        await self.session.delete(binding)
        await self.session.flush()

        remaining = await self.session.execute(
            select(func.count()).select_from(TermTaxonomy).where(TermTaxonomy.term_id == term_id)
        )
        if not remaining.scalar():
            await self.session.execute(
                delete(Term).where(Term.id == term_id).execution_options(synchronize_session=False)
            )
