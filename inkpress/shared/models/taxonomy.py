"""
Taxonomy Entity Models

Terms, their taxonomy bindings, and the post-to-binding edges.

Model Hierarchy:
================
    Term                      ← a named, sluggable label
       └── TermTaxonomy[]     ← the label used as a category or as a tag
              └── TermRelationship[]  ← edges to posts

    The same word can exist once as a Term and be bound both as a category
    and as a tag: two TermTaxonomy rows, one Term.

Denormalized Count:
===================
TermTaxonomy.count always equals the number of TermRelationship rows that
point at it. It is recomputed (never incremented) by the taxonomy
synchronizer after every change touching the binding.

SAMPLE ROWS:
┌──────────────────────────────────────────────────────────────────────────────┐
│ terms:              term_id=3  name="News"  slug="news"                      │
│ term_taxonomy:      term_taxonomy_id=5  term_id=3  taxonomy="category"       │
│                     parent=0  count=12                                       │
│ term_relationships: object_id=42  term_taxonomy_id=5                         │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inkpress.shared.models.base import Base, str_enum
from inkpress.shared.models.enums import TaxonomyKind


class Term(Base):
    """
    A named label, independent of how it is used.

    Slugs are unique: tag creation relies on the constraint to make
    "insert unless present" atomic between concurrent callers.
    """

    __tablename__ = "terms"

    id: Mapped[int] = mapped_column("term_id", Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)

    term_group: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Term(id={self.id}, slug={self.slug})>"


class TermTaxonomy(Base):
    """
    A Term scoped to one taxonomy kind.

    Attributes:
        id: Binding identifier (column term_taxonomy_id); what posts reference
        term_id: The label
        taxonomy: category or post_tag
        description: Free text
        parent: Parent binding id for categories, 0 for root
        count: Number of posts attached (denormalized)
    """

    __tablename__ = "term_taxonomy"
    __table_args__ = (UniqueConstraint("term_id", "taxonomy", name="uq_term_taxonomy_term_kind"),)

    id: Mapped[int] = mapped_column(
        "term_taxonomy_id", Integer, primary_key=True, autoincrement=True
    )

    term_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("terms.term_id", ondelete="CASCADE"),
        nullable=False,
    )

    taxonomy: Mapped[TaxonomyKind] = mapped_column(
        str_enum(TaxonomyKind, length=32),
        nullable=False,
        index=True,
    )

    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    parent: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Many-to-One: the label behind this binding (loaded eagerly, it is always shown)
    term: Mapped["Term"] = relationship("Term", lazy="joined")

    @property
    def name(self) -> str:
        return self.term.name

    @property
    def slug(self) -> str:
        return self.term.slug

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<TermTaxonomy(id={self.id}, taxonomy={self.taxonomy}, count={self.count})>"


class TermRelationship(Base):
    """
    Edge between a post and a taxonomy binding.

    The composite primary key makes duplicate edges impossible.
    """

    __tablename__ = "term_relationships"

    object_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    )

    term_taxonomy_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("term_taxonomy.term_taxonomy_id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    term_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<TermRelationship(object_id={self.object_id}, ttid={self.term_taxonomy_id})>"
