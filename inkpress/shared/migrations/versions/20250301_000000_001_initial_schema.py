# pylint: skip-file
# ruff: noqa
"""Initial schema - create all tables

Revision ID: 001
Revises:
Create Date: 2025-03-01 00:00:00

This migration creates all database tables for the Inkpress application.

Tables created:
- users: Post authors
- posts: Posts, pages and attachments
- postmeta: Key/value attributes per post
- post_extra: Presentation and narration attributes (one row per post)
- terms: Named labels
- term_taxonomy: Labels bound as categories or tags
- term_relationships: Post to binding edges
- comments: Reader comments

Status-like columns (post_status, taxonomy, format, audio_status) are plain
VARCHARs holding the enum value; no database enum types are created.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade database schema."""
    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_login", sa.String(60), nullable=False, unique=True),
        sa.Column("user_email", sa.String(100), nullable=False, server_default=""),
        sa.Column("display_name", sa.String(250), nullable=False, server_default=""),
        *_timestamps(),
    )

    # Create posts table
    op.create_table(
        "posts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("post_author", sa.Integer(), nullable=False, server_default="0", index=True),
        sa.Column("post_date", sa.DateTime(), nullable=False),
        sa.Column("post_date_gmt", sa.DateTime(), nullable=False),
        sa.Column("post_modified", sa.DateTime(), nullable=False),
        sa.Column("post_modified_gmt", sa.DateTime(), nullable=False),
        sa.Column("post_title", sa.Text(), nullable=False),
        sa.Column("post_content", sa.Text(), nullable=False),
        sa.Column("post_excerpt", sa.Text(), nullable=False),
        sa.Column("post_status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("post_name", sa.String(200), nullable=False, server_default="", index=True),
        sa.Column("comment_status", sa.String(20), nullable=False, server_default="open"),
        sa.Column("ping_status", sa.String(20), nullable=False, server_default="open"),
        sa.Column("post_parent", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("menu_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("post_type", sa.String(20), nullable=False, server_default="post"),
        sa.Column("post_mime_type", sa.String(100), nullable=False, server_default=""),
        sa.Column("guid", sa.String(255), nullable=False, server_default=""),
        sa.Column("comment_count", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index(
        "ix_posts_type_status_date", "posts", ["post_type", "post_status", "post_date"]
    )

    # Create postmeta table (no unique key: other consumers store multi-valued keys)
    op.create_table(
        "postmeta",
        sa.Column("meta_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "post_id",
            sa.Integer(),
            sa.ForeignKey("posts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("meta_key", sa.String(255), nullable=False, index=True),
        sa.Column("meta_value", sa.Text(), nullable=True),
    )
    op.create_index("ix_postmeta_post_key", "postmeta", ["post_id", "meta_key"])

    # Create post_extra table
    op.create_table(
        "post_extra",
        sa.Column(
            "post_id",
            sa.Integer(),
            sa.ForeignKey("posts.id", ondelete="CASCADE"),
            primary_key=True,
            autoincrement=False,
        ),
        sa.Column("subtitle", sa.Text(), nullable=True),
        sa.Column("highlight", sa.Text(), nullable=True),
        sa.Column("format", sa.String(20), nullable=False, server_default="standard"),
        sa.Column("gallery_json", sa.Text(), nullable=True),
        sa.Column("video_embed", sa.Text(), nullable=True),
        sa.Column("audio_status", sa.String(20), nullable=False, server_default="none"),
        sa.Column("audio_url", sa.Text(), nullable=True),
        sa.Column("audio_lang", sa.String(16), nullable=True),
        sa.Column("audio_chars", sa.Integer(), nullable=True),
        sa.Column("audio_duration_sec", sa.Integer(), nullable=True),
        sa.Column("audio_updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )

    # Create terms table
    op.create_table(
        "terms",
        sa.Column("term_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("slug", sa.String(200), nullable=False, unique=True),
        sa.Column("term_group", sa.Integer(), nullable=False, server_default="0"),
    )

    # Create term_taxonomy table
    op.create_table(
        "term_taxonomy",
        sa.Column("term_taxonomy_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "term_id",
            sa.Integer(),
            sa.ForeignKey("terms.term_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("taxonomy", sa.String(32), nullable=False, index=True),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("parent", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("count", sa.Integer(), nullable=False, server_default="0"),
        sa.UniqueConstraint("term_id", "taxonomy", name="uq_term_taxonomy_term_kind"),
    )

    # Create term_relationships table (composite key: one edge per pair)
    op.create_table(
        "term_relationships",
        sa.Column(
            "object_id",
            sa.Integer(),
            sa.ForeignKey("posts.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "term_taxonomy_id",
            sa.Integer(),
            sa.ForeignKey("term_taxonomy.term_taxonomy_id", ondelete="CASCADE"),
            primary_key=True,
            index=True,
        ),
        sa.Column("term_order", sa.Integer(), nullable=False, server_default="0"),
    )

    # Create comments table
    op.create_table(
        "comments",
        sa.Column("comment_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "comment_post_id",
            sa.Integer(),
            sa.ForeignKey("posts.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("comment_author", sa.String(255), nullable=False, server_default=""),
        sa.Column("comment_author_email", sa.String(100), nullable=False, server_default=""),
        sa.Column("comment_content", sa.Text(), nullable=False),
        sa.Column("comment_date", sa.DateTime(), nullable=False),
        sa.Column("comment_approved", sa.String(20), nullable=False, server_default="1"),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    # Drop tables in reverse order (respect foreign keys)
    op.drop_table("comments")
    op.drop_table("term_relationships")
    op.drop_table("term_taxonomy")
    op.drop_table("terms")
    op.drop_table("post_extra")
    op.drop_index("ix_postmeta_post_key", table_name="postmeta")
    op.drop_table("postmeta")
    op.drop_index("ix_posts_type_status_date", table_name="posts")
    op.drop_table("posts")
    op.drop_table("users")
