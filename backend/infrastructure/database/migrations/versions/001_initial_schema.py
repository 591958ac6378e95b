"""Initial schema: profiles, keywords, suggestion cache, quota, articles, style guides

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_profiles_user_id", "profiles", ["user_id"], unique=True)

    op.create_table(
        "keywords",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("phrase", sa.String(length=100), nullable=False),
        sa.Column("normalized", sa.String(length=100), nullable=False),
        sa.Column("source", sa.String(length=20), nullable=False, server_default="manual"),
        sa.Column("search_volume", sa.Integer(), nullable=True),
        sa.Column("cpc", sa.Float(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("normalized"),
    )
    op.create_index("ix_keywords_created_at", "keywords", ["created_at"])

    op.create_table(
        "keyword_suggestions_cache",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("seeds", postgresql.JSONB(), nullable=False),
        sa.Column("language_name", sa.String(length=100), nullable=False),
        sa.Column("location_code", sa.Integer(), nullable=False),
        sa.Column("response_data", sa.JSON(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_keyword_suggestions_cache_expires_at",
        "keyword_suggestions_cache",
        ["expires_at"],
    )
    op.create_index(
        "ix_kw_suggestions_locale",
        "keyword_suggestions_cache",
        ["language_name", "location_code"],
    )

    op.create_table(
        "generation_quota",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("tier", sa.String(length=20), nullable=False, server_default="free"),
        sa.Column("generation_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "last_reset_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_generation_quota_user_id", "generation_quota", ["user_id"], unique=True)

    op.create_table(
        "articles",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("style_guide_id", postgresql.UUID(as_uuid=False), nullable=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("slug", sa.String(length=200), nullable=False),
        sa.Column("keywords", sa.JSON(), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("tone", sa.String(length=50), nullable=True),
        sa.Column("content_length", sa.String(length=20), nullable=True),
        sa.Column("reading_level", sa.String(length=20), nullable=True),
        sa.Column("meta_title", sa.String(length=60), nullable=True),
        sa.Column("meta_description", sa.String(length=160), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="draft"),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('draft', 'published', 'archived')", name="ck_articles_status"
        ),
    )
    op.create_index("ix_articles_user_id", "articles", ["user_id"])
    op.create_index("ix_articles_slug", "articles", ["slug"])
    op.create_index("ix_articles_status", "articles", ["status"])
    op.create_index("ix_articles_user_created", "articles", ["user_id", "created_at"])

    op.create_table(
        "style_guides",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("brand_name", sa.String(length=100), nullable=False),
        sa.Column("brand_description", sa.Text(), nullable=False),
        sa.Column("personality", sa.JSON(), nullable=False),
        sa.Column("formality", sa.String(length=20), nullable=False),
        sa.Column("target_audience", sa.Text(), nullable=False),
        sa.Column("pain_points", sa.Text(), nullable=False),
        sa.Column("language", sa.String(length=5), nullable=False, server_default="ko"),
        sa.Column("tone", sa.String(length=50), nullable=False),
        sa.Column("content_length", sa.String(length=20), nullable=False),
        sa.Column("reading_level", sa.String(length=20), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default="false"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_style_guides_user_id", "style_guides", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_style_guides_user_id", table_name="style_guides")
    op.drop_table("style_guides")

    op.drop_index("ix_articles_user_created", table_name="articles")
    op.drop_index("ix_articles_status", table_name="articles")
    op.drop_index("ix_articles_slug", table_name="articles")
    op.drop_index("ix_articles_user_id", table_name="articles")
    op.drop_table("articles")

    op.drop_index("ix_generation_quota_user_id", table_name="generation_quota")
    op.drop_table("generation_quota")

    op.drop_index("ix_kw_suggestions_locale", table_name="keyword_suggestions_cache")
    op.drop_index("ix_keyword_suggestions_cache_expires_at", table_name="keyword_suggestions_cache")
    op.drop_table("keyword_suggestions_cache")

    op.drop_index("ix_keywords_created_at", table_name="keywords")
    op.drop_table("keywords")

    op.drop_index("ix_profiles_user_id", table_name="profiles")
    op.drop_table("profiles")
