"""Create learning platform tables and the increment_xp procedure.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# Adds experience atomically; level only moves up. Called through PostgREST
# as POST /rest/v1/rpc/increment_xp with {"uid": ..., "x": ...}.
INCREMENT_XP_FUNCTION = """
CREATE OR REPLACE FUNCTION increment_xp(uid varchar, x integer)
RETURNS void
LANGUAGE plpgsql
AS $$
BEGIN
    IF x < 0 THEN
        RAISE EXCEPTION 'experience award must be non-negative';
    END IF;
    UPDATE profiles
    SET xp = xp + x,
        level = GREATEST(level, (xp + x) / 500 + 1),
        updated_at = now()
    WHERE id = uid;
    IF NOT FOUND THEN
        RAISE EXCEPTION 'profile % not found', uid;
    END IF;
END;
$$;
"""


def upgrade() -> None:
    """Create tables, indexes and the experience procedure."""
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("full_name", sa.String(200), nullable=True),
        sa.Column("institution", sa.String(200), nullable=True),
        sa.Column("role", sa.String(200), nullable=True),
        sa.Column("xp", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("level", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "modules",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("slug", sa.String(300), nullable=False),
        sa.Column("domain", sa.String(200), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("difficulty", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("estimated_minutes", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )
    op.create_index(op.f("ix_modules_title"), "modules", ["title"], unique=False)

    op.create_table(
        "module_progress",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("module_id", sa.String(64), nullable=False),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("progress", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_score", sa.Integer(), nullable=True),
        sa.Column("last_opened", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["module_id"], ["modules.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "module_id", name="uq_module_progress_user"),
    )
    op.create_index(
        op.f("ix_module_progress_user_id"), "module_progress", ["user_id"], unique=False
    )
    op.create_index(
        op.f("ix_module_progress_module_id"), "module_progress", ["module_id"], unique=False
    )

    op.create_table(
        "questions",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("topic", sa.String(300), nullable=False),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("option_a", sa.Text(), nullable=False),
        sa.Column("option_b", sa.Text(), nullable=False),
        sa.Column("option_c", sa.Text(), nullable=False),
        sa.Column("option_d", sa.Text(), nullable=False),
        sa.Column("correct_answer", sa.String(16), nullable=False),
        sa.Column("explanation", sa.Text(), nullable=False, server_default=""),
        sa.Column("difficulty", sa.Integer(), nullable=False, server_default="1"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_questions_topic"), "questions", ["topic"], unique=False)

    op.create_table(
        "user_quiz_attempts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("question_id", sa.String(64), nullable=False),
        sa.Column("selected_option", sa.String(16), nullable=False),
        sa.Column("is_correct", sa.Boolean(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["question_id"], ["questions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_user_quiz_attempts_user_id"), "user_quiz_attempts", ["user_id"], unique=False
    )

    op.create_table(
        "key_terms",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("module_id", sa.String(64), nullable=True),
        sa.Column("term", sa.String(300), nullable=False),
        sa.Column("definition", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["module_id"], ["modules.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_key_terms_module_id"), "key_terms", ["module_id"], unique=False)

    if op.get_bind().dialect.name == "postgresql":
        op.execute(INCREMENT_XP_FUNCTION)


def downgrade() -> None:
    """Drop the experience procedure and all tables."""
    if op.get_bind().dialect.name == "postgresql":
        op.execute("DROP FUNCTION IF EXISTS increment_xp(varchar, integer)")
    op.drop_index(op.f("ix_key_terms_module_id"), table_name="key_terms")
    op.drop_table("key_terms")
    op.drop_index(op.f("ix_user_quiz_attempts_user_id"), table_name="user_quiz_attempts")
    op.drop_table("user_quiz_attempts")
    op.drop_index(op.f("ix_questions_topic"), table_name="questions")
    op.drop_table("questions")
    op.drop_index(op.f("ix_module_progress_module_id"), table_name="module_progress")
    op.drop_index(op.f("ix_module_progress_user_id"), table_name="module_progress")
    op.drop_table("module_progress")
    op.drop_index(op.f("ix_modules_title"), table_name="modules")
    op.drop_table("modules")
    op.drop_table("profiles")
