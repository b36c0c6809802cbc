"""initial schema: accounts, rubric, candidates, scores, progress

Revision ID: 20261018_initial
Revises:
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261018_initial"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, server_default=sa.func.now()),
    ]


def _is_active():
    return sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true())


def upgrade():
    op.create_table(
        "admins",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "evaluators",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("email", sa.String(254)),
        sa.Column("department", sa.String(120)),
        sa.Column("password_hash", sa.String(255), nullable=False),
        _is_active(),
        *_timestamps(),
    )
    op.create_index("ix_evaluators_name", "evaluators", ["name"], unique=True)
    op.create_index("ix_evaluators_is_active", "evaluators", ["is_active"])

    op.create_table(
        "candidates",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("department", sa.String(120)),
        sa.Column("position", sa.String(120)),
        sa.Column("category", sa.String(120)),
        sa.Column("description", sa.Text),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        _is_active(),
        *_timestamps(),
    )
    op.create_index("ix_candidates_sort_order", "candidates", ["sort_order"])
    op.create_index("ix_candidates_is_active", "candidates", ["is_active"])

    op.create_table(
        "evaluation_categories",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("category_code", sa.String(20), nullable=False, unique=True),
        sa.Column("category_name", sa.String(120), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        _is_active(),
        *_timestamps(),
    )
    op.create_index("ix_evaluation_categories_is_active", "evaluation_categories", ["is_active"])

    op.create_table(
        "evaluation_items",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("category_id", sa.Integer, sa.ForeignKey("evaluation_categories.id", ondelete="CASCADE"), nullable=False),
        sa.Column("item_code", sa.String(40), nullable=False),
        sa.Column("item_name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("max_score", sa.Float, nullable=False, server_default="100"),
        sa.Column("weight", sa.Float, nullable=False, server_default="1"),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        _is_active(),
        *_timestamps(),
    )
    op.create_index("ix_evaluation_items_category_id", "evaluation_items", ["category_id"])
    op.create_index("ix_evaluation_items_is_active", "evaluation_items", ["is_active"])

    op.create_table(
        "scores",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("evaluator_id", sa.Integer, sa.ForeignKey("evaluators.id", ondelete="CASCADE"), nullable=False),
        sa.Column("candidate_id", sa.Integer, sa.ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False),
        sa.Column("item_id", sa.Integer, sa.ForeignKey("evaluation_items.id", ondelete="CASCADE"), nullable=False),
        sa.Column("score", sa.Float, nullable=False, server_default="0"),
        sa.Column("max_score", sa.Float),
        sa.Column("comments", sa.Text),
        sa.Column("is_final", sa.Boolean, nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.UniqueConstraint("evaluator_id", "candidate_id", "item_id", name="uq_scores_evaluator_candidate_item"),
    )
    op.create_index("ix_scores_evaluator_id", "scores", ["evaluator_id"])
    op.create_index("ix_scores_candidate_id", "scores", ["candidate_id"])
    op.create_index("ix_scores_is_final", "scores", ["is_final"])

    op.create_table(
        "evaluation_progress",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("evaluator_id", sa.Integer, sa.ForeignKey("evaluators.id", ondelete="CASCADE"), nullable=False),
        sa.Column("candidate_id", sa.Integer, sa.ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False),
        sa.Column("total_items", sa.Integer, nullable=False, server_default="0"),
        sa.Column("completed_items", sa.Integer, nullable=False, server_default="0"),
        sa.Column("progress_percentage", sa.Float, nullable=False, server_default="0"),
        sa.Column("is_submitted", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("submitted_at", sa.DateTime),
        sa.Column("general_comment", sa.Text),
        *_timestamps(),
        sa.UniqueConstraint("evaluator_id", "candidate_id", name="uq_progress_evaluator_candidate"),
    )
    op.create_index("ix_evaluation_progress_evaluator_id", "evaluation_progress", ["evaluator_id"])
    op.create_index("ix_evaluation_progress_candidate_id", "evaluation_progress", ["candidate_id"])

    op.create_table(
        "settings",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("key", sa.String(128), nullable=False),
        sa.Column("value", sa.Text),
        *_timestamps(),
    )
    op.create_index("ix_settings_key", "settings", ["key"], unique=True)


def downgrade():
    for table in ("settings", "evaluation_progress", "scores", "evaluation_items",
                  "evaluation_categories", "candidates", "evaluators", "admins"):
        op.drop_table(table)
