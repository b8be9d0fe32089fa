"""Create the absence_questions answer table.

One row per recorded answer.  Rows are append-only and read back per
absence case in ``answered_at`` order, which the composite index serves.

Revision ID: 20261019_answers
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import TIMESTAMP

# revision identifiers, used by Alembic.
revision = "20261019_answers"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "absence_questions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("absence_id", sa.Integer(), nullable=False),
        sa.Column("question_template_id", sa.Integer(), nullable=False),
        sa.Column("answer", sa.Text(), nullable=False),
        sa.Column("answered_by_id", sa.Integer(), nullable=False),
        sa.Column(
            "answered_at",
            TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )
    op.create_index(
        "ix_absence_questions_absence_answered",
        "absence_questions",
        ["absence_id", "answered_at"],
    )


def downgrade() -> None:
    op.drop_index(
        "ix_absence_questions_absence_answered", table_name="absence_questions",
    )
    op.drop_table("absence_questions")
