from alembic import op
import sqlalchemy as sa

revision = "0001_safety_recalls"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "safety_recalls",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("recall_id", sa.String(length=255), nullable=False),

        sa.Column("product_name", sa.Text(), nullable=False),
        sa.Column("brand", sa.String(length=255), nullable=False),
        sa.Column("model", sa.String(length=255), nullable=True),
        sa.Column("hazard", sa.Text(), nullable=False),
        sa.Column("remedy", sa.Text(), nullable=False),
        sa.Column("recall_date", sa.Date(), nullable=False),

        sa.Column("brand_key", sa.String(length=255), nullable=False),
        sa.Column("model_key", sa.String(length=255), nullable=True),

        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),

        sa.UniqueConstraint("recall_id", name="uq_safety_recalls_recall_id"),
    )

    op.create_index("ix_safety_recalls_brand_key", "safety_recalls", ["brand_key"])
    op.create_index("ix_safety_recalls_recall_date", "safety_recalls", ["recall_date"])


def downgrade():
    op.drop_index("ix_safety_recalls_recall_date", table_name="safety_recalls")
    op.drop_index("ix_safety_recalls_brand_key", table_name="safety_recalls")
    op.drop_table("safety_recalls")
