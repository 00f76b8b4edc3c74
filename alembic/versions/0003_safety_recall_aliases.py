from alembic import op
import sqlalchemy as sa

revision = "0003_safety_recall_aliases"
down_revision = "0002_listings_and_photos"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "safety_recall_aliases",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("brand_key", sa.String(length=255), nullable=False),
        sa.Column("model_key", sa.String(length=255), nullable=False, server_default=""),
        sa.Column(
            "recall_id",
            sa.String(length=255),
            sa.ForeignKey("safety_recalls.recall_id", ondelete="CASCADE"),
            nullable=False,
        ),

        sa.UniqueConstraint("brand_key", "model_key", "recall_id", name="uq_safety_recall_alias"),
    )

    op.create_index("ix_safety_recall_aliases_recall_id", "safety_recall_aliases", ["recall_id"])

    # every cached recall is reachable under the brand/model it was first found with
    op.execute(
        "INSERT INTO safety_recall_aliases (brand_key, model_key, recall_id) "
        "SELECT brand_key, COALESCE(model_key, ''), recall_id FROM safety_recalls"
    )


def downgrade():
    op.drop_index("ix_safety_recall_aliases_recall_id", table_name="safety_recall_aliases")
    op.drop_table("safety_recall_aliases")
