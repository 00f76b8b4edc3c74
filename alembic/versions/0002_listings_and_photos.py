from alembic import op
import sqlalchemy as sa

revision = "0002_listings_and_photos"
down_revision = "0001_safety_recalls"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "listings",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("owner_id", sa.String(length=120), nullable=False),

        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("original_price", sa.Numeric(10, 2), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("age_range", sa.String(length=50), nullable=False),
        sa.Column("condition", sa.String(length=50), nullable=False),
        sa.Column("brand", sa.String(length=100), nullable=True),
        sa.Column("model", sa.String(length=100), nullable=True),
        sa.Column("is_smoke_free", sa.Boolean(), nullable=True),
        sa.Column("is_pet_free", sa.Boolean(), nullable=True),
        sa.Column("location_zip", sa.String(length=5), nullable=False),

        sa.Column("safety_checked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("has_recall", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("recall_notes", sa.Text(), nullable=True),
        sa.Column("recall_id", sa.String(length=255), nullable=True),

        sa.Column("status", sa.String(length=30), nullable=False, server_default="active"),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),

        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("created_by", sa.String(), nullable=True),
        sa.Column("updated_by", sa.String(), nullable=True),
    )

    op.create_index("ix_listings_owner_id", "listings", ["owner_id"])
    op.create_index("ix_listings_category", "listings", ["category"])
    op.create_index("ix_listings_location_zip", "listings", ["location_zip"])

    op.create_table(
        "listing_photos",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("listing_id", sa.String(), sa.ForeignKey("listings.id", ondelete="CASCADE"), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),

        sa.UniqueConstraint("listing_id", "display_order", name="uq_listing_photo_order"),
    )

    op.create_index("ix_listing_photos_listing_id", "listing_photos", ["listing_id"])


def downgrade():
    op.drop_index("ix_listing_photos_listing_id", table_name="listing_photos")
    op.drop_table("listing_photos")
    op.drop_index("ix_listings_location_zip", table_name="listings")
    op.drop_index("ix_listings_category", table_name="listings")
    op.drop_index("ix_listings_owner_id", table_name="listings")
    op.drop_table("listings")
