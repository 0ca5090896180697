"""Initial schema: homepage, products, projects, files, contacts and dashboard access"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20251020_01"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _order() -> sa.Column:
    return sa.Column("order", sa.Integer(), nullable=False, server_default=sa.text("0"))


def upgrade() -> None:
    op.create_table(
        "slider",
        *_timestamps(),
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("type", sa.String(length=255), nullable=False, server_default="home-cover"),
        sa.Column("image", sa.Text(), nullable=False),
        sa.Column("title_en", sa.String(length=200), nullable=False),
        sa.Column("title_id", sa.String(length=200), nullable=False),
        sa.Column("description_en", sa.String(length=500), nullable=True),
        sa.Column("description_id", sa.String(length=500), nullable=True),
        sa.Column("link", sa.Text(), nullable=True),
        sa.Column("link_text", sa.String(length=100), nullable=True),
        _order(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_slider_type_order", "slider", ["type", "order"], unique=False)

    op.create_table(
        "cover",
        *_timestamps(),
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("image", sa.Text(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=True),
        _order(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "product",
        *_timestamps(),
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("type", sa.String(length=40), nullable=False, server_default="product"),
        sa.Column("name", sa.String(length=160), nullable=False),
        sa.Column("slug", sa.String(length=160), nullable=True),
        sa.Column("title", sa.String(length=200), nullable=True),
        sa.Column("description_en", sa.Text(), nullable=True),
        sa.Column("description_id", sa.Text(), nullable=True),
        sa.Column("brand_image", sa.Text(), nullable=True),
        sa.Column("is_highlight", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        _order(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )
    op.create_index(op.f("ix_product_type"), "product", ["type"], unique=False)

    op.create_table(
        "product_profile",
        *_timestamps(),
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("product_id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=160), nullable=False),
        sa.Column("slug", sa.String(length=160), nullable=True),
        _order(),
        sa.ForeignKeyConstraint(["product_id"], ["product.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_product_profile_product_id"), "product_profile", ["product_id"], unique=False)

    op.create_table(
        "product_category",
        *_timestamps(),
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("product_id", sa.String(length=32), nullable=True),
        sa.Column("product_profile_id", sa.String(length=32), nullable=True),
        sa.Column("name", sa.String(length=160), nullable=False),
        sa.Column("subtitle", sa.String(length=200), nullable=True),
        _order(),
        sa.ForeignKeyConstraint(["product_id"], ["product.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["product_profile_id"], ["product_profile.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_product_category_product_id"), "product_category", ["product_id"], unique=False)
    op.create_index(
        op.f("ix_product_category_product_profile_id"), "product_category", ["product_profile_id"], unique=False
    )

    op.create_table(
        "product_item",
        *_timestamps(),
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("product_id", sa.String(length=32), nullable=False),
        sa.Column("product_profile_id", sa.String(length=32), nullable=True),
        sa.Column("product_category_id", sa.String(length=32), nullable=True),
        sa.Column("name", sa.String(length=160), nullable=False),
        sa.Column("image", sa.Text(), nullable=True),
        _order(),
        sa.ForeignKeyConstraint(["product_id"], ["product.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["product_profile_id"], ["product_profile.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["product_category_id"], ["product_category.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_product_item_product_id"), "product_item", ["product_id"], unique=False)

    for table in ("certificates", "product_badges"):
        op.create_table(
            table,
            *_timestamps(),
            sa.Column("id", sa.String(length=32), nullable=False),
            sa.Column("name", sa.String(length=160), nullable=False),
            sa.Column("image", sa.Text(), nullable=True),
            _order(),
            sa.PrimaryKeyConstraint("id"),
        )

    op.create_table(
        "product_certificates",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("product_id", sa.String(length=32), nullable=False),
        sa.Column("certificate_id", sa.String(length=32), nullable=False),
        sa.ForeignKeyConstraint(["product_id"], ["product.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["certificate_id"], ["certificates.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("product_id", "certificate_id"),
    )
    op.create_index(op.f("ix_product_certificates_product_id"), "product_certificates", ["product_id"], unique=False)

    op.create_table(
        "product_profile_certificates",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("product_profile_id", sa.String(length=32), nullable=False),
        sa.Column("certificate_id", sa.String(length=32), nullable=False),
        sa.ForeignKeyConstraint(["product_profile_id"], ["product_profile.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["certificate_id"], ["certificates.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("product_profile_id", "certificate_id"),
    )
    op.create_index(
        op.f("ix_product_profile_certificates_product_profile_id"),
        "product_profile_certificates",
        ["product_profile_id"],
        unique=False,
    )

    op.create_table(
        "product_profile_badges",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("product_profile_id", sa.String(length=32), nullable=False),
        sa.Column("badge_id", sa.String(length=32), nullable=False),
        sa.ForeignKeyConstraint(["product_profile_id"], ["product_profile.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["badge_id"], ["product_badges.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("product_profile_id", "badge_id"),
    )
    op.create_index(
        op.f("ix_product_profile_badges_product_profile_id"),
        "product_profile_badges",
        ["product_profile_id"],
        unique=False,
    )

    op.create_table(
        "project_categories",
        *_timestamps(),
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=160), nullable=False),
        sa.Column("slug", sa.String(length=160), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        _order(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )
    op.create_index(op.f("ix_project_categories_deleted_at"), "project_categories", ["deleted_at"], unique=False)

    op.create_table(
        "projects",
        *_timestamps(),
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("location_text", sa.String(length=255), nullable=True),
        sa.Column("location_link", sa.Text(), nullable=True),
        sa.Column("roof_type", sa.String(length=120), nullable=True),
        _order(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "project_images",
        *_timestamps(),
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("project_id", sa.String(length=32), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("is_highlight", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        _order(),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_project_images_project_id"), "project_images", ["project_id"], unique=False)

    op.create_table(
        "project_category_relations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("project_id", sa.String(length=32), nullable=False),
        sa.Column("category_id", sa.String(length=32), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["category_id"], ["project_categories.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("project_id", "category_id"),
    )
    op.create_index(
        op.f("ix_project_category_relations_project_id"), "project_category_relations", ["project_id"], unique=False
    )

    op.create_table(
        "contact_areas",
        *_timestamps(),
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=160), nullable=False),
        _order(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "contact_locations",
        *_timestamps(),
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("area_id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=160), nullable=False),
        sa.Column("link", sa.Text(), nullable=True),
        _order(),
        sa.ForeignKeyConstraint(["area_id"], ["contact_areas.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_contact_locations_area_id"), "contact_locations", ["area_id"], unique=False)

    op.create_table(
        "social_media",
        *_timestamps(),
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("platform", sa.String(length=60), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("image", sa.Text(), nullable=True),
        _order(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "roles",
        *_timestamps(),
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "role_menu_permissions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("role_id", sa.String(length=32), nullable=False),
        sa.Column("menu_key", sa.String(length=80), nullable=False),
        sa.Column("allowed", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("role_id", "menu_key"),
    )
    op.create_index(op.f("ix_role_menu_permissions_role_id"), "role_menu_permissions", ["role_id"], unique=False)

    op.create_table(
        "dashboard_users",
        *_timestamps(),
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=160), nullable=True),
        sa.Column("role_id", sa.String(length=32), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )


def downgrade() -> None:
    op.drop_table("dashboard_users")
    op.drop_index(op.f("ix_role_menu_permissions_role_id"), table_name="role_menu_permissions")
    op.drop_table("role_menu_permissions")
    op.drop_table("roles")
    op.drop_table("social_media")
    op.drop_index(op.f("ix_contact_locations_area_id"), table_name="contact_locations")
    op.drop_table("contact_locations")
    op.drop_table("contact_areas")
    op.drop_index(op.f("ix_project_category_relations_project_id"), table_name="project_category_relations")
    op.drop_table("project_category_relations")
    op.drop_index(op.f("ix_project_images_project_id"), table_name="project_images")
    op.drop_table("project_images")
    op.drop_table("projects")
    op.drop_index(op.f("ix_project_categories_deleted_at"), table_name="project_categories")
    op.drop_table("project_categories")
    op.drop_index(op.f("ix_product_profile_badges_product_profile_id"), table_name="product_profile_badges")
    op.drop_table("product_profile_badges")
    op.drop_index(
        op.f("ix_product_profile_certificates_product_profile_id"), table_name="product_profile_certificates"
    )
    op.drop_table("product_profile_certificates")
    op.drop_index(op.f("ix_product_certificates_product_id"), table_name="product_certificates")
    op.drop_table("product_certificates")
    op.drop_table("product_badges")
    op.drop_table("certificates")
    op.drop_index(op.f("ix_product_item_product_id"), table_name="product_item")
    op.drop_table("product_item")
    op.drop_index(op.f("ix_product_category_product_profile_id"), table_name="product_category")
    op.drop_index(op.f("ix_product_category_product_id"), table_name="product_category")
    op.drop_table("product_category")
    op.drop_index(op.f("ix_product_profile_product_id"), table_name="product_profile")
    op.drop_table("product_profile")
    op.drop_index(op.f("ix_product_type"), table_name="product")
    op.drop_table("product")
    op.drop_table("cover")
    op.drop_index("ix_slider_type_order", table_name="slider")
    op.drop_table("slider")
