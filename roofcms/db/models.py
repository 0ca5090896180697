from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def new_id() -> str:
    return uuid4().hex


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class OrderMixin:
    """Display position inside the entity's ordering scope."""

    order = Column(Integer, nullable=False, default=0)


# Homepage


class Slider(Base, TimestampMixin, OrderMixin):
    __tablename__ = "slider"

    id = Column(String(32), primary_key=True, default=new_id)
    type = Column(String(255), nullable=False, default="home-cover", index=True)
    image = Column(Text, nullable=False)
    title_en = Column(String(200), nullable=False)
    title_id = Column(String(200), nullable=False)
    description_en = Column(String(500), nullable=True)
    description_id = Column(String(500), nullable=True)
    link = Column(Text, nullable=True)
    link_text = Column(String(100), nullable=True)


class Cover(Base, TimestampMixin, OrderMixin):
    __tablename__ = "cover"

    id = Column(String(32), primary_key=True, default=new_id)
    image = Column(Text, nullable=False)
    title = Column(String(200), nullable=True)


# Products


class Product(Base, TimestampMixin, OrderMixin):
    __tablename__ = "product"

    id = Column(String(32), primary_key=True, default=new_id)
    # "product", "accessories" or "add-on"; each type is its own ordering sequence
    type = Column(String(40), nullable=False, default="product", index=True)
    name = Column(String(160), nullable=False)
    slug = Column(String(160), nullable=True, unique=True)
    title = Column(String(200), nullable=True)
    description_en = Column(Text, nullable=True)
    description_id = Column(Text, nullable=True)
    brand_image = Column(Text, nullable=True)
    is_highlight = Column(Boolean, default=False, nullable=False)

    profiles = relationship("ProductProfile", back_populates="product", cascade="all, delete-orphan")


class ProductProfile(Base, TimestampMixin, OrderMixin):
    __tablename__ = "product_profile"

    id = Column(String(32), primary_key=True, default=new_id)
    product_id = Column(String(32), ForeignKey("product.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(160), nullable=False)
    slug = Column(String(160), nullable=True)

    product = relationship("Product", back_populates="profiles")


class ProductCategory(Base, TimestampMixin, OrderMixin):
    __tablename__ = "product_category"

    id = Column(String(32), primary_key=True, default=new_id)
    product_id = Column(String(32), ForeignKey("product.id", ondelete="CASCADE"), nullable=True, index=True)
    product_profile_id = Column(
        String(32), ForeignKey("product_profile.id", ondelete="CASCADE"), nullable=True, index=True
    )
    name = Column(String(160), nullable=False)
    subtitle = Column(String(200), nullable=True)


class ProductItem(Base, TimestampMixin, OrderMixin):
    __tablename__ = "product_item"

    id = Column(String(32), primary_key=True, default=new_id)
    product_id = Column(String(32), ForeignKey("product.id", ondelete="CASCADE"), nullable=False, index=True)
    product_profile_id = Column(String(32), ForeignKey("product_profile.id", ondelete="CASCADE"), nullable=True)
    product_category_id = Column(String(32), ForeignKey("product_category.id", ondelete="CASCADE"), nullable=True)
    name = Column(String(160), nullable=False)
    image = Column(Text, nullable=True)


class Certificate(Base, TimestampMixin, OrderMixin):
    __tablename__ = "certificates"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(160), nullable=False)
    image = Column(Text, nullable=True)


class ProductBadge(Base, TimestampMixin, OrderMixin):
    __tablename__ = "product_badges"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(160), nullable=False)
    image = Column(Text, nullable=True)


class ProductCertificate(Base):
    __tablename__ = "product_certificates"
    __table_args__ = (UniqueConstraint("product_id", "certificate_id"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(String(32), ForeignKey("product.id", ondelete="CASCADE"), nullable=False, index=True)
    certificate_id = Column(String(32), ForeignKey("certificates.id", ondelete="CASCADE"), nullable=False)


class ProductProfileCertificate(Base):
    __tablename__ = "product_profile_certificates"
    __table_args__ = (UniqueConstraint("product_profile_id", "certificate_id"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_profile_id = Column(
        String(32), ForeignKey("product_profile.id", ondelete="CASCADE"), nullable=False, index=True
    )
    certificate_id = Column(String(32), ForeignKey("certificates.id", ondelete="CASCADE"), nullable=False)


class ProductProfileBadge(Base):
    __tablename__ = "product_profile_badges"
    __table_args__ = (UniqueConstraint("product_profile_id", "badge_id"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_profile_id = Column(
        String(32), ForeignKey("product_profile.id", ondelete="CASCADE"), nullable=False, index=True
    )
    badge_id = Column(String(32), ForeignKey("product_badges.id", ondelete="CASCADE"), nullable=False)


# Projects


class ProjectCategory(Base, TimestampMixin, OrderMixin):
    __tablename__ = "project_categories"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(160), nullable=False)
    slug = Column(String(160), nullable=False, unique=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)


class Project(Base, TimestampMixin, OrderMixin):
    __tablename__ = "projects"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    location_text = Column(String(255), nullable=True)
    location_link = Column(Text, nullable=True)
    roof_type = Column(String(120), nullable=True)

    images = relationship("ProjectImage", back_populates="project", cascade="all, delete-orphan")


class ProjectImage(Base, TimestampMixin, OrderMixin):
    __tablename__ = "project_images"

    id = Column(String(32), primary_key=True, default=new_id)
    project_id = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    image_url = Column(Text, nullable=False)
    is_highlight = Column(Boolean, default=False, nullable=False)

    project = relationship("Project", back_populates="images")


class ProjectCategoryRelation(Base):
    __tablename__ = "project_category_relations"
    __table_args__ = (UniqueConstraint("project_id", "category_id"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(String(32), ForeignKey("project_categories.id", ondelete="CASCADE"), nullable=False)


# Contacts & location


class ContactArea(Base, TimestampMixin, OrderMixin):
    __tablename__ = "contact_areas"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(160), nullable=False, unique=True)

    locations = relationship("ContactLocation", back_populates="area", cascade="all, delete-orphan")


class ContactLocation(Base, TimestampMixin, OrderMixin):
    __tablename__ = "contact_locations"

    id = Column(String(32), primary_key=True, default=new_id)
    area_id = Column(String(32), ForeignKey("contact_areas.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(160), nullable=False)
    link = Column(Text, nullable=True)

    area = relationship("ContactArea", back_populates="locations")


class SocialMediaLink(Base, TimestampMixin, OrderMixin):
    __tablename__ = "social_media"

    id = Column(String(32), primary_key=True, default=new_id)
    platform = Column(String(60), nullable=False)
    url = Column(Text, nullable=False)
    image = Column(Text, nullable=True)


# Dashboard access


class Role(Base, TimestampMixin):
    __tablename__ = "roles"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(120), nullable=False, unique=True)

    menu_permissions = relationship("RoleMenuPermission", back_populates="role", cascade="all, delete-orphan")


class RoleMenuPermission(Base):
    __tablename__ = "role_menu_permissions"
    __table_args__ = (UniqueConstraint("role_id", "menu_key"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    role_id = Column(String(32), ForeignKey("roles.id", ondelete="CASCADE"), nullable=False, index=True)
    menu_key = Column(String(80), nullable=False)
    allowed = Column(Boolean, default=True, nullable=False)

    role = relationship("Role", back_populates="menu_permissions")


class DashboardUser(Base, TimestampMixin):
    __tablename__ = "dashboard_users"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, unique=True)
    full_name = Column(String(160), nullable=True)
    role_id = Column(String(32), ForeignKey("roles.id", ondelete="SET NULL"), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    role = relationship("Role")
