from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Type

from sqlalchemy.sql import ColumnElement

from roofcms.db.models import (
    Certificate,
    ContactArea,
    ContactLocation,
    Cover,
    Product,
    ProductBadge,
    ProductCategory,
    ProductCertificate,
    ProductItem,
    ProductProfile,
    ProductProfileBadge,
    ProductProfileCertificate,
    Project,
    ProjectCategory,
    ProjectCategoryRelation,
    ProjectImage,
    Slider,
    SocialMediaLink,
)


class UnknownScopeKey(ValueError):
    """A scope value was supplied for a column the collection is not scoped by."""


@dataclass(frozen=True)
class SortableCollection:
    """A table whose rows are displayed, and dragged, in ``order`` sequence.

    ``scope_columns`` name the columns that split the table into independent
    ordering scopes. A scope column left out of the request matches ``NULL``,
    which is how "categories directly under a product" differ from
    "categories under one of its profiles".
    """

    name: str
    model: Type[Any]
    label: str
    menu_key: str
    scope_columns: Tuple[str, ...] = ()
    active: Optional[Callable[[Type[Any]], ColumnElement]] = None

    def scope_filters(self, values: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        values = dict(values or {})
        unknown = sorted(set(values) - set(self.scope_columns))
        if unknown:
            raise UnknownScopeKey(f"{self.name} is not scoped by: {', '.join(unknown)}")
        return {column: values.get(column) for column in self.scope_columns}

    def scope_of(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        """The scope a new row built from ``values`` lands in, column defaults included."""
        scope = {}
        for column in self.scope_columns:
            if column in values:
                scope[column] = values[column]
                continue
            default = self.model.__table__.c[column].default
            scope[column] = default.arg if default is not None and default.is_scalar else None
        return scope

    def extra_criteria(self) -> Sequence[ColumnElement]:
        if self.active is None:
            return ()
        return (self.active(self.model),)


@dataclass(frozen=True)
class RelationSet:
    """A junction table assigning related rows to an owner row."""

    name: str
    model: Type[Any]
    owner_model: Type[Any]
    owner_column: str
    related_column: str
    label: str
    menu_key: str

    def rows_for(self, owner_id: Any, related_ids: Sequence[Any]) -> List[Dict[str, Any]]:
        return [{self.owner_column: owner_id, self.related_column: related_id} for related_id in related_ids]


def _not_deleted(model: Type[Any]) -> ColumnElement:
    return model.deleted_at.is_(None)


COLLECTIONS: Dict[str, SortableCollection] = {
    collection.name: collection
    for collection in (
        SortableCollection("sliders", Slider, "Slider", "home", scope_columns=("type",)),
        SortableCollection("covers", Cover, "Cover image", "home"),
        SortableCollection("products", Product, "Product", "products", scope_columns=("type",)),
        SortableCollection("product-profiles", ProductProfile, "Profile", "products", scope_columns=("product_id",)),
        SortableCollection(
            "product-categories",
            ProductCategory,
            "Category",
            "products",
            scope_columns=("product_id", "product_profile_id"),
        ),
        SortableCollection(
            "product-items",
            ProductItem,
            "Item",
            "products",
            scope_columns=("product_id", "product_profile_id", "product_category_id"),
        ),
        SortableCollection("project-categories", ProjectCategory, "Category", "projects", active=_not_deleted),
        SortableCollection("projects", Project, "Project", "projects"),
        SortableCollection("project-images", ProjectImage, "Image", "projects", scope_columns=("project_id",)),
        SortableCollection("certificates", Certificate, "Certificate", "files"),
        SortableCollection("product-badges", ProductBadge, "Product badge", "files"),
        SortableCollection("contact-areas", ContactArea, "Area", "contacts"),
        SortableCollection("contact-locations", ContactLocation, "Location", "contacts", scope_columns=("area_id",)),
        SortableCollection("social-media", SocialMediaLink, "Social media", "contacts"),
    )
}

RELATION_SETS: Dict[str, RelationSet] = {
    relation.name: relation
    for relation in (
        RelationSet(
            "product-certificates",
            ProductCertificate,
            Product,
            "product_id",
            "certificate_id",
            "Certificates",
            "products",
        ),
        RelationSet(
            "profile-certificates",
            ProductProfileCertificate,
            ProductProfile,
            "product_profile_id",
            "certificate_id",
            "Certificates",
            "products",
        ),
        RelationSet(
            "profile-badges",
            ProductProfileBadge,
            ProductProfile,
            "product_profile_id",
            "badge_id",
            "Badges",
            "products",
        ),
        RelationSet(
            "project-categories",
            ProjectCategoryRelation,
            Project,
            "project_id",
            "category_id",
            "Categories",
            "projects",
        ),
    )
}
