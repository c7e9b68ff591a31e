"""
Row and form models for every backend table.
"""

from content_admin.models.base import Base, CommonSchema, SoftDeleteMixin
from content_admin.models.project import Project, ProjectMetaData, ProjectFormData
from content_admin.models.chapter import (
    Chapter,
    ChapterMetaData,
    ChapterFormData,
    Content,
    ContentFormData,
)
from content_admin.models.recipe import Recipe, RecipeMetaData, RecipeFormData
from content_admin.models.pairing import (
    Endpoint,
    Pairing,
    PairingMetaData,
    PairingFormData,
    other_endpoint,
)
from content_admin.models.content_row import ContentRow, ContentRowMetaData, ContentRowFormData
from content_admin.models.site_settings import (
    Footer,
    FooterFormData,
    FooterSettings,
    PageSettings,
    EmailCaptureSettings,
    ShopTag,
    ShopConfig,
    ShopConfigFormData,
)

__all__ = [
    "Base",
    "CommonSchema",
    "SoftDeleteMixin",
    "Project",
    "ProjectMetaData",
    "ProjectFormData",
    "Chapter",
    "ChapterMetaData",
    "ChapterFormData",
    "Content",
    "ContentFormData",
    "Recipe",
    "RecipeMetaData",
    "RecipeFormData",
    "Endpoint",
    "Pairing",
    "PairingMetaData",
    "PairingFormData",
    "other_endpoint",
    "ContentRow",
    "ContentRowMetaData",
    "ContentRowFormData",
    "Footer",
    "FooterFormData",
    "FooterSettings",
    "PageSettings",
    "EmailCaptureSettings",
    "ShopTag",
    "ShopConfig",
    "ShopConfigFormData",
]
