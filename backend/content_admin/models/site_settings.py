"""
Simple configuration entities: footer links, page/footer/email capture
settings and the shop page config. CRUD only.
"""

from __future__ import annotations

from pydantic import Field

from content_admin.models.base import Base, CommonSchema, SoftDeleteMixin


class FooterMetaData(Base):
    title: str | None = None
    url: str | None = None
    icon_url: str | None = None
    order_index: int | None = None


class Footer(CommonSchema, SoftDeleteMixin, FooterMetaData):
    pass


class FooterFormData(FooterMetaData):
    pass


class FooterSettingsMetaData(Base):
    title: str | None = None
    subtitle: str | None = None
    copyright_text: str | None = None


class FooterSettings(CommonSchema, FooterSettingsMetaData):
    pass


class PageSettingsMetaData(Base):
    page_name: str | None = None
    title: str | None = None
    subtitle: str | None = None


class PageSettings(CommonSchema, PageSettingsMetaData):
    pass


class EmailCaptureSettingsMetaData(Base):
    title: str | None = None
    subtitle: str | None = None
    cta_text: str | None = None
    footer_text: str | None = None


class EmailCaptureSettings(CommonSchema, EmailCaptureSettingsMetaData):
    pass


class ShopTag(Base):
    id: str
    order: int = 0
    title: str = ""
    description: str = ""


class ShopConfigMetaData(Base):
    """Shop page copy; column names are camelCase on the backend."""

    page_title: str | None = Field(default=None, alias="pageTitle")
    page_subtitle: str | None = Field(default=None, alias="pageSubtitle")
    coming_soon_title: str | None = Field(default=None, alias="comingSoonTitle")
    coming_soon_description: str | None = Field(default=None, alias="comingSoonDescription")
    shop_tags: list[ShopTag] = Field(default_factory=list, alias="shopTags")
    cta_text: str | None = Field(default=None, alias="ctaText")


class ShopConfig(CommonSchema, ShopConfigMetaData):
    pass


class ShopConfigFormData(ShopConfigMetaData):
    pass
