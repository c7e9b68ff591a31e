"""
Plain table repositories with no table-specific write rules.

Content rows and the settings tables are hard-delete only.
"""

from content_admin.models import (
    Chapter,
    ChapterFormData,
    Content,
    ContentFormData,
    ContentRow,
    ContentRowFormData,
    EmailCaptureSettings,
    Footer,
    FooterFormData,
    FooterSettings,
    PageSettings,
    Pairing,
    PairingFormData,
    ShopConfig,
    ShopConfigFormData,
)
from content_admin.services.crud import CRUDWrapper, GetTableOpts, TableBehaviour
from shared.config.constants import Tables
from shared.infrastructure.backend import BackendClient

HARD_DELETE_ONLY = TableBehaviour(supports_soft_deletion=False)


def get_chapter_repository(backend: BackendClient) -> CRUDWrapper[Chapter, ChapterFormData, GetTableOpts]:
    return CRUDWrapper(Tables.CHAPTERS, Chapter, backend)


def get_content_repository(backend: BackendClient) -> CRUDWrapper[Content, ContentFormData, GetTableOpts]:
    return CRUDWrapper(Tables.CONTENTS, Content, backend)


def get_pairing_repository(backend: BackendClient) -> CRUDWrapper[Pairing, PairingFormData, GetTableOpts]:
    return CRUDWrapper(Tables.PAIRINGS, Pairing, backend)


def get_content_row_repository(
    backend: BackendClient,
) -> CRUDWrapper[ContentRow, ContentRowFormData, GetTableOpts]:
    return CRUDWrapper(Tables.CONTENT_ROWS, ContentRow, backend, behaviour=HARD_DELETE_ONLY)


def get_footer_repository(backend: BackendClient) -> CRUDWrapper[Footer, FooterFormData, GetTableOpts]:
    return CRUDWrapper(Tables.FOOTER, Footer, backend)


def get_footer_settings_repository(backend: BackendClient) -> CRUDWrapper:
    return CRUDWrapper(Tables.FOOTER_SETTINGS, FooterSettings, backend, behaviour=HARD_DELETE_ONLY)


def get_page_settings_repository(backend: BackendClient) -> CRUDWrapper:
    return CRUDWrapper(Tables.PAGE_SETTINGS, PageSettings, backend, behaviour=HARD_DELETE_ONLY)


def get_email_capture_settings_repository(backend: BackendClient) -> CRUDWrapper:
    return CRUDWrapper(
        Tables.EMAIL_CAPTURE_SETTINGS,
        EmailCaptureSettings,
        backend,
        behaviour=HARD_DELETE_ONLY,
    )


def get_shop_repository(backend: BackendClient) -> CRUDWrapper[ShopConfig, ShopConfigFormData, GetTableOpts]:
    return CRUDWrapper(Tables.SHOP, ShopConfig, backend)
