"""
CRUD layer: response envelope, query options and the generic repository.
"""

from content_admin.services.crud.response import Flag, Response, ResponseError, SUCCESS_FLAGS
from content_admin.services.crud.query import (
    ArrayFilter,
    EqFilter,
    GetTableOpts,
    IlikeFilter,
    InFilter,
)
from content_admin.services.crud.repository import Callbacks, CRUDWrapper, TableBehaviour
from content_admin.services.crud.soft_delete import filter_active, soft_delete_payload

__all__ = [
    # Envelope
    "Flag",
    "Response",
    "ResponseError",
    "SUCCESS_FLAGS",
    # Query options
    "ArrayFilter",
    "EqFilter",
    "GetTableOpts",
    "IlikeFilter",
    "InFilter",
    # Repository
    "Callbacks",
    "CRUDWrapper",
    "TableBehaviour",
    # Soft delete
    "filter_active",
    "soft_delete_payload",
]
