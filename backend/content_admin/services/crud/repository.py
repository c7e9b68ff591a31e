"""
Generic table repository.

One CRUDWrapper per backend table gives create / update / read / delete /
archive operations that always answer with a Response envelope. Expected
failures never raise out of a repository: backend rejections become
API_ERROR, anything unexpected becomes INTERNAL_ERROR.

Usage:
    from content_admin.services.crud import CRUDWrapper, TableBehaviour

    rows = CRUDWrapper(
        "content_rows",
        ContentRow,
        backend,
        behaviour=TableBehaviour(supports_soft_deletion=False),
    )

    response = await rows.get(GetTableOpts(eq=[EqFilter("page", "home")]))
    if response.ok:
        for row in response.data:
            ...
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Iterator, Mapping, TypeVar

from pydantic import BaseModel

from content_admin.services.crud.query import GetTableOpts
from content_admin.services.crud.response import Flag, Response
from content_admin.services.crud.soft_delete import soft_delete_payload
from shared.config.logging import get_logger
from shared.infrastructure.backend import BackendClient
from shared.utils.exceptions import BackendAPIError, SoftDeleteNotSupportedError
from shared.utils.validators import strip_unwanted_values

logger = get_logger(__name__)

EntityT = TypeVar("EntityT", bound=BaseModel)
FormT = TypeVar("FormT", bound=BaseModel)
OptsT = TypeVar("OptsT", bound=GetTableOpts)

# Error code the backend uses when an object was requested but 0 or >1 rows matched
SINGLE_ROW_ERROR_CODE = "PGRST116"


@dataclass(frozen=True)
class TableBehaviour:
    """Per-table capabilities."""

    supports_soft_deletion: bool = True


@dataclass
class Callbacks:
    """Optional per-call hooks."""

    on_loading_state_change: Callable[[bool], None] | None = None


class CRUDWrapper(Generic[EntityT, FormT, OptsT]):
    """
    Repository bound to one backend table.

    Subclass and override prepare_payload / validate_payload for
    table-specific write rules.
    """

    def __init__(
        self,
        table_name: str,
        model: type[EntityT],
        backend: BackendClient,
        behaviour: TableBehaviour | None = None,
    ):
        self._table = table_name
        self._model = model
        self._backend = backend
        self._behaviour = behaviour or TableBehaviour()

    @property
    def table_name(self) -> str:
        return self._table

    @property
    def model(self) -> type[EntityT]:
        return self._model

    @property
    def behaviour(self) -> TableBehaviour:
        return self._behaviour

    # =========================================================================
    # Hooks
    # =========================================================================

    def prepare_payload(self, payload: dict[str, Any], *, creating: bool) -> dict[str, Any]:
        """Reshape a write payload before cleaning. Default: unchanged."""
        return payload

    def validate_payload(self, payload: dict[str, Any], *, creating: bool) -> str | None:
        """Return a validation message to reject the write. Default: accept."""
        return None

    # =========================================================================
    # Operations
    # =========================================================================

    async def create_one(
        self,
        data: FormT | Mapping[str, Any],
        callbacks: Callbacks | None = None,
    ) -> Response[EntityT]:
        """Insert one row and return it as stored."""
        payload = self.prepare_payload(self._to_payload(data), creating=True)
        payload = strip_unwanted_values(payload, drop_none=True)

        problem = self.validate_payload(payload, creating=True)
        if problem:
            return Response.validation_error(problem)

        async def call() -> Response[EntityT]:
            rows = await self._backend.insert(self._table, payload)
            if not rows:
                # Accepted, but the backend did not return the representation
                return Response(Flag.UNKNOWN_OR_SUCCESS, None)
            return Response.success(self._parse(rows[0]))

        return await self._run("create_one", call, callbacks)

    async def update_one_by_id(
        self,
        entity_id: str | int,
        data: FormT | Mapping[str, Any],
        callbacks: Callbacks | None = None,
    ) -> Response[EntityT]:
        """
        Apply a partial update.

        Blank strings are dropped; None is kept as an explicit clear.
        Success with data None means no row matched the id.
        """
        payload = self.prepare_payload(self._to_payload(data), creating=False)
        payload = strip_unwanted_values(payload)
        if not payload:
            return Response.validation_error("No updates found.")

        problem = self.validate_payload(payload, creating=False)
        if problem:
            return Response.validation_error(problem)

        async def call() -> Response[EntityT]:
            rows = await self._backend.update(self._table, payload, self._id_params(entity_id))
            return Response.success(self._parse(rows[0]) if rows else None)

        return await self._run("update_one_by_id", call, callbacks)

    async def get_by_id(
        self,
        entity_id: str | int,
        callbacks: Callbacks | None = None,
    ) -> Response[EntityT]:
        """Fetch one row. Success with data None means not found."""

        async def call() -> Response[EntityT]:
            rows = await self._backend.select(
                self._table, [("select", "*"), *self._id_params(entity_id)]
            )
            return Response.success(self._parse(rows[0]) if rows else None)

        return await self._run("get_by_id", call, callbacks)

    async def get(
        self,
        opts: OptsT | None = None,
        callbacks: Callbacks | None = None,
    ) -> Response[Any]:
        """
        Query the table.

        Data is a list of rows, or a single row (or None) when the options
        ask for single / maybe_single.
        """
        opts = opts or GetTableOpts()
        problem = opts.validate()
        if problem:
            return Response.validation_error(problem)

        params = opts.to_params()

        async def call() -> Response[Any]:
            if opts.single:
                row = await self._backend.select(self._table, params, single=True)
                return Response.success(self._parse(row))

            rows = await self._backend.select(self._table, params)
            if opts.maybe_single:
                if len(rows) > 1:
                    raise BackendAPIError(
                        "JSON object requested, multiple (or no) rows returned",
                        code=SINGLE_ROW_ERROR_CODE,
                        details=f"The result contains {len(rows)} rows",
                        table=self._table,
                    )
                return Response.success(self._parse(rows[0]) if rows else None)
            return Response.success([self._parse(row) for row in rows])

        return await self._run("get", call, callbacks)

    async def delete_one_by_id_permanent(
        self,
        entity_id: str | int,
        callbacks: Callbacks | None = None,
    ) -> Response[None]:
        """Hard delete. Deleting a missing row also succeeds."""

        async def call() -> Response[None]:
            await self._backend.delete(self._table, self._id_params(entity_id))
            return Response.success(None)

        return await self._run("delete_one_by_id_permanent", call, callbacks)

    async def toggle_soft_delete(
        self,
        entity_id: str | int,
        is_deleted: bool,
        callbacks: Callbacks | None = None,
    ) -> Response[EntityT]:
        """
        Archive (True) or restore (False) a row.

        Raises:
            SoftDeleteNotSupportedError: If the table only supports hard delete.
        """
        if not self._behaviour.supports_soft_deletion:
            raise SoftDeleteNotSupportedError(self._table)

        payload = soft_delete_payload(is_deleted)

        async def call() -> Response[EntityT]:
            rows = await self._backend.update(self._table, payload, self._id_params(entity_id))
            return Response.success(self._parse(rows[0]) if rows else None)

        return await self._run("toggle_soft_delete", call, callbacks)

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _run(
        self,
        operation: str,
        call: Callable[[], Awaitable[Response[Any]]],
        callbacks: Callbacks | None,
    ) -> Response[Any]:
        """Execute call and map exceptions onto the envelope."""
        with self._loading(callbacks):
            try:
                return await call()
            except BackendAPIError as exc:
                return Response.api_error(exc)
            except Exception as exc:
                logger.error(
                    "Unexpected repository failure",
                    table=self._table,
                    operation=operation,
                    exc_info=True,
                )
                return Response.internal_error(exc)

    @staticmethod
    @contextmanager
    def _loading(callbacks: Callbacks | None) -> Iterator[None]:
        notify = callbacks.on_loading_state_change if callbacks else None
        if notify:
            notify(True)
        try:
            yield
        finally:
            if notify:
                notify(False)

    @staticmethod
    def _to_payload(data: BaseModel | Mapping[str, Any]) -> dict[str, Any]:
        if isinstance(data, BaseModel):
            return data.model_dump(exclude_unset=True, by_alias=True, mode="json")
        return dict(data)

    @staticmethod
    def _id_params(entity_id: str | int) -> list[tuple[str, str]]:
        return [("id", f"eq.{entity_id}")]

    def _parse(self, row: Mapping[str, Any]) -> EntityT:
        return self._model.model_validate(row)
