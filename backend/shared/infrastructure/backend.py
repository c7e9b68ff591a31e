"""
HTTP client for the hosted backend (PostgREST tables + object storage).

Every table access in the admin goes through this client. No raw SQL is
issued: filters are expressed as PostgREST query parameters built by
GetTableOpts.to_params().

Usage:
    from shared.infrastructure.backend import BackendClient

    async with BackendClient.from_settings() as backend:
        rows = await backend.select("projects", [("select", "*"), ("is_deleted", "eq.false")])
"""

from __future__ import annotations

from typing import Any, Sequence
from urllib.parse import quote

import httpx

from shared.config.logging import get_logger, mask_key
from shared.config.settings import Settings, get_settings
from shared.utils.exceptions import BackendAPIError, ConfigurationError

logger = get_logger(__name__)

QueryParams = Sequence[tuple[str, str]]

OBJECT_MEDIA_TYPE = "application/vnd.pgrst.object+json"


class BackendClient:
    """
    Async client for the backend's REST and storage endpoints.

    Holds one pooled httpx.AsyncClient. Requests are independent: there
    is no retry, batching or caching here. A non-2xx answer raises
    BackendAPIError; transport failures surface as httpx.HTTPError.
    """

    REST_PATH = "/rest/v1"
    STORAGE_PATH = "/storage/v1"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 5.0,
        max_connections: int = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
            },
            timeout=timeout,
            limits=httpx.Limits(max_connections=max_connections),
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> BackendClient:
        """
        Build a client from environment configuration.

        Raises:
            ConfigurationError: If the backend URL or key is missing.
        """
        settings = settings or get_settings()
        problems = settings.validate_backend_config()
        if problems:
            raise ConfigurationError(problems)

        logger.info(
            "Backend client configured",
            url=settings.supabase_url,
            key=mask_key(settings.supabase_anon_key),
        )
        return cls(
            settings.supabase_url,
            settings.supabase_anon_key,
            timeout=settings.backend_timeout,
            max_connections=settings.backend_max_connections,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the pooled HTTP client. Call on shutdown."""
        if not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> BackendClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # =========================================================================
    # Tables
    # =========================================================================

    async def select(
        self,
        table: str,
        params: QueryParams,
        *,
        single: bool = False,
    ) -> Any:
        """
        Read rows. With single=True the backend must return exactly one
        row as an object, otherwise it answers with an error.
        """
        headers = {"Accept": OBJECT_MEDIA_TYPE} if single else {}
        response = await self._client.get(
            self._table_path(table), params=list(params), headers=headers
        )
        self._raise_for_error(response, table=table, operation="select")
        return response.json()

    async def insert(self, table: str, payload: dict[str, Any]) -> list[dict[str, Any]]:
        """Insert one row and return the stored representation."""
        response = await self._client.post(
            self._table_path(table),
            params=[("select", "*")],
            json=payload,
            headers={"Prefer": "return=representation"},
        )
        self._raise_for_error(response, table=table, operation="insert")
        return self._as_rows(response)

    async def update(
        self,
        table: str,
        payload: dict[str, Any],
        params: QueryParams,
    ) -> list[dict[str, Any]]:
        """Apply a partial update to every row matching params."""
        response = await self._client.patch(
            self._table_path(table),
            params=[("select", "*"), *params],
            json=payload,
            headers={"Prefer": "return=representation"},
        )
        self._raise_for_error(response, table=table, operation="update")
        return self._as_rows(response)

    async def delete(self, table: str, params: QueryParams) -> None:
        """Permanently delete every row matching params."""
        response = await self._client.delete(
            self._table_path(table),
            params=list(params),
            headers={"Prefer": "return=minimal"},
        )
        self._raise_for_error(response, table=table, operation="delete")

    # =========================================================================
    # Storage
    # =========================================================================

    async def upload(
        self,
        bucket: str,
        path: str,
        content: bytes,
        *,
        content_type: str | None = None,
        upsert: bool = True,
        cache_control: str = "3600",
    ) -> str:
        """Upload an object and return its path inside the bucket."""
        response = await self._client.post(
            f"{self.STORAGE_PATH}/object/{bucket}/{quote(path, safe='/')}",
            content=content,
            headers={
                "Content-Type": content_type or "application/octet-stream",
                "Cache-Control": f"max-age={cache_control}",
                "x-upsert": "true" if upsert else "false",
            },
        )
        self._raise_for_error(response, bucket=bucket, operation="upload")
        return path

    def public_url(self, bucket: str, path: str) -> str:
        """Public URL of an object. Reachability is not checked."""
        return f"{self.base_url}{self.STORAGE_PATH}/object/public/{bucket}/{quote(path, safe='/')}"

    # =========================================================================
    # Helpers
    # =========================================================================

    def _table_path(self, table: str) -> str:
        return f"{self.REST_PATH}/{table}"

    @staticmethod
    def _as_rows(response: httpx.Response) -> list[dict[str, Any]]:
        if not response.content:
            return []
        body = response.json()
        if isinstance(body, list):
            return body
        return [body] if body else []

    @staticmethod
    def _raise_for_error(response: httpx.Response, **log_context: Any) -> None:
        """Translate a non-2xx answer into BackendAPIError."""
        if response.is_success:
            return

        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            message = body.get("message") or body.get("error") or response.reason_phrase
            raise BackendAPIError(
                str(message),
                code=body.get("code"),
                details=body.get("details"),
                hint=body.get("hint"),
                status_code=response.status_code,
                **log_context,
            )

        raise BackendAPIError(
            response.text or response.reason_phrase,
            status_code=response.status_code,
            **log_context,
        )
