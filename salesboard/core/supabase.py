from __future__ import annotations

from threading import Lock
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlencode

import httpx

from salesboard.core.config import get_settings

Filters = List[Tuple[str, str]]


class SupabaseClient:
    """Thin PostgREST client shared by every repository."""

    _shared_client: httpx.Client | None = None
    _client_lock: Lock = Lock()

    def __init__(self) -> None:
        settings = get_settings()
        self.base_url = settings.supabase_url.rstrip("/") + "/rest/v1"
        self.api_key = settings.supabase_service_role_key or settings.supabase_anon_key
        if not self.api_key:
            raise ValueError("Supabase API key is required")
        self._client = self._get_shared_client()

    @classmethod
    def _get_shared_client(cls) -> httpx.Client:
        if cls._shared_client is not None:
            return cls._shared_client
        with cls._client_lock:
            if cls._shared_client is None:
                cls._shared_client = httpx.Client(
                    timeout=30.0,
                    limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
                )
        return cls._shared_client

    def _headers(self, prefer: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def _url(self, table: str, params: Optional[Filters] = None) -> str:
        url = f"{self.base_url}/{table}"
        if params:
            url = f"{url}?{urlencode(params, doseq=True)}"
        return url

    @staticmethod
    def _rows(response: httpx.Response) -> List[Dict[str, Any]]:
        response.raise_for_status()
        if not response.content:
            return []
        data = response.json()
        if isinstance(data, dict):
            return [data]
        return data if isinstance(data, list) else []

    def select(
        self,
        table: str,
        select: str,
        filters: Optional[Filters] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        order: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params: Filters = [("select", select), *(filters or [])]
        if order:
            params.append(("order", order))
        if limit is not None:
            params.append(("limit", str(limit)))
        if offset is not None:
            params.append(("offset", str(offset)))
        response = self._client.get(self._url(table, params), headers=self._headers())
        return self._rows(response)

    def select_all(
        self,
        table: str,
        select: str,
        filters: Optional[Filters] = None,
        order: Optional[str] = None,
        page_size: int = 1000,
    ) -> List[Dict[str, Any]]:
        """Page through ``table`` until a short page; PostgREST caps unpaged reads."""
        rows: List[Dict[str, Any]] = []
        offset = 0
        while True:
            batch = self.select(
                table=table,
                select=select,
                filters=filters,
                limit=page_size,
                offset=offset,
                order=order,
            )
            rows.extend(batch)
            if len(batch) < page_size:
                return rows
            offset += page_size

    def insert(
        self,
        table: str,
        payload: Dict[str, Any] | List[Dict[str, Any]],
        returning: bool = True,
    ) -> List[Dict[str, Any]]:
        response = self._client.post(
            self._url(table),
            headers=self._headers("return=representation" if returning else "return=minimal"),
            json=payload,
        )
        return self._rows(response)

    def delete(self, table: str, filters: Filters, returning: bool = True) -> List[Dict[str, Any]]:
        # PostgREST refuses unfiltered deletes; callers wipe tables with "id=not.is.null".
        if not filters:
            raise ValueError("Refusing to delete without filters")
        response = self._client.delete(
            self._url(table, filters),
            headers=self._headers("return=representation" if returning else "return=minimal"),
        )
        return self._rows(response)
