from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from seoschema.core.logger import get_logger
from seoschema.models.source_config import HttpSchemaSourceConfig
from seoschema.sources.base import format_from_suffix, parse_table_text
from seoschema.sources.registry import register_schema_source

logger = get_logger(__name__)


@register_schema_source(kind="http")
class HttpSchemaSource:
    """Schema table served by a remote schema service."""

    def __init__(
        self,
        base_url: str,
        path: str = "/",
        *,
        timeout_seconds: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
        fmt: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url
        self.path = path
        self.fmt = fmt
        self._client = client or httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
            headers=dict(headers or {}),
        )

    @classmethod
    def from_config(
        cls,
        cfg: HttpSchemaSourceConfig,
        *,
        client: Optional[httpx.Client] = None,
    ) -> "HttpSchemaSource":
        return cls(
            cfg.base_url,
            cfg.path,
            timeout_seconds=float(cfg.timeout_seconds),
            headers=cfg.headers,
            fmt=cfg.format,
            client=client,
        )

    def _format_for(self, resp: httpx.Response) -> str:
        if self.fmt:
            return self.fmt
        content_type = resp.headers.get("content-type", "")
        if "json" in content_type:
            return "json"
        if "yaml" in content_type:
            return "yaml"
        return format_from_suffix(self.path) or "yaml"

    def load(self) -> Dict[str, Any]:
        logger.info(f"Fetching schema table from {self.base_url}{self.path}")
        resp = self._client.get(self.path)
        resp.raise_for_status()
        return parse_table_text(resp.text, self._format_for(resp), origin=f"{self.base_url}{self.path}")
