"""
Glossary Loader

Fetches the glossary JSON document and turns it into a sorted dataset.
Transport failures (DataLoadError) are kept apart from malformed payloads
(DataFormatError).
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Optional
from urllib.parse import unquote, urlparse

import httpx
from pydantic import ValidationError

from glossary.core.config import settings
from glossary.core.errors import DataFormatError, DataLoadError
from glossary.core.logging import get_logger
from glossary.schemas.glossary import GlossaryDataset
from glossary.services.term_store import sort_dataset

logger = get_logger(__name__)


def _is_http(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


def _local_path(source: str) -> Path:
    parsed = urlparse(source)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    return Path(source)


def parse_dataset(payload: Any, sort_locale: Optional[str] = None) -> GlossaryDataset:
    """Validate a decoded payload and sort its terms by display name"""
    if not isinstance(payload, dict) or not isinstance(payload.get("terms"), list):
        raise DataFormatError("Invalid data format: terms array not found")

    try:
        dataset = GlossaryDataset.model_validate(payload)
    except ValidationError as e:
        raise DataFormatError(
            f"Invalid data format: {e.error_count()} invalid field(s)",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e

    return sort_dataset(dataset, sort_locale)


class GlossaryLoader:
    def __init__(
        self,
        source: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.source = source or settings.glossary_data_url
        self.timeout = timeout if timeout is not None else settings.data_load_timeout
        # Injected in tests (httpx.MockTransport)
        self.transport = transport

    async def _fetch_http(self) -> str:
        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
                response = await client.get(self.source)
                response.raise_for_status()
                return response.text
        except httpx.HTTPStatusError as e:
            raise DataLoadError(
                f"Failed to load glossary data: HTTP error! status: {e.response.status_code}",
                details={"source": self.source, "status": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            raise DataLoadError(
                f"Failed to load glossary data: {e}",
                details={"source": self.source},
            ) from e

    async def _read_file(self) -> str:
        path = _local_path(self.source)
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DataLoadError(
                f"Failed to load glossary data: {e}",
                details={"source": self.source},
            ) from e

    async def fetch(self) -> Any:
        """Fetch and decode the raw JSON document"""
        raw = await (self._fetch_http() if _is_http(self.source) else self._read_file())
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise DataFormatError(
                f"Invalid data format: response is not valid JSON ({e.msg})",
                details={"source": self.source},
            ) from e

    async def load(self) -> GlossaryDataset:
        payload = await self.fetch()
        dataset = parse_dataset(payload, settings.sort_locale)
        logger.info(
            f"Loaded {len(dataset.terms)} glossary terms in "
            f"{len(dataset.categories)} categories from {self.source}"
        )
        return dataset


async def load_dataset(
    source: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> GlossaryDataset:
    """Load, validate and sort a glossary dataset"""
    return await GlossaryLoader(source, transport=transport).load()
