"""Typed async HTTP client for the BIND terminology service (https://bind.codes).

    client = TerminologyClient()
    systems = await client.list()
    roof_types = await client.get("roof-type", lang="fr-CA")
    metal = await client.lookup("roof-type", "metal")
    hits = await client.search("shingle")
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote, quote_plus, urlencode

import httpx
from pydantic import ValidationError

from .config import ClientConfig
from .models import (
    CodeSystem,
    CodeSystemSummary,
    HealthStatus,
    LookupResult,
    TerminologyErrorBody,
)

logger = logging.getLogger("bind_terminology")

HEADERS = {"Accept": "application/json"}


class TerminologyClientError(Exception):
    """Raised when the terminology service answers with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status: int,
        body: Optional[TerminologyErrorBody] = None,
    ) -> None:
        self.message = message
        self.status = status
        self.body = body
        super().__init__(message)

    def __repr__(self) -> str:
        return f"TerminologyClientError(status={self.status}, message={self.message!r})"


def _parse_error_body(response: httpx.Response) -> Optional[TerminologyErrorBody]:
    try:
        return TerminologyErrorBody.model_validate_json(response.content)
    except ValidationError:
        return None


# Same character sets as encodeURIComponent and URLSearchParams, so URLs
# match the ones other BIND SDKs build.
def _segment(value: str) -> str:
    return quote(value, safe="!'()*")


def _form_quote(value: str, safe: str = "", encoding=None, errors=None) -> str:
    return quote_plus(value, safe="*", encoding=encoding, errors=errors).replace("~", "%7E")


def _with_query(path: str, params: Dict[str, str]) -> str:
    return f"{path}?{urlencode(params, quote_via=_form_quote)}" if params else path


class TerminologyClient:
    """
    Translates the five terminology operations into single GET requests.

    Holds nothing but its ClientConfig; concurrent calls on one instance
    are independent of each other.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.config = ClientConfig.from_env(base_url=base_url, transport=transport, timeout=timeout)

    @classmethod
    def from_config(cls, config: ClientConfig) -> "TerminologyClient":
        """Build a client from a prepared config, skipping environment lookup."""
        client = cls.__new__(cls)
        client.config = config
        return client

    @property
    def base_url(self) -> str:
        return self.config.base_url

    async def list(self) -> List[CodeSystemSummary]:
        """All known code systems, without their concept arrays."""
        return await self._request("/list")

    async def get(self, id: str, *, lang: Optional[str] = None) -> CodeSystem:
        """
        Full code system including every concept.
        `lang` is a BCP-47 tag for localized display values (e.g. "fr-CA").
        """
        params: Dict[str, str] = {}
        if lang:
            params["lang"] = lang
        return await self._request(_with_query(f"/{self._id_segment(id)}", params))

    async def lookup(self, id: str, code: str, *, lang: Optional[str] = None) -> LookupResult:
        """Resolve a single concept within one code system."""
        params = {"code": code}
        if lang:
            params["lang"] = lang
        return await self._request(_with_query(f"/{self._id_segment(id)}/$lookup", params))

    async def search(self, query: str, *, lang: Optional[str] = None) -> List[LookupResult]:
        """Full-text match on code, display and designation values across all code systems."""
        params = {"q": query}
        if lang:
            params["lang"] = lang
        return await self._request(_with_query("/$search", params))

    async def health(self) -> HealthStatus:
        return await self._request("/health")

    @staticmethod
    def _id_segment(id: str) -> str:
        if not id:
            raise ValueError("code system id is required")
        return _segment(id)

    async def _request(self, path: str) -> Any:
        url = f"{self.config.base_url}{path}"
        logger.debug(f"GET {url}")

        if self.config.transport is not None:
            response = await self.config.transport.get(url, headers=HEADERS)
        else:
            async with httpx.AsyncClient(timeout=self.config.timeout) as session:
                response = await session.get(url, headers=HEADERS)

        if not response.is_success:
            body = _parse_error_body(response)
            if body is not None and body.error is not None:
                message = body.error
            else:
                message = f"HTTP {response.status_code}: {response.reason_phrase}"
            logger.warning(f"terminology request failed status={response.status_code} url={url}")
            raise TerminologyClientError(message, response.status_code, body)

        return response.json()
