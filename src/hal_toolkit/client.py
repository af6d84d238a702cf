import logging
import time
from typing import Any, Dict, List, Mapping, Optional

import httpx

from .core.document import Document
from .core.errors import HalClientError, HalHTTPError, HalParseError, NoSuchLinkError
from .core.link import Link, target_url
from .core.observability import log_event

HAL_MEDIA_TYPE = "application/hal+json"


class HalClient:
    """
    Async HTTP client that fetches HAL documents and follows their links.
    - Relative URLs resolve against base_url (if any)
    - Raises on non-2xx; does not retry, cache or negotiate content
    - Embedded targets are returned without a request
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout_seconds: float = 10.0,
        headers: Optional[Mapping[str, str]] = None,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or "").rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.log = logger or logging.getLogger("hal_toolkit.client")

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Accept": HAL_MEDIA_TYPE,
                "Content-Type": HAL_MEDIA_TYPE,
                **dict(headers or {}),
            },
            timeout=timeout_seconds,
        )

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "HalClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        document: Optional[Document] = None,
    ) -> Document:
        """
        Core request method.
        - Raises HalHTTPError on non-2xx HTTP responses
        - Raises HalClientError on network/timeout errors
        - Raises HalParseError if the body isn't a JSON object
        - Returns the parsed Document; an empty body gives an empty Document
        """
        method = method.upper()
        start = time.perf_counter()
        body = document.to_json() if document is not None else None

        try:
            resp = await self.http.request(method, url, content=body)
        except httpx.HTTPError as exc:
            log_event(
                "hal_request",
                method=method,
                url=url,
                status="exception",
                error_type=type(exc).__name__,
                duration_ms=int((time.perf_counter() - start) * 1000),
            )
            raise HalClientError(f"Error calling {method} {url}: {exc}") from exc

        log_event(
            "hal_request",
            method=method,
            url=str(resp.request.url),
            status=resp.status_code,
            duration_ms=int((time.perf_counter() - start) * 1000),
        )

        if resp.status_code < 200 or resp.status_code >= 300:
            raise self._to_http_error(resp, method=method)

        return self._parse_document(resp)

    def _parse_document(self, resp: httpx.Response) -> Document:
        # Handle empty responses (204 No Content, etc.)
        if not resp.content:
            return Document()

        try:
            data = resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise HalParseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url}, got non-JSON body snippet: "
                f"{snippet!r}"
            ) from exc

        if not isinstance(data, dict):
            raise HalParseError(
                f"Expected top-level JSON object from "
                f"{resp.request.method} {resp.request.url}, "
                f"got {type(data).__name__}"
            )
        return Document.from_dict(data)

    def _to_http_error(self, resp: httpx.Response, *, method: str) -> HalHTTPError:
        url = str(resp.request.url)
        # Try JSON first; fall back to text snippet.
        response_json: Optional[Dict[str, Any]] = None
        response_text: Optional[str] = None
        message = "request failed"

        try:
            parsed = resp.json()
            if isinstance(parsed, dict):
                response_json = parsed
                message = parsed.get("message") or parsed.get("error") or message
        except ValueError:
            response_text = (resp.text or "")[:500]

        return HalHTTPError(
            status_code=resp.status_code,
            method=method,
            url=url,
            message=message,
            response_json=response_json,
            response_text=response_text,
        )

    async def get(self, url: str) -> Document:
        return await self.request("GET", url)

    async def post(self, url: str, document: Document) -> Document:
        return await self.request("POST", url, document=document)

    async def put(self, url: str, document: Document) -> Document:
        return await self.request("PUT", url, document=document)

    async def patch(self, url: str, document: Document) -> Document:
        return await self.request("PATCH", url, document=document)

    async def delete(self, url: str) -> Document:
        return await self.request("DELETE", url)

    # --- Navigation -------------------------------------------------------- #

    async def _follow(
        self, link: Link, vars: Optional[Mapping[str, Any]]
    ) -> Document:
        if link.is_embedded:
            return link.target

        url = target_url(link, vars)
        if url is None:
            raise NoSuchLinkError(link.rel, "link is anonymous")
        self.log.debug("Following %s -> %s", link.rel, url, extra={"rel": link.rel})
        return await self.get(url)

    async def follow_link(
        self, doc: Document, rel: str, *, vars: Optional[Mapping[str, Any]] = None
    ) -> Document:
        """Returns the document the first `rel` link points at."""
        links = doc.get_links(rel)
        if not links:
            raise NoSuchLinkError(rel)
        return await self._follow(links[0], vars)

    async def follow_links(
        self, doc: Document, rel: str, *, vars: Optional[Mapping[str, Any]] = None
    ) -> List[Document]:
        """Returns every document the `rel` links point at, in link order."""
        links = doc.get_links(rel)
        if not links:
            raise NoSuchLinkError(rel)
        return [await self._follow(link, vars) for link in links]


__all__ = ["HalClient", "HAL_MEDIA_TYPE"]
