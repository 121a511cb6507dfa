"""DataCite MDS client for DOI registration."""

import httpx
from loguru import logger

from doi_registry.core.config import get_settings
from doi_registry.core.exceptions import DoiProviderError
from doi_registry.schemas.doi_server import DoiRegistrationRequest


class DataCiteClient:
    """Register one prepared DOI against the DataCite Metadata Store API.

    The registration inputs come from ``DoiServerService.prepare_registration``.
    Pass ``transport`` to route requests elsewhere (tests use
    ``httpx.MockTransport``).
    """

    def __init__(
        self,
        request: DoiRegistrationRequest,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.request = request
        self.base_url = request.api_url.rstrip("/")
        self.timeout = timeout if timeout is not None else get_settings().datacite_timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        auth = None
        if self.request.username:
            password = self.request.password.get_secret_value() if self.request.password else ""
            auth = httpx.BasicAuth(self.request.username, password)
        return httpx.AsyncClient(
            auth=auth,
            timeout=self.timeout,
            transport=self.transport,
        )

    async def _send(
        self,
        method: str,
        path: str,
        content: str | None = None,
        content_type: str | None = None,
    ) -> httpx.Response:
        headers = {"Content-Type": content_type} if content_type else None
        url = f"{self.base_url}{path}"
        async with self._client() as client:
            try:
                return await client.request(method, url, content=content, headers=headers)
            except httpx.RequestError as e:
                logger.warning(f"DataCite {method} {url} failed: {e}")
                raise DoiProviderError(f"DataCite request failed: {e}") from e

    @staticmethod
    def _check(response: httpx.Response, action: str) -> None:
        if response.is_success:
            return
        logger.warning(
            f"DataCite {action} rejected: status={response.status_code}, body={response.text[:200]}"
        )
        raise DoiProviderError(
            f"DataCite {action} failed: {response.status_code} {response.text}",
            status_code=response.status_code,
        )

    async def register_metadata(self, metadata_xml: str) -> None:
        """Create or update the DataCite metadata for the DOI."""
        response = await self._send(
            "POST",
            "/metadata",
            content=metadata_xml,
            content_type="application/xml;charset=UTF-8",
        )
        self._check(response, "metadata registration")

    async def register_url(self) -> None:
        """Mint the DOI by pointing it at the landing page."""
        body = f"doi={self.request.doi}\nurl={self.request.landing_page}"
        response = await self._send(
            "PUT",
            f"/doi/{self.request.doi}",
            content=body,
            content_type="text/plain;charset=UTF-8",
        )
        self._check(response, "DOI registration")

    async def register(self, metadata_xml: str) -> str:
        """Register metadata then the URL. Returns the public DOI URL."""
        await self.register_metadata(metadata_xml)
        await self.register_url()
        logger.info(f"DOI registered: {self.request.doi} -> {self.request.landing_page}")
        return self.request.doi_url

    async def get_url(self) -> str | None:
        """Landing page currently registered for the DOI, None if unknown."""
        response = await self._send("GET", f"/doi/{self.request.doi}")
        if response.status_code in (204, 404):
            return None
        self._check(response, "DOI lookup")
        return response.text.strip()

    async def delete_metadata(self) -> None:
        """Mark the DOI inactive. DataCite never deletes a findable DOI."""
        response = await self._send("DELETE", f"/metadata/{self.request.doi}")
        self._check(response, "metadata deletion")
