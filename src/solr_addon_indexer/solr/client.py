"""
Solr Update Client

Posts documents to the Solr JSON update handler. Documents are replaced by
``id`` on the Solr side, so re-sending a record updates it.

Commit timing is left to Solr (autoCommit) or the caller: no request carries
a commit unless asked for explicitly.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence
import logging
import httpx

from ..config import settings
from ..core.errors import SolrError
from ..indexing.document import SolrDocument

logger = logging.getLogger("solr.sink")


class SolrClient:
    """
    Asynchronous client for one Solr core's update handler.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        core: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Parameters
        ----------
        base_url : Optional[str]
            Solr root, e.g. ``http://localhost:8983/solr``.
            Defaults to settings.solr_url.

        core : Optional[str]
            Core (or collection) name. Defaults to settings.solr_core.

        timeout : Optional[float]
            HTTP timeout for each request. Defaults to settings.solr_timeout.

        transport : Optional[httpx.AsyncBaseTransport]
            Transport override, used by tests.
        """
        base = str(base_url or settings.solr_url).rstrip("/")
        self.core = core or settings.solr_core
        self.update_url = f"{base}/{self.core}/update"
        self.timeout = timeout if timeout is not None else settings.solr_timeout
        self._transport = transport

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def add_documents(
        self,
        docs: Sequence[SolrDocument],
        batch_size: int = 100,
        commit: bool = False,
    ) -> int:
        """
        Send documents to Solr in batches.

        Returns
        -------
        int
            Number of documents sent.

        Raises
        ------
        SolrError
            If any batch fails. Earlier batches stay sent.
        """
        if not docs:
            return 0

        sent = 0
        async with self._client() as client:
            for start in range(0, len(docs), batch_size):
                batch = [d.as_dict() for d in docs[start : start + batch_size]]
                await self._post(client, batch, commit=commit)
                sent += len(batch)
                logger.debug("Sent %d/%d document(s)", sent, len(docs))

        return sent

    async def delete_all(self, commit: bool = False) -> None:
        """Remove every document from the core."""
        async with self._client() as client:
            await self._post(client, {"delete": {"query": "*:*"}}, commit=commit)
        logger.info("Cleared Solr core %s", self.core)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def _post(self, client: httpx.AsyncClient, payload: Any, commit: bool) -> None:
        params: Dict[str, str] = {"wt": "json"}
        if commit:
            params["commit"] = "true"

        try:
            response = await client.post(self.update_url, json=payload, params=params)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error(
                "Solr update failed (%s): %s",
                type(exc).__name__,
                str(exc),
            )
            raise SolrError(f"Solr update failed: {type(exc).__name__}") from exc

        self._check_status(response.json())

    @staticmethod
    def _check_status(data: Dict[str, Any]) -> None:
        """
        Solr reports errors in ``responseHeader.status`` (0 means success).
        """
        header: Dict[str, Any] = data.get("responseHeader", {}) if isinstance(data, dict) else {}
        status = header.get("status", 0)
        if status != 0:
            raise SolrError(f"Solr update returned status {status}.")

