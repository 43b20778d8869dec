"""
Supplier Sync Orchestrator.

Drives one run of the Oracle Fusion -> Graph flow:
token -> cutoff -> collect (with child tables) -> upload -> new cutoff.

Fatal errors (configuration, authentication, unparsable supplier page)
abort the run and leave the cutoff untouched. A supplier listing that
stops early on a failed request is reported as INCOMPLETE and also keeps
the previous cutoff. Child-table and per-item upload failures are
contained and reported in the result.
"""

import asyncio
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field

from ..auth import TokenProvider
from ..config import WorkerConfig, get_config
from ..exceptions import ConfigurationError, SyncError
from ..index import GraphConnectorClient, IndexSync
from .collector import SupplierCollector
from .context import SourceContext
from .retry import RetryPolicy
from .state import CutoffStore
from .tables import ChildTableFetcher

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RunStatus(str, Enum):
    SUCCESS = "success"
    UPLOAD_ERRORS = "upload_errors"
    INCOMPLETE = "incomplete"
    ABORTED = "aborted"


class SyncResult(BaseModel):
    """Outcome of one run."""

    mode: str
    status: RunStatus = RunStatus.SUCCESS
    started_at: datetime
    finished_at: Optional[datetime] = None
    cutoff: Optional[datetime] = None
    fetched: int = 0
    uploaded: int = 0
    failed: List[str] = Field(default_factory=list)
    error: Optional[str] = None
    listing_incomplete: bool = False
    cutoff_advanced: bool = False


class SyncOrchestrator:
    """
    Runs the fetch -> render -> upload cycle for one connection.

    Everything a run needs (HTTP client, tokens, cutoff store) is held by
    the instance; nothing is shared through module state.
    """

    def __init__(
        self,
        config: Optional[WorkerConfig] = None,
        connection_id: Optional[str] = None,
        store: Optional[CutoffStore] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        graph: Optional[GraphConnectorClient] = None,
        clock: Callable[[], datetime] = _utcnow,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.config = config or get_config()
        self.connection_id = connection_id or self.config.graph.connection_id
        self.store = store or CutoffStore(self.config.state_path)
        self._http_client = http_client
        self._owns_client = http_client is None
        self._graph = graph
        self._clock = clock
        self._sleep = sleep

    def _get_http_client(self) -> httpx.AsyncClient:
        """Lazy HTTP client shared by Oracle and Graph calls."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.config.http_timeout)
        return self._http_client

    def _get_graph(self) -> GraphConnectorClient:
        if self._graph is None:
            self._graph = GraphConnectorClient(self._get_http_client(), self.config.graph)
        return self._graph

    def _validate(self) -> None:
        missing = self.config.missing_settings()
        if not self.connection_id:
            missing.append("GRAPH_CONNECTION_ID")
        if missing:
            raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")

    async def _collect(self, incremental_only: bool, result: SyncResult):
        """Fetch phase. Raises SyncError on fatal failures."""
        cfg = self.config
        client = self._get_http_client()

        logger.info("Getting OAuth2 access token from Oracle Fusion...")
        token = await TokenProvider(
            client,
            cfg.oracle.access_token_url,
            cfg.oracle.client_id,
            cfg.oracle.client_secret,
            cfg.oracle.scope,
        ).get_token()

        # Fail before fetching if the upload side cannot authenticate
        await self._get_graph().authenticate()

        if incremental_only:
            result.cutoff = self.store.read()
            since = result.cutoff.isoformat() if result.cutoff else "the beginning"
            logger.info(f"Incremental sync of suppliers modified since {since}")

        context = SourceContext(
            client=client,
            token=token,
            supplier_url=cfg.oracle.supplier_url,
            page_size=cfg.oracle.page_size,
        )
        retry = RetryPolicy(
            max_attempts=cfg.retry.max_attempts,
            delay=cfg.retry.delay_seconds,
            sleep=self._sleep,
        )
        collector = SupplierCollector(context, fetcher=ChildTableFetcher(context, retry))
        suppliers = await collector.collect(incremental_only=incremental_only, cutoff=result.cutoff)
        result.listing_incomplete = collector.incomplete
        return suppliers

    async def run(self, incremental_only: bool = True) -> SyncResult:
        """Run one sync cycle.

        Returns:
            SyncResult; status ABORTED carries the fatal error message
        """
        started_at = self._clock()
        result = SyncResult(
            mode="incremental" if incremental_only else "full",
            started_at=started_at,
        )
        logger.info(f"Starting {result.mode} supplier sync at {started_at.isoformat()}")

        try:
            self._validate()
            suppliers = await self._collect(incremental_only, result)
        except SyncError as e:
            logger.error(f"Supplier sync aborted: {e}")
            result.status = RunStatus.ABORTED
            result.error = str(e)
            result.finished_at = self._clock()
            return result

        result.fetched = len(suppliers)

        index_sync = IndexSync(
            graph=self._get_graph(),
            connection_id=self.connection_id,
            link_base=self.config.oracle.link_base,
            icon_url=self.config.graph.icon_url,
            tenant_id=self.config.graph.tenant_id,
        )
        report = await index_sync.upload(suppliers)
        result.uploaded = report.succeeded
        result.failed = list(report.failed)
        if result.listing_incomplete:
            result.status = RunStatus.INCOMPLETE
        elif not report.success:
            result.status = RunStatus.UPLOAD_ERRORS

        if result.listing_incomplete:
            logger.warning("Keeping previous cutoff, the supplier listing did not complete")
        elif report.success or self.config.advance_cutoff_on_upload_failure:
            self.store.write(started_at)
            result.cutoff_advanced = True
        else:
            logger.warning("Keeping previous cutoff so failed suppliers are picked up next run")

        result.finished_at = self._clock()
        logger.info(
            f"Supplier sync complete: status={result.status.value} fetched={result.fetched} "
            f"uploaded={result.uploaded} failed={len(result.failed)}"
        )
        return result

    async def close(self):
        """Close the HTTP client if this orchestrator created it."""
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None


async def run_sync(
    incremental_only: bool = True,
    connection_id: Optional[str] = None,
    config: Optional[WorkerConfig] = None,
) -> Dict[str, Any]:
    """Run one sync and return the result as a JSON-ready dict."""
    orchestrator = SyncOrchestrator(config=config, connection_id=connection_id)
    try:
        result = await orchestrator.run(incremental_only=incremental_only)
        return result.model_dump(mode="json")
    finally:
        await orchestrator.close()
