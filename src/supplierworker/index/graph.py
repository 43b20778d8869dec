"""Microsoft Graph external connection client.

Thin async wrapper over the Graph REST endpoints used by the connector:
connection lifecycle, schema registration and item upsert.

Usage:
    async with httpx.AsyncClient() as http:
        graph = GraphConnectorClient(http, config.graph)
        await graph.put_item("oraclesuppliers", item)
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from urllib.parse import quote

import httpx

from ..auth import TokenProvider
from ..config import GraphConfig
from ..exceptions import GraphError

logger = logging.getLogger(__name__)


def _error_from_response(response: httpx.Response) -> GraphError:
    """Build a GraphError from an OData error body."""
    code, message, details = "", response.reason_phrase or "Request failed", ""
    try:
        error = response.json().get("error") or {}
        code = error.get("code", "") or ""
        message = error.get("message", "") or message
        if error.get("details"):
            details = str(error["details"])
    except (ValueError, AttributeError):
        if response.text:
            message = response.text
    return GraphError(message, status_code=response.status_code, code=code, details=details)


class GraphConnectorClient:
    """Graph calls for one tenant, authenticated with client credentials."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        config: GraphConfig,
        token_provider: Optional[TokenProvider] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.client = client
        self.config = config
        self.token_provider = token_provider or TokenProvider(
            client,
            config.token_endpoint,
            config.client_id,
            config.client_secret,
            config.scope,
        )
        self._sleep = sleep
        self._token: Optional[str] = None

    async def authenticate(self) -> None:
        """Acquire the Graph token if not held yet.

        Raises:
            AuthError: the client-credentials exchange failed
        """
        if self._token is None:
            self._token = await self.token_provider.get_token()

    async def _headers(self) -> Dict[str, str]:
        await self.authenticate()
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _url(self, path: str) -> str:
        if path.startswith("http"):
            return path
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """Send an authenticated request; non-2xx raises GraphError.

        A 401 drops the held token and replays the request once with a
        fresh one.
        """
        response = await self.client.request(
            method,
            self._url(path),
            headers=await self._headers(),
            json=json,
        )
        if response.status_code == 401:
            logger.info("Graph token rejected, requesting a new one")
            self._token = None
            response = await self.client.request(
                method,
                self._url(path),
                headers=await self._headers(),
                json=json,
            )
        if not response.is_success:
            raise _error_from_response(response)
        return response

    # =========================================================================
    # Connections
    # =========================================================================

    async def create_connection(
        self, connection_id: str, name: str, description: str
    ) -> Dict[str, Any]:
        response = await self._request(
            "POST",
            "external/connections",
            json={"id": connection_id, "name": name, "description": description},
        )
        logger.info(f"Created connection {connection_id}")
        return response.json()

    async def list_connections(self) -> List[Dict[str, Any]]:
        response = await self._request("GET", "external/connections")
        return response.json().get("value", [])

    async def delete_connection(self, connection_id: str) -> None:
        await self._request("DELETE", f"external/connections/{connection_id}")
        logger.info(f"Deleted connection {connection_id}")

    # =========================================================================
    # Schema
    # =========================================================================

    async def register_schema(self, connection_id: str, schema: Dict[str, Any]) -> None:
        """Register the schema and wait for the provisioning operation.

        Raises:
            GraphError: the request was rejected or the operation failed
        """
        response = await self._request(
            "PATCH", f"external/connections/{connection_id}/schema", json=schema
        )

        operation_url = response.headers.get("Location")
        if not operation_url:
            return

        for _ in range(self.config.schema_poll_max_attempts):
            await self._sleep(self.config.schema_poll_interval)
            operation = (await self._request("GET", operation_url)).json()
            status = operation.get("status")
            logger.debug(f"Schema operation for {connection_id}: {status}")
            if status == "completed":
                return
            if status == "failed":
                error = operation.get("error") or {}
                raise GraphError(
                    error.get("message", "Schema registration failed"),
                    code=error.get("code", ""),
                )

        raise GraphError(
            f"Schema operation for {connection_id} still running after "
            f"{self.config.schema_poll_max_attempts} checks",
            code="Timeout",
        )

    async def get_schema(self, connection_id: str) -> Dict[str, Any]:
        response = await self._request("GET", f"external/connections/{connection_id}/schema")
        return response.json()

    # =========================================================================
    # Items
    # =========================================================================

    async def put_item(self, connection_id: str, item: Dict[str, Any]) -> None:
        """Create or replace an external item keyed by ``item['id']``."""
        await self._request(
            "PUT",
            f"external/connections/{connection_id}/items/{quote(str(item['id']), safe='')}",
            json=item,
        )
