"""OAuth2 client-credentials token exchange.

Used for both Oracle Fusion and Microsoft Graph. Tokens are not cached
between runs; a failed exchange is fatal for the caller.
"""

from __future__ import annotations

import logging

import httpx

from .exceptions import AuthError

logger = logging.getLogger(__name__)


class TokenProvider:
    """Exchanges service credentials for a bearer token.

    Usage:
        provider = TokenProvider(client, token_url, client_id, secret, scope)
        token = await provider.get_token()
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token_url: str,
        client_id: str,
        client_secret: str,
        scope: str,
    ):
        self.client = client
        self.token_url = token_url
        self.client_id = client_id
        self.client_secret = client_secret
        self.scope = scope

    async def get_token(self) -> str:
        """Perform the exchange and return the access token.

        Raises:
            AuthError: request failed, non-2xx status, or no token in the body
        """
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "grant_type": "client_credentials",
            "scope": self.scope,
        }

        try:
            response = await self.client.post(
                self.token_url,
                data=data,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except httpx.HTTPError as e:
            raise AuthError(f"Token request to {self.token_url} failed: {e}") from e

        if not response.is_success:
            raise AuthError(
                f"Token request failed: {response.status_code} - {response.text}",
                response.status_code,
            )

        try:
            token = response.json().get("access_token")
        except (ValueError, AttributeError) as e:
            raise AuthError("Token response is not a JSON object", response.status_code) from e

        if not token:
            raise AuthError("Token response carries no access_token", response.status_code)

        logger.debug(f"Obtained access token from {self.token_url}")
        return str(token)
