"""Helius API client for WhaleScope.

This module wraps the two Helius surfaces the tracker needs: the Solana
JSON-RPC endpoint (largest holders, token accounts, supply) and the
enhanced transactions REST API (parsed wallet history).
"""

# Standard library imports
import json
from typing import Any, Dict, List, Optional

# Third-party library imports
import httpx

# Internal imports
from whalescope.config import HeliusConfig, get_helius_config
from whalescope.logging_config import get_logger
from whalescope.services.whale_tracker.models import RawTransaction, TokenHolder
from whalescope.utils.error_handling import (
    ConfigurationError,
    ErrorCode,
    HeliusAPIError,
    WhaleScopeError,
)

# Get logger
logger = get_logger(__name__)

TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"


class HeliusClient:
    """Async client for the Helius REST and JSON-RPC APIs.

    The client performs a single attempt per call. Failures surface as
    ``HeliusAPIError`` and are left to the caller.
    """

    def __init__(
        self,
        config: Optional[HeliusConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """Initialize the Helius client.

        Args:
            config: Helius configuration. Defaults to environment-based config.
            http_client: Pre-built HTTP client, e.g. one with a mock transport
        """
        self.config = config or get_helius_config()
        self.headers = {"Content-Type": "application/json"}
        self._http_client = http_client
        self._owns_http_client = http_client is None

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.config.timeout,
                headers=self.headers,
                limits=httpx.Limits(max_keepalive_connections=10, max_connections=20)
            )
            self._owns_http_client = True
        return self._http_client

    def _require_api_key(self) -> str:
        if not self.config.has_api_key:
            raise ConfigurationError("HELIUS_API_KEY environment variable not set")
        return self.config.api_key

    async def _send(self, method: str, url: str, endpoint: str, **kwargs: Any) -> Any:
        """Send one HTTP request and decode the JSON body.

        Args:
            method: HTTP method
            url: Full request URL, without the API key
            endpoint: Endpoint name used in errors and logs
            **kwargs: Extra arguments for ``httpx.AsyncClient.request``

        Returns:
            The decoded JSON body

        Raises:
            HeliusAPIError: On network failure, non-2xx status or invalid JSON
        """
        client = self._get_http_client()

        try:
            response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Helius request to {endpoint} failed: {str(e)}")
            raise HeliusAPIError(
                f"Network error calling Helius: {str(e)}",
                ErrorCode.PROVIDER_NETWORK_ERROR,
                endpoint=endpoint,
            ) from e

        if not response.is_success:
            logger.warning(f"Helius returned HTTP {response.status_code} for {endpoint}")
            raise HeliusAPIError(
                f"Helius API error ({response.status_code}): {response.text}",
                ErrorCode.PROVIDER_HTTP_ERROR,
                http_status=response.status_code,
                endpoint=endpoint,
            )

        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise HeliusAPIError(
                "Helius returned an invalid JSON body",
                ErrorCode.PROVIDER_RESPONSE_ERROR,
                http_status=response.status_code,
                endpoint=endpoint,
            ) from e

    async def _rest_request(
        self,
        endpoint: str,
        method: str = "GET",
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Call the enhanced transactions REST API.

        Args:
            endpoint: Path below the API base URL, e.g. ``/transactions``
            method: HTTP method
            params: Query parameters, the API key is added automatically
            body: JSON request body

        Returns:
            The decoded JSON response
        """
        api_key = self._require_api_key()
        query = dict(params or {})
        query["api-key"] = api_key

        return await self._send(
            method,
            f"{self.config.api_url}{endpoint}",
            endpoint,
            params=query,
            json=body,
        )

    async def _rpc_request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """Make a JSON-RPC request to the Helius RPC node.

        Args:
            method: The RPC method to call
            params: The parameters to pass to the method

        Returns:
            The ``result`` member of the JSON-RPC response

        Raises:
            HeliusAPIError: If the request fails or the node returns an error
        """
        api_key = self._require_api_key()
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params or [],
        }

        data = await self._send(
            "POST",
            f"{self.config.rpc_url}/",
            method,
            params={"api-key": api_key},
            json=payload,
        )

        if "error" in data:
            error = data["error"] or {}
            raise HeliusAPIError(
                f"RPC error: {error.get('message', 'Unknown error')}",
                ErrorCode.PROVIDER_RPC_ERROR,
                endpoint=method,
                details={"rpc_code": error.get("code")},
            )

        return data.get("result")

    async def get_largest_token_holders(self, mint: str, limit: int = 20) -> List[TokenHolder]:
        """Get the largest token accounts for a mint.

        Args:
            mint: Token mint address
            limit: Maximum number of holders to return

        Returns:
            Token holders sorted by balance, as returned by the node
        """
        result = await self._rpc_request("getTokenLargestAccounts", [mint])

        holders = [
            TokenHolder(
                address=account["address"],
                amount=int(account["amount"]),
                decimals=account["decimals"],
                ui_amount=float(account.get("uiAmount") or 0),
            )
            for account in result["value"][:limit]
        ]
        logger.debug(f"Fetched {len(holders)} largest holders for {mint}")
        return holders

    async def get_token_accounts_by_owner(self, owner: str, mint: Optional[str] = None) -> List[TokenHolder]:
        """Get the token accounts owned by a wallet.

        Args:
            owner: Wallet address
            mint: Restrict to one mint, otherwise all SPL token accounts

        Returns:
            One holder entry per token account
        """
        params = [
            owner,
            {"mint": mint} if mint else {"programId": TOKEN_PROGRAM_ID},
            {"encoding": "jsonParsed"},
        ]
        result = await self._rpc_request("getTokenAccountsByOwner", params)

        accounts = []
        for item in result["value"]:
            token_amount = item["account"]["data"]["parsed"]["info"]["tokenAmount"]
            accounts.append(TokenHolder(
                address=item["pubkey"],
                amount=int(token_amount["amount"]),
                decimals=token_amount["decimals"],
                ui_amount=float(token_amount.get("uiAmount") or 0),
            ))
        return accounts

    async def get_recent_transactions(self, address: str, limit: int = 100) -> List[RawTransaction]:
        """Get recent enhanced transactions for a wallet.

        Args:
            address: Wallet address
            limit: Maximum number of transactions to fetch

        Returns:
            Transactions newest first
        """
        data = await self._rest_request(f"/addresses/{address}/transactions", params={"limit": limit})
        return [RawTransaction.from_dict(tx) for tx in data]

    async def parse_transactions(self, signatures: List[str]) -> List[RawTransaction]:
        """Parse transactions by signature through the enhanced API.

        Args:
            signatures: Transaction signatures

        Returns:
            Enhanced transactions in request order
        """
        data = await self._rest_request("/transactions", method="POST", body={"transactions": signatures})
        return [RawTransaction.from_dict(tx) for tx in data]

    async def get_token_metadata(self, mint: str) -> Optional[Dict[str, Any]]:
        """Get basic metadata for a token from its supply.

        Args:
            mint: Token mint address

        Returns:
            Dict with name, symbol and decimals, or None if the lookup failed
        """
        try:
            result = await self._rpc_request("getTokenSupply", [mint])
        except WhaleScopeError as e:
            logger.warning(f"Token metadata lookup failed for {mint}: {e.message}")
            return None

        # The supply endpoint has no name or symbol
        return {
            "name": mint,
            "symbol": mint[:4],
            "decimals": result["value"]["decimals"],
        }

    @staticmethod
    def create_webhook_config(addresses: List[str], webhook_url: str) -> Dict[str, Any]:
        """Build the payload for registering an enhanced webhook.

        Args:
            addresses: Addresses to monitor
            webhook_url: URL that receives notifications

        Returns:
            Webhook configuration dictionary
        """
        return {
            "webhookURL": webhook_url,
            "transactionTypes": ["Any"],
            "accountAddresses": list(addresses),
            "webhookType": "enhanced",
        }

    async def __aenter__(self):
        """Async context manager entry.

        Returns:
            Self
        """
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the client and release resources."""
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
        self._http_client = None
