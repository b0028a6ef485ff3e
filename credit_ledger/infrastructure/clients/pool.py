"""Pool custody HTTP client for deposits and drawdown transfers"""

import httpx
from typing import Any, Dict
from credit_ledger.config import settings
from credit_ledger.domain.exceptions import (
    InsufficientPoolFundsError,
    PoolAccessError,
    PoolUnavailableError,
)
from credit_ledger.domain.pool import CustodyCapability
from credit_ledger.infrastructure.observability.metrics import (
    pool_transfer_failure_counter,
    pool_transfer_latency_histogram,
)


class HttpPoolClient:
    """
    Client for a remote pool custody service.

    transfer_to runs inside the desk lock during a drawdown, so calls block.
    Failures are not retried; they surface as PoolError subclasses and abort
    the drawdown.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ):
        self.base_url = base_url or settings.pool_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self._http_client = http_client

    def deposit(self, amount: int, sender: str) -> int:
        """Deposit funds into the pool, returning the pool's total funds"""
        data = self._request("POST", "/pool/deposit", json={"amount": amount, "sender": sender})
        return self._parse_int(data, "total_funds")

    def total_funds(self) -> int:
        data = self._request("GET", "/pool/balance")
        return self._parse_int(data, "total_funds")

    def transfer_to(self, amount: int, recipient: str, capability: CustodyCapability) -> None:
        """
        Move pooled funds to a recipient.

        Raises:
            InsufficientPoolFundsError: Pool cannot cover the amount (HTTP 409)
            PoolAccessError: Capability rejected (HTTP 401/403)
            PoolUnavailableError: Timeout, transport failure or unexpected status
        """
        try:
            with pool_transfer_latency_histogram.time():
                self._request(
                    "POST",
                    "/pool/transfer",
                    json={"amount": amount, "recipient": recipient},
                    headers={"Authorization": f"Bearer {capability.token}"},
                )
        except (InsufficientPoolFundsError, PoolAccessError, PoolUnavailableError):
            pool_transfer_failure_counter.inc()
            raise

    def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        if self._http_client is not None:
            return self._send(self._http_client, method, path, **kwargs)

        if not self.base_url:
            raise PoolUnavailableError("Pool API base URL is not configured")
        with httpx.Client(base_url=self.base_url, timeout=self.timeout) as client:
            return self._send(client, method, path, **kwargs)

    def _send(self, client: httpx.Client, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            response = client.request(method, path, **kwargs)
            response.raise_for_status()
            return response.json()

        except httpx.TimeoutException as e:
            raise PoolUnavailableError(f"Pool API timeout after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 409:
                raise InsufficientPoolFundsError(f"Pool rejected {path}: insufficient funds") from e
            if status in (401, 403):
                raise PoolAccessError(f"Pool rejected custody capability: {status}") from e
            raise PoolUnavailableError(f"Pool API error: {status}") from e
        except httpx.RequestError as e:
            raise PoolUnavailableError(f"Pool API unreachable: {e}") from e
        except ValueError as e:
            raise PoolUnavailableError(f"Invalid response from pool: {e}") from e

    @staticmethod
    def _parse_int(data: Dict[str, Any], key: str) -> int:
        try:
            return int(data[key])
        except (KeyError, ValueError, TypeError) as e:
            raise PoolUnavailableError(f"Invalid response from pool: {e}") from e
