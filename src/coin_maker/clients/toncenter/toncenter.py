# -*- coding: utf-8 -*-
"""TON Center v2 client (getTransaction, getTransactions)."""

from __future__ import annotations

import structlog
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, cast
from structlog.contextvars import bound_contextvars

from coin_maker.clients.chain import ChainTransaction, IChainQueryClient
from coin_maker.clients.toncenter.schema import ApiResponseSchema
from coin_maker.config import Settings
from coin_maker.exceptions import ChainUnavailableError
from coin_maker.utils.validation import mask_address

if TYPE_CHECKING:
    from coin_maker.clients.http import AsyncHttpClient


class TonCenterClient(IChainQueryClient):
    """IChainQueryClient backed by the TON Center v2 HTTP API."""

    def __init__(
        self,
        http_client: "AsyncHttpClient",
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Async HTTP client (e.g. AsyncHttpClient).
            settings: Application settings (uses settings.chain.base_url and api_key).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _base_url(self) -> str:
        return self._settings.chain.base_url.rstrip("/")

    def _params(self, **params: Any) -> Dict[str, Any]:
        api_key = self._settings.chain.api_key
        if api_key:
            params["api_key"] = api_key
        return params

    async def _call(self, method: str, params: Dict[str, Any]) -> ApiResponseSchema:
        url = f"{self._base_url()}/{method}"
        data = await self._http.get(url, params=self._params(**params), log_url=url)
        if not isinstance(data, dict):
            self._logger.warning(
                "toncenter_non_dict_response",
                toncenter_method=method,
                toncenter_response_type=type(data).__name__,
            )
            return cast(ApiResponseSchema, {"ok": False})
        return cast(ApiResponseSchema, data)

    async def get_transaction(self, tx_hash: str) -> Optional[ChainTransaction]:
        """Look up a single transaction by hash.

        Returns:
            The transaction, or None if the API answered without a result.

        Raises:
            ChainUnavailableError: If the request failed.
        """
        with bound_contextvars(toncenter_tx_hash=tx_hash):
            data = await self._call("getTransaction", {"hash": tx_hash})
            result = data.get("result")
            if not data.get("ok") or not result:
                self._logger.debug("toncenter_transaction_not_found", toncenter_ok=data.get("ok"))
                return None
            if isinstance(result, list):
                result = result[0] if result else None
            if not isinstance(result, dict):
                return None
            return ChainTransaction.from_response(cast(dict[str, Any], result))

    async def get_transactions_for_address(
        self,
        address: str,
        limit: int = 50,
    ) -> List[ChainTransaction]:
        """Fetch the most recent transactions of address (newest first, as returned).

        Raises:
            ChainUnavailableError: If the request failed or the API answered ok=false.
        """
        with bound_contextvars(
            toncenter_address_masked=mask_address(address),
            toncenter_limit=limit,
        ):
            data = await self._call("getTransactions", {"address": address, "limit": limit})
            if not data.get("ok"):
                self._logger.warning(
                    "toncenter_get_transactions_not_ok",
                    toncenter_error=data.get("error"),
                )
                raise ChainUnavailableError(
                    f"getTransactions returned ok=false: {data.get('error') or 'unknown error'}"
                )
            raw = data.get("result") or []
            if not isinstance(raw, list):
                self._logger.warning(
                    "toncenter_get_transactions_non_list",
                    toncenter_result_type=type(raw).__name__,
                )
                return []
            return [
                ChainTransaction.from_response(cast(dict[str, Any], tx))
                for tx in cast(list[Any], raw)
                if isinstance(tx, dict)
            ]
