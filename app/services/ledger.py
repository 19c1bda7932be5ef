"""Ledger collaborator interface and its HTTP gateway client."""

from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from app.core.config import Settings
from app.core.exceptions import ReadFailure, SubmissionFailure
from app.core.logging import get_logger
from app.models.property import PropertyRecord

logger = get_logger(__name__)


class Ledger(Protocol):
    """Request/response calls the marketplace client makes against the ledger."""

    async def get_count(self) -> int: ...

    async def get_record(self, index: int) -> PropertyRecord: ...

    async def submit_buy(self, index: int, payer: str, amount: int) -> None: ...

    async def submit_rent(self, index: int, payer: str, amount: int) -> None: ...

    async def submit_listing(self, fields: dict[str, Any], submitter: str) -> None: ...

    async def get_active_identity(self) -> str: ...


def _error_detail(response: httpx.Response) -> str:
    """Pull a human readable reason out of a gateway error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("detail"):
        return str(body["detail"])
    return response.reason_phrase


class HttpLedger:
    """Ledger reached through a JSON gateway over HTTP.

    Amounts are sent as decimal strings so that values above 2**53 survive
    any JSON implementation on the other side.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "HttpLedger":
        """Build a client pointed at the configured gateway."""
        client = httpx.AsyncClient(
            base_url=settings.LEDGER_URL,
            timeout=settings.LEDGER_TIMEOUT,
        )
        return cls(client)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _read(self, path: str) -> Any:
        try:
            response = await self._client.get(path)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise ReadFailure(
                f"Ledger read {path} failed: {_error_detail(exc.response)}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ReadFailure(f"Ledger read {path} failed: {exc}") from exc
        except ValueError as exc:
            raise ReadFailure(f"Ledger read {path} returned invalid JSON") from exc

    async def _submit(self, path: str, payload: dict[str, Any]) -> None:
        try:
            response = await self._client.post(path, json=payload)
        except httpx.HTTPError as exc:
            raise SubmissionFailure(f"Could not reach the ledger: {exc}") from exc
        if response.is_error:
            raise SubmissionFailure(_error_detail(response))

    async def get_count(self) -> int:
        body = await self._read("/properties/count")
        try:
            count = int(body["count"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ReadFailure("Ledger returned a malformed property count") from exc
        if count < 0:
            raise ReadFailure(f"Ledger returned a negative property count: {count}")
        return count

    async def get_record(self, index: int) -> PropertyRecord:
        body = await self._read(f"/properties/{index}")
        if not isinstance(body, dict):
            raise ReadFailure(f"Ledger returned a malformed record at index {index}")
        try:
            return PropertyRecord.model_validate({**body, "id": index})
        except ValidationError as exc:
            raise ReadFailure(f"Ledger returned an invalid record at index {index}") from exc

    async def submit_buy(self, index: int, payer: str, amount: int) -> None:
        await self._submit(
            f"/properties/{index}/buy",
            {"from": payer, "value": str(amount)},
        )

    async def submit_rent(self, index: int, payer: str, amount: int) -> None:
        await self._submit(
            f"/properties/{index}/rent",
            {"from": payer, "value": str(amount)},
        )

    async def submit_listing(self, fields: dict[str, Any], submitter: str) -> None:
        payload = {
            key: str(value) if key in ("price", "rentPayment") else value
            for key, value in fields.items()
        }
        payload["from"] = submitter
        await self._submit("/listings", payload)

    async def get_active_identity(self) -> str:
        body = await self._read("/accounts")
        accounts = body.get("accounts") if isinstance(body, dict) else None
        if not accounts:
            raise ReadFailure("Ledger gateway reported no active account")
        logger.debug("Ledger gateway reported %d account(s)", len(accounts))
        return str(accounts[0])
