"""
Single-endpoint fetch strategy.

Issues one GET against a resource path, unwraps the response envelope and
parses the result into domain records. Transport errors, error statuses and
payloads of the wrong shape all become a failed FetchOutcome.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Type, TypeVar

from pydantic import BaseModel

from storefront.fetching.abstract import AbstractFetchStrategy, FetchOutcome
from storefront.infrastructure.api_client import ApiClient

M = TypeVar("M", bound=BaseModel)

Parser = Callable[[Any], Any]


def unwrap_envelope(result: Any) -> Any:
    """
    Apply ``result.data ?? result ?? []``.

    Backends either wrap payloads as ``{"data": ...}`` or return them bare.
    """
    if isinstance(result, dict) and result.get("data") is not None:
        return result["data"]
    if result is not None:
        return result
    return []


def record_list(model: Type[M], empty_envelope_ok: bool = False) -> Callable[[Any], List[M]]:
    """
    Build a parser that requires a JSON array of objects.

    With ``empty_envelope_ok`` an object carrying no usable ``data`` array
    (``{}``, ``{"success": true, "data": null}``) parses as an empty list
    instead of failing.
    """

    def parse(value: Any) -> List[M]:
        if empty_envelope_ok and isinstance(value, dict):
            return []
        if not isinstance(value, list):
            raise ValueError(f"expected a list of records, got {type(value).__name__}")
        return [model.model_validate(item) for item in value]

    return parse


def record_object(model: Type[M]) -> Callable[[Any], Optional[M]]:
    """Build a parser for a single object; an empty payload yields None."""

    def parse(value: Any) -> Optional[M]:
        if value is None or value == [] or value == {}:
            return None
        if not isinstance(value, dict):
            raise ValueError(f"expected a record object, got {type(value).__name__}")
        return model.model_validate(value)

    return parse


class EndpointStrategy(AbstractFetchStrategy):
    """
    Read one resource path through the API client.
    """

    def __init__(
        self,
        client: ApiClient,
        path: str,
        parser: Parser,
        description: str | None = None,
    ) -> None:
        self.client = client
        self.path = path
        self.name = path
        self.description = description or f"GET {path}"
        self._parser = parser

    async def fetch(self) -> FetchOutcome:
        try:
            payload = await self.client.get_json(self.path)
            parsed = self._parser(unwrap_envelope(payload))
        except Exception as exc:  # noqa: BLE001 - any candidate failure is reported, not raised
            return FetchOutcome.failure(self.name, f"{type(exc).__name__}: {exc}")
        return FetchOutcome.success(self.name, parsed)


__all__ = ["EndpointStrategy", "record_list", "record_object", "unwrap_envelope"]
