"""Shared request data types."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RequestDescriptor(BaseModel):
    """Logical request sent by the UI (camelCase keys on the wire)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    base_url: str = ""
    email: str = ""
    api_token: str = ""
    endpoint: str
    method: str | None = "GET"
    body: Any = None
    is_tempo: bool | None = False
    auth_type: str | None = None


@dataclass(frozen=True)
class PreparedRequest:
    """Prepared data for an upstream request."""

    route_name: str
    method: str
    url: str
    headers: dict[str, str]
    body: Any = None
