from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Protocol

from app.core.config import DEFAULT_COUNTRY_CODE


@dataclass(frozen=True)
class InboundMessage:
    message_id: str
    from_number: str
    text: str
    contact_name: str
    remote_jid: str | None = None


class WhatsAppProvider(Protocol):
    name: str

    def send_text(self, number: str, text: str) -> bool:
        ...

    def get_status(self) -> dict[str, Any]:
        ...

    def create_instance(self) -> dict[str, Any]:
        ...

    def get_qrcode(self) -> dict[str, Any]:
        ...

    def disconnect(self) -> bool:
        ...


def normalize_phone(number: str, country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    """Só dígitos, com DDI. Números nacionais (DDD + 8/9 dígitos) ganham o DDI padrão."""
    digits = re.sub(r"\D", "", number or "")
    if len(digits) in (10, 11):
        return f"{country_code}{digits}"
    return digits


SENSITIVE_KEYS = {"apikey", "api_key", "authorization", "token"}


def _mask_value(value: Any) -> Any:
    if value is None:
        return None
    text = str(value)
    if len(text) <= 4:
        return "****"
    return f"****{text[-4:]}"


def sanitize_payload(payload: dict[str, Any]) -> dict[str, Any]:
    def _sanitize(value: Any) -> Any:
        if isinstance(value, dict):
            return {key: _sanitize_value(key, inner) for key, inner in value.items()}
        if isinstance(value, list):
            return [_sanitize(item) for item in value]
        return value

    def _sanitize_value(key: str, value: Any) -> Any:
        if key.lower() in SENSITIVE_KEYS:
            return _mask_value(value)
        return _sanitize(value)

    return _sanitize(payload)


def safe_json(payload: dict[str, Any]) -> str:
    try:
        return json.dumps(payload, ensure_ascii=False)
    except (TypeError, ValueError):
        return "{}"
