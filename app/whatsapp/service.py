from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import EVOLUTION_API_KEY, IS_DEV, WHATSAPP_PROVIDER
from app.models.whatsapp_message_log import WhatsAppMessageLog
from app.whatsapp.base import (
    InboundMessage,
    WhatsAppProvider,
    normalize_phone,
    safe_json,
    sanitize_payload,
)
from app.whatsapp.evolution_provider import EvolutionWhatsAppProvider, parse_evolution_webhook
from app.whatsapp.mock_provider import MockWhatsAppProvider

logger = logging.getLogger(__name__)


def select_provider() -> WhatsAppProvider:
    if WHATSAPP_PROVIDER == "mock":
        return MockWhatsAppProvider()
    if not EVOLUTION_API_KEY and IS_DEV:
        logger.warning("EVOLUTION_API_KEY ausente em dev, usando WhatsApp mock")
        return MockWhatsAppProvider()
    return EvolutionWhatsAppProvider()


class WhatsAppService:
    def __init__(self, provider: WhatsAppProvider | None = None) -> None:
        self.provider = provider or select_provider()

    def parse_webhook(self, payload: dict[str, Any]) -> tuple[InboundMessage | None, str | None]:
        return parse_evolution_webhook(payload)

    def send_text(self, db: Session, *, to_phone: str, text: str) -> bool:
        numero = normalize_phone(to_phone)
        enviado = self.provider.send_text(numero, text)
        self._log(
            db,
            direction="out",
            to_phone=numero,
            from_phone=None,
            contact_name=None,
            payload={"text": text, "provider": self.provider.name},
            status="sent" if enviado else "failed",
            error=None if enviado else "send_failed",
        )
        return enviado

    def log_inbound(self, db: Session, message: InboundMessage) -> WhatsAppMessageLog | None:
        return self._log(
            db,
            direction="in",
            to_phone=None,
            from_phone=message.from_number,
            contact_name=message.contact_name,
            payload={"text": message.text, "remote_jid": message.remote_jid},
            status="received",
            provider_message_id=message.message_id,
        )

    def get_status(self) -> dict[str, Any]:
        return self.provider.get_status()

    def create_instance(self) -> dict[str, Any]:
        return self.provider.create_instance()

    def get_qrcode(self) -> dict[str, Any]:
        return self.provider.get_qrcode()

    def disconnect(self) -> bool:
        return self.provider.disconnect()

    def _log(
        self,
        db: Session,
        *,
        direction: str,
        to_phone: str | None,
        from_phone: str | None,
        contact_name: str | None,
        payload: dict[str, Any],
        status: str,
        error: str | None = None,
        provider_message_id: str | None = None,
    ) -> WhatsAppMessageLog | None:
        log_entry = WhatsAppMessageLog(
            direction=direction,
            to_phone=to_phone,
            from_phone=from_phone,
            contact_name=contact_name,
            message_type="text",
            payload_json=safe_json(sanitize_payload(payload)),
            status=status,
            error=error,
            provider_message_id=provider_message_id,
        )
        try:
            db.add(log_entry)
            db.commit()
        except SQLAlchemyError:
            logger.exception("Erro ao gravar log de WhatsApp (%s)", direction)
            db.rollback()
            return None
        return log_entry
