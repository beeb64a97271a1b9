import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.request_context import set_request_context
from app.deps import get_bot_engine, get_whatsapp_service
from app.fsm.engine import BotEngine
from app.fsm.states import Intent
from app.models.processed_message import ProcessedMessage
from app.services.whatsapp_templates import resposta_para
from app.whatsapp.service import WhatsAppService

router = APIRouter(prefix="/api/whatsapp", tags=["whatsapp-webhook"])
logger = logging.getLogger(__name__)


@router.get("/webhook")
def webhook_health():
    return {
        "status": "ok",
        "service": "WhatsApp Webhook",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.post("/webhook")
def whatsapp_webhook(
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    engine: BotEngine = Depends(get_bot_engine),
    service: WhatsAppService = Depends(get_whatsapp_service),
):
    logger.info("Webhook evento recebido: %s", payload.get("event"))

    message, reason = service.parse_webhook(payload)
    if message is None:
        return {"status": "ignored", "reason": reason, "event": payload.get("event")}

    try:
        if db.query(ProcessedMessage).filter_by(message_id=message.message_id).first():
            return {"status": "duplicate"}
        db.add(ProcessedMessage(message_id=message.message_id, remote_jid=message.remote_jid))
        db.commit()
    except SQLAlchemyError:
        # Sem deduplicação nesta entrega; o cliente ainda recebe resposta.
        logger.exception("Erro ao registrar mensagem processada %s", message.message_id)
        db.rollback()

    set_request_context(phone=message.from_number)
    logger.info("Mensagem de %s (%s): %s", message.contact_name, message.from_number, message.text)
    try:
        service.log_inbound(db, message)
    except SQLAlchemyError:
        logger.exception("Erro ao registrar mensagem recebida de %s", message.from_number)
        db.rollback()

    try:
        resposta = engine.processar_mensagem(message.from_number, message.text, message.contact_name)
    except Exception:
        logger.exception("Erro ao processar mensagem de %s", message.from_number)
        resposta = resposta_para(Intent.GERAL)

    enviado = service.send_text(db, to_phone=message.from_number, text=resposta)
    logger.info("Resposta %s: %s...", "enviada" if enviado else "FALHOU", resposta[:50])

    return {
        "status": "processed",
        "from": message.from_number,
        "message": message.text,
        "response_sent": enviado,
    }
