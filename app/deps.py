# app/deps.py
from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from app.ai.classifier import IntentClassifier
from app.ai.service import AIResponder, get_provider
from app.core.config import ADMIN_API_TOKEN, IS_PROD
from app.core.database import SessionLocal, get_db
from app.fsm.engine import BotEngine
from app.fsm.store import InMemoryConversationStore
from app.services.availability import SqlAvailabilityQuery
from app.services.freight import FreightCalculator, FreightConfig
from app.services.geocoding import NominatimGeocoder, OsrmRouter
from app.services.notifications import NotificationService
from app.whatsapp.service import WhatsAppService


@lru_cache
def get_bot_engine() -> BotEngine:
    """Instância única por processo: o estado das conversas vive nela."""
    provider = get_provider()
    return BotEngine(
        classifier=IntentClassifier(provider),
        responder=AIResponder(provider),
        availability=SqlAvailabilityQuery(SessionLocal),
        store=InMemoryConversationStore(),
    )


@lru_cache
def get_freight_calculator() -> FreightCalculator:
    return FreightCalculator(FreightConfig(), NominatimGeocoder(), OsrmRouter())


@lru_cache
def get_whatsapp_service() -> WhatsAppService:
    return WhatsAppService()


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    return NotificationService(db)


def require_admin_token(x_admin_token: str | None = Header(default=None)) -> None:
    configured = ADMIN_API_TOKEN
    if not configured:
        if IS_PROD:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Rotas administrativas em produção requerem ADMIN_API_TOKEN configurado",
            )
        return
    if (x_admin_token or "").strip() != configured:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token inválido")
