from __future__ import annotations

import logging

from app.ai.base import AIProvider
from app.ai.mock_provider import MockProvider
from app.core.config import AI_PROVIDER, GOOGLE_GEMINI_API_KEY
from app.services.whatsapp_templates import IA_INDISPONIVEL, IA_SEM_RESPOSTA

logger = logging.getLogger(__name__)


def get_provider() -> AIProvider:
    provider = (AI_PROVIDER or "mock").strip().lower()
    if provider == "gemini" and GOOGLE_GEMINI_API_KEY:
        from app.ai.gemini_provider import GeminiProvider

        return GeminiProvider()
    if provider == "gemini":
        logger.warning("GOOGLE_GEMINI_API_KEY ausente, usando provedor de IA mock")
    return MockProvider()


class AIResponder:
    """Resposta livre da IA para mensagens classificadas como 'geral'."""

    def __init__(self, provider: AIProvider) -> None:
        self._provider = provider

    def reply(self, message: str, history: str | None = None) -> str:
        try:
            text = self._provider.generate_reply(message, history)
        except Exception:
            logger.exception("Erro ao gerar resposta com %s", self._provider.name)
            return IA_INDISPONIVEL

        text = (text or "").strip()
        return text or IA_SEM_RESPOSTA
