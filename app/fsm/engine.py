from __future__ import annotations

import logging
import re
from datetime import date

from app.ai.classifier import IntentClassifier
from app.ai.service import AIResponder
from app.fsm.states import AGUARDANDO_DATA, RESET_KEYWORDS, Intent
from app.fsm.store import ConversationState, InMemoryConversationStore
from app.services.availability import AvailabilityQuery, format_availability
from app.services.text_normalize import normalize
from app.services.whatsapp_templates import (
    DATA_FORMATO_INVALIDO,
    ERRO_DISPONIBILIDADE,
    resposta_para,
)

logger = logging.getLogger(__name__)

_DATA_PATTERN = re.compile(r"(?<!\d)(\d{2})/(\d{2})/(\d{4})(?!\d)")


def extrair_data(texto: str) -> date | None:
    """Primeira data DD/MM/AAAA válida do texto (31/02 não conta)."""
    match = _DATA_PATTERN.search(texto or "")
    if not match:
        return None
    dia, mes, ano = (int(part) for part in match.groups())
    try:
        return date(ano, mes, dia)
    except ValueError:
        return None


class BotEngine:
    def __init__(
        self,
        classifier: IntentClassifier,
        responder: AIResponder,
        availability: AvailabilityQuery,
        store: InMemoryConversationStore | None = None,
    ) -> None:
        self.classifier = classifier
        self.responder = responder
        self.availability = availability
        self.store = store if store is not None else InMemoryConversationStore()

    def processar_mensagem(self, numero: str, mensagem: str, nome_contato: str | None = None) -> str:
        texto = (mensagem or "").strip()

        if normalize(texto) in RESET_KEYWORDS:
            self.store.delete(numero)
            return resposta_para(Intent.SAUDACAO)

        estado = self.store.get(numero)
        if estado is not None and estado.etapa == AGUARDANDO_DATA:
            return self._responder_data(numero, texto)

        intencao = self.classifier.classify(texto)

        if intencao == Intent.DISPONIBILIDADE:
            self.store.set(numero, ConversationState(etapa=AGUARDANDO_DATA))
            return resposta_para(Intent.DISPONIBILIDADE)

        if intencao == Intent.ATENDENTE:
            self._marcar_precisa_atendente(numero, nome_contato or "Cliente")
            return resposta_para(Intent.ATENDENTE)

        if intencao == Intent.GERAL:
            return self.responder.reply(texto)

        return resposta_para(intencao)

    def _responder_data(self, numero: str, texto: str) -> str:
        data = extrair_data(texto)
        if data is None:
            return DATA_FORMATO_INVALIDO

        try:
            linhas = self.availability.get_availability(data)
        except Exception:
            logger.exception("Erro ao consultar disponibilidade para %s", data.isoformat())
            self.store.delete(numero)
            return ERRO_DISPONIBILIDADE

        self.store.delete(numero)
        return format_availability(data, linhas)

    def _marcar_precisa_atendente(self, numero: str, nome: str) -> None:
        logger.info("Cliente %s (%s) precisa de atendente humano", nome, numero)
