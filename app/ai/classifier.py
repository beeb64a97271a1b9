from __future__ import annotations

import logging

from app.ai.base import AIProvider
from app.ai.schema import decode_classification
from app.fsm.states import INTENT_LABELS, MENU_OPTIONS, Intent
from app.services.text_normalize import contains_phrase, normalize

logger = logging.getLogger(__name__)

SAUDACOES = ("oi", "olá", "ola", "bom dia", "boa tarde", "boa noite", "opa", "eai", "e ai", "hey", "hi")

# Ordem importa: a primeira regra que casar vence.
PALAVRAS_CHAVE: tuple[tuple[Intent, tuple[str, ...]], ...] = (
    (Intent.PRECO, ("preço", "preco", "preços", "valor", "valores", "quanto custa", "tabela")),
    (Intent.ORCAMENTO, ("orçamento", "orcamento", "alugar", "reservar")),
    (Intent.ATENDENTE, ("atendente", "humano", "falar com alguém", "falar com uma pessoa")),
    (Intent.DISPONIBILIDADE, ("disponível", "disponivel", "disponibilidade")),
)


def classify_by_rules(message: str) -> Intent | None:
    """Heurísticas locais; None quando nenhuma regra casa."""
    texto = normalize(message)
    if not texto:
        return None

    if any(contains_phrase(texto, saudacao) for saudacao in SAUDACOES):
        return Intent.SAUDACAO

    opcao = MENU_OPTIONS.get(message.strip())
    if opcao is not None:
        return opcao

    for intent, palavras in PALAVRAS_CHAVE:
        if any(contains_phrase(texto, palavra) for palavra in palavras):
            return intent
    return None


class IntentClassifier:
    def __init__(self, provider: AIProvider) -> None:
        self._provider = provider

    def classify(self, message: str) -> Intent:
        intent = classify_by_rules(message or "")
        if intent is not None:
            return intent

        try:
            raw = self._provider.classify_intent(message, INTENT_LABELS)
        except Exception:
            logger.warning("Falha na classificação por IA (%s)", self._provider.name, exc_info=True)
            return Intent.GERAL

        decoded = decode_classification(raw)
        if not decoded.ok:
            logger.warning("Resposta de classificação inválida: %s", decoded.error)
            return Intent.GERAL

        logger.info(
            "Intenção classificada por IA",
            extra={"intent": decoded.classification.intencao.value},
        )
        return decoded.classification.intencao
