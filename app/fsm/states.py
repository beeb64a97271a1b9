from __future__ import annotations

from enum import Enum


class Intent(str, Enum):
    SAUDACAO = "saudacao"
    DISPONIBILIDADE = "disponibilidade"
    PRECO = "preco"
    ORCAMENTO = "orcamento"
    ATENDENTE = "atendente"
    GERAL = "geral"


INTENT_LABELS = tuple(intent.value for intent in Intent)

# Única etapa pendente existente hoje
AGUARDANDO_DATA = "aguardando_data"

RESET_KEYWORDS = frozenset({"menu", "inicio", "voltar"})

# Mesma ordem do menu de saudação
MENU_OPTIONS = {
    "1": Intent.DISPONIBILIDADE,
    "2": Intent.PRECO,
    "3": Intent.ORCAMENTO,
    "4": Intent.ATENDENTE,
}
