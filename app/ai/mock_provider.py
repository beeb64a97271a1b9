from __future__ import annotations

import json
from typing import Sequence


class MockProvider:
    """Provedor offline usado quando não há chave do Gemini configurada."""

    name = "mock"

    def classify_intent(self, message: str, labels: Sequence[str]) -> str:
        return json.dumps({"intencao": "geral", "confianca": 0.0})

    def generate_reply(self, message: str, history: str | None = None) -> str:
        return (
            "Posso ajudar com disponibilidade, preços e orçamentos. "
            "Digite *menu* para ver as opções."
        )
