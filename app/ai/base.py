from __future__ import annotations

from typing import Protocol, Sequence


class AIProvider(Protocol):
    name: str

    def classify_intent(self, message: str, labels: Sequence[str]) -> str:
        """Retorna o texto bruto (JSON esperado) com {intencao, confianca}."""
        ...

    def generate_reply(self, message: str, history: str | None = None) -> str:
        ...
