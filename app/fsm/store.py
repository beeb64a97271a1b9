from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock


@dataclass
class ConversationState:
    etapa: str
    dados: dict[str, str] = field(default_factory=dict)


class InMemoryConversationStore:
    """Estado pendente por número de WhatsApp. Some quando o processo reinicia.

    Endpoints síncronos do FastAPI rodam em thread pool, por isso o lock.
    Mensagens do mesmo remetente chegam uma por vez (premissa do gateway).
    """

    def __init__(self) -> None:
        self._states: dict[str, ConversationState] = {}
        self._lock = Lock()

    def get(self, numero: str) -> ConversationState | None:
        with self._lock:
            return self._states.get(numero)

    def set(self, numero: str, state: ConversationState) -> None:
        with self._lock:
            self._states[numero] = state

    def delete(self, numero: str) -> None:
        with self._lock:
            self._states.pop(numero, None)

    def clear(self) -> None:
        with self._lock:
            self._states.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)
