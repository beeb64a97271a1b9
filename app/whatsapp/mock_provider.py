from __future__ import annotations

from typing import Any

from app.whatsapp.base import normalize_phone


class MockWhatsAppProvider:
    """Guarda as mensagens em memória em vez de enviar (ambiente de desenvolvimento)."""

    name = "mock"

    def __init__(self) -> None:
        self.sent: list[dict[str, str]] = []
        self.connected = True

    def send_text(self, number: str, text: str) -> bool:
        self.sent.append({"number": normalize_phone(number), "text": text})
        return True

    def get_status(self) -> dict[str, Any]:
        state = "open" if self.connected else "close"
        return {"connected": self.connected, "state": state}

    def create_instance(self) -> dict[str, Any]:
        self.connected = True
        return {"connected": True}

    def get_qrcode(self) -> dict[str, Any]:
        return {"connected": True} if self.connected else {"error": "QR Code não disponível (mock)"}

    def disconnect(self) -> bool:
        self.connected = False
        return True
