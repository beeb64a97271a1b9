from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from app.core.config import (
    EVOLUTION_API_KEY,
    EVOLUTION_API_URL,
    EVOLUTION_INSTANCE_NAME,
    HTTP_TIMEOUT_SECONDS,
)
from app.whatsapp.base import InboundMessage, normalize_phone

logger = logging.getLogger(__name__)

EVENTO_MENSAGEM = "messages.upsert"


def extrair_numero_whatsapp(remote_jid: str) -> str:
    return remote_jid.replace("@s.whatsapp.net", "").replace("@g.us", "")


def extrair_texto_mensagem(message: dict[str, Any] | None) -> str:
    if not message:
        return ""
    extended = message.get("extendedTextMessage") or {}
    return message.get("conversation") or extended.get("text") or ""


def parse_evolution_webhook(payload: dict[str, Any]) -> tuple[InboundMessage | None, str | None]:
    """Mensagem normalizada, ou (None, motivo) para eventos ignorados."""
    event = payload.get("event")
    if event != EVENTO_MENSAGEM:
        return None, "event"

    data = payload.get("data") or {}
    key = data.get("key") or {}
    if key.get("fromMe"):
        return None, "own_message"

    remote_jid = key.get("remoteJid") or ""
    if "@g.us" in remote_jid:
        return None, "group_message"

    numero = extrair_numero_whatsapp(remote_jid)
    texto = extrair_texto_mensagem(data.get("message")).strip()
    if not numero or not texto:
        return None, "missing_data"

    return (
        InboundMessage(
            message_id=key.get("id") or f"{numero}-{data.get('messageTimestamp') or ''}",
            from_number=numero,
            text=texto,
            contact_name=data.get("pushName") or "Cliente",
            remote_jid=remote_jid,
        ),
        None,
    )


class EvolutionWhatsAppProvider:
    """Cliente da Evolution API v1.8.x. Nenhum método levanta exceção."""

    name = "evolution"
    QR_FETCH_DELAY_SECONDS = 1.5

    def __init__(
        self,
        base_url: str = EVOLUTION_API_URL,
        api_key: str = EVOLUTION_API_KEY,
        instance: str = EVOLUTION_INSTANCE_NAME,
        *,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._instance = instance
        self._timeout = timeout
        self._client = client

    def _request(self, method: str, path: str, *, json: dict[str, Any] | None = None) -> httpx.Response:
        url = f"{self._base_url}{path}"
        headers = {"apikey": self._api_key, "Content-Type": "application/json"}
        if self._client is not None:
            return self._client.request(method, url, headers=headers, json=json)
        with httpx.Client(timeout=self._timeout) as client:
            return client.request(method, url, headers=headers, json=json)

    def send_text(self, number: str, text: str) -> bool:
        payload = {"number": normalize_phone(number), "textMessage": {"text": text}}
        try:
            response = self._request("POST", f"/message/sendText/{self._instance}", json=payload)
        except httpx.HTTPError:
            logger.exception("Erro ao enviar mensagem via Evolution API", extra={"integration": self.name})
            return False

        if not response.is_success:
            logger.error(
                "Erro ao enviar mensagem: %s %s",
                response.status_code,
                response.text,
                extra={"integration": self.name},
            )
            return False
        return True

    def create_instance(self) -> dict[str, Any]:
        payload = {"instanceName": self._instance, "qrcode": True, "integration": "WHATSAPP-BAILEYS"}
        try:
            response = self._request("POST", "/instance/create", json=payload)
            data = response.json()
        except (httpx.HTTPError, ValueError):
            logger.exception("Erro ao criar instância", extra={"integration": self.name})
            return {"error": "Erro de conexão com Evolution API"}

        qrcode = (data.get("qrcode") or {}).get("base64")
        if qrcode:
            return {"qrcode": qrcode}

        # Instância criada sem QR na resposta: busca separadamente
        if data.get("instance") or data.get("hash"):
            time.sleep(self.QR_FETCH_DELAY_SECONDS)
            return self.get_qrcode()

        return {"error": data.get("message") or data.get("error") or "Erro ao criar instância"}

    def get_qrcode(self) -> dict[str, Any]:
        try:
            response = self._request("GET", f"/instance/connect/{self._instance}")
            data = response.json()
        except (httpx.HTTPError, ValueError):
            logger.exception("Erro ao obter QR Code", extra={"integration": self.name})
            return {"error": "Erro de conexão com Evolution API"}

        if data.get("base64"):
            return {"qrcode": data["base64"]}
        if (data.get("instance") or {}).get("state") == "open":
            return {"connected": True}
        return {"error": data.get("message") or "QR Code não disponível (tente novamente)"}

    def get_status(self) -> dict[str, Any]:
        try:
            response = self._request("GET", f"/instance/connectionState/{self._instance}")
            data = response.json()
        except (httpx.HTTPError, ValueError):
            logger.exception("Erro ao verificar status", extra={"integration": self.name})
            return {"connected": False, "state": "error"}

        state = data.get("state") or (data.get("instance") or {}).get("state") or "unknown"
        return {"connected": state == "open", "state": state}

    def disconnect(self) -> bool:
        try:
            response = self._request("DELETE", f"/instance/logout/{self._instance}")
        except httpx.HTTPError:
            logger.exception("Erro ao desconectar", extra={"integration": self.name})
            return False
        return response.is_success
