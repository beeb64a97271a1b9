import json
from types import SimpleNamespace

from app.ai import service as ai_service
from app.ai.gemini_provider import GeminiProvider
from app.ai.mock_provider import MockProvider
from app.ai.prompts import SYSTEM_PROMPT
from app.ai.service import AIResponder
from app.services.whatsapp_templates import IA_INDISPONIVEL, IA_SEM_RESPOSTA


class FakeReplyProvider:
    name = "fake"

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error

    def classify_intent(self, message, labels):
        return ""

    def generate_reply(self, message, history=None):
        if self.error is not None:
            raise self.error
        return self.text


class FakeModels:
    def __init__(self, text):
        self.text = text
        self.calls = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(text=self.text)


def test_responder_returns_provider_text():
    responder = AIResponder(FakeReplyProvider(text="  Trabalhamos de segunda a sábado!  "))

    assert responder.reply("vocês abrem sábado?") == "Trabalhamos de segunda a sábado!"


def test_responder_uses_fallback_when_provider_is_empty():
    assert AIResponder(FakeReplyProvider(text="")).reply("???") == IA_SEM_RESPOSTA


def test_responder_uses_apology_when_provider_fails():
    responder = AIResponder(FakeReplyProvider(error=RuntimeError("quota")))

    assert responder.reply("???") == IA_INDISPONIVEL


def test_get_provider_without_key_uses_mock(monkeypatch):
    monkeypatch.setattr(ai_service, "AI_PROVIDER", "gemini")
    monkeypatch.setattr(ai_service, "GOOGLE_GEMINI_API_KEY", "")

    assert isinstance(ai_service.get_provider(), MockProvider)


def test_mock_provider_classification_is_valid_json():
    data = json.loads(MockProvider().classify_intent("x", ["geral"]))

    assert data["intencao"] == "geral"


def test_gemini_provider_requests_json_classification():
    models = FakeModels('{"intencao": "preco", "confianca": 0.8}')
    provider = GeminiProvider(model="gemini-test", client=SimpleNamespace(models=models))

    raw = provider.classify_intent("quanto é a mesa?", ["preco", "geral"])

    assert json.loads(raw)["intencao"] == "preco"
    call = models.calls[0]
    assert call["model"] == "gemini-test"
    assert "quanto é a mesa?" in call["contents"]
    assert call["config"].response_mime_type == "application/json"


def test_gemini_provider_reply_includes_store_context():
    models = FakeModels("Olá!")
    provider = GeminiProvider(model="gemini-test", client=SimpleNamespace(models=models))

    assert provider.generate_reply("quem são vocês?") == "Olá!"
    assert SYSTEM_PROMPT in models.calls[0]["contents"]
