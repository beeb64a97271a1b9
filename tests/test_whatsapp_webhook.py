import copy

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.ai.classifier import IntentClassifier
from app.ai.service import AIResponder
from app.core.database import Base, get_db
from app.deps import get_bot_engine, get_whatsapp_service
from app.fsm.engine import BotEngine
from app.fsm.states import Intent
from app.fsm.store import InMemoryConversationStore
from app.models.processed_message import ProcessedMessage
from app.models.whatsapp_message_log import WhatsAppMessageLog
from app.routers.webhook import router as webhook_router
from app.services.whatsapp_templates import RESPOSTAS
from app.whatsapp.mock_provider import MockWhatsAppProvider
from app.whatsapp.service import WhatsAppService
from tests.fixtures_data import EVOLUTION_OWN_MESSAGE, EVOLUTION_TEXT_MESSAGE


class FakeProvider:
    name = "fake"

    def classify_intent(self, message, labels):
        return '{"intencao": "geral", "confianca": 0.3}'

    def generate_reply(self, message, history=None):
        return "Resposta livre"


class EmptyAvailability:
    def get_availability(self, data):
        return []


class BrokenEngine:
    def processar_mensagem(self, numero, mensagem, nome_contato=None):
        raise RuntimeError("falha inesperada")


def _build_client(engine=None):
    db_engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    Base.metadata.create_all(bind=db_engine)
    db = testing_session_local()

    if engine is None:
        engine = BotEngine(
            classifier=IntentClassifier(FakeProvider()),
            responder=AIResponder(FakeProvider()),
            availability=EmptyAvailability(),
            store=InMemoryConversationStore(),
        )
    gateway = MockWhatsAppProvider()

    app = FastAPI()
    app.include_router(webhook_router)
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_bot_engine] = lambda: engine
    app.dependency_overrides[get_whatsapp_service] = lambda: WhatsAppService(provider=gateway)
    return TestClient(app), db, gateway


def test_webhook_replies_to_text_message():
    client, db, gateway = _build_client()

    response = client.post("/api/whatsapp/webhook", json=EVOLUTION_TEXT_MESSAGE)

    assert response.status_code == 200
    assert response.json() == {
        "status": "processed",
        "from": "5531999990000",
        "message": "oi",
        "response_sent": True,
    }
    assert gateway.sent == [{"number": "5531999990000", "text": RESPOSTAS[Intent.SAUDACAO]}]
    directions = sorted(row.direction for row in db.query(WhatsAppMessageLog).all())
    assert directions == ["in", "out"]


def test_webhook_ignores_redelivered_message():
    client, db, gateway = _build_client()

    client.post("/api/whatsapp/webhook", json=EVOLUTION_TEXT_MESSAGE)
    response = client.post("/api/whatsapp/webhook", json=EVOLUTION_TEXT_MESSAGE)

    assert response.json() == {"status": "duplicate"}
    assert len(gateway.sent) == 1
    assert db.query(ProcessedMessage).count() == 1


def test_webhook_ignores_own_messages():
    client, _, gateway = _build_client()

    response = client.post("/api/whatsapp/webhook", json=EVOLUTION_OWN_MESSAGE)

    assert response.json()["status"] == "ignored"
    assert response.json()["reason"] == "own_message"
    assert gateway.sent == []


def test_webhook_ignores_other_events():
    client, _, gateway = _build_client()

    response = client.post("/api/whatsapp/webhook", json={"event": "qrcode.updated", "data": {}})

    assert response.json() == {"status": "ignored", "reason": "event", "event": "qrcode.updated"}
    assert gateway.sent == []


def test_engine_failure_still_answers_customer():
    client, _, gateway = _build_client(engine=BrokenEngine())

    response = client.post("/api/whatsapp/webhook", json=EVOLUTION_TEXT_MESSAGE)

    assert response.status_code == 200
    assert gateway.sent[0]["text"] == RESPOSTAS[Intent.GERAL]


def test_availability_conversation_over_webhook():
    client, _, gateway = _build_client()
    primeira = copy.deepcopy(EVOLUTION_TEXT_MESSAGE)
    primeira["data"]["message"] = {"conversation": "1"}
    segunda = copy.deepcopy(EVOLUTION_TEXT_MESSAGE)
    segunda["data"]["key"]["id"] = "3EB0C767D26A1D6C"
    segunda["data"]["message"] = {"conversation": "amanhã"}

    client.post("/api/whatsapp/webhook", json=primeira)
    client.post("/api/whatsapp/webhook", json=segunda)

    assert gateway.sent[0]["text"] == RESPOSTAS[Intent.DISPONIBILIDADE]
    assert "DD/MM/AAAA" in gateway.sent[1]["text"]


def test_webhook_health():
    client, _, _ = _build_client()

    response = client.get("/api/whatsapp/webhook")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["service"] == "WhatsApp Webhook"


class InboundLogFailingService(WhatsAppService):
    def log_inbound(self, db, message):
        raise OperationalError("INSERT INTO whatsapp_message_log", {}, Exception("disk I/O error"))


def test_inbound_log_failure_still_answers_customer():
    client, db, gateway = _build_client()
    client.app.dependency_overrides[get_whatsapp_service] = lambda: InboundLogFailingService(provider=gateway)

    response = client.post("/api/whatsapp/webhook", json=EVOLUTION_TEXT_MESSAGE)

    assert response.status_code == 200
    assert response.json()["response_sent"] is True
    assert gateway.sent == [{"number": "5531999990000", "text": RESPOSTAS[Intent.SAUDACAO]}]
    assert db.query(ProcessedMessage).count() == 1


class CommitFailingDb:
    def __init__(self):
        self.rolled_back = False

    def add(self, _obj):
        return None

    def commit(self):
        raise OperationalError("INSERT INTO whatsapp_message_log", {}, Exception("database is locked"))

    def rollback(self):
        self.rolled_back = True


def test_send_result_survives_outbound_log_failure():
    gateway = MockWhatsAppProvider()
    db = CommitFailingDb()

    enviado = WhatsAppService(provider=gateway).send_text(db, to_phone="31999990000", text="Olá!")

    assert enviado is True
    assert db.rolled_back is True
    assert gateway.sent == [{"number": "5531999990000", "text": "Olá!"}]
