from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from decimal import Decimal
from zoneinfo import ZoneInfo

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.core.config import APP_TIMEZONE
from app.models.notification import (
    TIPO_DEVOLUCAO,
    TIPO_EVENTO_PROXIMO,
    TIPO_PAGAMENTO_PENDENTE,
    Notification,
)
from app.models.order import STATUS_ENTREGUE, STATUS_FINALIZADO, STATUS_RECOLHIDO, Order

logger = logging.getLogger(__name__)

SALDO_MINIMO = Decimal("0.01")
DIAS_PARA_DEVOLUCAO = 2


def today_local() -> date:
    return datetime.now(ZoneInfo(APP_TIMEZONE)).date()


def _decimal(value) -> Decimal:
    return Decimal(str(value if value is not None else 0))


def _nome_cliente(order: Order) -> str:
    customer = order.customer
    if customer is not None and customer.nome:
        return customer.nome
    return "Cliente"


class NotificationService:
    """Lembretes automáticos do painel.

    Cada candidato passa por "existe não lida?" e depois pelo insert, em dois
    passos. Duas execuções simultâneas podem duplicar uma notificação; se isso
    importar, o banco deve ganhar uma restrição única parcial.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self._criadas = 0

    def generate_automatic_notifications(self, today: date | None = None) -> int:
        hoje = today or today_local()
        # Conta a cada insert gravado, mesmo se a regra falhar no meio
        self._criadas = 0
        try:
            self._eventos_proximos(hoje)
            self._pagamentos_pendentes(hoje)
            self._devolucoes_pendentes(hoje)
        except SQLAlchemyError:
            logger.exception("Erro ao gerar notificações")
            self.db.rollback()
        if self._criadas:
            logger.info("Notificações automáticas criadas: %s", self._criadas)
        return self._criadas

    def _eventos_proximos(self, hoje: date) -> None:
        amanha = hoje + timedelta(days=1)
        pedidos = (
            self.db.query(Order)
            .options(joinedload(Order.customer))
            .filter(
                Order.data_evento.in_([hoje, amanha]),
                Order.status.notin_([STATUS_FINALIZADO, STATUS_RECOLHIDO]),
            )
            .order_by(Order.data_evento.asc(), Order.id.asc())
            .all()
        )
        for pedido in pedidos:
            if self.notification_exists(pedido.id, TIPO_EVENTO_PROXIMO):
                continue
            titulo = "🚚 Entrega HOJE!" if pedido.data_evento == hoje else "📅 Entrega amanhã"
            self.create_notification(
                tipo=TIPO_EVENTO_PROXIMO,
                titulo=titulo,
                mensagem=f"Evento de {_nome_cliente(pedido)}",
                pedido_id=pedido.id,
            )
            self._criadas += 1

    def _pagamentos_pendentes(self, hoje: date) -> None:
        pedidos = (
            self.db.query(Order)
            .options(joinedload(Order.customer))
            .filter(Order.data_evento < hoje, Order.status != STATUS_FINALIZADO)
            .order_by(Order.data_evento.asc(), Order.id.asc())
            .all()
        )
        for pedido in pedidos:
            saldo = _decimal(pedido.total_pedido) - _decimal(pedido.valor_pago)
            if saldo <= SALDO_MINIMO:
                continue
            if self.notification_exists(pedido.id, TIPO_PAGAMENTO_PENDENTE):
                continue
            self.create_notification(
                tipo=TIPO_PAGAMENTO_PENDENTE,
                titulo="💰 Pagamento pendente",
                mensagem=f"{_nome_cliente(pedido)} - Saldo: R$ {saldo:.2f}",
                pedido_id=pedido.id,
            )
            self._criadas += 1

    def _devolucoes_pendentes(self, hoje: date) -> None:
        limite = hoje - timedelta(days=DIAS_PARA_DEVOLUCAO)
        pedidos = (
            self.db.query(Order)
            .options(joinedload(Order.customer))
            .filter(Order.status == STATUS_ENTREGUE, Order.data_evento < limite)
            .order_by(Order.data_evento.asc(), Order.id.asc())
            .all()
        )
        for pedido in pedidos:
            if self.notification_exists(pedido.id, TIPO_DEVOLUCAO):
                continue
            self.create_notification(
                tipo=TIPO_DEVOLUCAO,
                titulo="⚠️ Devolução pendente",
                mensagem=f"Material de {_nome_cliente(pedido)} não recolhido",
                pedido_id=pedido.id,
            )
            self._criadas += 1

    def notification_exists(self, pedido_id: int, tipo: str) -> bool:
        existing = (
            self.db.query(Notification.id)
            .filter(
                Notification.pedido_id == pedido_id,
                Notification.tipo == tipo,
                Notification.lida.is_(False),
            )
            .first()
        )
        return existing is not None

    def create_notification(self, *, tipo: str, titulo: str, mensagem: str | None, pedido_id: int | None) -> Notification:
        notification = Notification(tipo=tipo, titulo=titulo, mensagem=mensagem, pedido_id=pedido_id)
        self.db.add(notification)
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def list_unread(self, limit: int = 20) -> list[Notification]:
        try:
            return (
                self.db.query(Notification)
                .filter(Notification.lida.is_(False))
                .order_by(Notification.created_at.desc(), Notification.id.desc())
                .limit(limit)
                .all()
            )
        except SQLAlchemyError:
            logger.exception("Erro ao buscar notificações")
            self.db.rollback()
            return []

    def mark_as_read(self, notification_id: int) -> bool:
        notification = self.db.query(Notification).filter(Notification.id == notification_id).first()
        if not notification:
            return False
        notification.lida = True
        self.db.commit()
        return True

    def mark_all_as_read(self) -> int:
        updated = (
            self.db.query(Notification)
            .filter(Notification.lida.is_(False))
            .update({Notification.lida: True}, synchronize_session=False)
        )
        self.db.commit()
        return int(updated or 0)
