from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Protocol

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.order import (
    STATUS_ASSINADO,
    STATUS_CONTRATO_ENVIADO,
    STATUS_ENTREGUE,
    STATUS_PAGO_50,
    Order,
)
from app.models.order_item import OrderItem
from app.models.product import Product
from app.services.whatsapp_templates import CHAMADA_ORCAMENTO, SEM_PRODUTOS

# Orçamento não segura material; recolhido/finalizado já devolveram.
STATUS_QUE_RESERVAM = (STATUS_CONTRATO_ENVIADO, STATUS_ASSINADO, STATUS_PAGO_50, STATUS_ENTREGUE)

MESES = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)


@dataclass(frozen=True)
class AvailabilityRow:
    produto_id: int
    nome: str
    quantidade_total: int
    quantidade_reservada: int
    quantidade_disponivel: int


class AvailabilityQuery(Protocol):
    def get_availability(self, data: date) -> list[AvailabilityRow]:
        ...


class SqlAvailabilityQuery:
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def get_availability(self, data: date) -> list[AvailabilityRow]:
        db = self._session_factory()
        try:
            reservas = (
                db.query(
                    OrderItem.produto_id.label("produto_id"),
                    func.sum(OrderItem.quantidade).label("reservada"),
                )
                .join(Order, Order.id == OrderItem.pedido_id)
                .filter(Order.data_evento == data, Order.status.in_(STATUS_QUE_RESERVAM))
                .group_by(OrderItem.produto_id)
                .subquery()
            )
            rows = (
                db.query(Product, func.coalesce(reservas.c.reservada, 0))
                .outerjoin(reservas, reservas.c.produto_id == Product.id)
                .order_by(Product.nome.asc())
                .all()
            )
        finally:
            db.close()

        result = []
        for product, reservada in rows:
            total = int(product.quantidade_total or 0)
            reservada = int(reservada or 0)
            result.append(
                AvailabilityRow(
                    produto_id=product.id,
                    nome=product.nome,
                    quantidade_total=total,
                    quantidade_reservada=reservada,
                    quantidade_disponivel=max(total - reservada, 0),
                )
            )
        return result


def format_long_date(data: date) -> str:
    return f"{data.day:02d} de {MESES[data.month - 1]} de {data.year}"


def format_availability(data: date, rows: list[AvailabilityRow] | None) -> str:
    if not rows:
        return SEM_PRODUTOS

    lines = [f"📅 *Disponibilidade para {format_long_date(data)}:*", ""]
    for row in rows:
        emoji = "✅" if row.quantidade_disponivel > 0 else "❌"
        lines.append(f"{emoji} *{row.nome}*: {row.quantidade_disponivel} disponíveis")
    lines.append("")
    lines.append(CHAMADA_ORCAMENTO)
    return "\n".join(lines)
