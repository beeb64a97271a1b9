from datetime import date

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base
from app.models.customer import Customer
from app.models.order import (
    STATUS_ASSINADO,
    STATUS_ENTREGUE,
    STATUS_FINALIZADO,
    STATUS_ORCAMENTO,
    STATUS_PAGO_50,
    Order,
)
from app.models.order_item import OrderItem
from app.models.product import Product
from app.services.availability import (
    AvailabilityRow,
    SqlAvailabilityQuery,
    format_availability,
    format_long_date,
)
from app.services.whatsapp_templates import CHAMADA_ORCAMENTO, SEM_PRODUTOS
from tests.fixtures_data import PRODUTOS

DATA_EVENTO = date(2024, 12, 25)


def _build_session_factory() -> sessionmaker:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def _add_order(db, *, pedido_id, data_evento, status, itens):
    db.add(Order(id=pedido_id, cliente_id=1, data_evento=data_evento, status=status))
    for produto_id, quantidade in itens:
        db.add(OrderItem(pedido_id=pedido_id, produto_id=produto_id, quantidade=quantidade))


def _seed(session_factory):
    db = session_factory()
    db.add(Customer(id=1, nome="Maria", whatsapp="5531999990000"))
    for produto in PRODUTOS:
        db.add(Product(**produto))
    _add_order(db, pedido_id=1, data_evento=DATA_EVENTO, status=STATUS_PAGO_50, itens=[(1, 4), (2, 30)])
    _add_order(db, pedido_id=2, data_evento=DATA_EVENTO, status=STATUS_ORCAMENTO, itens=[(1, 6)])
    _add_order(db, pedido_id=3, data_evento=DATA_EVENTO, status=STATUS_ASSINADO, itens=[(3, 4)])
    _add_order(db, pedido_id=4, data_evento=DATA_EVENTO, status=STATUS_ENTREGUE, itens=[(3, 3)])
    _add_order(db, pedido_id=5, data_evento=DATA_EVENTO, status=STATUS_FINALIZADO, itens=[(2, 70)])
    _add_order(db, pedido_id=6, data_evento=date(2024, 12, 26), status=STATUS_PAGO_50, itens=[(1, 10)])
    db.commit()
    db.close()


def test_sql_availability_counts_only_reserving_orders_on_the_date():
    session_factory = _build_session_factory()
    _seed(session_factory)

    rows = SqlAvailabilityQuery(session_factory).get_availability(DATA_EVENTO)

    assert [row.nome for row in rows] == ["Cadeira plástica", "Mesa redonda", "Toalha redonda"]
    por_nome = {row.nome: row for row in rows}
    assert por_nome["Cadeira plástica"].quantidade_reservada == 30
    assert por_nome["Cadeira plástica"].quantidade_disponivel == 70
    assert por_nome["Mesa redonda"].quantidade_reservada == 4
    assert por_nome["Mesa redonda"].quantidade_disponivel == 6
    # Reservado acima do estoque não fica negativo
    assert por_nome["Toalha redonda"].quantidade_reservada == 7
    assert por_nome["Toalha redonda"].quantidade_disponivel == 0


def test_sql_availability_without_orders_returns_full_stock():
    session_factory = _build_session_factory()
    _seed(session_factory)

    rows = SqlAvailabilityQuery(session_factory).get_availability(date(2025, 1, 10))

    assert all(row.quantidade_reservada == 0 for row in rows)
    assert all(row.quantidade_disponivel == row.quantidade_total for row in rows)


def test_sql_availability_with_empty_catalog():
    session_factory = _build_session_factory()

    assert SqlAvailabilityQuery(session_factory).get_availability(DATA_EVENTO) == []


def test_format_availability_lists_products_and_call_to_action():
    rows = [
        AvailabilityRow(produto_id=2, nome="Cadeira plástica", quantidade_total=100, quantidade_reservada=30, quantidade_disponivel=70),
        AvailabilityRow(produto_id=3, nome="Toalha redonda", quantidade_total=5, quantidade_reservada=7, quantidade_disponivel=0),
    ]

    texto = format_availability(DATA_EVENTO, rows)

    assert texto.splitlines() == [
        "📅 *Disponibilidade para 25 de dezembro de 2024:*",
        "",
        "✅ *Cadeira plástica*: 70 disponíveis",
        "❌ *Toalha redonda*: 0 disponíveis",
        "",
        CHAMADA_ORCAMENTO,
    ]


def test_format_availability_empty_rows():
    assert format_availability(DATA_EVENTO, []) == SEM_PRODUTOS


def test_format_long_date():
    assert format_long_date(date(2025, 3, 5)) == "05 de março de 2025"
