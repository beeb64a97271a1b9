from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import relationship

from app.core.database import Base

# Progressão do pedido: orcamento -> contrato_enviado -> assinado -> pago_50
# -> entregue -> recolhido -> finalizado
STATUS_ORCAMENTO = "orcamento"
STATUS_CONTRATO_ENVIADO = "contrato_enviado"
STATUS_ASSINADO = "assinado"
STATUS_PAGO_50 = "pago_50"
STATUS_ENTREGUE = "entregue"
STATUS_RECOLHIDO = "recolhido"
STATUS_FINALIZADO = "finalizado"


class Order(Base):
    __tablename__ = "pedidos"

    id = Column(Integer, primary_key=True)
    cliente_id = Column(Integer, ForeignKey("clientes.id"), index=True, nullable=False)

    data_evento = Column(Date, index=True, nullable=False)
    status = Column(String, default=STATUS_ORCAMENTO, index=True, nullable=False)

    total_pedido = Column(Numeric(10, 2), default=0, nullable=False)
    valor_pago = Column(Numeric(10, 2), default=0, nullable=False)

    data_entrega = Column(Date, nullable=True)
    data_recolhimento = Column(Date, nullable=True)
    observacoes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    customer = relationship("Customer", back_populates="orders")
    itens = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")
