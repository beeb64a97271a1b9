from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text, func

from app.core.database import Base

TIPO_EVENTO_PROXIMO = "evento_proximo"
TIPO_PAGAMENTO_PENDENTE = "pagamento_pendente"
TIPO_DEVOLUCAO = "devolucao"


class Notification(Base):
    __tablename__ = "notificacoes"

    id = Column(Integer, primary_key=True)
    tipo = Column(String, nullable=False)
    titulo = Column(String, nullable=False)
    mensagem = Column(Text, nullable=True)
    pedido_id = Column(Integer, ForeignKey("pedidos.id"), nullable=True)
    lida = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


# Sem restrição única: a deduplicação (pedido_id, tipo, não lida) é feita antes do insert.
Index("ix_notificacoes_pedido_tipo_lida", Notification.pedido_id, Notification.tipo, Notification.lida)
