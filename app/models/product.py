from sqlalchemy import Column, DateTime, Integer, Numeric, String, func

from app.core.database import Base


class Product(Base):
    __tablename__ = "produtos"

    id = Column(Integer, primary_key=True)
    nome = Column(String, nullable=False)
    quantidade_total = Column(Integer, nullable=False, default=0)
    preco_unitario = Column(Numeric(10, 2), nullable=False, default=0)
    categoria = Column(String, nullable=False, default="outros")  # mesas / cadeiras / toalhas / caixa_termica / outros
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
