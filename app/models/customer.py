from sqlalchemy import Column, DateTime, Float, Integer, String, Text, func
from sqlalchemy.orm import relationship

from app.core.database import Base


class Customer(Base):
    __tablename__ = "clientes"

    id = Column(Integer, primary_key=True)
    nome = Column(String(120), nullable=False)
    whatsapp = Column(String(30), nullable=False, index=True)
    endereco_completo = Column(Text, default="", nullable=False)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    cpf = Column(String(14), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    orders = relationship("Order", back_populates="customer")
