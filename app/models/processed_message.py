from sqlalchemy import Column, DateTime, String, func

from app.core.database import Base


class ProcessedMessage(Base):
    """Ids de mensagens do webhook já tratadas (o Evolution reenvia eventos)."""

    __tablename__ = "processed_messages"

    message_id = Column(String, primary_key=True)
    remote_jid = Column(String, nullable=True)
    received_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
