from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict

from app.deps import get_notification_service, require_admin_token
from app.services.notifications import NotificationService

router = APIRouter(
    prefix="/api/notifications",
    tags=["notifications"],
    dependencies=[Depends(require_admin_token)],
)


class NotificationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    tipo: str
    titulo: str
    mensagem: str | None = None
    pedido_id: int | None = None
    lida: bool
    created_at: datetime | None = None


@router.get("", response_model=list[NotificationRead])
def list_unread_notifications(
    limit: int = Query(20, ge=1, le=100),
    service: NotificationService = Depends(get_notification_service),
):
    return service.list_unread(limit=limit)


@router.post("/generate")
def generate_notifications(service: NotificationService = Depends(get_notification_service)):
    return {"created": service.generate_automatic_notifications()}


@router.post("/read-all")
def mark_all_notifications_read(service: NotificationService = Depends(get_notification_service)):
    return {"updated": service.mark_all_as_read()}


@router.post("/{notification_id}/read")
def mark_notification_read(
    notification_id: int,
    service: NotificationService = Depends(get_notification_service),
):
    if not service.mark_as_read(notification_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notificação não encontrada")
    return {"success": True}
