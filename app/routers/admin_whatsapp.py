from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.deps import get_whatsapp_service, require_admin_token
from app.whatsapp.service import WhatsAppService

router = APIRouter(
    prefix="/api/whatsapp",
    tags=["admin-whatsapp"],
    dependencies=[Depends(require_admin_token)],
)


class WhatsAppSendRequest(BaseModel):
    number: str = Field(..., min_length=8)
    message: str = Field(..., min_length=1)


@router.get("/status")
def whatsapp_status(service: WhatsAppService = Depends(get_whatsapp_service)):
    return service.get_status()


@router.post("/instance")
def whatsapp_create_instance(service: WhatsAppService = Depends(get_whatsapp_service)):
    result = service.create_instance()
    if result.get("error"):
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=result["error"])
    return result


@router.get("/qrcode")
def whatsapp_qrcode(service: WhatsAppService = Depends(get_whatsapp_service)):
    return service.get_qrcode()


@router.post("/disconnect")
def whatsapp_disconnect(service: WhatsAppService = Depends(get_whatsapp_service)):
    return {"success": service.disconnect()}


@router.post("/send")
def whatsapp_send(
    body: WhatsAppSendRequest,
    db: Session = Depends(get_db),
    service: WhatsAppService = Depends(get_whatsapp_service),
):
    enviado = service.send_text(db, to_phone=body.number, text=body.message)
    if not enviado:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Falha ao enviar mensagem")
    return {"success": True}
