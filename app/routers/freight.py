from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.deps import get_freight_calculator
from app.services.freight import FreightCalculator

router = APIRouter(prefix="/api/freight", tags=["freight"])


class FreightRequest(BaseModel):
    endereco: str = Field(..., min_length=3)


class FreightResponse(BaseModel):
    distancia_km: float | None = None
    frete: float
    calculado: bool


@router.post("/calculate", response_model=FreightResponse)
def calculate_freight(
    body: FreightRequest,
    calculator: FreightCalculator = Depends(get_freight_calculator),
):
    quote = calculator.calculate_freight_for_address(body.endereco)
    if quote is None:
        # Sem distância: cobra o mínimo e o atendente ajusta manualmente.
        return FreightResponse(frete=calculator.config.minimum_freight, calculado=False)
    return FreightResponse(distancia_km=quote.distance_km, frete=round(quote.freight, 2), calculado=True)


@router.get("/config")
def freight_config(calculator: FreightCalculator = Depends(get_freight_calculator)):
    config = calculator.config
    return {
        "price_per_km": config.price_per_km,
        "minimum_freight": config.minimum_freight,
        "store_address": config.store_address,
    }
