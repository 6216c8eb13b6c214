"""PIN and operational routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from linkminder.api.dependencies import get_pin_store
from linkminder.core.metrics import metrics_response
from linkminder.models.dto import PinSetRequest, PinStatusResponse, PinVerifyRequest, PinVerifyResponse
from linkminder.storage.pins import PinStore

router = APIRouter()


@router.get("/pin", response_model=PinStatusResponse, summary="Whether a private PIN is set")
async def pin_status(pins: PinStore = Depends(get_pin_store)) -> PinStatusResponse:
    return PinStatusResponse(has_pin=pins.has_pin())


@router.post("/pin", response_model=PinStatusResponse, summary="Set or change the private PIN")
async def set_pin(request: PinSetRequest, pins: PinStore = Depends(get_pin_store)) -> PinStatusResponse:
    pins.set_pin(request.pin, current=request.current)
    return PinStatusResponse(has_pin=True)


@router.post("/pin/verify", response_model=PinVerifyResponse, summary="Check a PIN without unlocking anything")
async def verify_pin(request: PinVerifyRequest, pins: PinStore = Depends(get_pin_store)) -> PinVerifyResponse:
    return PinVerifyResponse(match=pins.verify_pin(request.pin))


@router.get("/metrics", summary="Prometheus metrics")
async def get_metrics():
    return metrics_response()


__all__ = ["router"]
