# krishi_jyothi/routers/widgets.py
import logging

from fastapi import APIRouter, Form, status
from fastapi.responses import JSONResponse

from krishi_jyothi.services.weather_service import get_weather

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Widgets"])


@router.post("/subscribe")
def subscribe(email: str | None = Form(default=None)):
    """
    Newsletter signup from the footer.

    Nothing is stored; the address is only logged.
    """
    if not email or not email.strip():
        return JSONResponse(
            {"error": "Email is required"},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    logger.info("Subscribed email: %s", email.strip())
    return {"success": True, "message": "Successfully subscribed to newsletter"}


@router.get("/weather")
def weather(location: str | None = None):
    """
    Weather widget payload: current conditions, 5-day forecast, farming tips.

    Unknown cities get Mumbai's payload.
    """
    if not location:
        return JSONResponse(
            {"error": "Location parameter is required"},
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return get_weather(location)
