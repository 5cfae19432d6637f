"""GET / embedded admin home page."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from ..config import settings
from ..rendering.html import render_admin_home

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def admin_home(shop: str = "", host: str = "") -> HTMLResponse:
    return HTMLResponse(render_admin_home(shop, host, settings.api_key))
