"""Jinja2 template configuration."""

from pathlib import Path

from fastapi.templating import Jinja2Templates

from app.core.config import settings
from app.services.units import format_amount

# Template directory is at app/templates/
BASE_DIR = Path(__file__).resolve().parent.parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

templates.env.filters["amount"] = format_amount
templates.env.globals["unit_symbol"] = settings.PAYMENT_UNIT_SYMBOL
templates.env.globals["project_name"] = settings.PROJECT_NAME
