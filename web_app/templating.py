"""Jinja2 templates and error page rendering. No app imports to avoid circular deps."""

import os

from fastapi import Request
from fastapi.templating import Jinja2Templates

template_dir = os.path.join(os.path.dirname(__file__), "..", "ux", "web")
templates = Jinja2Templates(directory=template_dir)


def render_error(request: Request, status_code: int, title: str, message: str, back_url: str = "/"):
    """Render the themed error page with a link back home."""
    return templates.TemplateResponse(
        request,
        "error.html",
        {"title": title, "message": message, "back_url": back_url},
        status_code=status_code,
    )
