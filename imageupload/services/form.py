from pathlib import Path

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from imageupload.config import Settings

UPLOAD_ACTION = "/imageUpload"

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def render_form(request: Request, message: str | None = None) -> HTMLResponse:
    app_settings: Settings = request.app.state.settings
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": app_settings.app_name,
            "message": message,
            "upload_action": UPLOAD_ACTION,
            "field_name": app_settings.upload_field,
        },
    )
