# src/supportdesk/web.py
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI
from fastapi.responses import HTMLResponse, JSONResponse

from .endpoint import TicketEndpoint
from .models import AppConfig
from .schema import form_fields
from .ui import render_app_html

STATUS_CODES = {"validation": 422, "delivery": 502, "internal": 500}


def create_app(config: AppConfig, endpoint: Optional[TicketEndpoint] = None,
               ui_dir: Optional[str] = None) -> FastAPI:
    app = FastAPI(title=config.brand.name)
    endpoint = endpoint or TicketEndpoint(config)

    @app.get("/", response_class=HTMLResponse)
    def index():
        return render_app_html(config, "http", ui_dir)

    @app.get("/form")
    def form():
        return {"brand": config.brand.model_dump(), "fields": form_fields(config)}

    # sync route: SMTP blocks, FastAPI runs it in the threadpool
    @app.post("/tickets")
    def submit(payload: Dict[str, Any] = Body(...)):
        response = endpoint.submit(payload)
        return JSONResponse(response.payload, status_code=STATUS_CODES.get(response.error_kind, 200))

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app
