# src/supportdesk/ui.py
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .endpoint import TOOL_NAME
from .models import AppConfig
from .schema import form_fields

RESOURCE_URI = "ui://customer-support/mcp-app.html"
RESOURCE_MIME_TYPE = "text/html;profile=mcp-app"
APP_HTML = "mcp-app.html"

# Replaced with the form definition when the document is served
BOOTSTRAP_MARKER = "/*SUPPORTDESK_BOOTSTRAP*/null"

PACKAGED_UI_DIR = Path(__file__).parent / "static"


def ui_dir(override: Optional[Union[str, Path]] = None) -> Path:
    if override is not None:
        return Path(override)
    return Path(os.getenv("SUPPORTDESK_UI_DIR") or PACKAGED_UI_DIR)


def read_app_html(directory: Optional[Union[str, Path]] = None) -> str:
    """Read the built form document. Read on every call, never cached."""
    return (ui_dir(directory) / APP_HTML).read_text(encoding="utf-8")


def app_bootstrap(config: AppConfig, transport: str) -> Dict[str, Any]:
    """
    Everything the form needs to render without calling back to the server.
    transport is "mcp" (submit via the host's tools/call bridge) or "http".
    """
    return {
        "brand": config.brand.model_dump(),
        "fields": form_fields(config),
        "tool": TOOL_NAME,
        "transport": transport,
    }


def render_app_html(config: AppConfig, transport: str,
                    directory: Optional[Union[str, Path]] = None) -> str:
    data = json.dumps(app_bootstrap(config, transport)).replace("</", "<\\/")
    return read_app_html(directory).replace(BOOTSTRAP_MARKER, data)
