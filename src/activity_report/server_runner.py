"""Serve the conversion API with uvicorn."""

from __future__ import annotations

import logging
import threading
import webbrowser
from typing import Optional

import uvicorn

from .config import FieldMapping, ReportSettings
from .webapp import create_app

logger = logging.getLogger(__name__)

DOCS_PATH = "/docs"


def docs_url(host: str, port: int) -> str:
    return f"http://{host}:{port}{DOCS_PATH}"


def run_server(
    *,
    host: str = "127.0.0.1",
    port: int = 8765,
    fields: Optional[FieldMapping] = None,
    settings: Optional[ReportSettings] = None,
    open_browser: bool = False,
    log_level: str = "info",
) -> None:
    """Block serving the API; the docs page opens once uvicorn has had a moment to bind."""
    app = create_app(fields=fields, settings=settings)
    url = docs_url(host, port)
    logger.info("Conversion API docs at %s", url)

    if open_browser:
        opener = threading.Timer(1.0, _open_docs, args=(url,))
        opener.daemon = True
        opener.start()

    uvicorn.run(app, host=host, port=port, log_level=log_level)


def _open_docs(url: str) -> None:
    try:
        webbrowser.open(url)
    except webbrowser.Error:
        logger.exception("Could not open a browser for %s", url)
