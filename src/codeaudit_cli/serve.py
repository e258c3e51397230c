"""Local HTTP server exposing the analyzers as a JSON API.

Endpoints (all bound to 127.0.0.1):

    GET  /                 endpoint index
    GET  /api/languages    supported languages
    POST /api/analyze      {code, language?, filename?}
    POST /api/detect       {code}
    POST /api/cicd         {code}
"""

from __future__ import annotations

import json
import logging
import threading
import webbrowser
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any

from . import __version__
from .analyzer import analyze, check_input_size, check_language_mismatch, resolve_language
from .cicd import analyze_cicd_config
from .detection import detect_language
from .languages import Language, language_label

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8420


class BadRequest(Exception):
    """Client sent something the API cannot work with."""


def _require_code(body: dict[str, Any]) -> str:
    code = body.get("code")
    if not isinstance(code, str) or not code.strip():
        raise BadRequest("'code' is required")
    try:
        check_input_size(code)
    except ValueError as e:
        raise BadRequest(str(e))
    return code


def handle_analyze(body: dict[str, Any]) -> dict[str, Any]:
    code = _require_code(body)
    language = body.get("language") or resolve_language(code, body.get("filename"))
    mismatch = check_language_mismatch(code, language)
    return {
        "language": language,
        "analysisResult": analyze(code, language).to_dict(),
        "languageMismatch": mismatch.to_dict() if mismatch else None,
    }


def handle_detect(body: dict[str, Any]) -> dict[str, Any]:
    return detect_language(_require_code(body)).to_dict()


def handle_cicd(body: dict[str, Any]) -> dict[str, Any]:
    return analyze_cicd_config(_require_code(body)).to_dict()


ROUTES = {
    "/api/analyze": handle_analyze,
    "/api/detect": handle_detect,
    "/api/cicd": handle_cicd,
}


class CodeAuditHandler(BaseHTTPRequestHandler):
    """HTTP handler that dispatches JSON requests to the analyzers."""

    def do_GET(self):
        if self.path == "/":
            self._send_json(200, {
                "name": "codeaudit",
                "version": __version__,
                "endpoints": ["GET /api/languages", *(f"POST {p}" for p in ROUTES)],
            })
        elif self.path == "/api/languages":
            self._send_json(200, [
                {"value": lang.value, "label": language_label(lang.value)} for lang in Language
            ])
        else:
            self._send_json(404, {"error": f"Not found: {self.path}"})

    def do_POST(self):
        route = ROUTES.get(self.path)
        if route is None:
            self._send_json(404, {"error": f"Not found: {self.path}"})
            return
        try:
            body = self._read_json()
            self._send_json(200, route(body))
        except BadRequest as e:
            self._send_json(400, {"error": str(e)})
        except Exception as e:
            logger.exception("request to %s failed", self.path)
            self._send_json(500, {"error": str(e)})

    def _read_json(self) -> dict[str, Any]:
        length = int(self.headers.get("Content-Length") or 0)
        raw = self.rfile.read(length) if length else b""
        try:
            body = json.loads(raw or b"{}")
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise BadRequest("Request body must be valid JSON")
        if not isinstance(body, dict):
            raise BadRequest("Request body must be a JSON object")
        return body

    def _send_json(self, status: int, payload: Any) -> None:
        content = json.dumps(payload).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(content)))
        self.send_header("Access-Control-Allow-Origin", "*")
        self.end_headers()
        self.wfile.write(content)

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


def make_server(port: int = DEFAULT_PORT) -> HTTPServer:
    HTTPServer.allow_reuse_address = True
    return HTTPServer(("127.0.0.1", port), CodeAuditHandler)


def start_server(port: int = DEFAULT_PORT, open_browser: bool = False) -> None:
    """Start the local API server and block until interrupted.

    Args:
        port: Port to serve on
        open_browser: Whether to open the endpoint index in a browser
    """
    server = make_server(port)
    url = f"http://localhost:{server.server_address[1]}"
    logger.info("serving on %s", url)

    if open_browser:
        threading.Timer(0.5, lambda: webbrowser.open(url)).start()

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
