"""
Relay Application

Routes (all GET on "/"):
    ?pharmacy=vmclub&q=<query>           stateful session search, JSON verbatim
    ?pharmacy=sopharmacy&url=<target>    forward to a sopharmacy.bg URL
    ?url=<target>                        forward to any allow-listed host

Forwarded responses keep the upstream body, status and content-type.
Every response carries permissive CORS headers and OPTIONS requests
answer 200 with an empty body.
"""

import logging
from typing import Callable, Optional
from urllib.parse import urlparse

import requests
from flask import Flask, Response, jsonify, request
from flask_cors import CORS

from ..common.config_loader import Settings, load_settings
from ..common.errors import UpstreamError
from .allowlist import is_allowed_host
from .vmclub_session import VMClubSession

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], VMClubSession]


def _error(error: str, message: str, status: int) -> Response:
    response = jsonify({"error": error, "message": message})
    response.status_code = status
    return response


def create_app(settings: Optional[Settings] = None,
               session_factory: Optional[SessionFactory] = None) -> Flask:
    """
    Create the relay Flask application.

    Args:
        settings: Pipeline settings (loaded from config when omitted)
        session_factory: Builds a fresh VMClubSession per search

    Returns:
        Configured Flask app
    """
    if settings is None:
        settings = load_settings()
    relay_settings = settings.relay

    if session_factory is None:
        def session_factory() -> VMClubSession:
            return VMClubSession(
                relay_settings.vmclub_landing_url,
                relay_settings.vmclub_search_url,
                user_agent=settings.user_agent,
                accept_language=settings.accept_language,
                timeout=settings.request_timeout,
            )

    app = Flask(__name__)
    CORS(
        app,
        origins="*",
        send_wildcard=True,
        methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-CSRF-TOKEN", "Authorization"],
        max_age=86400,
    )

    forward_headers = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json, text/html",
        "Accept-Language": settings.accept_language,
    }

    @app.route("/", methods=["GET"])
    def relay():
        pharmacy = request.args.get("pharmacy", "").strip().lower()
        query = request.args.get("q")
        target_url = request.args.get("url")

        if pharmacy == "vmclub" and target_url is None:
            if not query or not query.strip():
                return _error("Missing q parameter", "Provide a search query with q=", 400)
            try:
                with session_factory() as session:
                    data = session.search(query.strip())
            except UpstreamError as e:
                logger.warning("VMClub session search failed: %s", e)
                return _error("VMClub search failed", str(e), 500)
            return jsonify(data)

        if not target_url:
            return _error("Missing url parameter", "Provide a target URL with url=", 400)

        parsed = urlparse(target_url)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            return _error("Invalid url parameter", f"Not an absolute http(s) URL: {target_url}", 400)

        host = parsed.hostname
        if pharmacy == "sopharmacy":
            allowed = relay_settings.sopharmacy_domain in host
        else:
            allowed = is_allowed_host(host, relay_settings.allowed_domains)

        if not allowed:
            logger.info("Rejected destination host: %s", host)
            return _error("Domain not allowed", f"{host} is not an allowed destination", 403)

        try:
            upstream = requests.get(target_url, headers=forward_headers, timeout=settings.request_timeout)
        except requests.RequestException as e:
            logger.warning("Forward to %s failed: %s", target_url, e)
            return _error("Failed to fetch from target URL", str(e), 500)

        content_type = upstream.headers.get("content-type", "application/octet-stream")
        return Response(upstream.content, status=upstream.status_code, content_type=content_type)

    return app
