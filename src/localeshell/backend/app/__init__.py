"""Application factory for LocaleShell backend services."""

import logging
import os
from warnings import warn

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import BadRequest

from localeshell.backend.version import get_project_version

from .async_bridge import shared_bridge
from .http import problem_response
from .localization import LocaleProviderError, LocaleRuntime
from .request_locale import LocaleExtension, init_locale_sessions
from .routes import register_routes

_LOGGER = logging.getLogger(__name__)

_DEVELOPMENT_SECRET_KEY = "localeshell-development-key"


def _parse_allowed_origins(raw: str | None) -> set[str]:
    """Convert an environment variable into a normalised set of origins."""

    if not raw:
        return set()

    return {origin.strip() for origin in raw.split(",") if origin.strip()}


def create_app(runtime: LocaleRuntime | None = None) -> Flask:
    """Create and configure the Flask application instance.

    ``runtime`` lets callers share a preconfigured loader; by default the
    packaged catalog and bundles are used.
    """

    app = Flask(__name__)

    secret_key = os.getenv("LOCALESHELL_SECRET_KEY")
    if not secret_key:
        warn(
            "LOCALESHELL_SECRET_KEY is not set; using an insecure development key.",
            stacklevel=1,
        )
        secret_key = _DEVELOPMENT_SECRET_KEY
    app.config.update(SECRET_KEY=secret_key)

    allowed_origins = _parse_allowed_origins(os.getenv("LOCALESHELL_ALLOWED_ORIGINS"))
    CORS(
        app,
        resources={r"/api/*": {"origins": sorted(allowed_origins)}},
        supports_credentials=True,
        methods=["GET", "OPTIONS", "PUT"],
        allow_headers=["Content-Type"],
    )

    extension = LocaleExtension(runtime=runtime or LocaleRuntime(), bridge=shared_bridge())
    init_locale_sessions(app, extension)
    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        catalog = extension.runtime.catalog
        payload = {
            "status": "ok",
            "version": get_project_version(),
            "default_locale": catalog.default_locale,
            "supported_locales": list(catalog.locale_codes),
        }
        return jsonify(payload)

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed payloads."""

        message = error.description or "Invalid request"
        return problem_response("bad_request", status=400, message=message).to_response()

    @app.errorhandler(LocaleProviderError)
    def handle_provider_error(error: LocaleProviderError):
        """Surface wiring defects as server errors instead of degrading silently."""

        _LOGGER.error("Locale capability used outside its scope: %s", error)
        return problem_response("locale_unavailable", status=500).to_response()

    return app
