"""Read and change the active locale of the current client."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from localeshell.backend.app.http import problem_response
from localeshell.backend.app.localization import normalise_locale, use_locale
from localeshell.backend.app.request_locale import current_locale_session, run_async

blueprint = Blueprint("locale", __name__, url_prefix="/api/v1/locale")


def _locale_payload() -> dict[str, object]:
    capability = use_locale()
    document = current_locale_session().document
    return {
        "locale": capability.locale,
        "is_loading": capability.is_loading,
        "lang": document.lang,
        "direction": document.dir,
    }


@blueprint.get("")
def get_locale():
    return jsonify(_locale_payload()), 200


@blueprint.put("")
def put_locale():
    """Apply an explicit locale change and persist it for later visits."""

    payload = request.get_json(silent=True) or {}
    requested = payload.get("locale") if isinstance(payload, dict) else None
    catalog = current_locale_session().engine.catalog
    locale = normalise_locale(requested, catalog)
    if locale is None:
        return problem_response(
            "unsupported_locale",
            status=400,
            message=f"Unsupported locale: {requested!r}",
            supported_locales=list(catalog.locale_codes),
        ).to_response()

    run_async(use_locale().set_locale(locale))
    return jsonify(_locale_payload()), 200
