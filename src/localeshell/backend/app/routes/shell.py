"""Serve the HTML shell rendered in the detected locale."""

from __future__ import annotations

from flask import Blueprint, render_template

from localeshell.backend.app.request_locale import current_locale_session, run_async

blueprint = Blueprint("shell", __name__)

_SHELL_NAMESPACES = ("common", "workflows")


@blueprint.get("/")
def serve_shell():
    locale_session = current_locale_session()
    engine = locale_session.engine
    run_async(engine.load_namespaces(_SHELL_NAMESPACES))
    catalog = engine.catalog

    return render_template(
        "index.html",
        document=locale_session.document,
        t=engine.t,
        locales=catalog.locales,
        current_locale=engine.language,
        language_name=catalog.locale_info(engine.language).native_name,
    )
