"""Expose translation bundles addressed as ``{locale}/{namespace}``."""

from __future__ import annotations

from flask import Blueprint, jsonify

from localeshell.backend.app.localization import normalise_locale
from localeshell.backend.app.localization.registry import bundle_to_dict
from localeshell.backend.app.request_locale import get_extension, run_async

blueprint = Blueprint("translations", __name__, url_prefix="/api/v1/translations")


@blueprint.get("/")
def get_catalog_metadata():
    """Describe the supported locales and namespaces."""

    catalog = get_extension().runtime.catalog
    payload = {
        "default_locale": catalog.default_locale,
        "default_namespace": catalog.default_namespace,
        "namespaces": list(catalog.namespaces),
        "locales": [
            {
                "code": info.code,
                "name": info.name,
                "native_name": info.native_name,
                "direction": catalog.direction(info.code),
            }
            for info in catalog.locales
        ],
    }
    return jsonify(payload), 200


@blueprint.get("/<locale>/<namespace>")
def get_bundle(locale: str, namespace: str):
    """Return one bundle, falling back to the default locale on a miss.

    Unknown namespaces produce an empty ``resources`` mapping rather than an
    error so the client renders keys verbatim.
    """

    runtime = get_extension().runtime
    resolved = normalise_locale(locale, runtime.catalog) or runtime.catalog.default_locale
    bundle = run_async(runtime.loader.load(resolved, namespace))
    payload = {
        "locale": resolved,
        "namespace": namespace,
        "resources": bundle_to_dict(bundle),
    }
    return jsonify(payload), 200
