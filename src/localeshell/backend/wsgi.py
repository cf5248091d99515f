"""WSGI entrypoint for deploying the LocaleShell backend."""

from localeshell.backend.app import create_app

# WSGI servers look up a module-level variable named ``application``.
application = create_app()
