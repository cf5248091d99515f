"""Backend services for the LocaleShell application."""
