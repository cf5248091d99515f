"""Locale resolution and translation bundle loading for the LocaleShell UI."""
