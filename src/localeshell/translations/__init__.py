"""Translation bundles laid out as ``{locale}/{namespace}.json``."""
