"""api-gen -- Express API boilerplate generator with a free-tier usage gate."""

__version__ = "1.0.0"
