"""StormForge - a small CRUD service over a single User resource."""

__version__ = "1.0.0"
