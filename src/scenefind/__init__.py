"""scenefind - find scene nodes by attached component type."""

__version__ = "0.1.0"
