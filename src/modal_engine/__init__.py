"""Modal (insert/normal) input engine for editable text surfaces."""

__all__ = [
    "adapters",
    "config",
    "dispatch",
    "machine",
    "motions",
    "runtime",
    "surface",
]

__version__ = "0.1.0"
