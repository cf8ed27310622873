"""trash-expiry - remove old items from freedesktop.org trash directories."""

__version__ = "0.1.0"
