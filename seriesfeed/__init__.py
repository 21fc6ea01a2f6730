"""niconico series → RSS 2.0 feed service."""

__version__ = "0.1.0"
