"""HTTP API."""

from amar_foshol.api.app import create_app

__all__ = ["create_app"]
