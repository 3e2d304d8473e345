"""REST API of the Leitstand UI backend."""

from leitstand_ui.api.app import create_app

__all__ = ["create_app"]
