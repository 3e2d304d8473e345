from leitstand_ui.api.routers import dictionaries, modules, tags

__all__ = ["dictionaries", "modules", "tags"]
