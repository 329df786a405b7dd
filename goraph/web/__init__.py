"""Web service that serves the dependency graph to the browser visualizer."""

from goraph.web.app import create_app

__all__ = ["create_app"]
