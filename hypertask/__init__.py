"""Server-rendered task tracker that answers htmx requests with HTML fragments."""

__version__ = "1.0.0"
