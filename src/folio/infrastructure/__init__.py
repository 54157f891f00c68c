"""Infrastructure layer: filesystem, Markdown, templates, site repository.

This layer wraps third-party libs (Jinja2, Python-Markdown, ruamel.yaml).
It may import from domain and css, never from services, commands, or output.
"""
