"""Templating — jinja environment, page compilation and the compiled-template cache."""
