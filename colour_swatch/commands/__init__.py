"""CLI commands.

Every .py file in this package that defines a `command` object is
auto-registered by colour_swatch.registry.discover().
"""
