"""Infinito Catalog.

Printable product catalogs from the Infinito Piercing storefront.
"""

__version__ = "0.1.0"
