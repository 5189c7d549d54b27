# Inventory module
"""
Inventory form module

This module handles:
- Entries: per-(product, room) issued/returned quantities, mutually exclusive
- Summary: per-product and per-room totals, net totals
- Storage: auto-save / restore / clear of the in-progress form
- Session: debounced auto-save, backend save, CSV export, clear

Sub-modules:
- catalog: products, rooms and reporters in display order
- client: HTTP client for the inventory backend
- api: JSON endpoints over the form session
"""

from .api import router as form_router

__all__ = ["form_router"]
