"""
Top-level package for the Series Tracker API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``series_tracker_api.app.main:app``.
"""

__all__ = []
