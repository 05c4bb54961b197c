"""
Routes package for the Todo service.

This package contains route blueprints:
- api: JSON endpoints for creating, listing, fetching and deleting tasks
"""
