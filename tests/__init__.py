"""
Test suite for the Todo service.

This package contains:
- unit/: Store contract, backend and configuration tests
- integration/: HTTP tests through the Flask test client
"""
