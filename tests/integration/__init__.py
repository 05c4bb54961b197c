"""
API test package for the Todo service.

Tests use the Flask test client against both task store backends and cover:
- CRUD operations on /task and /tasks
- Request validation (content type, JSON body, ids)
- Translation of store errors into HTTP responses
"""
