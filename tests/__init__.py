# tests\__init__.py
"""
Test Suite for the Expedientes API.

Organization:
- `core`: Services, converters, security primitives and settings, run
  against an in-memory SQLite database.
- `http_api`: End-to-end tests through FastAPI's TestClient.
"""
