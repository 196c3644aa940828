"""Test suite for Hypea API.

Test structure follows the test pyramid:
- unit/: Unit tests - domain logic and adapters in isolation
- integration/: Integration tests - repositories on SQLite, real structlog
- api/: API endpoint tests - HTTP contract through TestClient
"""
