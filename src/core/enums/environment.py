"""Application environment types.

Used by Settings to pick environment-specific adapters (email backend,
log rendering) and behaviour.

Environments:
- DEVELOPMENT: Local development, human-readable logs
- TESTING: Automated test execution
- CI: Continuous integration runs
- PRODUCTION: Production deployment (JSON logs, SES email)
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
