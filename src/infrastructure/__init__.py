"""Infrastructure layer - Adapters and external integrations.

This layer contains implementations of domain protocols (ports):
- persistence/: SQLAlchemy models, repositories and the Database wrapper
- cache/: In-process TTL cache with tag invalidation, entity caches
- rate_limit/: Fixed-window limiters (in-memory and Redis)
- security/: bcrypt hashing, token generation, webhook signatures
- email/: SES and stub email adapters with templates
- notifications/: Discord webhook notifier
- logging/: structlog console adapter
- jobs/: Periodic cleanup of expired tokens and cache entries

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
