"""Domain layer - Pure business logic.

Entities, enums, value objects, validators and protocols (ports). The domain
layer has NO dependencies on frameworks or infrastructure.

Structure:
- entities/: Domain entities (mutable, have identity)
- enums/: Closed sets of domain values (roles, statuses, token purposes)
- errors/: Domain-specific error dataclasses
- value_objects/: Immutable values (rate limit rules, password strength)
- validators/: Pure validation functions (username, password strength)
- protocols/: Ports implemented by infrastructure adapters
"""
