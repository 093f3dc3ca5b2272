"""
Customers module (read-only).

Scope:
- Single-customer lookup by id, optionally bounded by a created_at range
- JSON endpoint + CLI on top of the same service call
- No writes: customer lifecycle is owned by the upstream system
"""
