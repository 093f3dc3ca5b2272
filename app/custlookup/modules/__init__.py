"""
Feature modules.

Each module owns its models, service layer and HTTP surface:
- customers: read-only customer lookup
"""
