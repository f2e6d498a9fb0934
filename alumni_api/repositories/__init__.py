"""
Persistence adapters.

These modules encapsulate how data is stored/retrieved. Services depend on the
repository object they are constructed with instead of opening sessions.
"""
