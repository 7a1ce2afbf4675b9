"""
Persistence adapters.

Each repository wraps the shared Store and returns typed records. Services
depend on these classes rather than touching sessions or tables directly.
"""
