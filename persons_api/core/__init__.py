"""
Core utilities shared across the persons API.

This package hosts configuration (env vars, paths), logging setup and the
identifier generator. Routers, services and repositories should depend on
these primitives instead of reading os.environ directly.
"""
