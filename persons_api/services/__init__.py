"""
High-level use cases for the persons API.

Each service module orchestrates the repositories to implement the
directory's rules (validate a person, replace a user's roles, seed the
starter data). Routers call these services instead of using sessions or
repositories directly.
"""
