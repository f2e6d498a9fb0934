"""
High-level use cases for the alumni API.

Each service orchestrates the repository and adapters (mailer, token signing,
image storage) it is constructed with. Routers call these services instead of
touching the database or files directly.
"""
