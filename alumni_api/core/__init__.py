"""
Core utilities shared across the alumni API.

This package hosts configuration helpers (env vars, paths), logging setup,
password hashing, the SMTP mailer adapter and the domain error catalogue.
Services and routers depend on these primitives instead of reading
os.environ or talking to smtplib directly.
"""
