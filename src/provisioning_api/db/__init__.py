"""
provisioning_api.db

Directory storage package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, and the repositories that implement
  the Directory and UserDirectory protocols.
"""

# Package marker.
