"""
provisioning_api.db.repositories

Repository package.

Responsibilities:
- SQL implementations of the Directory (`groups`) and UserDirectory (`users`) protocols.
"""

# Package marker; repositories are imported directly from submodules.
