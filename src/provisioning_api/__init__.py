"""
provisioning_api

Group provisioning API: list, create and delete groups, and read group
membership under a global-admin / sub-admin visibility model.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
