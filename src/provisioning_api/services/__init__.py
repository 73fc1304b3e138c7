"""
provisioning_api.services

Service-layer package.

Responsibilities:
- Hold the group access gateway and the collaborator protocols it consumes.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services depend only on protocols, so they are testable with in-memory fakes.
