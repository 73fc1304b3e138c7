"""
provisioning_api.api

API package for the provisioning service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring, error mapping and request/response models.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: request validation + auth + delegation to the gateway.
