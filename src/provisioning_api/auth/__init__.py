"""
provisioning_api.auth

Session package: turns a bearer token into the acting identity.

Responsibilities:
- JWT issuing and validation helpers.
- FastAPI dependencies yielding a `Principal` and enforcing password confirmation.
"""

# Package marker.
