from __future__ import annotations

from provisioning_api.observability.logging import _add_service_name, _redact_credentials


def test_credentials_are_scrubbed() -> None:
    event = {"event": "token_issued", "access_token": "eyJ...", "actor": "alice"}
    assert _redact_credentials(None, "info", event) == {
        "event": "token_issued",
        "access_token": "***",
        "actor": "alice",
    }


def test_service_name_does_not_override_bound_value() -> None:
    processor = _add_service_name("provisioning-api")
    assert processor(None, "info", {"event": "x"})["service"] == "provisioning-api"
    assert processor(None, "info", {"event": "x", "service": "other"})["service"] == "other"
