"""Log scrubbing: emails become fingerprints, credentials never reach the renderer."""

from grantees.middleware.logging import REDACTED, email_fingerprint, redact_sensitive
from grantees.middleware.request_id import resolve_request_id


def _process(**event):
    return redact_sensitive(None, "info", event)


class TestEmailFingerprint:
    def test_stable_and_case_insensitive(self):
        assert email_fingerprint("Ada@Example.com") == email_fingerprint(" ada@example.com ")

    def test_does_not_contain_address(self):
        fingerprint = email_fingerprint("ada@example.com")
        assert fingerprint.startswith("email:")
        assert "ada" not in fingerprint
        assert len(fingerprint) == len("email:") + 12


class TestRedactSensitive:
    def test_email_values_fingerprinted(self):
        event = _process(event="email_sent", to="ada@example.com")
        assert event["to"] == email_fingerprint("ada@example.com")
        assert event["event"] == "email_sent"

    def test_email_inside_text(self):
        event = _process(event="welcome_email_error", exception="Traceback ...\nValueError: bad ada@example.com\n")
        assert "ada@example.com" not in event["exception"]
        assert email_fingerprint("ada@example.com") in event["exception"]

    def test_bearer_token_scrubbed(self):
        event = _process(event="auth_failed", header="Bearer eyJhbGciOiJIUzI1NiJ9.e30.sig")
        assert event["header"] == f"Bearer {REDACTED}"

    def test_secret_keys_redacted(self):
        event = _process(event="x", password="Builder2026", Authorization="Bearer abc", api_key=123)
        assert event["password"] == REDACTED
        assert event["Authorization"] == REDACTED
        assert event["api_key"] == REDACTED

    def test_other_values_untouched(self):
        event = _process(event="credits_consumed", user_id=7, amount=3, tx_hash="0x" + "a" * 64)
        assert event == {"event": "credits_consumed", "user_id": 7, "amount": 3, "tx_hash": "0x" + "a" * 64}


class TestResolveRequestId:
    def test_well_formed_id_kept(self):
        assert resolve_request_id("req-123.abc_9") == "req-123.abc_9"

    def test_missing_id_generated(self):
        assert len(resolve_request_id(None)) == 36

    def test_malformed_ids_replaced(self):
        for bad in ("x" * 65, "has space", "line\nbreak", ""):
            request_id = resolve_request_id(bad)
            assert request_id != bad
            assert len(request_id) == 36
