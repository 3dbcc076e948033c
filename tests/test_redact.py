from __future__ import annotations

from pyinventory._redact import redact_for_log


def test_redact_for_log_masks_credentials() -> None:
    params = {"pageSize": "300", "key": "AIza-secret", "access_token": "ya29.other"}

    redacted = redact_for_log(params)
    assert redacted == {"pageSize": "300", "key": "<redacted>", "access_token": "<redacted>"}
    assert params["key"] == "AIza-secret"


def test_redact_for_log_matches_header_names_case_insensitively() -> None:
    headers = {"Authorization": "Bearer ya29.token", "accept": "application/json", "X-Goog-Api-Key": "k"}

    redacted = redact_for_log(headers)
    assert redacted["Authorization"] == "<redacted>"
    assert redacted["X-Goog-Api-Key"] == "<redacted>"
    assert redacted["accept"] == "application/json"


def test_redact_for_log_masks_nested_mappings() -> None:
    redacted = redact_for_log({"auth": {"token": "t", "user": "me"}, "retries": 3})
    assert redacted == {"auth": {"token": "<redacted>", "user": "me"}, "retries": 3}


def test_redact_for_log_truncates_long_strings() -> None:
    redacted = redact_for_log({"pageToken": "x" * 600}, max_string=10)
    assert redacted["pageToken"].startswith("x" * 10)
    assert "<truncated>" in redacted["pageToken"]
