from __future__ import annotations

import hashlib
import hmac
import re
import time

from yogaflow.core.errors import SignatureError

SIGNATURE_HEADER = "mux-signature"
DEFAULT_TOLERANCE_SECONDS = 300

_HEX_RE = re.compile(r"[0-9a-f]+")


def parse_signature_header(header: str) -> tuple[int, list[str]]:
    """
    Split a ``Mux-Signature`` header into its timestamp and v1 signatures.

    Format: ``t=1565125718,v1=854ece4c...`` (several v1 entries are allowed
    while a secret is being rotated).
    """
    timestamp: int | None = None
    signatures: list[str] = []
    for part in (header or "").split(","):
        key, sep, value = part.strip().partition("=")
        if not sep:
            continue
        if key == "t":
            try:
                timestamp = int(value)
            except ValueError:
                raise SignatureError("Malformed signature timestamp") from None
        elif key == "v1" and value:
            signature = value.strip().lower()
            if not _HEX_RE.fullmatch(signature):
                raise SignatureError("Malformed signature header")
            signatures.append(signature)

    if timestamp is None or not signatures:
        raise SignatureError("Malformed signature header")
    return timestamp, signatures


def compute_signature(*, secret: str, timestamp: int, raw_body: bytes) -> str:
    payload = f"{timestamp}.".encode("utf-8") + raw_body
    return hmac.new(
        key=secret.encode("utf-8"),
        msg=payload,
        digestmod=hashlib.sha256,
    ).hexdigest()


def verify_signature(
    *,
    raw_body: bytes,
    header: str | None,
    secret: str | None,
    tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
    now: float | None = None,
) -> None:
    """Raise ``SignatureError`` unless ``header`` is a fresh, valid signature of ``raw_body``."""
    if not secret:
        # No secret configured means every delivery is rejected.
        raise SignatureError("Webhook signing secret is not configured")
    if not header:
        raise SignatureError("Missing signature header")

    timestamp, signatures = parse_signature_header(header)

    current = time.time() if now is None else now
    if abs(current - timestamp) > tolerance_seconds:
        raise SignatureError("Signature timestamp outside tolerance")

    expected = compute_signature(secret=secret, timestamp=timestamp, raw_body=raw_body)
    if not any(hmac.compare_digest(expected, candidate) for candidate in signatures):
        raise SignatureError("Signature mismatch")
