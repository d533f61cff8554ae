# src/llm/sanitize.py — v1
"""Strip personal data from text before it leaves the process.

Patterns are applied in order, so URLs carrying credentials are masked
before the generic long-token rule can eat their query string.
"""

from __future__ import annotations

import re

_API_KEY_FORMAT = re.compile(r"^AIza[0-9A-Za-z\-_]{35}$")

_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "[email]"),
    (
        re.compile(
            r"https?://[^\s]+[?&](token|key|api_key|apikey|auth|secret)=[^\s&]+",
            re.IGNORECASE,
        ),
        "[url-with-token]",
    ),
    (re.compile(r"\b[a-zA-Z0-9_-]{32,}\b"), "[token]"),
    (re.compile(r"\b\d{4}[-\s]?\d{4}[-\s]?\d{4}[-\s]?\d{4}\b"), "[card]"),
    (re.compile(r"\b\d{3}-\d{2}-\d{4}\b"), "[ssn]"),
    (re.compile(r"(?:\+?1[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}"), "[phone]"),
    (
        re.compile(r"\+[0-9]{1,3}[-.\s]?[0-9]{1,4}[-.\s]?[0-9]{1,4}[-.\s]?[0-9]{1,9}\b"),
        "[phone]",
    ),
    (re.compile(r"\b(?:[0-9]{1,3}\.){3}[0-9]{1,3}\b"), "[ip]"),
]


def sanitize_text(text: str) -> str:
    """Replace emails, credentials, card numbers, SSNs, phones and IPs."""
    for pattern, placeholder in _PATTERNS:
        text = pattern.sub(placeholder, text)
    return text


def is_valid_google_key(key: str) -> bool:
    """Gemini keys are ``AIza`` followed by 35 URL-safe characters."""
    return bool(_API_KEY_FORMAT.match(key))
