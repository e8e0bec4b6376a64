"""
Security headers stage (Helmet-style hardening headers).

Headers added to every response:
- X-Content-Type-Options: nosniff (no MIME type sniffing)
- X-Frame-Options: DENY (no framing, against clickjacking)
- X-XSS-Protection: 1; mode=block (legacy browser XSS filter)
- Strict-Transport-Security (HTTPS only for one year, subdomains included)
- Content-Security-Policy: default-src 'self' (same-origin resources only)
"""

from __future__ import annotations

from echo_mirror.pipeline.base import CallNext, Exchange, Outcome, Stage

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "Content-Security-Policy": "default-src 'self'",
}


class SecurityHeadersStage(Stage):
    """Stage the security headers on the exchange's response channel, then continue."""

    async def process(self, exchange: Exchange, call_next: CallNext) -> Outcome:
        exchange.channel.headers.update(SECURITY_HEADERS)
        return await call_next(exchange)
