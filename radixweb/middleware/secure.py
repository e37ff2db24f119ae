"""Security-related response headers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

HEADER_X_XSS_PROTECTION = "X-XSS-Protection"
HEADER_X_CONTENT_TYPE_OPTIONS = "X-Content-Type-Options"
HEADER_X_FRAME_OPTIONS = "X-Frame-Options"
HEADER_STRICT_TRANSPORT_SECURITY = "Strict-Transport-Security"
HEADER_CONTENT_SECURITY_POLICY = "Content-Security-Policy"
HEADER_CONTENT_SECURITY_POLICY_REPORT_ONLY = "Content-Security-Policy-Report-Only"
HEADER_REFERRER_POLICY = "Referrer-Policy"


@dataclass(frozen=True)
class SecureConfig:
    """Which security headers to set; empty or zero values leave a header out."""

    xss_protection: str = ""
    content_type_nosniff: str = ""
    x_frame_options: str = ""
    hsts_max_age: int = 0
    hsts_exclude_subdomains: bool = False
    content_security_policy: str = ""
    csp_report_only: bool = False
    hsts_preload_enabled: bool = False
    referrer_policy: str = ""


DEFAULT_SECURE_CONFIG = SecureConfig(
    xss_protection="1; mode=block",
    content_type_nosniff="nosniff",
    x_frame_options="SAMEORIGIN",
)


def secure_headers(
    config: Optional[SecureConfig] = None,
    tls: bool = False,
    forwarded_proto: str = "",
) -> dict[str, str]:
    """Return the security headers for a response.

    HSTS is only emitted for TLS requests or ones forwarded as ``https``.
    """
    if config is None:
        config = DEFAULT_SECURE_CONFIG
    headers: dict[str, str] = {}
    if config.xss_protection:
        headers[HEADER_X_XSS_PROTECTION] = config.xss_protection
    if config.content_type_nosniff:
        headers[HEADER_X_CONTENT_TYPE_OPTIONS] = config.content_type_nosniff
    if config.x_frame_options:
        headers[HEADER_X_FRAME_OPTIONS] = config.x_frame_options
    if (tls or forwarded_proto == "https") and config.hsts_max_age != 0:
        suffix = "" if config.hsts_exclude_subdomains else "; includeSubdomains"
        if config.hsts_preload_enabled:
            suffix += "; preload"
        headers[HEADER_STRICT_TRANSPORT_SECURITY] = f"max-age={config.hsts_max_age}{suffix}"
    if config.content_security_policy:
        name = (
            HEADER_CONTENT_SECURITY_POLICY_REPORT_ONLY
            if config.csp_report_only
            else HEADER_CONTENT_SECURITY_POLICY
        )
        headers[name] = config.content_security_policy
    if config.referrer_policy:
        headers[HEADER_REFERRER_POLICY] = config.referrer_policy
    return headers