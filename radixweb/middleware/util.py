"""Origin matching helpers."""

from __future__ import annotations

_MAX_AUTHORITY_LENGTH = 253


def match_scheme(domain: str, pattern: str) -> bool:
    """Return True when ``domain`` and ``pattern`` share the same scheme."""
    didx = domain.find(":")
    pidx = pattern.find(":")
    return didx != -1 and pidx != -1 and domain[:didx] == pattern[:pidx]


def match_subdomain(domain: str, pattern: str) -> bool:
    """Return True when ``domain`` matches a ``*`` wildcard ``pattern``."""
    if not match_scheme(domain, pattern):
        return False
    didx = domain.find("://")
    pidx = pattern.find("://")
    if didx == -1 or pidx == -1:
        return False
    dom_auth = domain[didx + 3 :]
    if len(dom_auth) > _MAX_AUTHORITY_LENGTH:
        return False
    pat_auth = pattern[pidx + 3 :]

    dom_parts = dom_auth.split(".")[::-1]
    pat_parts = pat_auth.split(".")[::-1]
    for i, part in enumerate(dom_parts):
        if i >= len(pat_parts):
            return False
        expected = pat_parts[i]
        if expected == "*":
            return True
        if expected != part:
            return False
    return False