"""
Destination host checks for the relay.
"""

from typing import Iterable, Optional


def is_allowed_host(host: Optional[str], allowed_domains: Iterable[str]) -> bool:
    """
    Check a host against the allow-list.

    A host is allowed when it equals an allowed domain or is one of its
    subdomains ("sofia.vmclub.bg" matches "vmclub.bg", "evilvmclub.bg" does not).
    """
    if not host:
        return False
    host = host.lower().rstrip('.')
    for domain in allowed_domains:
        domain = domain.lower().strip()
        if domain and (host == domain or host.endswith('.' + domain)):
            return True
    return False
