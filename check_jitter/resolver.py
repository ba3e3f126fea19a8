"""Target address resolution.

Literal IPv4/IPv6 addresses are used as-is.  Hostnames go through
dnspython; only the first address of the answer is ever probed.
"""

from __future__ import annotations

import ipaddress
import logging
import re
from typing import Callable

import dns.exception
import dns.rdatatype
import dns.resolver

from check_jitter.config import DNS_LIFETIME
from check_jitter.errors import DnsLookupFailed, DnsResolutionError

logger = logging.getLogger(__name__)

# Signature: (hostname) -> list of address strings
LookupFunc = Callable[[str], list]

_LABEL_RE = re.compile(r"^(?!-)[A-Za-z0-9_-]{1,63}(?<!-)$")


def parse_ip(text: str) -> str | None:
    """Return the normalized address if *text* is an IP literal, else None."""
    candidate = text.strip()
    if candidate.startswith("[") and candidate.endswith("]"):
        candidate = candidate[1:-1]
    try:
        return str(ipaddress.ip_address(candidate))
    except ValueError:
        return None


def is_valid_hostname(text: str) -> bool:
    name = text[:-1] if text.endswith(".") else text
    if not name or len(name) > 253:
        return False
    try:
        name = name.encode("idna").decode("ascii")
    except UnicodeError:
        return False
    labels = name.split(".")
    if labels[-1].isdigit():
        # "999.999.999.999" is a broken address, not a hostname
        return False
    return all(_LABEL_RE.match(label) for label in labels)


def validate_host(text: str) -> bool:
    """True if *text* is an IP literal or a syntactically valid hostname."""
    return parse_ip(text) is not None or is_valid_hostname(text)


def dns_lookup(hostname: str, lifetime: float = DNS_LIFETIME) -> list[str]:
    """Resolve *hostname* via dnspython, A records first, AAAA as fallback.

    Raises
    ------
    DnsLookupFailed
        The name exists nowhere or has no address records.
    DnsResolutionError
        The resolver failed (timeout, no reachable nameservers, ...).
    """
    resolver = dns.resolver.Resolver()
    resolver.lifetime = lifetime

    for rdtype in (dns.rdatatype.A, dns.rdatatype.AAAA):
        try:
            answer = resolver.resolve(hostname, rdtype, search=True)
        except dns.resolver.NXDOMAIN:
            logger.debug("NXDOMAIN for %s", hostname)
            raise DnsLookupFailed(hostname) from None
        except dns.resolver.NoAnswer:
            logger.debug("No %s records for %s", dns.rdatatype.to_text(rdtype), hostname)
            continue
        except dns.exception.DNSException as exc:
            raise DnsResolutionError(hostname, str(exc)) from exc

        addresses = [str(rdata) for rdata in answer]
        if addresses:
            return addresses

    return []


def resolve_addresses(host: str, lookup: LookupFunc = dns_lookup) -> list[str]:
    """All candidate addresses for *host*, without touching DNS for literals."""
    literal = parse_ip(host)
    if literal is not None:
        return [literal]

    addresses = list(lookup(host))
    if not addresses:
        raise DnsLookupFailed(host)
    return addresses


def resolve_address(host: str, lookup: LookupFunc = dns_lookup) -> str:
    """Resolve *host* to the single address that will be probed."""
    addresses = resolve_addresses(host, lookup)
    if len(addresses) > 1:
        logger.info(
            "%s resolved to %d addresses, using the first: %s",
            host, len(addresses), addresses[0],
        )
    logger.debug("Resolved %s to %s", host, addresses[0])
    return addresses[0]
