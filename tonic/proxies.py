"""Trusted proxy networks and client address resolution from forwarding headers."""

from __future__ import annotations

import ipaddress
from typing import Iterable, Iterator, Optional, Sequence, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]

DEFAULT_TRUSTED_PROXIES: tuple[str, ...] = ("0.0.0.0/0", "::/0")

_MAX_PREFIX = {4: 32, 6: 128}


def _normalize(address: IPAddress) -> IPAddress:
    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped is not None:
        return address.ipv4_mapped
    return address


def parse_ip(ip: Union[str, IPAddress]) -> Optional[IPAddress]:
    """Parse an IP address, or return None when it is not one.

    IPv4 addresses, including IPv4-mapped IPv6 ones, come back as
    IPv4Address; all others as IPv6Address. Scoped addresses are rejected.
    """
    if isinstance(ip, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return _normalize(ip)
    if not isinstance(ip, str) or "%" in ip:
        return None
    try:
        address = ipaddress.ip_address(ip)
    except ValueError:
        return None
    return _normalize(address)


def _parse_network(proxy: str) -> IPNetwork:
    if "/" not in proxy:
        address = parse_ip(proxy)
        if address is None:
            raise ValueError(f"invalid IP address: {proxy}")
        return ipaddress.ip_network(f"{address}/{_MAX_PREFIX[address.version]}")
    address_part, _, prefix = proxy.partition("/")
    if "%" in address_part or not prefix.isdigit():
        raise ValueError(f"invalid CIDR address: {proxy}")
    try:
        return ipaddress.ip_network(proxy, strict=False)
    except ValueError:
        raise ValueError(f"invalid CIDR address: {proxy}") from None


def _iter_networks(proxies: Iterable[str]) -> Iterator[IPNetwork]:
    for proxy in proxies:
        yield _parse_network(proxy)


def prepare_trusted_cidrs(proxies: Optional[Iterable[str]]) -> Optional[list[IPNetwork]]:
    """Turn addresses and CIDRs into networks; None stays None.

    A bare address becomes a single-host network. Raises ValueError on the
    first entry that is neither.
    """
    if proxies is None:
        return None
    return list(_iter_networks(proxies))


class TrustedProxies:
    """The set of proxy networks whose forwarding headers are believed.

    By default every address is trusted. ``None`` disables trust entirely.
    """

    def __init__(self, proxies: Optional[Sequence[str]] = DEFAULT_TRUSTED_PROXIES) -> None:
        self.proxies: Optional[list[str]] = None
        self._cidrs: Optional[list[IPNetwork]] = None
        self.set_trusted_proxies(proxies)

    def set_trusted_proxies(self, proxies: Optional[Sequence[str]]) -> None:
        """Replace the trusted proxies.

        On an invalid entry ValueError is raised and the networks parsed
        before it remain in effect.
        """
        self.proxies = None if proxies is None else list(proxies)
        if self.proxies is None:
            self._cidrs = None
            return
        parsed: list[IPNetwork] = []
        try:
            for network in _iter_networks(self.proxies):
                parsed.append(network)
        finally:
            self._cidrs = parsed

    def cidrs(self) -> Optional[tuple[IPNetwork, ...]]:
        """Return the trusted networks, or None when trust is disabled."""
        return None if self._cidrs is None else tuple(self._cidrs)

    def is_trusted_proxy(self, ip: Union[str, IPAddress]) -> bool:
        """Return True when ``ip`` lies in one of the trusted networks."""
        if self._cidrs is None:
            return False
        address = parse_ip(ip)
        if address is None:
            return False
        return any(address in network for network in self._cidrs)

    def is_unsafe(self) -> bool:
        """Return True when every IPv4 or every IPv6 address is trusted."""
        return self.is_trusted_proxy("0.0.0.0") or self.is_trusted_proxy("::")

    def validate_header(self, header: str) -> Optional[str]:
        """Return the client address from an X-Forwarded-For style header.

        Entries are walked from the last to the first; the first one that is
        not a trusted proxy, or the first entry of all, is the client. None
        is returned for an empty header or when an invalid entry is met.
        """
        if not header:
            return None
        items = header.split(",")
        for position in range(len(items) - 1, -1, -1):
            candidate = items[position].strip()
            if parse_ip(candidate) is None:
                break
            if position == 0 or not self.is_trusted_proxy(candidate):
                return candidate
        return None