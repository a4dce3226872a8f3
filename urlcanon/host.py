"""
urlcanon.host — Host names: domain names and IPv4 addresses.

A host is either a ``DomainName`` (lower-cased labels) or an
``IPv4Address`` (32-bit integer).  Both render a display form and a
proximity-order form; the latter is the host part of a dedup key.
"""

import re
from dataclasses import dataclass
from typing import Union

from urlcanon.errors import OutOfRangeError

ILLEGAL_IPV4 = -1
MAX_IPV4 = 2 ** 32 - 1

_OCTET = r"(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"
_IPV4_PATTERN = re.compile(rf"{_OCTET}\.{_OCTET}\.{_OCTET}\.{_OCTET}")

DOMAIN_NAME_DELIMITER = "."


@dataclass(frozen=True)
class DomainName:
    labels: tuple

    @classmethod
    def from_string(cls, domain: str) -> "DomainName":
        """Split on '.', dropping empty labels, and lower-case each label."""
        return cls(tuple(
            label.lower() for label in domain.split(DOMAIN_NAME_DELIMITER) if label
        ))

    def as_string(self) -> str:
        return DOMAIN_NAME_DELIMITER.join(self.labels)

    def as_reversed_string(self) -> str:
        return DOMAIN_NAME_DELIMITER.join(reversed(self.labels))

    def optimized_for_proximity_order(self) -> str:
        """Reverse the labels after stripping a leading ``www`` label.

        ``www.koch.ro`` becomes ``ro.koch``; ``ww.faz.net`` keeps its
        first label and becomes ``net.faz.ww``.
        """
        labels = self.labels
        if labels and labels[0].lower() == "www":
            labels = labels[1:]
        return DOMAIN_NAME_DELIMITER.join(reversed(labels))


@dataclass(frozen=True)
class IPv4Address:
    address: int

    def __post_init__(self):
        if not 0 <= self.address <= MAX_IPV4:
            raise OutOfRangeError(
                f"{self.address} is not in the range of a valid IPv4 address "
                f"(0 to {MAX_IPV4})"
            )

    def octets(self) -> tuple:
        octets = []
        for k in range(4, 0, -1):
            octets.append((self.address % 256 ** k) // 256 ** (k - 1))
        return tuple(octets)

    def as_string(self) -> str:
        return ".".join(str(octet) for octet in self.octets())

    def optimized_for_proximity_order(self) -> str:
        return self.as_string()


HostName = Union[DomainName, IPv4Address]


def parse_ipv4_string(text: str) -> int:
    """
    Parse a dotted quad into its integer value.

    Returns ``ILLEGAL_IPV4`` when ``text`` is not exactly four octets in
    ``0..255``; surrounding whitespace or extra segments fail the match.
    """
    match = _IPV4_PATTERN.fullmatch(text)
    if match is None:
        return ILLEGAL_IPV4
    result = 0
    for octet in match.groups():
        result = result * 256 + int(octet)
    return result


def build_host_name(host: str) -> HostName:
    """Wrap a URL host into an ``IPv4Address`` or a ``DomainName``."""
    address = parse_ipv4_string(host)
    if address != ILLEGAL_IPV4:
        return IPv4Address(address)
    return DomainName.from_string(host)
