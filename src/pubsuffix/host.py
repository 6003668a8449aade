"""
Parsing of the host part of an URL into its parts.

    sub.name.pub[:port]     domain names, pub being the public suffix
    1.2.3.4[:port]          IPv4 addresses
    [::1][:port]            IPv6 addresses

A Host always serializes back to the exact string it was parsed from.
"""
from dataclasses import dataclass
from typing import Optional, Protocol, Union, runtime_checkable
import re

from .errors import HostFormatError, InputTypeError, NoPublicSuffixError, PortRangeError
from .matcher import MatchFunc

_IPV4_OCTET = r"(?:2(?:[0-4][0-9]|5[0-5])|[01]?[0-9][0-9]?)"
_IPV4_RE = re.compile(r"(?:" + _IPV4_OCTET + r"\.){3}" + _IPV4_OCTET)
_PORT_RE = re.compile(r"[0-9]+")

MAX_PORT = 65535


@runtime_checkable
class HasHost(Protocol):
    """Anything that carries a host string, eg an URL-like object"""

    host: str


@dataclass
class Host:
    """
    Exactly one of ipv6, ipv4 and name is set for a non-empty host.
    sub and pub are only set together with name, and name never contains a ".".
    port is the port as written (base 10), or "" if there is none.
    """

    sub: str = ""
    name: str = ""
    pub: str = ""
    ipv4: str = ""
    ipv6: str = ""
    port: str = ""

    @property
    def hostname(self) -> str:
        """The host without its port"""
        if self.ipv6:
            return "[" + self.ipv6 + "]"
        if self.ipv4:
            return self.ipv4
        return (self.sub + "." if self.sub else "") + self.name + ("." + self.pub if self.pub else "")

    @property
    def registrable_domain(self) -> str:
        """name.pub, or "" if the host has no public suffix"""
        if self.name and self.pub:
            return self.name + "." + self.pub
        return ""

    @property
    def port_number(self) -> Optional[int]:
        return int(self.port) if self.port else None

    def __str__(self) -> str:
        return self.hostname + (":" + self.port if self.port else "")


def _host_string(value: Union[str, HasHost]) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, HasHost) and isinstance(value.host, str):
        return value.host
    raise InputTypeError(
        f"The host must be a string or an object with a host string, got {type(value).__name__}"
    )


def _check_port(port: str, host: str) -> None:
    if not _PORT_RE.fullmatch(port) or int(port) > MAX_PORT:
        raise PortRangeError(f'Invalid port number in host "{host}"')


def parse_host(value: Union[str, HasHost], match: MatchFunc, strict: bool = False) -> Host:
    """
    Split a host string into a Host.

    match returns the public suffix length of a label sequence, see
    matcher.match_suffix_length. In strict mode a dotted domain that does not
    end with a public suffix raises NoPublicSuffixError instead of leaving
    pub empty, and so does a domain with an empty name.
    """
    host = _host_string(value)
    result = Host()
    port = None

    if host.startswith("["):
        # IPv6
        end = host.find("]")
        if end < 0:
            raise HostFormatError(f'Unterminated IPv6 address in host "{host}"')
        rest = host[end + 1 :]
        if rest and not rest.startswith(":"):
            raise HostFormatError(f'Invalid host address "{host}"')
        result.ipv6 = host[1:end]
        if rest:
            port = rest[1:]
    else:
        split = host.split(":")
        if len(split) > 2:
            raise HostFormatError(f'Invalid host address "{host}"')
        address = split[0]
        if len(split) == 2:
            port = split[1]

        if _IPV4_RE.fullmatch(address):
            result.ipv4 = address
        else:
            # domain name
            labels = address.split(".")
            count = match(labels)
            if strict and not count and len(labels) > 1:
                raise NoPublicSuffixError(f'No public suffix in host "{host}"')

            result.pub = ".".join(labels[len(labels) - count :]) if count else ""
            result.name = labels[len(labels) - count - 1]
            result.sub = ".".join(labels[: len(labels) - count - 1])

            # eg ".com" or "a..com", there is no registrable name
            if strict and not result.name:
                raise NoPublicSuffixError(f'No registrable name in host "{host}"')

    if port is not None:
        _check_port(port, host)
        result.port = port

    return result
