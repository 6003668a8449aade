"""
Public suffix lookup and host parsing.

    >>> suffixes = PublicSuffixList.from_lines(["com", "co.uk", "*.ck", "!www.ck"])
    >>> suffixes.get_public_suffix("www.example.co.uk")
    '.co.uk'
    >>> suffixes.parse_host("a.b.com:8080")
    Host(sub='a', name='b', pub='com', ipv4='', ipv6='', port='8080')

The module level functions use the list given as suffix_list, or the
process wide default built from the bundled configuration.
"""
from typing import Optional, Union

from .errors import (
    ConfigError,
    HostFormatError,
    InputTypeError,
    NoPublicSuffixError,
    PortRangeError,
    PubSuffixError,
    SuffixListError,
)
from .host import HasHost, Host
from .matcher import match_suffix_length
from .nameprep import ascii_nameprep, get_nameprep, idna_nameprep, lowercase_nameprep
from .rules import load_rules, parse_rules
from .suffix_list import PublicSuffixList, get_default, reload_default, set_default
from .trie import TERMINAL, Branch, Terminal, build_tree, iter_rules

__version__ = "1.0.0"


def get_public_suffix(
    domain: Optional[str], suffix_list: Optional[PublicSuffixList] = None
) -> Optional[str]:
    return (suffix_list or get_default()).get_public_suffix(domain)


def parse_host(
    value: Union[str, HasHost], suffix_list: Optional[PublicSuffixList] = None
) -> Host:
    return (suffix_list or get_default()).parse_host(value)


def parse_domain(
    value: Union[str, HasHost], suffix_list: Optional[PublicSuffixList] = None
) -> Host:
    return (suffix_list or get_default()).parse_domain(value)


def get_tree(suffix_list: Optional[PublicSuffixList] = None) -> Branch:
    """The read-only tree, for code that serializes it"""
    return (suffix_list or get_default()).tree
