from typing import Iterable, Optional, Sequence, Union
import logging
import threading

from cachetools import LRUCache, cachedmethod

from . import host as _host
from . import matcher
from .config import ConfigManager
from .host import HasHost, Host
from .nameprep import NamePrep, ascii_nameprep
from .rules import load_rules, parse_rules
from .trie import Branch, build_tree

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 1024


class PublicSuffixList:
    """
    An immutable suffix tree together with the name preparation it was built
    with. Instances are safe to share between threads: lookups never modify
    the tree, and the result cache is guarded by a lock.
    """

    def __init__(
        self,
        root: Branch,
        nameprep: Optional[NamePrep] = None,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ) -> None:
        self._root = root
        self._nameprep = nameprep
        self._cache = LRUCache(maxsize=cache_size)
        self._lock = threading.Lock()

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        nameprep: Optional[NamePrep] = None,
        include_private: bool = True,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ) -> "PublicSuffixList":
        """Build from raw suffix list lines (comments and blanks allowed)"""
        rules = parse_rules(lines, include_private)
        return cls(build_tree(rules, nameprep), nameprep, cache_size)

    @classmethod
    def from_file(
        cls,
        path: str,
        nameprep: Optional[NamePrep] = None,
        include_private: bool = True,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ) -> "PublicSuffixList":
        rules = load_rules(path, include_private)
        return cls(build_tree(rules, nameprep), nameprep, cache_size)

    @classmethod
    def from_config(cls, conf: ConfigManager) -> "PublicSuffixList":
        logger.info(f"Building public suffix list from {conf.get_suffix_list()}")
        return cls.from_file(
            conf.get_suffix_list(),
            nameprep=conf.get_nameprep(),
            include_private=conf.get_include_private(),
            cache_size=conf.get_cache_size(),
        )

    @property
    def tree(self) -> Branch:
        return self._root

    @property
    def nameprep(self) -> Optional[NamePrep]:
        return self._nameprep

    def match_suffix_length(self, labels: Sequence[str]) -> int:
        return self._match(tuple(labels))

    @cachedmethod(lambda self: self._cache, lock=lambda self: self._lock)
    def _match(self, labels: tuple) -> int:
        return matcher.match_suffix_length(labels, self._root, self._nameprep)

    def get_public_suffix(self, domain: Optional[str]) -> Optional[str]:
        return matcher.get_public_suffix(domain, self.match_suffix_length)

    def parse_host(self, value: Union[str, HasHost]) -> Host:
        return _host.parse_host(value, self.match_suffix_length)

    def parse_domain(self, value: Union[str, HasHost]) -> Host:
        """Like parse_host, but requires dotted domains to end with a public suffix"""
        return _host.parse_host(value, self.match_suffix_length, strict=True)

    def registrable_domain(self, value: Union[str, HasHost]) -> str:
        """
        The public suffix plus one label, eg "example.co.uk" for "www.example.co.uk:80".
        Empty for IP addresses and for domains without a public suffix.
        """
        return self.parse_host(value).registrable_domain

    def same_site(self, a: Union[str, HasHost], b: Union[str, HasHost]) -> bool:
        """
        Two hosts are same-site if they share a registrable domain, or are
        the very same address or name when they have none. Names are compared
        after name preparation and lower casing, so "www.Example.com" and
        "api.example.com" are the same site.
        """
        host_a, host_b = self.parse_host(a), self.parse_host(b)
        site_a = self._canonical(host_a.registrable_domain)
        site_b = self._canonical(host_b.registrable_domain)
        if site_a or site_b:
            return site_a == site_b
        return self._canonical(host_a.hostname) == self._canonical(host_b.hostname)

    def _canonical(self, name: str) -> str:
        prepare = self._nameprep or ascii_nameprep
        return ".".join(prepare(label).lower() for label in name.split("."))


_default: Optional[PublicSuffixList] = None
_default_lock = threading.Lock()


def get_default() -> PublicSuffixList:
    """
    The process wide list, built from the configuration on first use.
    """
    global _default
    current = _default
    if current is not None:
        return current

    with _default_lock:
        # someone else may have built it while we were waiting
        if _default is None:
            conf = ConfigManager()
            conf.parse_file()
            _default = PublicSuffixList.from_config(conf)
        return _default


def set_default(suffix_list: PublicSuffixList) -> None:
    """
    Replace the process wide list. Lookups already running keep the list
    they started with.
    """
    global _default
    with _default_lock:
        _default = suffix_list
    logger.info("Replaced default public suffix list")


def reload_default(conf_path: Optional[str] = None) -> PublicSuffixList:
    """Build a new default list from the configuration, then swap it in"""
    conf = ConfigManager()
    conf.parse_file(conf_path)
    suffix_list = PublicSuffixList.from_config(conf)
    set_default(suffix_list)
    return suffix_list
