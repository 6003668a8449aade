"""
Name preparation strategies.

A preparer maps one label to the form used as a key in the suffix tree. The
same preparer has to be applied when a tree is built and when it is queried,
otherwise rule labels and domain labels will not compare equal.
"""
from typing import Callable, Dict
import logging

import dns.exception
import dns.name

logger = logging.getLogger(__name__)

NamePrep = Callable[[str], str]


def ascii_nameprep(label: str) -> str:
    """Default: labels are used exactly as given"""
    return label


def lowercase_nameprep(label: str) -> str:
    return label.lower()


def idna_nameprep(label: str) -> str:
    """
    Lower case the label and convert it to its IDNA ASCII form, eg:
        游戏   -> xn--unup4y
        Bücher -> xn--bcher-kva
    Labels the codec refuses (too long, invalid code points) are kept as they are.
    """
    label = label.lower()
    try:
        return dns.name.IDNA_2003.encode(label).decode("ascii")
    except (dns.exception.DNSException, UnicodeError) as e:
        logger.debug(f"Failed to nameprep {label!r}: {e!r}")
        return label


_NAMEPREPS: Dict[str, NamePrep] = {
    "ascii": ascii_nameprep,
    "lower": lowercase_nameprep,
    "idna": idna_nameprep,
}


def get_nameprep(name: str) -> NamePrep:
    try:
        return _NAMEPREPS[name]
    except KeyError:
        raise ValueError(
            f"Unknown nameprep {name!r}, expected one of: {', '.join(_NAMEPREPS)}"
        )
