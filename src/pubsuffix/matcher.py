from typing import Callable, Optional, Sequence

from .errors import InputTypeError
from .nameprep import NamePrep
from .trie import Node, Terminal

MatchFunc = Callable[[Sequence[str]], int]


def match_suffix_length(
    labels: Sequence[str], root: Node, nameprep: Optional[NamePrep] = None
) -> int:
    """
    Returns the number of labels (from the end) that form the longest public
    suffix of a domain, given as its labels in left to right order.

    0 if the domain doesn't end with a public suffix, and also if the entire
    domain would be the public suffix: at least one label must be left over
    as the registrable name.
    """
    node = root
    count = 0
    length = len(labels)

    for index in range(length - 1, -1, -1):
        if isinstance(node, Terminal):
            break

        # leave the left-most label, eg "com.de" is a domain under "de",
        # even though "com.de" is listed as a suffix itself
        if index == 0 and node.terminal:
            break

        label = nameprep(labels[index]) if nameprep else labels[index]

        child = node.children.get(label)
        if child is not None:
            count += 1
            node = child
            continue

        # a wildcard only ever resolves the one level below its node
        if node.exceptions is not None:
            if label not in node.exceptions:
                count += 1
            break

        if node.terminal:
            break

        return 0

    if count == length:
        return 0
    return count


def get_public_suffix(domain: Optional[str], match: MatchFunc) -> Optional[str]:
    """
    Returns the public suffix of domain with a leading ".", eg ".co.uk".

        None        for None, and when no rule matches
        ""          for names without any "."
    """
    if domain is None:
        return None
    if not isinstance(domain, str):
        raise InputTypeError(f"Domain must be a string, got {type(domain).__name__}")

    labels = domain.split(".")
    if len(labels) == 1:
        return ""

    count = match(labels)
    if not count:
        return None
    return "." + ".".join(labels[-count:])
