from enum import Enum
from typing import Iterable, List, NamedTuple
import logging

from .errors import SuffixListError

logger = logging.getLogger(__name__)

PRIVATE_MARKER = "// ===BEGIN PRIVATE DOMAINS==="


class RuleKind(Enum):
    PLAIN = "plain"
    WILDCARD = "wildcard"
    EXCEPTION = "exception"


class Rule(NamedTuple):
    kind: RuleKind
    labels: List[str]


def parse_rule(token: str) -> Rule:
    """
    Classify a rule token by the right-most special label, which is where
    the tree builder stops reading it:
        com.au      plain
        *.ck        wildcard
        !www.ck     exception
        a.!x.ck     exception
    """
    labels = token.split(".")
    for label in reversed(labels):
        if label == "*":
            return Rule(RuleKind.WILDCARD, labels)
        if label.startswith("!"):
            return Rule(RuleKind.EXCEPTION, labels)
    return Rule(RuleKind.PLAIN, labels)


def parse_rules(lines: Iterable[str], include_private: bool = True) -> List[str]:
    """
    Normalize raw suffix list lines into rule tokens.

    Comments ("//") and blank lines are dropped, and only the first
    whitespace delimited token of a line is kept. With include_private off,
    reading stops where the private domains section of the list begins.
    """
    tokens = []
    for raw in lines:
        line = raw.strip()

        if line.startswith(PRIVATE_MARKER) and not include_private:
            logger.debug(f"Stopped at private section after {len(tokens)} rules")
            break

        # skip comments
        if not line or line.startswith("//"):
            continue

        tokens.append(line.split()[0])

    return tokens


def load_rules(path: str, include_private: bool = True) -> List[str]:
    """Read a suffix list file and return its rule tokens"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return parse_rules(f, include_private)
    except OSError as e:
        raise SuffixListError(f"Cannot read suffix list {path}: {e}")
