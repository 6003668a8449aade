from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Set, Union
import logging

from .nameprep import NamePrep
from .rules import RuleKind, parse_rule

logger = logging.getLogger(__name__)


class Terminal:
    """
    A leaf: the public suffix ends here and cannot continue.
    Equivalent to Branch(terminal=True) without children or exceptions.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "TERMINAL"


TERMINAL = Terminal()


@dataclass(frozen=True)
class Branch:
    """
    terminal:   the public suffix may end here, but can also continue into children
    exceptions: when not None, any single label below this node matches as a
                wildcard, except the labels listed
    children:   child nodes keyed by label
    """

    terminal: bool = False
    exceptions: Optional[FrozenSet[str]] = None
    children: Mapping[str, "Node"] = field(default_factory=lambda: MappingProxyType({}))


Node = Union[Terminal, Branch]


class TrieNode:
    """Mutable node, only used while a tree is being built"""

    def __init__(self) -> None:
        self.children: Dict[str, "TrieNode"] = {}
        self.terminal = False
        self.exceptions: Optional[Set[str]] = None

    def freeze(self) -> Node:
        if self.terminal and not self.children and self.exceptions is None:
            return TERMINAL

        children = {label: child.freeze() for label, child in self.children.items()}
        exceptions = None if self.exceptions is None else frozenset(self.exceptions)
        return Branch(self.terminal, exceptions, MappingProxyType(children))


class SuffixTrieBuilder:
    """
    Collects suffix rules into a trie keyed by label, read right to left,
    so "github.io" is stored as root -> io -> github.
    """

    def __init__(self, nameprep: Optional[NamePrep] = None) -> None:
        self.root = TrieNode()
        self.nameprep = nameprep
        self.counts = {kind: 0 for kind in RuleKind}
        self.skipped = 0

    def insert(self, token: str) -> bool:
        """
        Add one rule token. Returns False if the token was skipped.
        """
        rule = parse_rule(token)
        labels = rule.labels

        if any(not label or label == "!" for label in labels):
            logger.debug(f"Skipping malformed rule: {token!r}")
            self.skipped += 1
            return False

        cur = self.root
        for label in reversed(labels):
            if label == "*":
                if cur.exceptions is None:
                    cur.exceptions = set()
                break

            if label.startswith("!"):
                if cur.exceptions is None:
                    cur.exceptions = set()
                cur.exceptions.add(self._prepare(label[1:]))
                break

            label = self._prepare(label)
            if label not in cur.children:
                cur.children[label] = TrieNode()
            cur = cur.children[label]
        else:
            # all labels consumed
            cur.terminal = True

        self.counts[rule.kind] += 1
        return True

    def freeze(self) -> Branch:
        # the root is never terminal, so it always freezes to a Branch
        return self.root.freeze()

    def _prepare(self, label: str) -> str:
        return self.nameprep(label) if self.nameprep else label


def build_tree(rule_lines: Iterable[str], nameprep: Optional[NamePrep] = None) -> Branch:
    """
    Build an immutable suffix tree from rule tokens (see rules.parse_rules).
    Pure: the same input always yields an equal tree.
    """
    builder = SuffixTrieBuilder(nameprep)
    for token in rule_lines:
        builder.insert(token)

    root = builder.freeze()
    logger.info(
        f"Built suffix tree: {builder.counts[RuleKind.PLAIN]} plain, "
        f"{builder.counts[RuleKind.WILDCARD]} wildcard, "
        f"{builder.counts[RuleKind.EXCEPTION]} exception rules, "
        f"{builder.skipped} skipped, {count_nodes(root)} nodes"
    )
    return root


def iter_rules(root: Node) -> Iterator[str]:
    """
    Walk a frozen tree and yield rule tokens that rebuild an equal tree.
    Labels are yielded as stored, i.e. after name preparation.
    """

    def walk(node: Node, labels: List[str]) -> Iterator[str]:
        suffix = ".".join(reversed(labels))
        if isinstance(node, Terminal):
            yield suffix
            return

        if node.terminal:
            yield suffix
        if node.exceptions is not None:
            tail = "." + suffix if suffix else ""
            yield "*" + tail
            for label in sorted(node.exceptions):
                yield "!" + label + tail
        for label, child in sorted(node.children.items()):
            yield from walk(child, labels + [label])

    yield from walk(root, [])


def count_nodes(root: Node) -> int:
    if isinstance(root, Terminal):
        return 1
    return 1 + sum(count_nodes(child) for child in root.children.values())
