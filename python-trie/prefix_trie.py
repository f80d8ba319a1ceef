"""
prefix_trie – a character trie with insertion, membership lookup and
deletion that prunes dead branches.

Run:
    prefix-trie --insert cat catch --delete cat --query cat catch --list
"""

import argparse
import logging
import os
import sys
from typing import Hashable, Iterable, Iterator, List, Optional, Sequence, Tuple


LOG_LEVEL_ENV = "PREFIX_TRIE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

logger = logging.getLogger(__name__)

_END = object()  # marks an exhausted word in _delete_by_successor


class TrieNode:
    """
    A single node in the trie.

    Attributes:
        value (Hashable | None):
            The character on the edge leading to this node,
            None for the root.
        children (dict[Hashable, TrieNode]):
            Mapping from a character to the next TrieNode.
        is_end (bool):
            True if this node marks the end of a stored word.
    """
    __slots__ = ("value", "children", "is_end")

    def __init__(self, value: Optional[Hashable] = None, is_end: bool = False):
        self.value = value
        self.children = {}
        self.is_end = is_end

    def get(self, ch: Hashable) -> Optional["TrieNode"]:
        return self.children.get(ch)

    def has(self, ch: Hashable) -> bool:
        return ch in self.children

    def is_empty(self) -> bool:
        """A node that is neither a word end nor a parent has to be pruned."""
        return not self.is_end and not self.children

    def __repr__(self):
        return f"TrieNode({self.value!r}, is_end={self.is_end}, children={len(self.children)})"


class Trie:
    """
    A trie (prefix tree) supporting insertion, membership lookup,
    deletion with pruning, and iteration over all stored words.

    Words are any finite iterables of hashable characters; plain
    strings are the usual case. The empty word is never stored.

    Not thread safe: callers sharing a trie across threads must
    guard it with their own lock.
    """

    def __init__(self):
        """Initialize an empty trie."""
        self.root = TrieNode()

    # -------------------------------------------------------------
    # Core Operations
    # -------------------------------------------------------------

    def insert(self, word: Iterable[Hashable]) -> None:
        """
        Insert a word into the trie.

        Inserting an empty word does nothing; inserting a word twice
        leaves the trie unchanged the second time.

        Args:
            word: The word to insert.

        Returns:
            None
        """
        node = self.root
        for ch in word:
            if ch not in node.children:
                node.children[ch] = TrieNode(ch)
            node = node.children[ch]
        if node is not self.root:
            node.is_end = True

    def contains(self, word: Iterable[Hashable]) -> bool:
        """
        Determine whether a word is stored in the trie.

        Args:
            word: The word to look up.

        Returns:
            bool: True only if the whole word was inserted; False for
                  absent words, bare prefixes and the empty word.
        """
        node = self.root
        for ch in word:
            if ch not in node.children:
                return False
            node = node.children[ch]
        return node.is_end

    def __contains__(self, word) -> bool:
        return self.contains(word)

    def delete(self, word: Iterable[Hashable]) -> bool:
        """
        Delete a word from the trie and prune the branch it leaves behind.

        Walking back up from the terminal node, every node that is now
        neither a word end nor a parent is removed from its parent,
        stopping at the first ancestor that still has a reason to exist.
        An explicit stack is used so word length is not bounded by the
        recursion limit.

        Args:
            word: The word to delete.

        Returns:
            bool: True if the word was deleted,
                  False if the word was not stored (nothing changes).
        """
        path: List[Tuple[TrieNode, Hashable]] = []
        node = self.root
        for ch in word:
            child = node.get(ch)
            if child is None:
                logger.debug("delete: %r not stored", word)
                return False
            path.append((node, ch))
            node = child

        if not node.is_end:
            logger.debug("delete: %r not stored", word)
            return False

        node.is_end = False
        pruned = 0
        while path:
            parent, ch = path.pop()
            if not parent.children[ch].is_empty():
                break
            del parent.children[ch]
            pruned += 1

        logger.debug("delete: removed %r, pruned %d node(s)", word, pruned)
        return True

    def clear(self) -> None:
        """Drop every stored word; the root node itself is kept."""
        logger.debug("clear: dropping %d top-level branch(es)", len(self.root.children))
        self.root.children.clear()

    # -------------------------------------------------------------
    # Enumeration
    # -------------------------------------------------------------

    def __iter__(self):
        """
        Iterate over all words stored in the trie.

        Yields:
            str for words made of single-character strings,
            otherwise a tuple of the word's characters.
        """
        path = []
        stack = [(child, 1) for child in self.root.children.values()]
        while stack:
            node, depth = stack.pop()
            # trim path back to this node's ancestors
            del path[depth - 1:]
            path.append(node.value)
            if node.is_end:
                yield _as_word(tuple(path))
            for nxt in node.children.values():
                stack.append((nxt, depth + 1))

    def __len__(self):
        count = 0
        stack = list(self.root.children.values())
        while stack:
            node = stack.pop()
            if node.is_end:
                count += 1
            stack.extend(node.children.values())
        return count

    def __repr__(self):
        return f"Trie(words={len(self)})"


def _as_word(path: Tuple[Hashable, ...]):
    if all(isinstance(ch, str) and len(ch) == 1 for ch in path):
        return "".join(path)
    return path


# -------------------------------------------------------------
# Recursive deletion strategies
#
# Both produce the same tree as Trie.delete; each returns True when
# the node it was called on is now empty and should be dropped by
# its parent.
# -------------------------------------------------------------

def _delete_by_depth(node: TrieNode, word: Sequence[Hashable], depth: int = 0) -> bool:
    """Delete ``word[depth:]`` below ``node``, indexing by depth."""
    if depth > len(word):
        return False

    if depth == len(word):
        node.is_end = False
        return node.is_empty()

    ch = word[depth]
    if not node.has(ch):
        return False

    if _delete_by_depth(node.get(ch), word, depth + 1):
        del node.children[ch]

    return node.is_empty()


def _delete_by_successor(node: TrieNode, chars: Iterator[Hashable]) -> bool:
    """Delete the rest of ``chars`` below ``node``, one character per call."""
    ch = next(chars, _END)
    if ch is _END:
        node.is_end = False
        return node.is_empty()

    child = node.get(ch)
    if child is None:
        return False

    if _delete_by_successor(child, chars):
        del node.children[ch]

    return node.is_empty()


# -------------------------------------------------------------
# Command line
# -------------------------------------------------------------

def read_words(path: str) -> List[str]:
    """Read one word per line, skipping blank lines."""
    with open(path, "r", encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prefix-trie",
        description="Insert, delete and look up words in an in-memory trie.",
    )
    parser.add_argument("--words-file", help="Text file with one word per line to insert first")
    parser.add_argument("--insert", nargs="+", default=[], metavar="WORD", help="Words to insert")
    parser.add_argument("--delete", nargs="+", default=[], metavar="WORD", help="Words to delete after inserting")
    parser.add_argument("--query", nargs="+", default=[], metavar="WORD", help="Words to look up")
    parser.add_argument("--list", action="store_true", help="Print every stored word, sorted")
    parser.add_argument("--log-level", default=os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL),
                        help="Logging level (default: %(default)s)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = args.log_level.upper()
    if not isinstance(logging.getLevelName(level), int):
        parser.error(f"unknown log level: {args.log_level}")

    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    trie = Trie()

    if args.words_file:
        if not os.path.isfile(args.words_file):
            parser.error(f"words file not found: {args.words_file}")
        words = read_words(args.words_file)
        for w in words:
            trie.insert(w)
        logger.info("loaded %d word(s) from %s", len(words), args.words_file)

    for w in args.insert:
        trie.insert(w)

    for w in args.delete:
        trie.delete(w)

    for w in args.query:
        print(f"{w}: {trie.contains(w)}")

    if args.list:
        for w in sorted(trie):
            print(w)

    return 0


if __name__ == "__main__":
    sys.exit(main())
