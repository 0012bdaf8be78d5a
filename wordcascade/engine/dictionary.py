"""Word-membership oracle backed by an in-memory word set."""

import logging
from pathlib import Path
from typing import Iterable, Optional, Protocol, Set


logger = logging.getLogger(__name__)

# Used when the real word list cannot be loaded
FALLBACK_WORDS = [
    "CAT", "DOG", "THE", "AND", "FOR", "ARE", "BUT", "NOT", "YOU", "ALL",
    "CAN", "HER", "WAS", "ONE", "OUR", "OUT", "DAY", "GET", "HAS", "HIM",
    "HIS", "HOW", "MAN", "NEW", "NOW", "OLD", "SEE", "TWO", "WAY", "WHO",
    "BOY", "DID", "ITS", "LET", "PUT", "SAY", "SHE", "TOO", "USE",
]


class WordList:
    """
    Case-insensitive word set with an explicit loaded/not-loaded state.

    A WordList built without words is *not loaded*: the session treats that
    as "dictionary unavailable" rather than "word invalid".
    """

    def __init__(self, words: Optional[Iterable[str]] = None):
        self._words: Set[str] = set()
        self._prefixes: Set[str] = set()
        self._loaded = False
        if words is not None:
            self.load(words)

    @classmethod
    def from_file(cls, path: str | Path) -> "WordList":
        """Build a loaded WordList from a text file with one word per line."""
        word_list = cls()
        word_list.load_file(path)
        return word_list

    @classmethod
    def fallback(cls) -> "WordList":
        return cls(FALLBACK_WORDS)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load(self, words: Iterable[str]) -> None:
        """Replace the word set. Blank and non-alphabetic entries are skipped."""
        cleaned = set()
        for word in words:
            word = word.strip().upper()
            if word and word.isalpha():
                cleaned.add(word)
        self._words = cleaned
        self._prefixes = {w[:i] for w in cleaned for i in range(1, len(w) + 1)}
        self._loaded = True
        logger.info("Word list loaded: %d words", len(cleaned))

    def load_file(self, path: str | Path) -> None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Word list not found: {path}")
        self.load(path.read_text(encoding="utf-8").splitlines())

    def contains(self, word: str) -> bool:
        """
        Check whether ``word`` is in the list, ignoring case.

        Raises:
            RuntimeError: If the list has not been loaded yet
        """
        if not self._loaded:
            raise RuntimeError("Word list is not loaded")
        return word.strip().upper() in self._words

    def has_prefix(self, prefix: str) -> bool:
        """True when some word starts with ``prefix``; used to prune hint search."""
        return prefix.strip().upper() in self._prefixes

    def __contains__(self, word: str) -> bool:
        return self.contains(word)

    def __len__(self) -> int:
        return len(self._words)


class WordOracle(Protocol):
    """What the session needs from a dictionary."""

    @property
    def is_loaded(self) -> bool: ...

    def contains(self, word: str) -> bool: ...
