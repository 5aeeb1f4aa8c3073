"""Search query compilation for filtering IED lists.

Search input is a whitespace separated list of terms which must all be present
(in any order) for an item to match. Matching is case-insensitive. Terms support
globbing with `*` (any run of characters) and `?` (exactly one character), and
may be quoted with `'` or `"` to include whitespace.
"""

import re
from dataclasses import dataclass


# Regex metacharacters escaped before tokenising. `*` and `?` are left alone for globbing.
_METACHARACTERS = re.compile(r"[.+^${}()|\[\]\\]")

# A term is a run of unquoted characters and/or quoted sections, e.g. `abc`, `"a b"`, `x"a b"y`.
# An unterminated quote is skipped by the tokenizer rather than rejected.
_TERM = re.compile(r"""(?:[^\s"']+|['"][^'"]*["'])+""")

_QUOTES = re.compile(r"""["']""")


@dataclass(frozen=True)
class SearchQuery:
    """A compiled search query."""

    raw: str
    terms: tuple[str, ...]
    pattern: re.Pattern

    def test(self, candidate: str) -> bool:
        """Return True if every term of the query occurs in `candidate`."""
        return self.pattern.match(candidate) is not None

    @property
    def matches_all(self) -> bool:
        return not self.terms


MATCH_ALL = SearchQuery(raw="", terms=(), pattern=re.compile(r".*", re.IGNORECASE | re.DOTALL))


def _expand_term(term: str) -> str:
    """Turn an escaped search term into a regex fragment."""
    return _QUOTES.sub("", term.replace("*", ".*").replace("?", "."))


def compile_query(raw: str) -> SearchQuery:
    """Compile raw search input into a `SearchQuery`.

    Compilation never fails: malformed quoting degrades to a best-effort split.

    Args:
        raw: Search text as typed by the operator.

    Returns:
        A query whose `test` method checks candidate strings.
    """
    if raw == "":
        return MATCH_ALL

    escaped = _METACHARACTERS.sub(lambda m: "\\" + m.group(0), raw).strip()
    terms = tuple(_expand_term(term) for term in _TERM.findall(escaped))

    lookaheads = "".join(f"(?=.*{term})" for term in terms)
    pattern = re.compile(f"{lookaheads}.*", re.IGNORECASE | re.DOTALL)

    return SearchQuery(raw=raw, terms=terms, pattern=pattern)
