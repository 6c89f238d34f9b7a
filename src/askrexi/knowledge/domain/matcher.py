"""
Knowledge Matcher
=================

Term matching helpers shared by routing and lookup, and the scorer that
picks the best curated entry for a question.

Terms match case-insensitively as whole phrases: the characters on either
side must not be letters or digits, and a trailing plural "s"/"es" is
tolerated. "ich" therefore matches "ICH E6" but not "which", and
"guideline" matches "guidelines".
"""

import re
from functools import lru_cache
from typing import FrozenSet, Iterable, Optional, Sequence

from askrexi.knowledge.domain.entities import KnowledgeEntry

STOPWORDS: FrozenSet[str] = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "by", "can", "do", "does",
    "for", "from", "how", "i", "in", "is", "it", "me", "my", "of", "on",
    "or", "our", "should", "that", "the", "their", "this", "to", "we",
    "what", "when", "where", "which", "who", "why", "with", "you", "your",
})

_TOKEN_RE = re.compile(r"[a-z0-9](?:[a-z0-9/\-]*[a-z0-9])?")


def normalize_question(text: Optional[str]) -> str:
    """Lowercase, collapse whitespace and drop trailing punctuation."""
    collapsed = " ".join((text or "").lower().split())
    return collapsed.rstrip("?!. ")


@lru_cache(maxsize=4096)
def term_pattern(term: str) -> "re.Pattern[str]":
    """Compiled whole-phrase pattern for a routing or trigger term."""
    phrase = re.escape(" ".join(term.lower().split()))
    return re.compile(rf"(?<![a-z0-9]){phrase}(?:e?s)?(?![a-z0-9])", re.IGNORECASE)


def contains_term(text: str, term: str) -> bool:
    return term_pattern(term).search(text) is not None


def count_term(text: str, term: str) -> int:
    return len(term_pattern(term).findall(text))


def contains_any(text: str, terms: Iterable[str]) -> bool:
    return any(contains_term(text, term) for term in terms)


def contains_all(text: str, terms: Iterable[str]) -> bool:
    return all(contains_term(text, term) for term in terms)


def extract_tokens(text: Optional[str]) -> FrozenSet[str]:
    """
    Significant lowercase tokens of a text.

    Keeps "/" and "-" inside a token ("ai/ml", "e6-r3"), drops stopwords and
    single characters.
    """
    return frozenset(
        token for token in _TOKEN_RE.findall((text or "").lower())
        if len(token) > 1 and token not in STOPWORDS
    )


def shares_token(entry: KnowledgeEntry, tokens: FrozenSet[str]) -> bool:
    """Whether the entry's question, variations or keywords overlap the tokens."""
    if not tokens:
        return False
    return not tokens.isdisjoint(extract_tokens(entry.search_text))


def is_direct_hit(entry: KnowledgeEntry, normalized_question: str) -> bool:
    """
    Whether the entry question or one of its variations equals, contains
    or is contained in the normalized question.

    Stores rank these entries ahead of token-only overlaps so the candidate
    cap never drops them.
    """
    if not normalized_question:
        return False
    for text in (entry.question, *entry.variations):
        candidate = normalize_question(text)
        if candidate and (normalized_question in candidate or candidate in normalized_question):
            return True
    return False


class KnowledgeMatcher:
    """
    Scores curated entries against a question and returns the best one.

    Scoring per entry, cumulative:
    - normalized question equals the entry question: +100
    - a variation equals, contains or is contained in the question: +80
    - the entry question contains the question or vice versa: +70
    - +10 for each entry keyword found in the question

    The first of several equally scored entries wins. Entries scoring zero
    never match.
    """

    EXACT_SCORE = 100
    VARIATION_SCORE = 80
    CONTAINMENT_SCORE = 70
    KEYWORD_SCORE = 10

    def score(self, question: str, entry: KnowledgeEntry, tokens: Optional[FrozenSet[str]] = None) -> int:
        normalized = normalize_question(question)
        if not normalized:
            return 0
        if tokens is None:
            tokens = extract_tokens(normalized)

        canonical = normalize_question(entry.question)
        score = 0

        if canonical == normalized:
            score += self.EXACT_SCORE

        if normalized in canonical or canonical in normalized:
            score += self.CONTAINMENT_SCORE

        for variation in entry.variations:
            candidate = normalize_question(variation)
            if candidate and (candidate == normalized or normalized in candidate or candidate in normalized):
                score += self.VARIATION_SCORE
                break

        for keyword in entry.keywords:
            keyword = keyword.strip().lower()
            if not keyword:
                continue
            if " " in keyword:
                found = contains_term(normalized, keyword)
            else:
                found = keyword in tokens
            if found:
                score += self.KEYWORD_SCORE

        return score

    def match(self, question: str, entries: Sequence[KnowledgeEntry]) -> Optional[KnowledgeEntry]:
        """Best-scoring entry, or None for an empty pool or all-zero scores."""
        if not entries:
            return None

        tokens = extract_tokens(question)
        best: Optional[KnowledgeEntry] = None
        best_score = 0
        for entry in entries:
            score = self.score(question, entry, tokens)
            if score > best_score:
                best, best_score = entry, score
        return best
