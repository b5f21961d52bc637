"""
Token matching for Hikiate.

Resolves MeCab tokens against the entries of a parsed Dictionary.

Four strategies are tried, in priority order:
1. Lemma: the token's lemma equals a kanji or kana text of the entry
2. Kana: the token's kana form (or pronunciation) equals a kana text
3. Kanji: the token's surface equals a kanji text
4. Part of speech: the token's POS is a sense POS label (case-insensitive)

All comparisons except the POS one are exact, full-string matches.
Every strategy is a full scan over the entries; nothing is indexed.
"""

from typing import Iterable, List, Sequence, Set, Tuple

from hikiate.models import Dictionary, Entry
from hikiate.tokens import Token


def unique_entries(entries: Iterable[Entry]) -> List[Entry]:
    """Remove entries with an already seen id, keeping first occurrences in order."""
    seen: Set[str] = set()
    result = []
    for entry in entries:
        if entry.id in seen:
            continue
        seen.add(entry.id)
        result.append(entry)
    return result


class TokenMatcher:
    """
    Matches tokens to the entries of one Dictionary.

    The dictionary is bound at construction and never replaced; build a
    new matcher to use a different dictionary. Matching has no side
    effects, so one matcher can be shared between threads.

    Example:
        >>> matcher = TokenMatcher(load_dictionary("jmdict-eng.json"))
        >>> for token in tokenize("猫が好き"):
        ...     entries = matcher.advanced_match(token)
    """

    def __init__(self, dictionary: Dictionary):
        self._dictionary = dictionary

    @property
    def dictionary(self) -> Dictionary:
        return self._dictionary

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def _match_by_lemma(self, token: Token) -> List[Entry]:
        lemma = token.lemma
        if lemma is None:
            return []
        return [
            entry for entry in self._dictionary.entries
            if any(k.text == lemma for k in entry.kanji)
            or any(k.text == lemma for k in entry.kana)
        ]

    def _match_by_kana(self, token: Token) -> List[Entry]:
        kana = token.kana_form if token.kana_form is not None else token.pronunciation
        if kana is None:
            return []
        return [
            entry for entry in self._dictionary.entries
            if any(k.text == kana for k in entry.kana)
        ]

    def _match_by_kanji(self, token: Token) -> List[Entry]:
        surface = token.surface
        if not surface:
            return []
        return [
            entry for entry in self._dictionary.entries
            if any(k.text == surface for k in entry.kanji)
        ]

    def _match_by_part_of_speech(self, token: Token) -> List[Entry]:
        pos = token.primary_part_of_speech
        if pos is None:
            return []
        return [
            entry for entry in self._dictionary.entries
            if any(sense.has_pos(pos) for sense in entry.sense)
        ]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def match(self, token: Token) -> List[Entry]:
        """
        Match a token using the first strategy that finds anything.

        Args:
            token: Token to look up.

        Returns:
            Every entry found by the highest-priority strategy with a
            result, in dictionary order. Empty if no strategy matches.
        """
        for strategy in (
            self._match_by_lemma,
            self._match_by_kana,
            self._match_by_kanji,
            self._match_by_part_of_speech,
        ):
            entries = strategy(token)
            if entries:
                return entries
        return []

    def advanced_match(self, token: Token) -> List[Entry]:
        """
        Match a token using all strategies, merged by priority.

        Lemma matches come first, then kana matches, then kanji matches,
        then part-of-speech matches. A later stage only contributes
        entries that no earlier stage found, and each entry appears once.

        Args:
            token: Token to look up.

        Returns:
            Deduplicated list of entries, grouped by strategy priority and
            in dictionary order within a group.
        """
        merged: List[Entry] = []
        seen: Set[str] = set()

        for stage in (
            self._match_by_lemma(token),
            self._match_by_kana(token),
            self._match_by_kanji(token),
            self._match_by_part_of_speech(token),
        ):
            stage_ids = {entry.id for entry in stage}
            merged.extend(entry for entry in stage if entry.id not in seen)
            seen |= stage_ids

        # A stage can still yield the same id twice (duplicate ids in the export)
        return unique_entries(merged)

    def filter_matches(self, entries: Sequence[Entry], token: Token) -> List[Entry]:
        """
        Keep only entries with a common kanji or kana form.

        Args:
            entries: Entries to filter, usually a match result.
            token: The token the entries were matched for. Not used by
                the current filter.

        Returns:
            Filtered list, order preserved.
        """
        return [entry for entry in entries if entry.is_common]

    def contextual_match(self, tokens: Sequence[Token], current_index: int) -> List[Entry]:
        """
        Match a token together with its neighbours.

        Runs match() on the previous token, the next token and the current
        token, in that order, and removes duplicate entries.

        Args:
            tokens: Token sequence.
            current_index: Index of the current token.

        Returns:
            Deduplicated entries, or an empty list if current_index is out
            of range.
        """
        if current_index < 0 or current_index >= len(tokens):
            return []

        matches: List[Entry] = []
        if current_index > 0:
            matches.extend(self.match(tokens[current_index - 1]))
        if current_index < len(tokens) - 1:
            matches.extend(self.match(tokens[current_index + 1]))
        matches.extend(self.match(tokens[current_index]))

        return unique_entries(matches)

    def match_all(self, tokens: Iterable[Token]) -> List[Tuple[Token, List[Entry]]]:
        """Pair each token with its advanced_match() result."""
        return [(token, self.advanced_match(token)) for token in tokens]
