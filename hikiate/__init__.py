"""
Hikiate: JMdict lookup for MeCab tokens

Parses JMdict JSON exports and matches morphological tokens against them.
"""

from typing import List, Tuple

from hikiate.dict_load import (
    DictionaryParseError, MalformedDictionaryError, EmptyDictionaryError,
    parse_dictionary, load_dictionary,
)
from hikiate.matcher import TokenMatcher
from hikiate.models import Dictionary, Entry
from hikiate.tokens import Token

__version__ = "0.1.0"

__all__ = [
    'DictionaryParseError', 'MalformedDictionaryError', 'EmptyDictionaryError',
    'Dictionary', 'Entry', 'Token', 'TokenMatcher',
    'parse_dictionary', 'load_dictionary', 'lookup',
]


def lookup(
    text: str,
    dictionary: Dictionary,
    common_only: bool = False,
    tagger=None,
) -> List[Tuple[Token, List[Entry]]]:
    """
    Tokenize text and look every token up in a dictionary.

    This is the main high-level API. It needs fugashi for tokenization.

    Args:
        text: Japanese text to analyze.
        dictionary: Parsed dictionary.
        common_only: If True, keep only entries with a common form.
        tagger: Optional fugashi Tagger. If None, a shared one is created.

    Returns:
        List of (token, entries) pairs in text order.

    Example:
        >>> import hikiate
        >>> dictionary = hikiate.load_dictionary("jmdict-eng.json")
        >>> for token, entries in hikiate.lookup("猫が好き", dictionary):
        ...     print(token.surface, [e.kanji_texts for e in entries])
    """
    from hikiate.tokenizer import tokenize

    matcher = TokenMatcher(dictionary)
    results = matcher.match_all(tokenize(text, tagger=tagger))

    if common_only:
        results = [
            (token, matcher.filter_matches(entries, token))
            for token, entries in results
        ]

    return results
