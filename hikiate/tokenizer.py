"""
MeCab adapter for Hikiate.

Wraps a fugashi Tagger and turns its nodes into Tokens. fugashi and a
UniDic dictionary are optional; install them with:

    pip install "hikiate[mecab]"

Any object exposing `surface` and `feature_raw` attributes can be passed
to tokens_from_nodes(), so the matcher never depends on fugashi itself.
"""

import logging
from typing import Any, Iterable, List, Optional

from hikiate.tokens import Token

logger = logging.getLogger(__name__)

# Lazily created default tagger
_TAGGER: Optional[Any] = None


def get_tagger() -> Any:
    """Get the shared fugashi Tagger, creating it on first use."""
    global _TAGGER
    if _TAGGER is None:
        from fugashi import Tagger
        _TAGGER = Tagger()
        logger.debug("Created fugashi Tagger")
    return _TAGGER


def tokens_from_nodes(nodes: Iterable[Any]) -> List[Token]:
    """
    Convert analyzer nodes into Tokens.

    Nodes without a surface are skipped.

    Args:
        nodes: Iterable of objects with `surface` and `feature_raw`.

    Returns:
        List of Tokens in node order.
    """
    tokens = []
    for node in nodes:
        surface = getattr(node, 'surface', None)
        raw = getattr(node, 'feature_raw', None) or ""
        token = Token.from_features(surface, raw)
        if token is None:
            logger.debug(f"Skipping node without surface: {node!r}")
            continue
        tokens.append(token)
    return tokens


def tokenize(text: str, tagger: Optional[Any] = None) -> List[Token]:
    """
    Tokenize Japanese text with MeCab.

    Args:
        text: Input text.
        tagger: Optional fugashi Tagger (or compatible callable). If None,
            the shared default Tagger is used.

    Returns:
        List of Tokens.
    """
    if not text:
        return []
    if tagger is None:
        tagger = get_tagger()
    return tokens_from_nodes(tagger(text))
