"""
Command line interface for hikiate.

Usage:
    python -m hikiate.cli "日本語テキスト"            # tokenize with MeCab and look up
    python -m hikiate.cli -w 食べる 走る              # look up dictionary-form words
    python -m hikiate.cli -f "日本語テキスト"         # full JSON
    python -m hikiate.cli -d jmdict-eng.json "猫"   # custom dictionary file
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import List, Optional, Sequence, Tuple

from hikiate import __version__
from hikiate.settings import DICT_PATH, DEBUG, LOG_FORMAT, JMDICT_SIMPLIFIED_URL
from hikiate.dict_load import load_dictionary, DictionaryParseError
from hikiate.matcher import TokenMatcher
from hikiate.models import Entry
from hikiate.tokens import Token
from hikiate.tokenizer import tokenize

logger = logging.getLogger(__name__)

# How much of each entry the text output shows
MAX_SENSES = 3
MAX_GLOSSES = 2


def format_entry_text(entry: Entry) -> str:
    """Format one entry as indented text lines."""
    lines = []
    if entry.kanji:
        lines.append("    Kanji: " + ", ".join(entry.kanji_texts))
    if entry.kana:
        lines.append("    Kana: " + ", ".join(entry.kana_texts))
    for sense in entry.sense[:MAX_SENSES]:
        if sense.part_of_speech:
            lines.append("      POS: " + ", ".join(sense.part_of_speech))
        for gloss in sense.gloss[:MAX_GLOSSES]:
            lines.append(f"      {gloss.lang}: {gloss.text}")
    return '\n'.join(lines)


def format_matches_text(results: Sequence[Tuple[Token, List[Entry]]]) -> str:
    """Format (token, entries) pairs as text output."""
    lines = []
    for token, entries in results:
        header = f"* {token.surface}"
        if token.lemma and token.lemma != token.surface:
            header += f"  = {token.lemma}"
        if token.parts_of_speech:
            header += f"  ({'、'.join(token.parts_of_speech)})"
        lines.append(header)

        if not entries:
            lines.append("    No dictionary matches found")
        for entry in entries:
            lines.append(format_entry_text(entry))
        lines.append('')
    return '\n'.join(lines).rstrip('\n')


def matches_to_json(results: Sequence[Tuple[Token, List[Entry]]]) -> list:
    """Convert (token, entries) pairs to JSON-compatible data."""
    return [
        {
            'token': asdict(token),
            'matches': [e.model_dump(mode='json', by_alias=True) for e in entries],
        }
        for token, entries in results
    ]


def run_matching(
    matcher: TokenMatcher,
    tokens: List[Token],
    strict: bool = False,
    context: bool = False,
    common: bool = False,
) -> List[Tuple[Token, List[Entry]]]:
    """Match every token with the selected strategy."""
    results = []
    for index, token in enumerate(tokens):
        if context:
            entries = matcher.contextual_match(tokens, index)
        elif strict:
            entries = matcher.match(token)
        else:
            entries = matcher.advanced_match(token)
        if common:
            entries = matcher.filter_matches(entries, token)
        results.append((token, entries))
    return results


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description='Look up Japanese text in a JMdict export (Hikiate)',
        prog='hikiate',
        epilog=f'Dictionary exports: {JMDICT_SIMPLIFIED_URL}',
    )

    parser.add_argument(
        'text',
        nargs='*',
        help='Japanese text to look up',
    )

    parser.add_argument(
        '-d', '--dictionary',
        type=str,
        default=None,
        metavar='PATH',
        help=f'Path to JMdict JSON export (default: {DICT_PATH})',
    )

    parser.add_argument(
        '-w', '--words',
        action='store_true',
        help='Treat each argument as a dictionary-form word (no MeCab)',
    )

    parser.add_argument(
        '-s', '--strict',
        action='store_true',
        help='Stop at the first matching strategy',
    )

    parser.add_argument(
        '-x', '--context',
        action='store_true',
        help='Include matches for the neighbouring tokens',
    )

    parser.add_argument(
        '-c', '--common',
        action='store_true',
        help='Only show entries with a common kanji or kana form',
    )

    parser.add_argument(
        '-f', '--full',
        action='store_true',
        help='Full match info as JSON',
    )

    parser.add_argument(
        '-v', '--version',
        action='store_true',
        help='Show version information',
    )

    parsed = parser.parse_args(args)

    if parsed.version:
        print(f'hikiate {__version__}')
        return 0

    logging.basicConfig(
        level=logging.DEBUG if DEBUG else logging.WARNING,
        format=LOG_FORMAT,
    )

    if not parsed.text:
        parser.print_help()
        return 1

    try:
        dictionary = load_dictionary(parsed.dictionary)
    except FileNotFoundError as e:
        print(f'Error: {e}', file=sys.stderr)
        print(f'Download an export from: {JMDICT_SIMPLIFIED_URL}', file=sys.stderr)
        return 1
    except DictionaryParseError as e:
        print(f'Error loading dictionary: {e}', file=sys.stderr)
        return 1

    if parsed.words:
        tokens = [Token.from_word(w) for w in parsed.text]
    else:
        try:
            tokens = tokenize(' '.join(parsed.text))
        except ImportError:
            print('Error: fugashi is not installed. pip install "hikiate[mecab]"', file=sys.stderr)
            print('Or pass -w to look up dictionary-form words without MeCab', file=sys.stderr)
            return 1

    matcher = TokenMatcher(dictionary)
    results = run_matching(
        matcher, tokens,
        strict=parsed.strict,
        context=parsed.context,
        common=parsed.common,
    )
    logger.debug(f"Matched {len(results)} tokens")

    if parsed.full:
        print(json.dumps(matches_to_json(results), ensure_ascii=False))
    else:
        print(format_matches_text(results))

    return 0


if __name__ == '__main__':
    sys.exit(main())
