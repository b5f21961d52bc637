"""
Dictionary loading module for Hikiate.

Parses a JMdict JSON export into the frozen models of hikiate.models.

Two export layouts are understood: the camelCase jmdict-simplified schema
and an older snake_case schema named after the JMdict XML elements. Every
list and text field is looked up through an ordered tuple of key names
(see hikiate.constants); the first key holding a non-empty value wins.

Parsing is lenient below the document level. Records missing a required
value are dropped without failing the whole parse:
- kanji / kana forms with empty text
- glosses with empty text, language sources with no language
- senses with no gloss, no part of speech and no antonym
- entries left with no kanji, kana or sense
"""

import gzip
import json
import logging
import os
import zipfile
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar, Union

from hikiate.settings import DICT_PATH
from hikiate.constants import (
    ENTRY_LIST_KEYS, ENTRY_ID_KEYS,
    KANJI_LIST_KEYS, KANJI_TEXT_KEYS,
    KANA_LIST_KEYS, KANA_TEXT_KEYS, KANA_APPLIES_TO_KANJI_KEYS,
    SENSE_LIST_KEYS, SENSE_POS_KEYS,
    SENSE_APPLIES_TO_KANA_KEYS, SENSE_APPLIES_TO_KANJI_KEYS,
    SENSE_LANGUAGE_SOURCE_KEYS, SENSE_TAG_FIELDS,
)
from hikiate.models import (
    Dictionary, Entry, KanjiForm, KanaForm, Sense, Gloss, LanguageSource,
    Gender, GlossType,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')


# ============================================================================
# Errors
# ============================================================================

class DictionaryParseError(ValueError):
    """Base class for dictionary export parse failures."""


class MalformedDictionaryError(DictionaryParseError):
    """The input is not a JSON object, or holds no JSON export."""


class EmptyDictionaryError(DictionaryParseError):
    """The input parsed, but no usable entry survived validation."""


# ============================================================================
# Value Extraction
# ============================================================================

def _as_string(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_optional_string(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    return False


def _as_id(value: Any) -> str:
    """Entry ids may be exported as strings or as JMdict sequence numbers."""
    if isinstance(value, bool):
        return ""
    if isinstance(value, int):
        return str(value)
    return _as_string(value)


def _as_records(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _xref_text(value: Any) -> str:
    """
    Render a tag list item as text.

    Cross-references (related, antonym) are exported as arrays such as
    ["丸", "まる", 1]; they are joined with ・ the way JMdict XML writes
    them.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        parts = [
            str(p) for p in value
            if isinstance(p, str) or (isinstance(p, int) and not isinstance(p, bool))
        ]
        return '・'.join(p for p in parts if p)
    return ""


def _as_string_list(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(s for s in (_xref_text(v) for v in value) if s)


def _as_tag_map(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {k: v for k, v in value.items() if isinstance(k, str) and isinstance(v, str)}


def first_present(source: Any, keys: Tuple[str, ...], extract: Callable[[Any], T]) -> T:
    """
    Get the first non-empty value among several candidate keys.

    Args:
        source: Mapping to read from. Anything else is treated as empty.
        keys: Key names, primary first, then fallbacks in order.
        extract: Converts a raw value to the wanted type. It must accept
            None and return an empty value for anything of the wrong shape.

    Returns:
        The first truthy extracted value, or extract(None) if none is.
    """
    if isinstance(source, dict):
        for key in keys:
            value = extract(source.get(key))
            if value:
                return value
    return extract(None)


# ============================================================================
# Record Parsing
# ============================================================================

def _parse_kanji(record: Any) -> Optional[KanjiForm]:
    if not isinstance(record, dict):
        return None
    text = first_present(record, KANJI_TEXT_KEYS, _as_string)
    if not text:
        return None
    return KanjiForm(
        text=text,
        common=_as_bool(record.get('common')),
        tags=_as_string_list(record.get('tags')),
    )


def _parse_kana(record: Any) -> Optional[KanaForm]:
    if not isinstance(record, dict):
        return None
    text = first_present(record, KANA_TEXT_KEYS, _as_string)
    if not text:
        return None
    return KanaForm(
        text=text,
        common=_as_bool(record.get('common')),
        tags=_as_string_list(record.get('tags')),
        applies_to_kanji=first_present(record, KANA_APPLIES_TO_KANJI_KEYS, _as_string_list),
    )


def _parse_gloss(record: Any) -> Optional[Gloss]:
    if not isinstance(record, dict):
        return None
    text = _as_string(record.get('text'))
    if not text:
        return None
    return Gloss(
        text=text,
        lang=_as_string(record.get('lang')),
        gender=Gender.from_label(record.get('gender')),
        type=GlossType.from_label(record.get('type')),
    )


def _parse_language_source(record: Any) -> Optional[LanguageSource]:
    if not isinstance(record, dict):
        return None
    lang = _as_string(record.get('lang'))
    if not lang:
        return None
    return LanguageSource(
        lang=lang,
        text=_as_optional_string(record.get('text')),
        full=_as_bool(record.get('full')),
        wasei=_as_bool(record.get('wasei')),
    )


def _parse_sense(record: Any) -> Optional[Sense]:
    if not isinstance(record, dict):
        return None

    glosses = _collect(_as_records(record.get('gloss')), _parse_gloss)
    part_of_speech = first_present(record, SENSE_POS_KEYS, _as_string_list)
    tag_lists = {name: _as_string_list(record.get(name)) for name in SENSE_TAG_FIELDS}

    # An antonym-only sense is still meaningful as a cross-reference
    if not glosses and not part_of_speech and not tag_lists['antonym']:
        return None

    sources = first_present(record, SENSE_LANGUAGE_SOURCE_KEYS, _as_records)

    return Sense(
        part_of_speech=part_of_speech,
        applies_to_kana=first_present(record, SENSE_APPLIES_TO_KANA_KEYS, _as_string_list),
        applies_to_kanji=first_present(record, SENSE_APPLIES_TO_KANJI_KEYS, _as_string_list),
        gloss=glosses,
        language_source=_collect(sources, _parse_language_source),
        **tag_lists,
    )


def _collect(records: List[Any], parse: Callable[[Any], Optional[T]]) -> Tuple[T, ...]:
    """Parse each record independently, dropping the ones that fail."""
    result = []
    for record in records:
        item = parse(record)
        if item is None:
            logger.debug(f"Dropped invalid record: {record!r}")
            continue
        result.append(item)
    return tuple(result)


def parse_entry(record: Any) -> Optional[Entry]:
    """
    Parse a single entry record.

    Args:
        record: One element of the export's entry list.

    Returns:
        Entry, or None if the record is not an object or nothing usable
        remains after dropping invalid forms and senses.
    """
    if not isinstance(record, dict) or not record:
        return None

    entry = Entry(
        id=first_present(record, ENTRY_ID_KEYS, _as_id),
        kanji=_collect(first_present(record, KANJI_LIST_KEYS, _as_records), _parse_kanji),
        kana=_collect(first_present(record, KANA_LIST_KEYS, _as_records), _parse_kana),
        sense=_collect(first_present(record, SENSE_LIST_KEYS, _as_records), _parse_sense),
    )

    if entry.is_empty():
        return None
    return entry


# ============================================================================
# Document Parsing
# ============================================================================

def _decode_document(raw: Union[bytes, bytearray, str]) -> Dict[str, Any]:
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise MalformedDictionaryError(f"Dictionary export is not valid UTF-8: {e}") from e

    try:
        document = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedDictionaryError(f"Dictionary export is not valid JSON: {e}") from e
    except RecursionError as e:
        raise MalformedDictionaryError("Dictionary export is nested too deeply") from e

    if not isinstance(document, dict):
        raise MalformedDictionaryError(
            f"Dictionary export must be a JSON object, got {type(document).__name__}"
        )
    return document


def parse_dictionary(raw: Union[bytes, bytearray, str]) -> Dictionary:
    """
    Parse a JMdict JSON export.

    Args:
        raw: Raw bytes (UTF-8, optional BOM) or an already decoded string.

    Returns:
        Dictionary with at least one entry.

    Raises:
        MalformedDictionaryError: If the input is not a JSON object.
        EmptyDictionaryError: If no entry survives validation.
    """
    document = _decode_document(raw)

    records = first_present(document, ENTRY_LIST_KEYS, _as_records)
    entries = []
    for index, record in enumerate(records):
        entry = parse_entry(record)
        if entry is None:
            logger.debug(f"Dropped entry at index {index}")
            continue
        entries.append(entry)

    logger.info(f"Parsed {len(entries)} of {len(records)} entries "
                f"({len(records) - len(entries)} dropped)")

    if not entries:
        raise EmptyDictionaryError("Dictionary export contains no usable entries")

    return Dictionary(
        common_only=_as_bool(document.get('commonOnly')),
        dict_date=_as_string(document.get('dictDate')),
        dict_revisions=_as_string_list(document.get('dictRevisions')),
        languages=_as_string_list(document.get('languages')),
        tags=_as_tag_map(document.get('tags')),
        version=_as_string(document.get('version')),
        entries=tuple(entries),
    )


# ============================================================================
# File Loading
# ============================================================================

def is_gzip_file(path: str) -> bool:
    """Check if a file is gzip compressed by reading magic bytes."""
    try:
        with open(path, 'rb') as f:
            return f.read(2) == b'\x1f\x8b'
    except OSError:
        return False


def read_zip_export(path: str) -> bytes:
    """
    Read the first JSON file inside a zip archive.

    jmdict-simplified publishes its releases as .json.zip archives holding
    a single export. Directories and hidden files are skipped.
    """
    with zipfile.ZipFile(path) as archive:
        for info in archive.infolist():
            name = os.path.basename(info.filename)
            if info.is_dir() or name.startswith('.'):
                continue
            if name.lower().endswith('.json'):
                logger.info(f"Reading {info.filename} from {path}")
                return archive.read(info)
    raise MalformedDictionaryError(f"No JSON file found in archive: {path}")


def load_dictionary(path: Optional[Union[str, Path]] = None) -> Dictionary:
    """
    Load a JMdict JSON export from disk.

    Args:
        path: Path to the export (plain, gzipped, or a zip archive
            holding one). Defaults to settings.DICT_PATH.

    Returns:
        Parsed Dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        DictionaryParseError: If the file cannot be parsed.
    """
    path = str(path or DICT_PATH)

    # Also check for .gz and .zip versions
    if not os.path.exists(path):
        for suffix in ('.gz', '.zip'):
            if os.path.exists(path + suffix):
                path = path + suffix
                break

    if not os.path.exists(path):
        raise FileNotFoundError(f"Dictionary not found at: {path}")

    if path.endswith('.gz') or is_gzip_file(path):
        with gzip.open(path, 'rb') as f:
            raw = f.read()
    elif zipfile.is_zipfile(path):
        raw = read_zip_export(path)
    else:
        with open(path, 'rb') as f:
            raw = f.read()

    logger.info(f"Loading dictionary from {path} ({len(raw):,} bytes)")
    return parse_dictionary(raw)
