"""
Consolidated constants for Hikiate.

This module provides a single source of truth for:
- MeCab feature positions and the "no value" sentinel
- Dictionary export key names, primary first then fallbacks

The key tables cover two export layouts: the camelCase jmdict-simplified
schema, and the older snake_case schema that mirrors the JMdict XML
element names (k_ele, r_ele, keb, reb).
"""

from typing import Tuple


# ============================================================================
# MeCab Feature Layout
# ============================================================================
# Positions follow the UniDic feature order produced by MeCab.

FEATURE_SENTINEL = "*"

POS_LEVELS = 4  # 品詞, 品詞細分類1, 品詞細分類2, 品詞細分類3

FEATURE_POS = 0
FEATURE_INFLECTION_TYPE = 4   # 活用型
FEATURE_INFLECTION_FORM = 5   # 活用形
FEATURE_LEMMA = 7             # 語彙素
FEATURE_WRITTEN_FORM = 8      # 書字形
FEATURE_PRONUNCIATION = 9     # 発音形
FEATURE_KANA_FORM = 17        # 仮名形


# ============================================================================
# Dictionary Export Keys
# ============================================================================

ENTRY_LIST_KEYS: Tuple[str, ...] = ("words", "entries")
ENTRY_ID_KEYS: Tuple[str, ...] = ("id", "entry_id")

KANJI_LIST_KEYS: Tuple[str, ...] = ("kanji", "k_ele", "characters")
KANJI_TEXT_KEYS: Tuple[str, ...] = ("text", "keb", "character")

KANA_LIST_KEYS: Tuple[str, ...] = ("kana", "r_ele", "readings")
KANA_TEXT_KEYS: Tuple[str, ...] = ("text", "reb", "reading")
KANA_APPLIES_TO_KANJI_KEYS: Tuple[str, ...] = ("appliesToKanji", "applies_to")

SENSE_LIST_KEYS: Tuple[str, ...] = ("sense", "senses", "meanings")
SENSE_POS_KEYS: Tuple[str, ...] = ("partOfSpeech", "pos")
SENSE_APPLIES_TO_KANA_KEYS: Tuple[str, ...] = ("appliesToKana", "applies_to_kana")
SENSE_APPLIES_TO_KANJI_KEYS: Tuple[str, ...] = ("appliesToKanji", "applies_to_kanji")
SENSE_LANGUAGE_SOURCE_KEYS: Tuple[str, ...] = ("languageSource", "language_source")

# Sense tag lists that share one key name across both layouts
SENSE_TAG_FIELDS: Tuple[str, ...] = (
    'field', 'misc', 'dialect', 'info', 'antonym', 'related',
)
