"""
Token type for morphological units produced by MeCab.

MeCab marks a missing feature with "*". Tokens never keep that marker:
every consumed feature position is converted to None when it holds the
sentinel or is past the end of the feature list.
"""

import csv
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from hikiate.constants import (
    FEATURE_SENTINEL, POS_LEVELS,
    FEATURE_POS, FEATURE_INFLECTION_TYPE, FEATURE_INFLECTION_FORM,
    FEATURE_LEMMA, FEATURE_WRITTEN_FORM, FEATURE_PRONUNCIATION,
    FEATURE_KANA_FORM,
)


def split_features(raw: str) -> Tuple[str, ...]:
    """
    Split a raw MeCab feature string into fields.

    UniDic quotes fields that contain commas, so the string is read as
    one CSV row rather than split naively.
    """
    if not raw:
        return ()
    return tuple(next(csv.reader([raw])))


def _feature(features: Sequence[str], index: int) -> Optional[str]:
    """Get the feature at index, or None if missing or the sentinel."""
    if index >= len(features):
        return None
    value = features[index]
    if value is None or value == FEATURE_SENTINEL:
        return None
    return value


@dataclass(frozen=True)
class Token:
    """A single morphological unit (one MeCab node)."""
    surface: Optional[str] = None                  # 表層形
    primary_part_of_speech: Optional[str] = None   # 品詞
    parts_of_speech: Tuple[str, ...] = ()          # 品詞 .. 品詞細分類3
    inflection_type: Optional[str] = None          # 活用型
    inflection_form: Optional[str] = None          # 活用形
    lemma: Optional[str] = None                    # 語彙素
    written_form: Optional[str] = None             # 書字形
    pronunciation: Optional[str] = None            # 発音形
    kana_form: Optional[str] = None                # 仮名形

    @classmethod
    def from_features(
        cls,
        surface: Optional[str],
        features: Union[str, Sequence[str]],
    ) -> Optional["Token"]:
        """
        Build a Token from a surface string and MeCab features.

        Args:
            surface: Surface text of the node. None or empty means the
                record is malformed and no Token is built.
            features: Either the raw comma-separated feature string or an
                already split sequence of fields.

        Returns:
            Token, or None if the record has no surface.
        """
        if not surface:
            return None
        if isinstance(features, str):
            features = split_features(features)

        parts = tuple(
            f for f in (_feature(features, i) for i in range(POS_LEVELS))
            if f is not None
        )

        return cls(
            surface=surface,
            primary_part_of_speech=_feature(features, FEATURE_POS),
            parts_of_speech=parts,
            inflection_type=_feature(features, FEATURE_INFLECTION_TYPE),
            inflection_form=_feature(features, FEATURE_INFLECTION_FORM),
            lemma=_feature(features, FEATURE_LEMMA),
            written_form=_feature(features, FEATURE_WRITTEN_FORM),
            pronunciation=_feature(features, FEATURE_PRONUNCIATION),
            kana_form=_feature(features, FEATURE_KANA_FORM),
        )

    @classmethod
    def from_word(cls, word: str) -> "Token":
        """Build a Token for a bare dictionary-form word, without MeCab."""
        return cls(surface=word, lemma=word)
