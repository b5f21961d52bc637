"""
Pydantic models for the normalized dictionary.

These models hold one parsed JMdict export in memory:
- Dictionary: export metadata plus the ordered entry list
- Entry: one headword with its kanji forms, kana forms and senses
- Sense / Gloss / LanguageSource: meanings and their translations

All models are frozen and use tuples for their collections, so a parsed
Dictionary can be shared between matchers (and threads) without copying.

Usage:
    from hikiate.models import Dictionary, Entry

    dictionary = parse_dictionary(raw_bytes)
    for entry in dictionary.entries:
        print(entry.id, entry.kanji_texts, entry.kana_texts)

    # Serialized field names follow the jmdict-simplified layout
    entry.model_dump(mode="json", by_alias=True)
"""

from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


# =============================================================================
# Enumerations
# =============================================================================

class Gender(str, Enum):
    """Grammatical gender of a gloss in its target language."""
    MASCULINE = "masculine"
    FEMININE = "feminine"
    NEUTER = "neuter"

    @classmethod
    def from_label(cls, label: object) -> Optional["Gender"]:
        """Look up a gender by label, ignoring case. Unknown labels give None."""
        if not isinstance(label, str):
            return None
        try:
            return cls(label.strip().lower())
        except ValueError:
            return None


class GlossType(str, Enum):
    """How a gloss relates to the Japanese headword."""
    LITERAL = "literal"
    FIGURATIVE = "figurative"
    EXPLANATION = "explanation"
    TRADEMARK = "trademark"

    @classmethod
    def from_label(cls, label: object) -> Optional["GlossType"]:
        """Look up a gloss type by label, ignoring case. Unknown labels give None."""
        if not isinstance(label, str):
            return None
        try:
            return cls(label.strip().lower())
        except ValueError:
            return None


# =============================================================================
# Entity Models
# =============================================================================

class _Frozen(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class KanjiForm(_Frozen):
    """A kanji spelling of an entry (JMdict k_ele)."""
    text: str
    common: bool = False
    tags: Tuple[str, ...] = ()


class KanaForm(_Frozen):
    """
    A kana reading of an entry (JMdict r_ele).

    An empty applies_to_kanji means the reading is valid for every
    kanji form of the entry.
    """
    text: str
    common: bool = False
    tags: Tuple[str, ...] = ()
    applies_to_kanji: Tuple[str, ...] = ()


class Gloss(_Frozen):
    """One translation of a sense."""
    text: str
    lang: str = ""
    gender: Optional[Gender] = None
    type: Optional[GlossType] = None

    @property
    def key(self) -> Tuple:
        return (self.text, self.lang, self.type, self.gender)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Gloss):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


class LanguageSource(_Frozen):
    """Source language of a loanword."""
    lang: str
    text: Optional[str] = None
    full: bool = False   # text is the complete source word
    wasei: bool = False  # 和製 pseudo-loanword


class Sense(_Frozen):
    """
    One meaning of an entry.

    Two senses are equal when they share part of speech, gloss texts
    and the kanji/kana restrictions; the auxiliary tag lists are ignored.
    """
    part_of_speech: Tuple[str, ...] = ()
    field: Tuple[str, ...] = ()
    misc: Tuple[str, ...] = ()
    dialect: Tuple[str, ...] = ()
    info: Tuple[str, ...] = ()
    antonym: Tuple[str, ...] = ()
    related: Tuple[str, ...] = ()
    applies_to_kana: Tuple[str, ...] = ()
    applies_to_kanji: Tuple[str, ...] = ()
    gloss: Tuple[Gloss, ...] = ()
    language_source: Tuple[LanguageSource, ...] = ()

    @property
    def gloss_texts(self) -> Tuple[str, ...]:
        return tuple(g.text for g in self.gloss)

    @property
    def key(self) -> Tuple:
        return (
            self.part_of_speech,
            self.gloss_texts,
            self.applies_to_kanji,
            self.applies_to_kana,
        )

    def has_pos(self, pos: str) -> bool:
        """Check whether this sense carries a POS label (case-insensitive)."""
        wanted = pos.lower()
        return any(p.lower() == wanted for p in self.part_of_speech)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sense):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


class Entry(_Frozen):
    """
    A single dictionary entry.

    Entries are identified by id alone: two Entry objects with the same
    id compare equal even if their contents differ.
    """
    id: str = ""
    kanji: Tuple[KanjiForm, ...] = ()
    kana: Tuple[KanaForm, ...] = ()
    sense: Tuple[Sense, ...] = ()

    @property
    def kanji_texts(self) -> Tuple[str, ...]:
        return tuple(k.text for k in self.kanji)

    @property
    def kana_texts(self) -> Tuple[str, ...]:
        return tuple(k.text for k in self.kana)

    @property
    def is_common(self) -> bool:
        """True if any kanji or kana form is marked common."""
        return any(k.common for k in self.kanji) or any(k.common for k in self.kana)

    def is_empty(self) -> bool:
        return not (self.kanji or self.kana or self.sense)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class Dictionary(_Frozen):
    """
    A parsed dictionary export.

    The metadata fields are informational only; matching looks at
    entries alone. The tag map is a read-only view.
    """
    common_only: bool = False
    dict_date: str = ""
    dict_revisions: Tuple[str, ...] = ()
    languages: Tuple[str, ...] = ()
    tags: Mapping[str, str] = Field(default_factory=lambda: MappingProxyType({}))
    version: str = ""
    entries: Tuple[Entry, ...] = ()

    @field_validator("tags", mode="after")
    @classmethod
    def freeze_tags(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_serializer("tags")
    def serialize_tags(self, value: Mapping[str, str]) -> Dict[str, str]:
        return dict(value)

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, entry_id: str) -> Optional[Entry]:
        """Return the first entry with the given id, or None."""
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None
