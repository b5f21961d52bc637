"""
Shared fixtures for hikiate tests.

The sample export follows the jmdict-simplified layout; no test needs a
real dictionary file or MeCab.
"""

import json

import pytest

from hikiate.dict_load import parse_dictionary
from hikiate.matcher import TokenMatcher


def make_entry(id, kanji=(), kana=(), senses=(), kanji_common=False, kana_common=False):
    """Build a jmdict-simplified entry record."""
    return {
        'id': id,
        'kanji': [{'common': kanji_common, 'text': k, 'tags': []} for k in kanji],
        'kana': [
            {'common': kana_common, 'text': k, 'tags': [], 'appliesToKanji': ['*']}
            for k in kana
        ],
        'sense': list(senses),
    }


def make_sense(pos=(), glosses=(), **extra):
    """Build a jmdict-simplified sense record with English glosses."""
    sense = {
        'partOfSpeech': list(pos),
        'appliesToKanji': ['*'],
        'appliesToKana': ['*'],
        'related': [],
        'antonym': [],
        'field': [],
        'dialect': [],
        'misc': [],
        'info': [],
        'languageSource': [],
        'gloss': [{'lang': 'eng', 'gender': None, 'type': None, 'text': g} for g in glosses],
    }
    sense.update(extra)
    return sense


def make_export(records, **metadata):
    """Build a full export document and encode it as UTF-8 bytes."""
    document = {
        'version': '3.5.0',
        'languages': ['eng'],
        'commonOnly': False,
        'dictDate': '2024-12-16',
        'dictRevisions': ['1.09', '1.08'],
        'tags': {'v1': 'Ichidan verb', 'n': 'noun (common) (futsuumeishi)'},
        'words': list(records),
    }
    document.update(metadata)
    return json.dumps(document, ensure_ascii=False).encode('utf-8')


@pytest.fixture
def sample_entries():
    return [
        make_entry(
            '1358280', kanji=['食べる'], kana=['たべる'], kanji_common=True, kana_common=True,
            senses=[make_sense(['v1', 'vt'], ['to eat'])],
        ),
        make_entry(
            '1467640', kanji=['猫'], kana=['ねこ'], kanji_common=True, kana_common=True,
            senses=[make_sense(['n'], ['cat'])],
        ),
        make_entry(
            '2711690', kanji=['寝子'], kana=['ねこ'],
            senses=[make_sense(['n'], ['child who sleeps a lot'])],
        ),
        make_entry(
            '1002980', kana=['すき'],
            senses=[make_sense(['adj-na'], ['liking'])],
        ),
        make_entry(
            '1576150', kanji=['好き'], kana=['すき'], kanji_common=True,
            senses=[make_sense(['adj-na', 'n'], ['liked', 'favourite'])],
        ),
    ]


@pytest.fixture
def sample_bytes(sample_entries):
    return make_export(sample_entries)


@pytest.fixture
def dictionary(sample_bytes):
    return parse_dictionary(sample_bytes)


@pytest.fixture
def matcher(dictionary):
    return TokenMatcher(dictionary)
