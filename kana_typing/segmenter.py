# kana_typing/segmenter.py
import logging
from dataclasses import dataclass, field, asdict
from typing import List

from kana_typing.roman_table import lookup, role_of, SOKUON, HATSUON

# 促音で重ねられる子音 (n, x, l は重ねない)
DOUBLEABLE_CONSONANTS = "bcdfghjkmpqrstvwyz"
# 直後がこれで始まる場合 ん は nn で打つ必要がある
NN_REQUIRED_HEADS = "aiueoyn"


@dataclass
class PhoneticUnit:
    kana: str
    romaji: str
    options: List[str] = field(default_factory=list)
    typed: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


def _resolve_key(s, i):
    """位置 i から始まるユニットのキーを返す (2文字優先)"""
    if i + 1 < len(s) and lookup(s[i:i+2]) is not None:
        return s[i:i+2]
    return s[i]


def _options_for(key):
    """テーブルにない文字はそのまま1候補として扱う"""
    romaji = lookup(key)
    if romaji is None:
        return [key]
    return list(romaji)


def split_kana(s):
    """かな文字列をローマ字テーブルに基づいて分割する (拗音などを考慮)"""
    i = 0
    result = []
    while i < len(s):
        key = _resolve_key(s, i)
        result.append(key)
        i += len(key)
    return result


def requires_double_n(options):
    """直後のユニットの候補が母音/y/n で始まるなら True"""
    return any(r and r[0] in NN_REQUIRED_HEADS for r in options)


def _apply_sokuon(unit, next_options):
    head = next_options[0][:1]
    if not head or head not in DOUBLEABLE_CONSONANTS:
        return
    unit.romaji = head
    for r in next_options:
        c = r[:1]
        if c and c in DOUBLEABLE_CONSONANTS and c not in unit.options:
            unit.options.append(c)


def _apply_hatsuon(unit, next_options):
    if requires_double_n(next_options):
        unit.romaji = "nn"


def segment(s) -> List[PhoneticUnit]:
    """かな文字列を PhoneticUnit の列に変換する"""
    keys = split_kana(s)
    units = []
    for idx, key in enumerate(keys):
        options = _options_for(key)
        if lookup(key) is None:
            logging.debug(f"pass-through unit: {key!r}")
        unit = PhoneticUnit(kana=key, romaji=options[0], options=options)

        if idx + 1 < len(keys):
            next_options = _options_for(keys[idx + 1])
            role = role_of(key)
            if role == SOKUON:
                _apply_sokuon(unit, next_options)
            elif role == HATSUON:
                _apply_hatsuon(unit, next_options)

        units.append(unit)
    return units
