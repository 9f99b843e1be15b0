# kana_typing/furigana.py (形態素解析 API 呼び出し版)

import logging
import unicodedata
import re
import os
import json

import requests
from pykakasi import Kakasi

from kana_typing.problems import Problem
from kana_typing.roman_table import kata_to_hira
from kana_typing.split_with_context import split_with_context

# 形態素解析 API の設定 (環境変数から読み込む)
API_BASE_URL = os.environ.get("FURIGANA_API_URL")  # 例: https://my-app.koyeb.app
API_KEY = os.environ.get("FURIGANA_API_KEY")
API_TIMEOUT = 10

# API のレスポンス (カタカナ) をひらがなにするために使う
try:
    KKS = Kakasi()
except Exception as e:
    logging.error(f"Failed to initialize Kakasi: {e}")
    KKS = None

# 日本語判定パターン
JAPANESE_PATTERN = re.compile(r'[ぁ-んァ-ヶ\u4E00-\u9FAF]')

# NFKC でそろわない記号の置き換え
CONVERSION_MAP = {
    '『': '「',
    '』': '」',
    '〜': '~',
}

# 日本語以外の語でそのまま残す記号
KEEP_SYMBOLS = {'、', '。', '・', '「', '」', 'ー'}


def _sanitize(message):
    chars = []
    for c in message:
        if unicodedata.category(c) == 'So':
            continue
        if c in ('\n', '\r', '\t'):
            chars.append(' ')
        else:
            chars.append(c)
    return "".join(chars)


def _reading_of_japanese(surface, reading_kata):
    if not reading_kata:
        reading_kata = surface
    result_list = KKS.convert(reading_kata)
    return "".join(item['hira'] for item in result_list)


def _reading_of_other(surface):
    """記号・英数字は打てる文字だけを残す"""
    temp_yomi = []
    for char in kata_to_hira(surface):
        char = CONVERSION_MAP.get(char, char)
        code = ord(char)
        if 0x3041 <= code <= 0x309F or char in KEEP_SYMBOLS:
            temp_yomi.append(char)
        elif 0x20 <= code <= 0x7E:
            temp_yomi.append(char)
        # それ以外は無視
    return "".join(temp_yomi)


def get_reading(message):
    """
    形態素解析 API を呼び出し、タイピング用のひらがな読みを返す。
    日本語の語は読み (ひらがな)、それ以外は記号を ASCII にそろえてそのまま残す。

    Returns:
        str | None: 読み。API の設定がない・失敗した場合は None
    """
    if not KKS:
        logging.error("Kakasi not initialized. Cannot process furigana.")
        return None
    if not API_BASE_URL or not API_KEY:
        logging.error("FURIGANA_API_URL or FURIGANA_API_KEY not set.")
        return None

    sanitized_message = _sanitize(message)
    if not sanitized_message.strip():
        logging.warning(f"Message becomes empty after sanitization: {message}")
        return ""

    url = f"{API_BASE_URL}/get_morphemes"
    payload = {
        "text": sanitized_message,
        "mode": "C"
    }
    headers = {
        "Content-Type": "application/json",
        "X-API-KEY": API_KEY
    }

    try:
        response = requests.post(url, headers=headers, data=json.dumps(payload), timeout=API_TIMEOUT)
        response.raise_for_status()
        api_data = response.json()
    except requests.exceptions.RequestException as e:
        logging.error(f"Morpheme API Request Error: {e}")
        return None
    except ValueError as e:
        logging.error(f"Morpheme API returned invalid JSON: {e}")
        return None

    if "morphemes" not in api_data:
        logging.error(f"API response missing 'morphemes' key: {api_data}")
        return None

    yomi_parts = []
    for m in api_data["morphemes"]:
        surface = m.get("surface", "")
        if JAPANESE_PATTERN.search(surface):
            yomi_parts.append(_reading_of_japanese(surface, m.get("reading", "")))
        else:
            yomi_parts.append(_reading_of_other(surface))
    return "".join(yomi_parts)


def text_to_problems(raw_text):
    """
    漢字かな混じりの文章を一文ずつ Problem に変換する。
    読みが取れなかった文はスキップする。
    """
    problems = []
    for data in split_with_context(raw_text):
        sentence = data['segment']
        reading = get_reading(sentence)
        if not reading:
            logging.warning(f"No reading for sentence, skipping: {sentence[:20]}...")
            continue
        problems.append(Problem(word=sentence, kana=reading.strip()))
    return problems
