# api/wiki.py
import logging
import os
import random
import re

import requests
from flask import Flask, request, jsonify

from kana_typing.furigana import text_to_problems

app = Flask(__name__)

# --- 設定 (Configuration) ---
logging.basicConfig(level=logging.INFO)
GOAL_LENGTH = int(os.environ.get("WIKI_GOAL_LENGTH", 300))
WIKI_API_URL = "https://ja.wikipedia.org/w/api.php"
WIKI_TIMEOUT = 10

CATEGORIES = [
    "動物", "植物", "科学", "技術", "歴史", "地理", "数学", "物理学", "化学", "生物学", "天文学",
    "哲学", "経済学", "法律", "芸術", "スポーツ", "料理", "気象", "言語学"
]

my_headers = {
    "User-Agent": "kana-typing - For a typing game"
}


def has_unsupported_chars(text):
    """ASCII・かな・漢字・全角記号以外が含まれていれば True (打てない可能性が高い)"""
    for ch in text:
        code = ord(ch)
        if (0x0000 <= code <= 0x007F or 0x3040 <= code <= 0x309F
                or 0x30A0 <= code <= 0x30FF or 0x4E00 <= code <= 0x9FFF
                or 0x3000 <= code <= 0x303F or 0xFF00 <= code <= 0xFFEF):
            continue
        return True
    return False


def normalize_summary(summary):
    """括弧書きの補足を除き、空白を1つにそろえる"""
    summary = re.sub(r'（[^）]*）', '', summary)
    summary = re.sub(r'\([^)]*\)', '', summary)
    return re.sub(r'\s+', ' ', summary).strip()


def get_wiki_summary(session, title):
    params = {
        "action": "query",
        "format": "json",
        "prop": "extracts",
        "exintro": True,
        "explaintext": True,
        "titles": title
    }
    try:
        res = session.get(WIKI_API_URL, params=params, headers=my_headers, timeout=WIKI_TIMEOUT)
        res.raise_for_status()
        data = res.json()
        page = next(iter(data["query"]["pages"].values()))
        return page.get("extract", "")
    except (requests.exceptions.RequestException, ValueError, KeyError, StopIteration) as e:
        logging.warning(f"Failed to get summary for {title}: {e}")
        return ""


def get_random_title_from_search(session):
    cat = random.choice(CATEGORIES)
    params = {
        "action": "query",
        "format": "json",
        "list": "categorymembers",
        "cmtitle": f"Category:{cat}",
        "cmnamespace": 0,
        "cmlimit": 50,
    }
    try:
        res = session.get(WIKI_API_URL, params=params, headers=my_headers, timeout=WIKI_TIMEOUT)
        res.raise_for_status()
        data = res.json()
        members = data.get("query", {}).get("categorymembers", [])
        if not members:
            return None
        return random.choice(members)["title"]
    except (requests.exceptions.RequestException, ValueError, KeyError) as e:
        logging.warning(f"Failed to get random title: {e}")
        return None


def trim_to_goal(problems, goal_length=GOAL_LENGTH):
    """読みの合計が goal_length を超えたところで打ち切る (最低1問は残す)"""
    result = []
    total = 0
    for p in problems:
        if result and total + len(p.kana) > goal_length:
            break
        result.append(p)
        total += len(p.kana)
    return result


@app.route("/api/wiki", methods=["GET"])
def api_get_wiki():
    """
    Wikipedia の記事の要約を取得し、一文ずつの問題 (表示文・かな・ユニット) として返す API。
    title を指定しなければカテゴリからランダムに選ぶ。
    """
    try:
        with requests.Session() as session:
            title = request.args.get('title') or get_random_title_from_search(session)
            if not title:
                return jsonify(error="記事が見つかりませんでした"), 500
            summary = get_wiki_summary(session, title)

        if not summary:
            return jsonify(error=f"記事が見つかりませんでした: {title}"), 404
        summary = normalize_summary(summary)
        if has_unsupported_chars(summary):
            logging.info(f"Wiki: '{title}' has unsupported characters.")
            return jsonify(error="打てない文字が含まれています"), 422

        problems = trim_to_goal(text_to_problems(summary))
        if not problems:
            return jsonify(error="Problem generation failed."), 500

        logging.info(f"Wiki: '{title}' -> {len(problems)} problems")
        return jsonify(title=title, problems=[p.to_payload() for p in problems])
    except Exception as e:
        logging.exception(f"Unexpected error in /api/wiki: {e}")
        return jsonify(error="Internal server error"), 500


# --- サーバー起動（開発用） ---
if __name__ == '__main__':
    app.run(debug=True, port=int(os.environ.get("PORT", 5000)))
