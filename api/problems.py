# api/problems.py
import logging
import os
import random

from flask import Flask, request, jsonify

from kana_typing.problems import PROBLEMS, Problem

app = Flask(__name__)
logging.basicConfig(level=logging.INFO)


@app.route('/api/problems', methods=['GET'])
def get_problems():
    """
    問題バンクから問題を返す。
    category を指定しなければ全カテゴリ、shuffle=1 で順番をランダムにする。
    各問題には分割済みユニット (かな・ローマ字・候補) を含める。
    """
    try:
        category = request.args.get('category')
        if category:
            if category not in PROBLEMS:
                return jsonify(error=f"Unknown category: {category}", categories=list(PROBLEMS)), 404
            problems = list(PROBLEMS[category])
        else:
            problems = [p for items in PROBLEMS.values() for p in items]

        if request.args.get('shuffle') == '1':
            random.shuffle(problems)

        logging.info(f"Serving {len(problems)} problems (category={category})")
        return jsonify(problems=[p.to_payload() for p in problems])
    except Exception as e:
        logging.exception(f"Unexpected error in /api/problems: {e}")
        return jsonify(error="Internal server error"), 500


@app.route('/api/categories', methods=['GET'])
def get_categories():
    return jsonify(categories=list(PROBLEMS))


@app.route('/api/segment', methods=['POST'])
def segment_problems():
    """
    クライアントが用意した問題 ({"problems": [{"kana": ..., "word": ...}, ...]}) を
    分割済みユニット付きで返す。
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not isinstance(data.get('problems'), list):
        return jsonify(error="problems (list) is required"), 400
    try:
        problems = [Problem.from_dict(item) for item in data['problems']]
    except (KeyError, TypeError, AttributeError) as e:
        logging.warning(f"Invalid problem in /api/segment: {e!r}")
        return jsonify(error="each problem needs a kana string"), 400

    try:
        logging.info(f"Segmenting {len(problems)} client problems")
        return jsonify(problems=[p.to_payload() for p in problems])
    except Exception as e:
        logging.exception(f"Unexpected error in /api/segment: {e}")
        return jsonify(error="Internal server error"), 500


if __name__ == '__main__':
    app.run(debug=True, port=int(os.environ.get("PORT", 5000)))
