# kana_typing/performance.py

# スコアに基づいたレベル定義 (minScore 昇順)
LEVELS = [
    {"name": "見習い", "min_score": 0},
    {"name": "初級者", "min_score": 2000},
    {"name": "中級者", "min_score": 10000},
    {"name": "上級者", "min_score": 25000},
    {"name": "熟練者", "min_score": 50000},
    {"name": "達人", "min_score": 80000},
    {"name": "超人", "min_score": 120000},
    {"name": "神", "min_score": 150000},
]


def calculate_performance(typed_chars, mistake_count, elapsed_ms):
    """
    WPM と正確率 (%) を計算する。
    1 word = 5 文字として扱う。ミスは入力途中かどうかに関係なく同じ重み。
    """
    elapsed_sec = elapsed_ms / 1000
    wpm = (typed_chars / 5) / (elapsed_sec / 60) if elapsed_sec > 0 else 0.0

    total_typed = typed_chars + mistake_count
    accuracy = (typed_chars / total_typed) * 100 if total_typed > 0 else 100.0
    return wpm, accuracy


def get_level_from_score(score):
    """スコアから対応するレベルを返す (LEVELS はソート済みが前提)"""
    current_level = LEVELS[0]
    for level in LEVELS:
        if score >= level["min_score"]:
            current_level = level
        else:
            break
    return current_level
