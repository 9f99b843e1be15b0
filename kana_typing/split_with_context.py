# kana_typing/split_with_context.py
import re

# 分割文字
SPLIT_CHARS = {'。', '？', '」', '！', '?', '!'}


def split_with_context(text: str) -> list[dict]:
    """
    括弧のコンテキストを考慮して文章を一文ずつに分割します。

    「」や () のネストをカウントし、ネストが0の状態で分割文字が出現した場合に
    分割します。各セグメントの改行・タブは削除し、全角スペースは半角にします。
    空白だけのセグメントは返しません。

    Returns:
        list[dict]: [{'segment': str, 'start': int, 'end': int}, ...]
                    start/end は元の text におけるスライス位置
    """
    raw_segments = []
    start_index = 0
    in_kakko = 0      # () のネストレベル
    in_kagikakko = 0  # 「」のネストレベル

    for i, char in enumerate(text):
        if char in ('(', '（'):
            in_kakko += 1
        elif char in (')', '）'):
            if in_kakko > 0:
                in_kakko -= 1
        elif char == '「':
            in_kagikakko += 1
        elif char == '」':
            if in_kagikakko > 0:
                in_kagikakko -= 1

        if char in SPLIT_CHARS and in_kakko == 0 and in_kagikakko == 0:
            raw_segments.append((start_index, i + 1))
            start_index = i + 1

    # 最後の「。」の後ろに残った文字列
    if start_index < len(text):
        raw_segments.append((start_index, len(text)))

    cleaned = []
    for start, end in raw_segments:
        segment = text[start:end].replace('　', ' ')
        # タブ・改行などは削除 (半角スペースは残す)
        segment = re.sub(r'[^\S ]+', '', segment)
        if segment.strip() == "":
            continue
        cleaned.append({'segment': segment.strip(), 'start': start, 'end': end})
    return cleaned
