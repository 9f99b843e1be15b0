# kana_typing/problems.py
import logging
import re
from dataclasses import dataclass, asdict

from kana_typing.segmenter import segment


@dataclass
class Problem:
    word: str  # 表示用 (漢字など)
    kana: str  # 判定用 (かな)

    def to_dict(self) -> dict:
        return asdict(self)

    def to_payload(self) -> dict:
        """クライアント向けに分割済みユニットを含めた dict を返す"""
        units = segment(self.kana)
        return {
            "word": self.word,
            "kana": self.kana,
            "romaji": "".join(u.romaji for u in units),
            "units": [u.to_dict() for u in units],
        }

    @staticmethod
    def from_dict(data: dict) -> "Problem":
        """{"kana": ..., "word": ...} から作る。word が無ければ kana を表示に使う"""
        kana = data["kana"]
        if not isinstance(kana, str) or not kana:
            raise TypeError(f"kana must be a non-empty string: {kana!r}")
        return Problem(word=data.get("word") or kana, kana=kana)


PROBLEMS = {
    "ことわざ": [
        Problem("光陰矢の如し", "こういんやのごとし"),
        Problem("能ある鷹は爪を隠す", "のうあるたかはつめをかくす"),
        Problem("塵も積もれば山となる", "ちりもつもればやまとなる"),
        Problem("継続は力なり", "けいぞくはちからなり"),
        Problem("石の上にも三年", "いしのうえにもさんねん"),
        Problem("青は藍より出でて藍より青し", "あおはあいよりいでてあいよりあおし"),
        Problem("明日は明日の風が吹く", "あしたはあしたのかぜがふく"),
    ],
    "文章": [
        Problem("タイピングは正確さと速さが重要です。", "たいぴんぐはせいかくさとはやさがじゅうようです。"),
        Problem("今日の天気は晴れ、絶好の洗濯日和です！", "きょうのてんきははれ、ぜっこうのせんたくびよりです！"),
        Problem("このプロジェクトの成功を心から願っています。", "このぷろじぇくとのせいこうをこころからねがっています。"),
        Problem("「こんにちは！」と彼は言った。", "「こんにちは！」とかれはいった。"),
        Problem("これは本当に正しいのでしょうか？", "これはほんとうにただしいのでしょうか？"),
        Problem("メールアドレスは example@example.com です。", "めーるあどれすは example@example.com です。"),
    ],
    "単語": [
        Problem("寿司", "すし"),
        Problem("日本", "にっぽん"),
        Problem("桜", "さくら"),
        Problem("切符", "きっぷ"),
        Problem("権威", "けんい"),
        Problem("ゲーム", "げーむ"),
        Problem("インターネット", "いんたーねっと"),
        Problem("新幹線", "しんかんせん"),
    ],
    "記号と数字": [
        Problem("ABCDEFG", "ABCDEFG"),
        Problem("2024年", "2024ねん"),
        Problem("100%", "100%"),
    ],
}


def read_word_file(path):
    """
    単語ファイルを読み込み、レベルごとの Problem リストを返す。

    1行1問で "かな,表示" の形式。"txt3" のような行があると、それ以降はレベル3。
    ファイルが読めない場合は空の dict を返す。
    """
    try:
        with open(path, "r", encoding="utf-8") as file:
            lines = file.read().splitlines()
    except OSError as e:
        logging.error(f"Failed to read word file {path}: {e}")
        return {}

    levels = {}
    now_level = 0
    for line in lines:
        line = line.strip()
        if not line:
            continue
        m = re.search(r"txt(\d+)", line)
        if m:
            now_level = int(m.group(1))
            continue
        kana, _, word = line.partition(",")
        if not kana:
            logging.warning(f"Skipping malformed line in {path}: {line!r}")
            continue
        levels.setdefault(now_level, []).append(Problem(word=word or kana, kana=kana))
    return levels
