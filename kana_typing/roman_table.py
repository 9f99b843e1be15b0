# kana_typing/roman_table.py
import unicodedata
from types import MappingProxyType

# 役割 (ロール)
SOKUON = "sokuon"    # 促音 っ
HATSUON = "hatsuon"  # 撥音 ん

# ローマ字テーブル: 先頭がデフォルト表記
_ROMAN_TABLE = {
    # 清音
    "あ": ("a",), "い": ("i", "yi"), "う": ("u", "wu", "whu"), "え": ("e",), "お": ("o",),
    "か": ("ka", "ca"), "き": ("ki",), "く": ("ku", "cu", "qu"), "け": ("ke",), "こ": ("ko", "co"),
    "さ": ("sa",), "し": ("shi", "si", "ci"), "す": ("su",), "せ": ("se", "ce"), "そ": ("so",),
    "た": ("ta",), "ち": ("chi", "ti"), "つ": ("tsu", "tu"), "て": ("te",), "と": ("to",),
    "な": ("na",), "に": ("ni",), "ぬ": ("nu",), "ね": ("ne",), "の": ("no",),
    "は": ("ha",), "ひ": ("hi",), "ふ": ("fu", "hu"), "へ": ("he",), "ほ": ("ho",),
    "ま": ("ma",), "み": ("mi",), "む": ("mu",), "め": ("me",), "も": ("mo",),
    "や": ("ya",), "ゆ": ("yu",), "よ": ("yo",),
    "ら": ("ra",), "り": ("ri",), "る": ("ru",), "れ": ("re",), "ろ": ("ro",),
    "わ": ("wa",), "を": ("wo",),

    # 撥音・促音・長音
    "ん": ("n", "nn", "xn"),
    "っ": ("xtu", "ltu", "xtsu", "ltsu"),
    "ー": ("-",),

    # 濁音
    "が": ("ga",), "ぎ": ("gi",), "ぐ": ("gu",), "げ": ("ge",), "ご": ("go",),
    "ざ": ("za",), "じ": ("ji", "zi"), "ず": ("zu",), "ぜ": ("ze",), "ぞ": ("zo",),
    "だ": ("da",), "ぢ": ("di", "dzi"), "づ": ("du", "dzu"), "で": ("de",), "ど": ("do",),
    "ば": ("ba",), "び": ("bi",), "ぶ": ("bu",), "べ": ("be",), "ぼ": ("bo",),

    # 半濁音
    "ぱ": ("pa",), "ぴ": ("pi",), "ぷ": ("pu",), "ぺ": ("pe",), "ぽ": ("po",),

    # 拗音 (直接入力のみ。小文字を分けて打つ表記は _compose_small_kana で追加する)
    "きゃ": ("kya",), "きゅ": ("kyu",), "きょ": ("kyo",),
    "ぎゃ": ("gya",), "ぎゅ": ("gyu",), "ぎょ": ("gyo",),
    "しゃ": ("sha", "sya"), "しゅ": ("shu", "syu"), "しょ": ("sho", "syo"),
    "しぇ": ("she", "sye"),
    "じゃ": ("ja", "jya", "zya"), "じゅ": ("ju", "jyu", "zyu"), "じょ": ("jo", "jyo", "zyo"),
    "じぇ": ("je", "jye", "zye"),
    "ちゃ": ("cha", "tya", "cya"), "ちゅ": ("chu", "tyu", "cyu"), "ちょ": ("cho", "tyo", "cyo"),
    "ちぇ": ("che", "tye", "cye"),
    "ぢゃ": ("dya",), "ぢゅ": ("dyu",), "ぢょ": ("dyo",),
    "にゃ": ("nya",), "にゅ": ("nyu",), "にょ": ("nyo",),
    "ひゃ": ("hya",), "ひゅ": ("hyu",), "ひょ": ("hyo",),
    "びゃ": ("bya",), "びゅ": ("byu",), "びょ": ("byo",),
    "ぴゃ": ("pya",), "ぴゅ": ("pyu",), "ぴょ": ("pyo",),
    "みゃ": ("mya",), "みゅ": ("myu",), "みょ": ("myo",),
    "りゃ": ("rya",), "りゅ": ("ryu",), "りょ": ("ryo",),

    # 外来音
    "ふぁ": ("fa", "fwa"), "ふぃ": ("fi", "fwi"), "ふぇ": ("fe", "fwe"), "ふぉ": ("fo", "fwo"),
    "ふゅ": ("fyu",),
    "うぃ": ("wi", "whi"), "うぇ": ("we", "whe"), "うぉ": ("who",),
    "いぇ": ("ye",),
    "ゔぁ": ("va",), "ゔぃ": ("vi",), "ゔ": ("vu",), "ゔぇ": ("ve",), "ゔぉ": ("vo",),
    "てぃ": ("thi",), "てゅ": ("thu",),
    "でぃ": ("dhi",), "でゅ": ("dhu",),
    "とぅ": ("twu",), "どぅ": ("dwu",),
    "つぁ": ("tsa",), "つぃ": ("tsi",), "つぇ": ("tse",), "つぉ": ("tso",),
    "くぁ": ("qa", "kwa"), "ぐぁ": ("gwa",),

    # 小文字単体 (x/l 始まり)
    "ぁ": ("xa", "la"), "ぃ": ("xi", "li"), "ぅ": ("xu", "lu"), "ぇ": ("xe", "le"), "ぉ": ("xo", "lo"),
    "ゃ": ("xya", "lya"), "ゅ": ("xyu", "lyu"), "ょ": ("xyo", "lyo"), "ゎ": ("xwa", "lwa"),

    # 記号など
    "、": (",",), "。": (".",), "・": ("/",), "「": ("[",), "」": ("]",),
    "　": (" ",), "？": ("?",), "！": ("!",), "：": (":",), "；": (";",),
    "（": ("(",), "）": (")",), "＜": ("<",), "＞": (">",), "～": ("~",),
}

SMALL_KANA = "ぁぃぅぇぉゃゅょゎ"


def _compose_small_kana(table):
    """2文字のエントリに「1文字目の表記 + 小文字の表記」(kixya, tuxa など) を追加する"""
    for key, romaji in list(table.items()):
        if len(key) != 2 or key[1] not in SMALL_KANA:
            continue
        composed = [a + b for a in table[key[0]] for b in table[key[1]]]
        extra = [r for r in dict.fromkeys(composed) if r not in romaji]
        table[key] = romaji + tuple(extra)


_compose_small_kana(_ROMAN_TABLE)
ROMAN_TABLE = MappingProxyType(_ROMAN_TABLE)

UNIT_ROLES = MappingProxyType({
    "っ": SOKUON,
    "ん": HATSUON,
})


def kata_to_hira(s, normalize=True):
    """
    カタカナをひらがなに変換する。
    normalize=True なら先に NFKC 正規化する (全角英数などもそろう)。
    テーブル検索では文字数を変えないよう normalize=False で使う。
    """
    if normalize:
        s = unicodedata.normalize('NFKC', s)
    result = []
    for ch in s:
        code = ord(ch)
        if 0x30A1 <= code <= 0x30F6:
            result.append(chr(code - 0x60))
        else:
            result.append(ch)
    return "".join(result)


def lookup(key):
    """キーに対応するローマ字表記のタプルを返す。テーブルにない場合は None"""
    return ROMAN_TABLE.get(kata_to_hira(key, normalize=False))


def role_of(key):
    """っ/ん のロールを返す。それ以外は None"""
    return UNIT_ROLES.get(kata_to_hira(key, normalize=False))
