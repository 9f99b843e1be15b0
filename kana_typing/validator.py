# kana_typing/validator.py

CORRECT = "correct"
IN_PROGRESS = "in-progress"
INCORRECT = "incorrect"


def validate(typed, options):
    """
    入力判定ロジック。

    typed: 現在のユニットに対してユーザーが入力した文字列 (例: 'k', 'ka')
    options: 正解となるローマ字表記の列 (例: ['ka', 'ca'])

    戻り値:
    CORRECT: 入力が完了した
    IN_PROGRESS: 入力は正しいが、まだ途中
    INCORRECT: どの候補にも前方一致しない
    """
    partial_matches = [r for r in options if r.startswith(typed)]
    if not partial_matches:
        return INCORRECT

    if typed in partial_matches:
        # 'n' と 'nn' のように、より長い候補が残っていれば途中扱い
        if any(len(r) > len(typed) for r in partial_matches):
            return IN_PROGRESS
        return CORRECT

    return IN_PROGRESS
