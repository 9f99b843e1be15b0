# play.py
import argparse
import logging
import os
import random

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from kana_typing.judge import TypingJudge
from kana_typing.performance import get_level_from_score
from kana_typing.problems import PROBLEMS, read_word_file

console = Console()

RESET_ON_MISS = os.environ.get("KANA_TYPING_RESET_ON_MISS", "0") == "1"


def render_status(judge):
    """入力済みローマ字を緑、残りをグレーで表示する"""
    text = Text()
    text.append(judge.typed_romaji, style="bold green")
    text.append(judge.current_input, style="bold yellow")
    text.append(judge.remaining_romaji, style="grey50")
    return text


def calc_score(judge):
    """正確率で重みづけした WPM をスコアにする"""
    return int(judge.wpm * judge.accuracy * 10)


def play_problem(judge, problem):
    judge.set_problem(problem)
    console.print(Panel(f"[bold]{problem.word}[/bold]\n{problem.kana}"))
    while not judge.is_finished:
        console.print(render_status(judge))
        try:
            s = console.input("入力してください: ")
        except EOFError:
            return False
        for key in s:
            if not judge.check(key):
                console.print(f"[red]NG[/red] ({key})")
            if judge.is_finished:
                break

    score = calc_score(judge)
    level = get_level_from_score(score)
    console.print(render_status(judge))
    console.print(
        f"[bold]WPM[/bold] {judge.wpm:.1f}  [bold]正確率[/bold] {judge.accuracy:.1f}%  "
        f"[bold]ミス[/bold] {judge.mistake_count}  [bold]レベル[/bold] {level['name']} ({score})"
    )
    return True


def load_problems(category=None, word_file=None, level=None):
    if word_file:
        levels = read_word_file(word_file)
        if level is not None:
            return list(levels.get(level, []))
        return [p for items in levels.values() for p in items]
    if category:
        return list(PROBLEMS.get(category, []))
    return [p for items in PROBLEMS.values() for p in items]


def main():
    logging.basicConfig(level=logging.INFO)
    parser = argparse.ArgumentParser(description="ローマ字タイピング練習")
    parser.add_argument("--category", choices=list(PROBLEMS), help="問題のカテゴリ")
    parser.add_argument("--word-file", help="単語ファイル (かな,表示 形式)")
    parser.add_argument("--level", type=int, help="単語ファイルのレベル")
    args = parser.parse_args()

    problems = load_problems(args.category, args.word_file, args.level)
    if not problems:
        console.print("[red]問題がありません[/red]")
        return

    judge = TypingJudge("", reset_input_on_miss=RESET_ON_MISS)
    for problem in random.sample(problems, len(problems)):
        if not play_problem(judge, problem):
            break


if __name__ == "__main__":
    main()
