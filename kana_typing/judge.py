# kana_typing/judge.py
import logging
import time

from kana_typing.performance import calculate_performance
from kana_typing.problems import Problem
from kana_typing.roman_table import lookup, role_of, HATSUON
from kana_typing.segmenter import segment, requires_double_n
from kana_typing.validator import validate, CORRECT, IN_PROGRESS, INCORRECT


class TypingJudge:
    """
    かな文字列に対するローマ字タイピング入力を1キーずつ判定するクラス。

    使用例:
    judge = TypingJudge("にっぽん")
    judge.check("n")  # True (ん ではなく に の途中)
    judge.check("i")  # True
    judge.check("p")  # True (っ を p で確定)
    judge.check("p")  # True
    judge.check("o")  # True
    judge.check("n")  # True (文末の ん は n 一文字で確定)
    judge.is_finished  # True

    judge.set_problem("けんい")  # 新しい問題
    "ken" を打った後の "i" は False (kenni が必要)

    reset_input_on_miss:
    False の場合、ミスしても入力途中のバッファは残る (続けて打てる)。
    True の場合、ミスでバッファを空に戻す。
    """

    def __init__(self, problem, reset_input_on_miss=False, clock=time.time):
        self.reset_input_on_miss = reset_input_on_miss
        self._clock = clock
        self.set_problem(problem)

    def set_problem(self, problem):
        """新しい問題を設定し、状態をすべてリセットする"""
        if isinstance(problem, str):
            problem = Problem(word=problem, kana=problem)
        self.problem = problem
        self.units = segment(problem.kana)
        self.index = 0
        self.current_input = ""
        self.is_finished = not self.units

        self.mistake_count = 0
        self.start_time = None
        self.elapsed_ms = 0
        self.wpm, self.accuracy = calculate_performance(0, 0, 0)

    # ----------------------------
    # 表示用 (読み取り専用)
    # ----------------------------
    @property
    def current_unit(self):
        if self.is_finished:
            return None
        return self.units[self.index]

    @property
    def full_romaji(self):
        return "".join(u.romaji for u in self.units)

    @property
    def typed_romaji(self):
        return "".join(u.romaji for u in self.units[:self.index])

    @property
    def remaining_romaji(self):
        unit = self.current_unit
        if unit is None:
            return ""

        if self.current_input == "":
            untyped_current = unit.romaji
        else:
            best = unit.romaji if unit.romaji.startswith(self.current_input) else None
            if best is None:
                best = next((r for r in unit.options if r.startswith(self.current_input)), "")
            untyped_current = best[len(self.current_input):]

        future = "".join(u.romaji for u in self.units[self.index + 1:])
        return untyped_current + future

    @property
    def typed_kana(self):
        return "".join(u.kana for u in self.units[:self.index])

    @property
    def remaining_kana(self):
        return "".join(u.kana for u in self.units[self.index:])

    # ----------------------------
    # 入力処理
    # ----------------------------
    def check(self, key):
        """
        入力キーを判定する。
        戻り値:
        True: 入力は正しい (途中 or 確定)、または既に完了している
        False: 入力は間違い
        """
        if self.is_finished:
            return True

        if self.start_time is None:
            self.start_time = self._clock()

        unit = self.units[self.index]
        attempt = self.current_input + key
        result = validate(attempt, unit.options)

        # n の後の入力が不正解なら、ん を n で確定して次のユニットでやり直す (1回だけ)
        if result == INCORRECT and self._can_close_hatsuon(key):
            logging.debug(f"'{unit.kana}' closed with '{self.current_input}' before '{key}'")
            self._complete_current(self.current_input)
            unit = self.units[self.index]
            attempt = key
            result = validate(attempt, unit.options)

        if result == CORRECT:
            self._complete_current(attempt)
            return True

        if result == IN_PROGRESS:
            self.current_input = attempt
            # 単語末尾の ん は n 一文字で即時確定
            if (self.index == len(self.units) - 1 and role_of(unit.kana) == HATSUON
                    and attempt == _single_n(unit)):
                self._complete_current(attempt)
            return True

        self.mistake_count += 1
        if self.reset_input_on_miss:
            self.current_input = ""
        return False

    def _can_close_hatsuon(self, key):
        unit = self.units[self.index]
        if role_of(unit.kana) != HATSUON or self.current_input != _single_n(unit):
            return False
        if self.index + 1 >= len(self.units):
            return False
        next_options = self.units[self.index + 1].options
        is_start_of_next = any(r.startswith(key) for r in next_options)
        return is_start_of_next and not requires_double_n(next_options)

    def _complete_current(self, romaji):
        assert self.index < len(self.units), "cursor moved past the last unit"
        unit = self.units[self.index]
        assert not unit.typed, f"unit '{unit.kana}' completed twice"

        # どの表記で入力したかを記録
        unit.romaji = romaji
        unit.typed = True
        self.current_input = ""
        self.index += 1
        if self.index == len(self.units):
            self._finish()

    def _finish(self):
        self.is_finished = True
        self.elapsed_ms = int((self._clock() - self.start_time) * 1000)
        self.wpm, self.accuracy = calculate_performance(
            len(self.typed_romaji), self.mistake_count, self.elapsed_ms)
        logging.debug(f"finished '{self.problem.word}' in {self.elapsed_ms}ms, "
                      f"mistakes={self.mistake_count}")


def _single_n(unit):
    """ん の一文字表記 (テーブルの先頭)"""
    return lookup(unit.kana)[0]


def create_session(problem, **kwargs):
    return TypingJudge(problem, **kwargs)


def submit_key(session, key):
    return session.check(key)
