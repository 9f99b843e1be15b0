import unittest
from unittest import mock

from kana_typing.judge import TypingJudge, create_session, submit_key
from kana_typing.problems import Problem
from kana_typing.roman_table import ROMAN_TABLE, SMALL_KANA


def type_keys(judge, keys):
    return [judge.check(k) for k in keys]


class TestTypingJudge(unittest.TestCase):
    def test_simple_word(self):
        judge = TypingJudge("さくら")
        self.assertEqual([u.kana for u in judge.units], ["さ", "く", "ら"])
        self.assertEqual(judge.remaining_romaji, "sakura")

        self.assertEqual(type_keys(judge, "sakura"), [True] * 6)
        self.assertTrue(judge.is_finished)
        self.assertEqual(judge.typed_romaji, "sakura")
        self.assertEqual(judge.remaining_romaji, "")
        self.assertEqual(judge.mistake_count, 0)

    def test_sokuon(self):
        judge = TypingJudge("かった")
        type_keys(judge, "katta")
        self.assertTrue(judge.is_finished)
        self.assertEqual([u.romaji for u in judge.units], ["ka", "t", "ta"])
        self.assertEqual(judge.typed_romaji, "katta")

    def test_sokuon_with_alternative_consonant(self):
        judge = TypingJudge("まっち")
        self.assertTrue(all(type_keys(judge, "matti")))
        self.assertTrue(judge.is_finished)
        self.assertEqual(judge.typed_romaji, "matti")

    def test_sokuon_typed_alone(self):
        judge = TypingJudge("かった")
        self.assertTrue(all(type_keys(judge, "kaxtuta")))
        self.assertEqual([u.romaji for u in judge.units], ["ka", "xtu", "ta"])

    def test_hatsuon_closed_by_next_consonant(self):
        judge = TypingJudge("にっぽん")
        self.assertTrue(all(type_keys(judge, "nippon")))
        self.assertTrue(judge.is_finished)
        self.assertEqual(judge.units[3].romaji, "n")
        self.assertEqual(judge.typed_romaji, "nippon")

        judge = TypingJudge("かんと")
        self.assertTrue(all(type_keys(judge, "kant")))
        self.assertEqual(judge.units[1].romaji, "n")
        self.assertTrue(judge.units[1].typed)
        self.assertEqual(judge.current_input, "t")
        judge.check("o")
        self.assertTrue(judge.is_finished)
        self.assertEqual(judge.mistake_count, 0)

        judge = TypingJudge("しんかんせん")
        self.assertTrue(all(type_keys(judge, "shinkansen")))
        self.assertTrue(judge.is_finished)

    def test_hatsuon_before_vowel_requires_nn(self):
        judge = TypingJudge("けんい")
        type_keys(judge, "ken")
        self.assertFalse(judge.is_finished)
        self.assertEqual(judge.index, 1)
        self.assertEqual(judge.current_input, "n")

        judge.check("n")
        self.assertEqual(judge.units[1].romaji, "nn")
        judge.check("i")
        self.assertTrue(judge.is_finished)
        self.assertEqual(judge.typed_romaji, "kenni")

    def test_single_n_before_vowel_is_a_mistake(self):
        judge = TypingJudge("けんい")
        type_keys(judge, "ken")
        self.assertFalse(judge.check("i"))
        self.assertEqual(judge.mistake_count, 1)
        self.assertEqual(judge.index, 1)
        self.assertEqual(judge.current_input, "n")

        self.assertTrue(all(type_keys(judge, "ni")))
        self.assertTrue(judge.is_finished)
        self.assertEqual(judge.typed_romaji, "kenni")

    def test_trailing_hatsuon_variants(self):
        judge = TypingJudge("ほん")
        type_keys(judge, "hoxn")
        self.assertTrue(judge.is_finished)
        self.assertEqual(judge.typed_romaji, "hoxn")

        judge = TypingJudge("ほん")
        type_keys(judge, "hon")
        self.assertTrue(judge.is_finished)
        # 完了後の入力は無視される
        self.assertTrue(judge.check("n"))
        self.assertEqual(judge.typed_romaji, "hon")

    def test_alternative_spellings_are_recorded(self):
        judge = TypingJudge("しか")
        type_keys(judge, "si")
        self.assertEqual(judge.typed_romaji, "si")
        self.assertEqual(judge.remaining_romaji, "ka")
        self.assertEqual(judge.full_romaji, "sika")

        judge = TypingJudge("ちゃ")
        type_keys(judge, "tya")
        self.assertTrue(judge.is_finished)
        self.assertEqual(judge.units[0].romaji, "tya")

    def test_remaining_romaji_while_typing(self):
        judge = TypingJudge("しか")
        judge.check("s")
        self.assertEqual(judge.typed_romaji, "")
        self.assertEqual(judge.remaining_romaji, "hika")

        judge = TypingJudge("けんい")
        type_keys(judge, "ken")
        self.assertEqual(judge.remaining_romaji, "ni")
        self.assertEqual(judge.typed_kana, "け")
        self.assertEqual(judge.remaining_kana, "んい")

    def test_projection_is_always_typeable(self):
        for kana, keys in [("にっぽん", "nippon"), ("けんい", "kenni"), ("きょうと", "kixyouto"),
                           ("しんぶん", "sinbun")]:
            judge = TypingJudge(kana)
            for key in keys:
                judge.check(key)
                romaji = judge.typed_romaji + judge.current_input + judge.remaining_romaji
                fresh = TypingJudge(kana)
                self.assertTrue(all(type_keys(fresh, romaji)), f"{kana}: {romaji}")
                self.assertTrue(fresh.is_finished, f"{kana}: {romaji}")

    def test_mistake_keeps_pending_input(self):
        judge = TypingJudge("さくら")
        type_keys(judge, "sak")
        self.assertFalse(judge.check("x"))
        self.assertEqual(judge.mistake_count, 1)
        self.assertEqual(judge.index, 1)
        self.assertEqual(judge.current_input, "k")

        self.assertTrue(judge.check("u"))
        self.assertEqual(judge.index, 2)

    def test_mistake_resets_pending_input(self):
        judge = TypingJudge("さくら", reset_input_on_miss=True)
        type_keys(judge, "sak")
        self.assertFalse(judge.check("x"))
        self.assertEqual(judge.mistake_count, 1)
        self.assertEqual(judge.index, 1)
        self.assertEqual(judge.current_input, "")

        self.assertFalse(judge.check("u"))
        self.assertEqual(judge.mistake_count, 2)
        self.assertTrue(all(type_keys(judge, "kura")))
        self.assertTrue(judge.is_finished)

    def test_reset_policy_with_hatsuon(self):
        judge = TypingJudge("けんい", reset_input_on_miss=True)
        type_keys(judge, "ken")
        self.assertFalse(judge.check("i"))
        self.assertEqual(judge.current_input, "")
        self.assertTrue(all(type_keys(judge, "nni")))
        self.assertTrue(judge.is_finished)
        self.assertEqual(judge.mistake_count, 1)

    def test_empty_problem_is_finished(self):
        judge = TypingJudge("")
        self.assertTrue(judge.is_finished)
        self.assertEqual(judge.units, [])
        self.assertTrue(judge.check("a"))
        self.assertEqual(judge.mistake_count, 0)
        self.assertIsNone(judge.current_unit)

    def test_finished_session_ignores_keys(self):
        judge = TypingJudge("あ")
        judge.check("a")
        self.assertTrue(judge.is_finished)
        self.assertTrue(judge.check("z"))
        self.assertEqual(judge.mistake_count, 0)

    def test_pass_through_characters(self):
        judge = TypingJudge(Problem("ABC", "ABC"))
        self.assertFalse(judge.check("a"))
        self.assertTrue(all(type_keys(judge, "ABC")))
        self.assertTrue(judge.is_finished)

    def test_timing(self):
        clock = mock.Mock(side_effect=[100.0, 102.5])
        judge = TypingJudge("さくら", clock=clock)
        type_keys(judge, "sakura")
        self.assertEqual(judge.elapsed_ms, 2500)
        self.assertAlmostEqual(judge.wpm, 28.8)
        self.assertAlmostEqual(judge.accuracy, 100.0)
        self.assertEqual(clock.call_count, 2)

    def test_accuracy_counts_mistakes(self):
        clock = mock.Mock(side_effect=[0.0, 60.0])
        judge = TypingJudge("あいうえおかきくけこ", clock=clock)
        judge.check("z")
        type_keys(judge, "aiueokakikukeko")
        self.assertEqual(judge.mistake_count, 1)
        self.assertAlmostEqual(judge.accuracy, 15 / 16 * 100)
        self.assertAlmostEqual(judge.wpm, 3.0)

    def test_set_problem_resets_state(self):
        judge = TypingJudge("さくら")
        type_keys(judge, "sz")
        judge.set_problem(Problem("寿司", "すし"))
        self.assertEqual(judge.problem.word, "寿司")
        self.assertEqual(judge.mistake_count, 0)
        self.assertEqual(judge.current_input, "")
        self.assertEqual(judge.index, 0)
        self.assertIsNone(judge.start_time)
        self.assertEqual(judge.full_romaji, "sushi")


class TestSessionFunctions(unittest.TestCase):
    def test_create_and_submit(self):
        session = create_session(Problem("桜", "さくら"))
        self.assertTrue(submit_key(session, "s"))
        self.assertFalse(submit_key(session, "x"))
        for key in "akura":
            submit_key(session, key)
        self.assertTrue(session.is_finished)
        self.assertEqual(session.mistake_count, 1)

    def test_create_with_policy(self):
        session = create_session("さくら", reset_input_on_miss=True)
        self.assertTrue(session.reset_input_on_miss)


class TestSmallKanaSpellings(unittest.TestCase):
    def test_split_spellings_are_accepted(self):
        for kana, keys in [("じゃ", "zixya"), ("じゃ", "jilya"), ("ちゃ", "tixya"), ("しゃ", "silya"),
                           ("ゔぁ", "vuxa"), ("しぇ", "shixe"), ("つぁ", "tuxa"), ("きゃ", "kixya")]:
            judge = TypingJudge(kana)
            self.assertEqual(type_keys(judge, keys), [True] * len(keys), f"{kana}: {keys}")
            self.assertTrue(judge.is_finished, f"{kana}: {keys}")
            self.assertEqual(judge.mistake_count, 0, f"{kana}: {keys}")

    def test_every_composed_spelling_in_table(self):
        for kana in ROMAN_TABLE:
            if len(kana) != 2 or kana[1] not in SMALL_KANA:
                continue
            for first in ROMAN_TABLE[kana[0]]:
                for small in ROMAN_TABLE[kana[1]]:
                    keys = first + small
                    judge = TypingJudge(kana)
                    self.assertTrue(all(type_keys(judge, keys)), f"{kana}: {keys}")
                    self.assertTrue(judge.is_finished, f"{kana}: {keys}")
                    self.assertEqual(judge.mistake_count, 0, f"{kana}: {keys}")

    def test_direct_spelling_stays_default(self):
        judge = TypingJudge("しゃしん")
        self.assertEqual(judge.full_romaji, "shashin")


if __name__ == "__main__":
    unittest.main()
