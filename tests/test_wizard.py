"""Tests for the questionnaire state machine."""

import pytest

from logic.wizard import DATA_STEPS, STEP_ORDER, Step, Wizard


def walk_to(wizard, target):
    while wizard.step is not target:
        wizard.advance()
    return wizard


class TestNavigation:
    def test_starts_at_welcome_with_no_answers(self):
        wizard = Wizard()
        assert wizard.step is Step.WELCOME
        assert wizard.answers == {}
        assert wizard.result is None

    def test_advance_follows_fixed_order(self):
        wizard = Wizard()
        visited = [wizard.step]
        while wizard.step is not Step.RESULTS:
            visited.append(wizard.advance())
        assert visited == STEP_ORDER

    def test_leaving_step5_scores_answers(self, example_answers):
        wizard = walk_to(Wizard(answers=example_answers), Step.STEP5)
        assert wizard.result is None
        assert wizard.advance() is Step.RESULTS
        assert wizard.result.score == 93

    def test_advance_from_results_is_noop(self):
        wizard = walk_to(Wizard(), Step.RESULTS)
        result = wizard.result
        assert wizard.advance() is Step.RESULTS
        assert wizard.result is result

    @pytest.mark.parametrize("step", [Step.WELCOME, Step.STEP1, Step.RESULTS])
    def test_retreat_is_noop(self, step):
        wizard = Wizard(step=step)
        assert wizard.retreat() is step
        assert not wizard.can_retreat

    @pytest.mark.parametrize("step, previous", [
        (Step.STEP2, Step.STEP1),
        (Step.STEP3, Step.STEP2),
        (Step.STEP5, Step.STEP4),
    ])
    def test_retreat_moves_back_one(self, step, previous):
        wizard = Wizard(step=step)
        assert wizard.can_retreat
        assert wizard.retreat() is previous

    def test_retreat_keeps_answers(self):
        wizard = Wizard(step=Step.STEP3, answers={"pricePoint": "5"})
        wizard.retreat()
        assert wizard.answers == {"pricePoint": "5"}


class TestAnswers:
    def test_last_write_wins(self):
        wizard = Wizard()
        wizard.set_answer("pricePoint", "5")
        wizard.set_answer("pricePoint", "7")
        assert wizard.answers["pricePoint"] == "7"

    def test_no_coercion_on_write(self):
        wizard = Wizard()
        wizard.set_answer("dailyTraffic", "lots")
        assert wizard.answers["dailyTraffic"] == "lots"

    def test_set_answers_upserts(self):
        wizard = Wizard(answers={"a": "1", "b": "2"})
        wizard.set_answers({"b": "3", "c": "4"})
        assert wizard.answers == {"a": "1", "b": "3", "c": "4"}

    def test_constructor_copies_answers(self):
        answers = {"a": "1"}
        wizard = Wizard(answers=answers)
        wizard.set_answer("a", "2")
        assert answers == {"a": "1"}


class TestReset:
    def test_reset_clears_everything(self, example_answers):
        wizard = walk_to(Wizard(answers=example_answers), Step.RESULTS)
        wizard.reset()
        assert wizard.step is Step.WELCOME
        assert wizard.answers == {}
        assert wizard.result is None

    def test_restart_after_reset_replays_sequence(self, example_answers):
        wizard = walk_to(Wizard(answers=example_answers), Step.RESULTS)
        wizard.reset()
        visited = [wizard.step]
        while wizard.step is not Step.RESULTS:
            visited.append(wizard.advance())
        assert visited == STEP_ORDER
        assert wizard.result.score == 18


class TestRendererHelpers:
    def test_step_numbers(self):
        assert Wizard(step=Step.WELCOME).step_number == 0
        assert Wizard(step=Step.RESULTS).step_number == 0
        assert [Wizard(step=s).step_number for s in DATA_STEPS] == [1, 2, 3, 4, 5]

    def test_progress(self):
        assert Wizard(step=Step.STEP3).progress_percent == 60
        assert Wizard(step=Step.STEP5).progress_percent == 100

    def test_final_data_step(self):
        assert Wizard(step=Step.STEP5).is_final_data_step
        assert not Wizard(step=Step.STEP4).is_final_data_step


class TestSessionStorage:
    def test_round_trip(self, example_answers):
        wizard = walk_to(Wizard(answers=example_answers), Step.RESULTS)
        restored = Wizard.from_dict(wizard.to_dict())
        assert restored.step is Step.RESULTS
        assert restored.answers == example_answers
        assert restored.result == wizard.result

    def test_empty_session_starts_fresh(self):
        assert Wizard.from_dict(None).step is Step.WELCOME

    def test_unknown_step_starts_fresh(self):
        wizard = Wizard.from_dict({"step": "step9", "answers": {"a": "1"}})
        assert wizard.step is Step.WELCOME
        assert wizard.answers == {}

    def test_results_without_score_falls_back_to_step5(self):
        wizard = Wizard.from_dict({"step": "results", "answers": {}, "result": None})
        assert wizard.step is Step.STEP5
