"""Step-by-step questionnaire state: current step, answers and the final score."""

import logging
from enum import Enum
from typing import Optional

from logic.score_engine import VentureScore, calculate_venture

logger = logging.getLogger(__name__)


class Step(str, Enum):
    WELCOME = "welcome"
    STEP1 = "step1"
    STEP2 = "step2"
    STEP3 = "step3"
    STEP4 = "step4"
    STEP5 = "step5"
    RESULTS = "results"


STEP_ORDER = list(Step)
DATA_STEPS = STEP_ORDER[1:-1]


class Wizard:
    def __init__(self, step: Step = Step.WELCOME, answers: Optional[dict] = None,
                 result: Optional[VentureScore] = None):
        self.step = step
        self.answers = dict(answers or {})
        self.result = result

    # ---------- Navigation ----------
    def advance(self) -> Step:
        """Move forward; leaving the last data step scores the answers."""
        if self.step is Step.RESULTS:
            return self.step
        if self.step is Step.STEP5:
            self.result = calculate_venture(self.answers)
            self.step = Step.RESULTS
        else:
            self.step = STEP_ORDER[STEP_ORDER.index(self.step) + 1]
        logger.debug("Wizard advanced to %s", self.step.value)
        return self.step

    def retreat(self) -> Step:
        if self.can_retreat:
            self.step = STEP_ORDER[STEP_ORDER.index(self.step) - 1]
            logger.debug("Wizard moved back to %s", self.step.value)
        return self.step

    def reset(self):
        self.answers = {}
        self.result = None
        self.step = Step.WELCOME
        logger.debug("Wizard reset")

    # ---------- Answers ----------
    def set_answer(self, key, value):
        self.answers[key] = value

    def set_answers(self, values: dict):
        for key, value in values.items():
            self.set_answer(key, value)

    # ---------- Renderer helpers ----------
    @property
    def can_retreat(self) -> bool:
        return self.step in DATA_STEPS and self.step is not Step.STEP1

    @property
    def is_final_data_step(self) -> bool:
        return self.step is Step.STEP5

    @property
    def step_number(self) -> int:
        """1..5 on data steps, 0 otherwise."""
        if self.step in DATA_STEPS:
            return DATA_STEPS.index(self.step) + 1
        return 0

    @property
    def progress_percent(self) -> int:
        return round(self.step_number / len(DATA_STEPS) * 100)

    # ---------- Session storage ----------
    def to_dict(self) -> dict:
        return {
            "step": self.step.value,
            "answers": dict(self.answers),
            "result": self.result.to_dict() if self.result else None,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Wizard":
        if not data:
            return cls()
        try:
            step = Step(data.get("step", Step.WELCOME.value))
        except ValueError:
            logger.warning("Unknown wizard step %r in session, starting over", data.get("step"))
            return cls()
        result = data.get("result")
        result = VentureScore.from_dict(result) if result else None
        if step is Step.RESULTS and result is None:
            step = Step.STEP5
        return cls(step=step, answers=data.get("answers"), result=result)
