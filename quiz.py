from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from auth import SessionController
from gate import ROADMAP_PATH
from logic import DEFAULT_QUESTIONS, Question, StreamScore, score_answers, top_stream

SELECT_PROMPT = "Please select an answer"
SELECT_DETAIL = "Choose one option before proceeding to the next question."
UNKNOWN_OPTION = "Choose one of the listed options."
COMPLETED = "Quiz Completed!"


@dataclass
class QuizProgress:
    questions: list[Question] = field(default_factory=lambda: list(DEFAULT_QUESTIONS))
    current_index: int = 0
    answers: dict[int, str] = field(default_factory=dict)
    selected: str = ""
    completed: bool = False

    def current_question(self) -> Question:
        return self.questions[self.current_index]

    def is_last_question(self) -> bool:
        return self.current_index + 1 >= len(self.questions)

    def progress_percent(self) -> float:
        if not self.questions:
            return 0.0
        return ((self.current_index + 1) / len(self.questions)) * 100

    def select(self, option: str) -> None:
        self.selected = option or ""

    def advance(self) -> tuple[bool, str]:
        if self.completed:
            return True, COMPLETED
        if not self.selected:
            return False, f"{SELECT_PROMPT}. {SELECT_DETAIL}"
        question = self.current_question()
        if self.selected not in question.options:
            return False, UNKNOWN_OPTION

        self.answers[question.id] = self.selected
        if self.is_last_question():
            self.completed = True
            return True, COMPLETED
        self.current_index += 1
        self.selected = self.answers.get(self.current_question().id, "")
        return True, ""

    def back(self) -> None:
        if self.current_index == 0 or self.completed:
            return
        self.current_index -= 1
        self.selected = self.answers.get(self.current_question().id, "")

    def restart(self) -> None:
        self.current_index = 0
        self.answers = {}
        self.selected = ""
        self.completed = False

    def results(self) -> list[StreamScore]:
        return score_answers(self.answers, self.questions)


def finish_quiz(progress: QuizProgress, controller: SessionController) -> dict[str, Any]:
    if not progress.completed:
        raise ValueError("Quiz is not complete; answer every question before finishing")
    results = progress.results()
    controller.complete_onboarding()
    return {
        "results": results,
        "top_stream": top_stream(results),
        "next_path": ROADMAP_PATH,
    }
