from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping, Sequence


# Option position decides the category, whatever the option text says.
CATEGORIES = ("science", "commerce", "arts", "technical")
OPTIONS_PER_QUESTION = len(CATEGORIES)

STREAM_LABELS = {
    "science": "Science",
    "commerce": "Commerce",
    "arts": "Arts",
    "technical": "Technology",
}

NEXT_STEPS = [
    "Explore career opportunities in your top-matching stream",
    "View detailed career roadmaps for recommended paths",
    "Research colleges that offer relevant programs",
    "Connect with career counselors for personalized guidance",
]


@dataclass(frozen=True)
class Question:
    id: int
    prompt: str
    options: tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.options) != OPTIONS_PER_QUESTION:
            raise ValueError(f"Question {self.id} needs exactly {OPTIONS_PER_QUESTION} options, got {len(self.options)}")


@dataclass(frozen=True)
class StreamScore:
    category: str
    raw_count: int
    percentage: float

    @property
    def label(self) -> str:
        return STREAM_LABELS.get(self.category, self.category.title())

    def to_dict(self) -> dict[str, Any]:
        return {**asdict(self), "label": self.label}


DEFAULT_QUESTIONS: tuple[Question, ...] = (
    Question(
        1,
        "Which subject do you find most interesting?",
        ("Mathematics and Physics", "Economics and Business Studies", "Literature and History", "Computer Programming"),
    ),
    Question(
        2,
        "What type of problems do you enjoy solving?",
        (
            "Scientific experiments and calculations",
            "Market analysis and financial planning",
            "Creative writing and research",
            "Coding and technical challenges",
        ),
    ),
    Question(
        3,
        "In your free time, you prefer to:",
        ("Read science magazines", "Follow business news", "Create art or write stories", "Build apps or websites"),
    ),
    Question(
        4,
        "Your ideal work environment would be:",
        ("Research laboratory", "Corporate office", "Creative studio", "Tech startup"),
    ),
    Question(
        5,
        "Which career sounds most appealing?",
        (
            "Doctor or Engineer",
            "Business Manager or Entrepreneur",
            "Teacher or Journalist",
            "Software Developer or Data Scientist",
        ),
    ),
)


def category_for_answer(question: Question, answer: str | None) -> str | None:
    if answer is None:
        return None
    try:
        index = question.options.index(answer)
    except ValueError:
        return None
    return CATEGORIES[index]


def recognized_answer_count(answers: Mapping[int, str], questions: Sequence[Question]) -> int:
    return sum(1 for question in questions if category_for_answer(question, answers.get(question.id)) is not None)


def score_answers(answers: Mapping[int, str], questions: Sequence[Question] = DEFAULT_QUESTIONS) -> list[StreamScore]:
    """Rank the four streams by how many answers fell on each option position.

    Skipped questions and answers that match none of a question's options
    add nothing. Percentages are taken over every question, answered or not.
    The sort is stable, so equal counts keep the ``CATEGORIES`` order.
    """
    counts = {category: 0 for category in CATEGORIES}
    for question in questions:
        category = category_for_answer(question, answers.get(question.id))
        if category is not None:
            counts[category] += 1

    total = len(questions)
    results = [
        StreamScore(category, count, (count / total) * 100 if total else 0.0)
        for category, count in counts.items()
    ]
    results.sort(key=lambda item: item.raw_count, reverse=True)
    return results


def top_stream(results: Sequence[StreamScore]) -> str | None:
    return results[0].category if results else None


def answers_from_indices(indices: Sequence[int | None], questions: Sequence[Question] = DEFAULT_QUESTIONS) -> dict[int, str]:
    answers: dict[int, str] = {}
    for question, index in zip(questions, indices):
        if index is None or not 0 <= index < len(question.options):
            continue
        answers[question.id] = question.options[index]
    return answers
