import pytest

from logic import (
    CATEGORIES,
    DEFAULT_QUESTIONS,
    Question,
    answers_from_indices,
    category_for_answer,
    recognized_answer_count,
    score_answers,
    top_stream,
)


def as_table(results) -> list[tuple[str, int, float]]:
    return [(item.category, item.raw_count, item.percentage) for item in results]


def test_all_first_options_rank_science_at_full_marks() -> None:
    answers = answers_from_indices([0, 0, 0, 0, 0])

    results = score_answers(answers, DEFAULT_QUESTIONS)

    assert as_table(results) == [
        ("science", 5, 100.0),
        ("commerce", 0, 0.0),
        ("arts", 0, 0.0),
        ("technical", 0, 0.0),
    ]
    assert top_stream(results) == "science"


def test_category_follows_option_position_not_question_theme() -> None:
    # Question 2 is about technical problems, yet option 2 still counts as arts.
    question = DEFAULT_QUESTIONS[1]

    assert category_for_answer(question, question.options[2]) == "arts"
    assert category_for_answer(question, question.options[3]) == "technical"


def test_empty_answers_keep_fixed_category_order() -> None:
    first = score_answers({}, DEFAULT_QUESTIONS)
    second = score_answers({}, DEFAULT_QUESTIONS)

    assert [item.category for item in first] == list(CATEGORIES)
    assert as_table(first) == as_table(second)
    assert all(item.percentage == 0.0 for item in first)


def test_ties_keep_category_order() -> None:
    answers = answers_from_indices([3, 0, 3, 0, None])

    results = score_answers(answers, DEFAULT_QUESTIONS)

    assert [item.category for item in results] == ["science", "technical", "commerce", "arts"]
    assert [item.raw_count for item in results] == [2, 2, 0, 0]


def test_ranking_sorted_by_count_descending() -> None:
    answers = answers_from_indices([1, 1, 2, 3, 1])

    results = score_answers(answers, DEFAULT_QUESTIONS)

    assert [item.category for item in results] == ["commerce", "arts", "technical", "science"]
    assert results[0].percentage == pytest.approx(60.0)
    assert results[1].percentage == pytest.approx(20.0)


def test_skipped_questions_still_count_in_denominator() -> None:
    answers = answers_from_indices([2, None, 2, None, None])

    results = score_answers(answers, DEFAULT_QUESTIONS)

    assert results[0].category == "arts"
    assert results[0].raw_count == 2
    assert results[0].percentage == pytest.approx(40.0)


def test_unknown_option_text_is_ignored() -> None:
    answers = {1: "Mathematics and Physics", 2: "Underwater basket weaving", 3: "read science magazines"}

    results = score_answers(answers, DEFAULT_QUESTIONS)

    assert sum(item.raw_count for item in results) == 1
    assert recognized_answer_count(answers, DEFAULT_QUESTIONS) == 1


def test_answers_for_unknown_question_ids_are_ignored() -> None:
    answers = {99: "Mathematics and Physics", 1: "Computer Programming"}

    results = score_answers(answers, DEFAULT_QUESTIONS)

    assert top_stream(results) == "technical"
    assert sum(item.raw_count for item in results) == 1


@pytest.mark.parametrize(
    "indices",
    [
        [0, 1, 2, 3, 0],
        [None, None, 1, None, 2],
        [3, 3, 3, None, 3],
        [],
    ],
)
def test_total_count_matches_recognized_answers(indices) -> None:
    answers = answers_from_indices(indices)

    results = score_answers(answers, DEFAULT_QUESTIONS)
    total = sum(item.raw_count for item in results)

    assert len(results) == 4
    assert total == recognized_answer_count(answers, DEFAULT_QUESTIONS)
    assert total <= len(DEFAULT_QUESTIONS)


def test_answer_order_does_not_change_scores() -> None:
    forward = answers_from_indices([0, 1, 2, 3, 3])
    reversed_answers = dict(reversed(list(forward.items())))

    assert as_table(score_answers(forward)) == as_table(score_answers(reversed_answers))


def test_no_questions_gives_zero_percentages() -> None:
    results = score_answers({1: "anything"}, [])

    assert [item.percentage for item in results] == [0.0, 0.0, 0.0, 0.0]


def test_question_requires_four_options() -> None:
    with pytest.raises(ValueError):
        Question(10, "Too few options", ("a", "b", "c"))


def test_result_dict_uses_display_label() -> None:
    results = score_answers(answers_from_indices([3, 3, 3, 3, 3]))

    top = results[0].to_dict()

    assert top["category"] == "technical"
    assert top["label"] == "Technology"
    assert top["raw_count"] == 5
    assert top_stream([]) is None
