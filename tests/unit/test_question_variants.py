"""
Unit tests for QuizDeck question variants.

Tests present(), collect() and grade() of each variant.
"""

import random

import pytest

from src.quizdeck.errors import PresentationMismatch
from src.quizdeck.questions import (
    FILL_ALL_BLANKS,
    INVALID_CHOICE,
    NO_ANSWER,
    QUESTION_TYPES,
    Blank,
    Difficulty,
    DropdownChoiceQuestion,
    FillBlanksQuestion,
    FreeTextQuestion,
    GradeResult,
    MatchPairsQuestion,
    MultiChoiceQuestion,
    QuestionKind,
    SingleChoiceQuestion,
    contains_all,
    get_question_type,
    matches,
)
from src.quizdeck.questions.fill_blanks import split_template


class TestQuestionRegistry:
    """Test the variant registry."""

    def test_all_kinds_registered(self):
        assert set(QUESTION_TYPES) == set(QuestionKind)

    def test_get_type_by_string(self):
        assert get_question_type("single_choice") is SingleChoiceQuestion
        assert get_question_type("MATCH_PAIRS") is MatchPairsQuestion

    def test_get_type_by_enum(self):
        assert get_question_type(QuestionKind.FILL_BLANKS) is FillBlanksQuestion

    def test_get_type_invalid(self):
        assert get_question_type("essay") is None

    def test_kind_set_on_class(self):
        for kind, cls in QUESTION_TYPES.items():
            assert cls.kind == kind


class TestQuestionDeclaration:
    """Test construction-time checks shared by every variant."""

    def _single(self, **overrides):
        fields = dict(
            id="x", difficulty="easy", title="t", options=("a", "b"), correct_index=0
        )
        fields.update(overrides)
        return SingleChoiceQuestion(**fields)

    def test_difficulty_string_coerced(self):
        assert self._single().difficulty is Difficulty.EASY

    @pytest.mark.parametrize("points", [0, -1, True, 1.5])
    def test_points_must_be_positive_int(self, points):
        with pytest.raises(ValueError):
            self._single(points=points)

    def test_empty_id_rejected(self):
        with pytest.raises(ValueError):
            self._single(id="")

    def test_correct_index_out_of_range(self):
        with pytest.raises(ValueError):
            self._single(correct_index=2)

    def test_unknown_difficulty(self):
        with pytest.raises(ValueError):
            self._single(difficulty="expert")

    def test_questions_are_immutable(self):
        question = self._single()
        with pytest.raises(AttributeError):
            question.title = "changed"

    def test_difficulty_labels(self):
        assert Difficulty.EASY.label == "Beginner"
        assert Difficulty.MEDIUM.label == "Intermediate"
        assert Difficulty.HARD.label == "Advanced"

    def test_grade_result_to_dict(self):
        result = GradeResult(correct=False, earned=0, message=NO_ANSWER)
        assert result.to_dict() == {"correct": False, "earned": 0, "message": "no answer"}


class TestSingleChoice:
    """Test the single-choice variant."""

    def test_present_shuffles_with_mapping(self, single_question, rng):
        p = single_question.present(rng)

        assert sorted(p.options) == sorted(single_question.options)
        for slot, original in enumerate(p.order):
            assert p.options[slot] == single_question.options[original]

    def test_correct_slot_scores(self, single_question, solve, rng):
        answer, p = solve(single_question, rng)
        result = single_question.grade(answer, p)

        assert result.correct is True
        assert result.earned == single_question.points

    def test_wrong_slot(self, single_question, rng):
        p = single_question.present(rng)
        wrong = next(slot for slot, idx in enumerate(p.order) if idx != single_question.correct_index)
        p.select(wrong)
        result = single_question.grade(single_question.collect(p), p)

        assert result == GradeResult(correct=False, earned=0)

    def test_select_replaces_previous(self, single_question, rng):
        p = single_question.present(rng)
        p.select(0)
        p.select(2)

        assert single_question.collect(p) == 2

    def test_nothing_selected(self, single_question, rng):
        p = single_question.present(rng)
        assert single_question.collect(p) is None

        result = single_question.grade(None, p)
        assert result.correct is False
        assert result.message == NO_ANSWER

    def test_out_of_range_slot(self, single_question, rng):
        p = single_question.present(rng)
        result = single_question.grade(17, p)

        assert result.correct is False
        assert result.message == INVALID_CHOICE

    def test_grade_needs_own_presentation(self, single_question, multi_question, rng):
        with pytest.raises(PresentationMismatch):
            single_question.grade(0)
        with pytest.raises(PresentationMismatch):
            single_question.grade(0, multi_question.present(rng))

    def test_each_presentation_keeps_its_mapping(self, single_question, solve):
        """An answer is judged against the mapping it was made on."""
        answer, first = solve(single_question, random.Random(1))
        single_question.present(random.Random(2))

        assert single_question.grade(answer, first).correct is True

    def test_correctness_independent_of_order(self, single_question, solve):
        for seed in range(20):
            answer, p = solve(single_question, random.Random(seed))
            assert single_question.grade(answer, p).correct is True

    def test_select_bad_slot(self, single_question, rng):
        p = single_question.present(rng)
        with pytest.raises(IndexError):
            p.select(4)


class TestMultiChoice:
    """Test the multi-choice variant."""

    def test_exact_set_scores(self, multi_question, solve, rng):
        answer, p = solve(multi_question, rng)
        result = multi_question.grade(answer, p)

        assert result.correct is True
        assert result.earned == 1

    def test_subset_gets_nothing(self, multi_question, rng):
        p = multi_question.present(rng)
        p.select(p.order.index(0))
        p.select(p.order.index(1))
        result = multi_question.grade(multi_question.collect(p), p)

        assert result.correct is False
        assert result.earned == 0

    def test_superset_gets_nothing(self, multi_question, rng):
        p = multi_question.present(rng)
        for slot in range(len(p.options)):
            p.select(slot)

        assert multi_question.grade(multi_question.collect(p), p).correct is False

    def test_toggle(self, multi_question, rng):
        p = multi_question.present(rng)
        p.toggle(1)
        p.toggle(3)
        p.toggle(1)

        assert multi_question.collect(p) == [3]

    def test_empty_selection(self, multi_question, rng):
        p = multi_question.present(rng)
        result = multi_question.grade(multi_question.collect(p), p)

        assert result.message == NO_ANSWER

    def test_invalid_slot(self, multi_question, rng):
        p = multi_question.present(rng)
        assert multi_question.grade([0, 9], p).message == INVALID_CHOICE

    def test_declaration_needs_correct_index(self):
        with pytest.raises(ValueError):
            MultiChoiceQuestion(
                id="x", difficulty="easy", title="t", options=("a", "b"), correct_indexes=set()
            )

    def test_correct_options(self, multi_question):
        assert multi_question.correct_options == ["map", "filter", "reduce"]


class TestDropdownChoice:
    """Test the dropdown variant."""

    def test_options_shuffled_but_complete(self, dropdown_question, rng):
        p = dropdown_question.present(rng)
        assert sorted(p.options) == sorted(dropdown_question.options)
        assert p.value == ""

    def test_correct_value(self, dropdown_question, solve, rng):
        answer, p = solve(dropdown_question, rng)
        assert dropdown_question.grade(answer, p).correct is True

    def test_grading_ignores_presentation(self, dropdown_question):
        assert dropdown_question.grade("input.value").correct is True
        assert dropdown_question.grade("input.text").correct is False

    def test_unselected(self, dropdown_question, rng):
        p = dropdown_question.present(rng)
        assert dropdown_question.grade(dropdown_question.collect(p), p).message == NO_ANSWER

    def test_choose_unknown_value(self, dropdown_question, rng):
        p = dropdown_question.present(rng)
        with pytest.raises(ValueError):
            p.choose("input.val")

    def test_declaration_requires_known_value(self):
        with pytest.raises(ValueError):
            DropdownChoiceQuestion(
                id="x", difficulty="easy", title="t", options=("a", "b"), correct_value="c"
            )


class TestFreeText:
    """Test the validator-graded free-text variant."""

    def test_pattern_match(self, free_text_question):
        assert free_text_question.grade("el.classList.add('active');").correct is True
        assert free_text_question.grade('el.classList.add( "active" )').correct is True

    def test_pattern_miss(self, free_text_question):
        result = free_text_question.grade("el.className = 'active';")

        assert result.correct is False
        assert result.message is None

    def test_none_is_incorrect(self, free_text_question):
        assert free_text_question.grade(None).correct is False

    def test_live_check(self, free_text_question, rng):
        p = free_text_question.present(rng)
        assert p.live_check() is None

        p.type("el.classList.add('active')")
        assert p.live_check() is True

        p.type("nope")
        assert p.live_check() is False

    def test_starter_prefills_text(self):
        question = FreeTextQuestion(
            id="fix",
            difficulty="easy",
            title="Fix it",
            starter="btn.onclick('click', go);",
            validator=contains_all("addEventListener", "click", normalized=False),
        )
        p = question.present()

        assert question.collect(p) == "btn.onclick('click', go);"
        assert question.grade(question.collect(p), p).correct is False
        assert question.grade("btn.addEventListener('click', go);").correct is True

    def test_contains_all_case_sensitivity(self):
        strict = contains_all("addEventListener", normalized=False)
        loose = contains_all("addEventListener")

        assert strict("btn.addeventlistener()") is False
        assert loose("btn.ADDEVENTLISTENER()") is True

    def test_contains_all_needs_fragments(self):
        with pytest.raises(ValueError):
            contains_all()

    def test_matches_collapse_whitespace(self):
        validate = matches(r"a b", collapse_whitespace=True)
        assert validate("a \n   b") is True
        assert matches(r"a b")("a \n   b") is False

    def test_validator_must_be_callable(self):
        with pytest.raises(ValueError):
            FreeTextQuestion(id="x", difficulty="easy", title="t", validator="not callable")


class TestFillBlanks:
    """Test the fill-in-blanks variant."""

    def test_segments(self, blanks_question, rng):
        p = blanks_question.present(rng)

        assert p.segments == ("document.", 0, "('.box').", 1, "('click', fn);")
        assert p.placeholders == ("method", "")
        assert p.values == ["", ""]

    def test_normalized_match(self, blanks_question):
        result = blanks_question.grade(["  QuerySelector ", "addeventlistener"])

        assert result.correct is True
        assert result.earned == 2

    def test_wrong_value(self, blanks_question):
        assert blanks_question.grade(["querySelectorAll", "addEventListener"]).correct is False

    @pytest.mark.parametrize(
        "answer",
        [
            ["querySelector", ""],
            ["querySelector", "   "],
            ["querySelector", None],
            ["querySelector"],
            [],
            None,
        ],
    )
    def test_incomplete(self, blanks_question, answer):
        result = blanks_question.grade(answer)

        assert result.correct is False
        assert result.earned == 0
        assert result.message == FILL_ALL_BLANKS

    def test_collect_from_presentation(self, blanks_question, solve, rng):
        answer, p = solve(blanks_question, rng)

        assert answer == ["querySelector", "addEventListener"]
        assert blanks_question.grade(answer, p).correct is True

    def test_fill_bad_slot(self, blanks_question, rng):
        p = blanks_question.present(rng)
        with pytest.raises(IndexError):
            p.fill(2, "x")

    def test_template_must_have_every_slot(self):
        with pytest.raises(ValueError):
            FillBlanksQuestion(
                id="x", difficulty="easy", title="t", template="a {0} b", blanks=(Blank("1"), Blank("2"))
            )

    def test_split_template_ignores_unknown_slots(self):
        assert split_template("{0} and {5}", 1) == (0, " and {5}")

    def test_expected(self, blanks_question):
        assert blanks_question.expected == ["querySelector", "addEventListener"]
