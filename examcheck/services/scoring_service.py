"""
Answer-key grading engine.

Pure functions that compare a candidate's answer set against a test's answer key:
multiple-choice blocks by case-insensitive letter match, numeric blocks by
numeric equivalence of their canonical decimal text. Marking is +4 for a correct
answer, -1 for a wrong one and 0 for an unattempted question.
"""
import logging
import re
from dataclasses import dataclass
from decimal import MAX_EMAX, MIN_EMIN, Decimal, DecimalException, localcontext
from enum import Enum
from typing import List, Optional, Sequence

from examcheck.schemas import (
    MCQ_QUESTIONS,
    NUMERIC_QUESTIONS,
    AnswerKey,
    AnswerSet,
    BlockResult,
    ScoreReport,
    Subject,
    SubjectReport,
)

logger = logging.getLogger(__name__)

CORRECT_MARKS = 4
WRONG_MARKS = -1
NUMERIC_FIRST_QUESTION = MCQ_QUESTIONS + 1
MAX_TOTAL = CORRECT_MARKS * (MCQ_QUESTIONS + NUMERIC_QUESTIONS) * len(Subject)

# Signed decimal with optional fractional part: 3, -1.5, +.5, 03, 3.
_DECIMAL_PATTERN = re.compile(r"^[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)$")


class NumericKind(str, Enum):
    BLANK = "blank"
    INVALID = "invalid"
    NUMBER = "number"


@dataclass(frozen=True)
class NumericValue:
    kind: NumericKind
    canonical: Optional[str] = None


def _entry(values: Optional[Sequence[Optional[str]]], index: int) -> str:
    """Return the entry at `index` as text, or "" when the position is missing."""
    if values is None or index >= len(values):
        return ""
    value = values[index]
    return "" if value is None else str(value)


def normalize_choice(value: Optional[str]) -> str:
    return (value or "").strip().upper()


def normalize_numeric(value: Optional[str]) -> NumericValue:
    """
    Classify a numeric answer as blank, invalid, or a number in canonical form.

    The canonical form is the plain decimal text with leading zeros, trailing
    fractional zeros and the sign of zero removed, so "3", "3.0" and "03" all
    become "3".
    """
    text = (value or "").strip()
    if not text:
        return NumericValue(NumericKind.BLANK)
    if not _DECIMAL_PATTERN.match(text):
        return NumericValue(NumericKind.INVALID)

    try:
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, len(text))
            ctx.Emax = MAX_EMAX
            ctx.Emin = MIN_EMIN
            number = Decimal(text).normalize()
    except DecimalException:
        return NumericValue(NumericKind.INVALID)

    if number.is_zero():
        return NumericValue(NumericKind.NUMBER, "0")
    return NumericValue(NumericKind.NUMBER, format(number, "f"))


def _block_result(correct: int, wrong: int, unattempted: int, wrong_questions: List[int]) -> BlockResult:
    return BlockResult(
        correct=correct,
        wrong=wrong,
        unattempted=unattempted,
        marks=correct * CORRECT_MARKS + wrong * WRONG_MARKS,
        wrong_questions=tuple(wrong_questions),
    )


def grade_mcq_block(key: Sequence[Optional[str]], answers: Sequence[Optional[str]]) -> BlockResult:
    """Grade one subject's 20 multiple-choice questions (Q1-Q20)."""
    correct = wrong = unattempted = 0
    wrong_questions = []

    for i in range(MCQ_QUESTIONS):
        answer = normalize_choice(_entry(answers, i))
        if not answer:
            unattempted += 1
            continue
        # An empty key entry never matches, so any answer to it is wrong.
        if answer == normalize_choice(_entry(key, i)):
            correct += 1
        else:
            wrong += 1
            wrong_questions.append(i + 1)

    return _block_result(correct, wrong, unattempted, wrong_questions)


def grade_numeric_block(key: Sequence[Optional[str]], answers: Sequence[Optional[str]]) -> BlockResult:
    """Grade one subject's 5 numeric questions (Q21-Q25)."""
    correct = wrong = unattempted = 0
    wrong_questions = []

    for i in range(NUMERIC_QUESTIONS):
        answer = normalize_numeric(_entry(answers, i))
        if answer.kind is NumericKind.BLANK:
            unattempted += 1
            continue

        expected = normalize_numeric(_entry(key, i))
        if (
            answer.kind is NumericKind.NUMBER
            and expected.kind is NumericKind.NUMBER
            and answer.canonical == expected.canonical
        ):
            correct += 1
        else:
            # Invalid text on either side, a blank key, or a different number
            wrong += 1
            wrong_questions.append(NUMERIC_FIRST_QUESTION + i)

    return _block_result(correct, wrong, unattempted, wrong_questions)


def grade_subject(key_mcq, key_numeric, answer_mcq, answer_numeric) -> SubjectReport:
    mcq = grade_mcq_block(key_mcq, answer_mcq)
    numeric = grade_numeric_block(key_numeric, answer_numeric)
    return SubjectReport(
        marks=mcq.marks + numeric.marks,
        correct_count=mcq.correct + numeric.correct,
        wrong_count=mcq.wrong + numeric.wrong,
        unattempted_count=mcq.unattempted + numeric.unattempted,
        wrong_question_numbers=mcq.wrong_questions + numeric.wrong_questions,
        mcq=mcq,
        numeric=numeric,
    )


def grade(answer_key: AnswerKey, answer_set: AnswerSet) -> ScoreReport:
    """
    Grade a candidate's answer set against a test's answer key.

    Never raises for well-formed inputs: malformed numeric text is scored as a
    wrong answer and flagged rather than treated as an error.

    Args:
        answer_key: Expected answers for every subject
        answer_set: The candidate's responses

    Returns:
        ScoreReport with per-subject marks, counts and missed question numbers
    """
    subjects = {}
    for subject in Subject:
        key = answer_key.for_subject(subject)
        answers = answer_set.for_subject(subject)
        subjects[subject] = grade_subject(key.mcq, key.numeric, answers.mcq, answers.numeric)

    total = sum(report.marks for report in subjects.values())
    logger.debug(f"Graded answer set: total {total}/{MAX_TOTAL}")
    return ScoreReport(subjects=subjects, total=total, max_total=MAX_TOTAL)
