from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

MCQ_QUESTIONS = 20
NUMERIC_QUESTIONS = 5


class Subject(str, Enum):
    PHYSICS = "physics"
    CHEMISTRY = "chemistry"
    MATHEMATICS = "maths"


def pad_block(values: Any, size: int) -> List[str]:
    """
    Coerce a raw answer block into a list of exactly `size` strings.

    Missing positions and None entries become "", anything past `size` is dropped.
    """
    if values is None:
        values = []
    block = ["" if v is None else str(v) for v in list(values)[:size]]
    block.extend([""] * (size - len(block)))
    return block


def _fit_block(value: Any, size: int, label: str) -> Tuple[str, ...]:
    if value is None:
        value = []
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise ValueError(f"{label} answers must be a list")
    if len(value) > size:
        raise ValueError(f"at most {size} {label} entries allowed")
    return tuple(pad_block(value, size))


class SubjectAnswers(BaseModel):
    """One subject's MCQ block (Q1-Q20) and numeric block (Q21-Q25)."""

    model_config = ConfigDict(frozen=True)

    mcq: Tuple[str, ...] = Field(default=("",) * MCQ_QUESTIONS, description="Choices for Q1-Q20, '' when empty")
    numeric: Tuple[str, ...] = Field(default=("",) * NUMERIC_QUESTIONS, description="Numeric answers for Q21-Q25 as text")

    @field_validator("mcq", mode="before")
    @classmethod
    def _fit_mcq(cls, value):
        return _fit_block(value, MCQ_QUESTIONS, "MCQ")

    @field_validator("numeric", mode="before")
    @classmethod
    def _fit_numeric(cls, value):
        return _fit_block(value, NUMERIC_QUESTIONS, "numeric")


class AnswerSheet(BaseModel):
    """Answers for all three subjects. Shared shape of answer keys and answer sets."""

    model_config = ConfigDict(frozen=True)

    physics: SubjectAnswers = Field(default_factory=SubjectAnswers)
    chemistry: SubjectAnswers = Field(default_factory=SubjectAnswers)
    maths: SubjectAnswers = Field(default_factory=SubjectAnswers)

    def for_subject(self, subject: Subject) -> SubjectAnswers:
        return getattr(self, subject.value)

    @classmethod
    def from_blocks(cls, mcq: Optional[Dict[str, Any]], numeric: Optional[Dict[str, Any]]) -> "AnswerSheet":
        """Build a sheet from the stored layout: {subject: [...]} per block."""
        mcq = mcq or {}
        numeric = numeric or {}
        return cls(**{
            subject.value: SubjectAnswers(
                mcq=mcq.get(subject.value),
                numeric=numeric.get(subject.value),
            )
            for subject in Subject
        })

    def mcq_blocks(self) -> Dict[str, List[str]]:
        return {subject.value: list(self.for_subject(subject).mcq) for subject in Subject}

    def numeric_blocks(self) -> Dict[str, List[str]]:
        return {subject.value: list(self.for_subject(subject).numeric) for subject in Subject}


class AnswerKey(AnswerSheet):
    """Expected answers for one test. Immutable once created."""


class AnswerSet(AnswerSheet):
    """One candidate's responses; empty entries mean unattempted."""


class BlockResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    correct: int = Field(..., description="Questions answered correctly")
    wrong: int = Field(..., description="Questions answered incorrectly")
    unattempted: int = Field(..., description="Questions left blank")
    marks: int = Field(..., description="correct*4 - wrong*1")
    wrong_questions: Tuple[int, ...] = Field(default=(), description="Question numbers answered incorrectly")


class SubjectReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    marks: int = Field(..., description="MCQ marks + numeric marks")
    correct_count: int
    wrong_count: int
    unattempted_count: int
    wrong_question_numbers: Tuple[int, ...] = Field(default=(), description="MCQ misses followed by numeric misses")
    mcq: BlockResult
    numeric: BlockResult


class ScoreReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    subjects: Dict[Subject, SubjectReport] = Field(..., description="Per subject breakdown")
    total: int = Field(..., description="Sum of the three subject marks")
    max_total: int = Field(..., description="Highest achievable total")

    def marks(self) -> Dict[str, int]:
        out = {subject.value: self.subjects[subject].marks for subject in Subject}
        out["total"] = self.total
        return out

    def wrong_questions(self) -> Dict[str, List[int]]:
        return {subject.value: list(self.subjects[subject].wrong_question_numbers) for subject in Subject}


# ==================== API MODELS ====================

class CreateTestRequest(BaseModel):
    test_name: str = Field(..., description="Display name of the test, e.g. 'JEE Mock Test 01'")
    answer_key: AnswerKey = Field(default_factory=AnswerKey)


class CheckRequest(BaseModel):
    student_id: Optional[str] = Field(None, description="Selected student")
    test_id: Optional[str] = Field(None, description="Selected test")
    answers: AnswerSet = Field(default_factory=AnswerSet)
