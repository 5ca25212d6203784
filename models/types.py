# models/types.py

"""
Holds TypeVar definition for simplifying type checks.
"""

from typing import TypeVar

from models.academic_grades import StudentAcademicGrades, StudentCourseGrades
from models.instrument import EvaluationInstrument
from models.outcome import EvaluationCriterion, LearningOutcome
from models.practical_exam import PracticalExamEvaluation
from models.service import Service, ServiceEvaluation
from models.student import PracticeGroup, Student

RecordType = TypeVar(
    "RecordType",
    Student,
    PracticeGroup,
    EvaluationInstrument,
    LearningOutcome,
    EvaluationCriterion,
    Service,
    ServiceEvaluation,
    PracticalExamEvaluation,
    StudentAcademicGrades,
    StudentCourseGrades,
)
