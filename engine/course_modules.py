# engine/course_modules.py

"""
Final averages for the other course modules (FOL, Inglés Técnico, EIE).

The module average is the mean of whichever of the three term grades are present. The
remediation grade is reported alongside it but not folded into the average.
"""

from __future__ import annotations

from core.grade import Grade
from core.numeric import coerce_grade, mean
from engine.sources import GradeSources
from models.academic_grades import COURSE_MODULES, StudentCourseGrades
from models.grade_source import TRIMESTERS


def module_final_average(grades: StudentCourseGrades | None, module: str) -> Grade:
    if grades is None:
        return Grade.absent()

    module_grades = grades.module_grades(module)
    present = [
        value
        for trimester in TRIMESTERS
        if (value := coerce_grade(module_grades.get(trimester))) is not None
    ]

    if not present:
        return Grade.absent()

    return Grade.present(mean(present), coverage=len(present))


def student_module_summary(student_id: str, sources: GradeSources) -> dict[str, dict]:
    grades = sources.course_grades.get(student_id)
    modules = list(COURSE_MODULES)
    if grades is not None:
        modules += [m for m in grades.modules if m not in modules]

    summary: dict[str, dict] = {}
    for module in modules:
        module_grades = grades.module_grades(module) if grades else {}
        summary[module] = {
            "t1": coerce_grade(module_grades.get("t1")),
            "t2": coerce_grade(module_grades.get("t2")),
            "t3": coerce_grade(module_grades.get("t3")),
            "rec": coerce_grade(module_grades.get("rec")),
            "final": module_final_average(grades, module).rounded(),
        }

    return summary
