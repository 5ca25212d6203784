# models/gradebook.py

"""
The Gradebook model is the central data object of the program and the "source of truth" for every raw score.

Students, practice groups, instruments (with their activities), learning outcomes, criteria, services, service
evaluations, practical exams, academic grades and course module grades are stored in dictionaries keyed by id and
written to .json upon saving, along with `metadata.json` (course information) and `evaluation_structure.json` (the
period instrument tables).

The Gradebook never computes grades itself beyond the practical exam final score it caches at save time. Every
other figure is produced by the `engine` aggregators from a read-only `snapshot()`.
"""

from __future__ import annotations

import datetime
import json
import logging
import os
from typing import Any, Callable

from core.response import ErrorCode, Response
from core.utils import generate_record_id
from engine.practical_exam import calculate_final_score
from engine.report import build_student_report
from engine.sources import GradeSources
from models.academic_grades import StudentAcademicGrades, StudentCourseGrades
from models.course_defaults import default_criteria, default_instruments, default_outcomes
from models.instrument import EvaluationActivity, EvaluationInstrument
from models.outcome import EvaluationCriterion, LearningOutcome
from models.period import EvaluationStructure
from models.practical_exam import PracticalExamEvaluation
from models.service import Service, ServiceEvaluation
from models.student import PracticeGroup, Student
from models.types import RecordType

logger = logging.getLogger(__name__)

STRUCTURE_FILENAME = "evaluation_structure.json"


class Gradebook:
    _tracking_maps: dict[type, str] = {
        Student: "students",
        PracticeGroup: "practice_groups",
        EvaluationInstrument: "instruments",
        LearningOutcome: "outcomes",
        EvaluationCriterion: "criteria",
        Service: "services",
        ServiceEvaluation: "service_evaluations",
        PracticalExamEvaluation: "practical_exams",
        StudentAcademicGrades: "academic_grades",
        StudentCourseGrades: "course_grades",
    }

    # filename -> (record class, tracking attribute), in load order
    _record_files: dict[str, tuple[type, str]] = {
        "students.json": (Student, "students"),
        "practice_groups.json": (PracticeGroup, "practice_groups"),
        "instruments.json": (EvaluationInstrument, "instruments"),
        "outcomes.json": (LearningOutcome, "outcomes"),
        "criteria.json": (EvaluationCriterion, "criteria"),
        "services.json": (Service, "services"),
        "service_evaluations.json": (ServiceEvaluation, "service_evaluations"),
        "practical_exams.json": (PracticalExamEvaluation, "practical_exams"),
        "academic_grades.json": (StudentAcademicGrades, "academic_grades"),
        "course_grades.json": (StudentCourseGrades, "course_grades"),
    }

    def __init__(self, save_dir_path: str):
        self._metadata: dict[str, Any] = {}
        self._students: dict[str, Student] = {}
        self._practice_groups: dict[str, PracticeGroup] = {}
        self._instruments: dict[str, EvaluationInstrument] = {}
        self._outcomes: dict[str, LearningOutcome] = {}
        self._criteria: dict[str, EvaluationCriterion] = {}
        self._services: dict[str, Service] = {}
        self._service_evaluations: dict[str, ServiceEvaluation] = {}
        self._practical_exams: dict[str, PracticalExamEvaluation] = {}
        self._academic_grades: dict[str, StudentAcademicGrades] = {}
        self._course_grades: dict[str, StudentCourseGrades] = {}
        self._structure: EvaluationStructure = EvaluationStructure.default()
        self._dir_path: str = save_dir_path
        self._unsaved_changes: bool = False

    # === properties ===

    # --- core data structures ---

    @property
    def students(self) -> dict[str, Student]:
        return self._students

    @property
    def practice_groups(self) -> dict[str, PracticeGroup]:
        return self._practice_groups

    @property
    def instruments(self) -> dict[str, EvaluationInstrument]:
        return self._instruments

    @property
    def activities(self) -> dict[str, EvaluationActivity]:
        return {
            activity.id: activity
            for instrument in self._instruments.values()
            for activity in instrument.activities
        }

    @property
    def outcomes(self) -> dict[str, LearningOutcome]:
        return self._outcomes

    @property
    def criteria(self) -> dict[str, EvaluationCriterion]:
        return self._criteria

    @property
    def services(self) -> dict[str, Service]:
        return self._services

    @property
    def service_evaluations(self) -> dict[str, ServiceEvaluation]:
        return self._service_evaluations

    @property
    def practical_exams(self) -> dict[str, PracticalExamEvaluation]:
        return self._practical_exams

    @property
    def academic_grades(self) -> dict[str, StudentAcademicGrades]:
        return self._academic_grades

    @property
    def course_grades(self) -> dict[str, StudentCourseGrades]:
        return self._course_grades

    @property
    def structure(self) -> EvaluationStructure:
        return self._structure

    # --- metadata fields ---

    @property
    def name(self) -> str:
        return self._metadata["name"]

    @property
    def academic_year(self) -> str:
        return self._metadata["academic_year"]

    @property
    def path(self) -> str:
        return self._dir_path

    @property
    def has_unsaved_changes(self) -> bool:
        return self._unsaved_changes

    # === public classmethods ===

    @classmethod
    def create(
        cls,
        name: str,
        academic_year: str,
        save_dir_path: str,
        seed_defaults: bool = True,
    ) -> Response:
        """
        Creates, saves, and returns a new `Gradebook` instance.

        Args:
            name (str): The course name.
            academic_year (str): The academic year, e.g. "2025-2026".
            save_dir_path (str): The directory for reading and writing serialized data.
            seed_defaults (bool): Whether to start with the default instruments, outcomes and criteria.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the `Gradebook` was created and written to disk.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_FIELD_VALUE` if ValueError raised.
                    - `ErrorCode.INTERNAL_ERROR` if the directory cannot be written or for unexpected errors.
                - data (dict | None):
                    - On success: "gradebook" (Gradebook).

        Notes:
            - The directory is created if it does not exist.
        """
        try:
            gradebook = cls(save_dir_path)
            gradebook._metadata = {
                "name": name,
                "academic_year": academic_year,
                "created_at": datetime.datetime.now().isoformat(),
            }

            if seed_defaults:
                for instrument in default_instruments():
                    gradebook._instruments[instrument.id] = instrument
                for outcome in default_outcomes():
                    gradebook._outcomes[outcome.id] = outcome
                for criterion in default_criteria():
                    gradebook._criteria[criterion.id] = criterion

            os.makedirs(save_dir_path, exist_ok=True)
            save_response = gradebook.save(save_dir_path)

            if not save_response.success:
                return save_response

        except ValueError as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except Exception as e:
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        else:
            return Response.succeed(data={"gradebook": gradebook})

    @classmethod
    def load(cls, save_dir_path: str) -> Response:
        """
        Loads previously serialized data from disk and returns a `Gradebook` instance.

        Args:
            save_dir_path (str): The directory path where the gradebook data is stored.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if every record file was read and imported.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_INPUT` if JSONDecodeError raised.
                    - `ErrorCode.INVALID_FIELD_VALUE` if ValueError raised (including a bad evaluation structure).
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if a record is missing a field.
                    - `ErrorCode.NOT_FOUND` if a required file is missing.
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - data (dict | None):
                    - On success: "gradebook" (Gradebook).

        Notes:
            - Practical exam final scores are loaded verbatim and not recomputed.
            - `evaluation_structure.json` is optional; the default structure is used when it is absent.
        """
        try:
            gradebook = cls(save_dir_path)
            gradebook.import_metadata(save_dir_path)

            for filename, (record_cls, attr_name) in cls._record_files.items():
                data = gradebook._read_json(filename)
                if not isinstance(data, list):
                    raise ValueError(f"Expected {filename} to contain a list.")

                gradebook._import_records(
                    data=data,
                    from_dict_fn=record_cls.from_dict,
                    add_fn=gradebook._import_fn(record_cls),
                    record_name=attr_name,
                )

            gradebook._unsaved_changes = False

        except json.JSONDecodeError as e:
            return Response.fail(
                detail=f"Failed to parse JSON data: {e}",
                error=ErrorCode.INVALID_INPUT,
            )

        except FileNotFoundError as e:
            return Response.fail(
                detail=f"Missing gradebook file: {e}",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        except KeyError as e:
            return Response.fail(
                detail=f"Missing required field: {e}",
                error=ErrorCode.MISSING_REQUIRED_FIELD,
            )

        except (ValueError, TypeError) as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except Exception as e:
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        else:
            logger.info(
                "Loaded gradebook %s with %d students from %s",
                gradebook.name,
                len(gradebook.students),
                save_dir_path,
            )
            return Response.succeed(data={"gradebook": gradebook})

    # === persistence and import ===

    def _read_json(self, filename: str, dir_path: str | None = None) -> Any:
        with open(os.path.join(dir_path or self._dir_path, filename), "r", encoding="utf-8") as f:
            return json.load(f)

    def save(self, save_dir_path: str | None = None) -> Response:
        """
        Serializes and saves every registry to disk in JSON format.

        Args:
            save_dir_path (str | None): Target directory. Defaults to the gradebook's own path.

        Returns:
            Response: success with detail "Gradebook successfully saved to disk.", or failure with
            `ErrorCode.INVALID_FIELD_VALUE` (unserializable data) or `ErrorCode.INTERNAL_ERROR` (OSError, unexpected).

        Notes:
            - Existing files in the directory are overwritten.
        """
        target_dir = save_dir_path or self._dir_path

        def write_json(filename: str, data: list | dict) -> None:
            with open(os.path.join(target_dir, filename), "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True, ensure_ascii=False)

        try:
            write_json("metadata.json", self._metadata)
            write_json(STRUCTURE_FILENAME, self._structure.to_dict())

            for filename, (_, attr_name) in self._record_files.items():
                records = getattr(self, attr_name)
                write_json(filename, [r.to_dict() for r in records.values()])

        except (ValueError, TypeError) as e:
            return Response.fail(
                detail=f"Object not JSON serializable: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except OSError as e:
            return Response.fail(
                detail=f"Failed to write data to disk: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        except Exception as e:
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        else:
            self._unsaved_changes = False
            logger.info("Saved gradebook to %s", target_dir)

            return Response.succeed(detail="Gradebook successfully saved to disk.")

    def import_metadata(self, dir_path: str) -> None:
        """
        Loads gradebook metadata and the optional evaluation structure from disk.

        Raises:
            ValueError:
                - If `metadata.json` does not contain a dictionary.
                - If `evaluation_structure.json` exists but is not a valid structure.
        """
        raw_metadata = self._read_json("metadata.json", dir_path)
        if not isinstance(raw_metadata, dict):
            raise ValueError("metadata.json must contain a dictionary.")
        self._metadata = raw_metadata

        try:
            raw_structure = self._read_json(STRUCTURE_FILENAME, dir_path)

        except FileNotFoundError:
            self._structure = EvaluationStructure.default()

        else:
            self._structure = EvaluationStructure.from_dict(raw_structure)

    def _import_fn(self, record_cls: type) -> Callable[[Any], Response]:
        import_fns: dict[type, Callable[[Any], Response]] = {
            Student: self.add_student,
            PracticeGroup: self.add_practice_group,
            EvaluationInstrument: self.add_instrument,
            LearningOutcome: self.add_outcome,
            EvaluationCriterion: lambda c: self.add_criterion(c, link_to_outcome=False),
            Service: lambda s: self.add_service(s, with_evaluation=False),
            ServiceEvaluation: self.add_service_evaluation,
            PracticalExamEvaluation: self.add_practical_exam,
        }

        return import_fns.get(record_cls, self._add_tracked)

    def _import_records(
        self,
        data: list[dict[str, Any]],
        from_dict_fn: Callable[[dict[str, Any]], RecordType],
        add_fn: Callable[[RecordType], Response],
        record_name: str,
    ) -> None:
        """
        Deserializes and imports a list of records into the gradebook, failing fast on error.

        Raises:
            ValueError: If a record dictionary is malformed or its insertion is rejected.
            RuntimeError: If an internal error occurs during the add operation.
        """
        for record_dict in data:
            try:
                record = from_dict_fn(record_dict)
            except (ValueError, TypeError, KeyError) as e:
                raise ValueError(
                    f"Failed to deserialize {record_name}: {record_dict} - {e}"
                ) from None

            response = add_fn(record)

            if not response.success:
                message = f"Failed to import {record_name}: {record_dict} - {response.detail}"
                match response.error:
                    case ErrorCode.INTERNAL_ERROR:
                        raise RuntimeError(message)
                    case _:
                        raise ValueError(message)

    # === data accessors ===

    def get_records(
        self,
        dictionary: dict[str, RecordType],
        predicate: Callable[[RecordType], bool] | None = None,
    ) -> Response:
        """
        Fetches records from a dictionary, optionally filtered by a predicate.

        Returns:
            Response: success with data "records" (list, possibly empty); failure with
            `ErrorCode.INTERNAL_ERROR` if the predicate raises.
        """
        try:
            if predicate:
                records = list(filter(predicate, dictionary.values()))
            else:
                records = list(dictionary.values())

        except Exception as e:
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        else:
            return Response.succeed(data={"records": records})

    def find_record_by_uuid(self, uuid: str, dictionary: dict[str, RecordType]) -> Response:
        """
        Finds a record by id within a given dictionary.

        Returns:
            Response: success with data "record"; failure with `ErrorCode.NOT_FOUND` and status 404.
        """
        record = dictionary.get(uuid)

        if record is None:
            return Response.fail(
                detail=f"No matching record found for {uuid}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        return Response.succeed(data={"record": record})

    def find_student_by_uuid(self, uuid: str) -> Response:
        return self.find_record_by_uuid(uuid, self._students)

    def find_instrument_by_uuid(self, uuid: str) -> Response:
        return self.find_record_by_uuid(uuid, self._instruments)

    def find_activity_by_uuid(self, uuid: str) -> Response:
        return self.find_record_by_uuid(uuid, self.activities)

    def find_outcome_by_uuid(self, uuid: str) -> Response:
        return self.find_record_by_uuid(uuid, self._outcomes)

    def find_criterion_by_uuid(self, uuid: str) -> Response:
        return self.find_record_by_uuid(uuid, self._criteria)

    def find_service_by_uuid(self, uuid: str) -> Response:
        return self.find_record_by_uuid(uuid, self._services)

    def find_service_evaluation(self, service_id: str) -> Response:
        evaluation = next(
            (e for e in self._service_evaluations.values() if e.service_id == service_id),
            None,
        )

        if evaluation is None:
            return Response.fail(
                detail=f"No evaluation found for service {service_id}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        return Response.succeed(data={"record": evaluation})

    def find_practical_exam(self, student_id: str, exam_period: str) -> Response:
        evaluation = next(
            (
                e
                for e in self._practical_exams.values()
                if e.student_id == student_id and e.exam_period == exam_period
            ),
            None,
        )

        if evaluation is None:
            return Response.fail(
                detail=f"No practical exam for student {student_id} in period {exam_period}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        return Response.succeed(data={"record": evaluation})

    # --- engine access ---

    def snapshot(self) -> GradeSources:
        """Returns a read-only bundle of the current registries for one query pass."""
        return GradeSources(
            students=self._students,
            practice_groups=self._practice_groups,
            instruments=self._instruments,
            outcomes=self._outcomes,
            criteria=self._criteria,
            services=self._services,
            service_evaluations=self._service_evaluations,
            practical_exams=self._practical_exams,
            academic_grades=self._academic_grades,
            course_grades=self._course_grades,
            structure=self._structure,
        )

    def get_student_report(self, student_id: str) -> Response:
        """
        Builds the full grade report for one student.

        Returns:
            Response: success with data "report" (StudentReport); failure with `ErrorCode.NOT_FOUND`
            if the student is not on the roster.
        """
        if student_id not in self._students:
            return Response.fail(
                detail=f"No student found for {student_id}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        return Response.succeed(
            data={"report": build_student_report(student_id, self.snapshot())}
        )

    # === data manipulators ===

    def _mark_dirty(self) -> None:
        self._unsaved_changes = True

    def _get_tracking_dict(self, record: RecordType) -> dict[str, RecordType]:
        try:
            attr_name = self._tracking_maps[type(record)]

            return getattr(self, attr_name)

        except KeyError:
            raise TypeError(f"Unrecognized record type: {type(record)}") from None

    # --- generalized record operations ---

    def _add_tracked(self, record: RecordType) -> Response:
        """
        Adds any tracked record after checking its id is unique.

        Returns:
            Response: success with data "record"; failure with `ErrorCode.DUPLICATE_RECORD` (409) if the id is
            already tracked, or `ErrorCode.INTERNAL_ERROR` for unrecognized record types.

        Notes:
            - Marks the gradebook dirty on success.
        """
        try:
            dictionary = self._get_tracking_dict(record)

        except TypeError as e:
            return Response.fail(detail=str(e), error=ErrorCode.INTERNAL_ERROR)

        if record.id in dictionary:
            return Response.fail(
                detail=f"A record with id {record.id} already exists.",
                error=ErrorCode.DUPLICATE_RECORD,
                status_code=409,
            )

        dictionary[record.id] = record
        self._mark_dirty()

        return Response.succeed(
            detail="Record successfully added to the gradebook.",
            data={"record": record},
        )

    def _remove_tracked(self, record: RecordType) -> Response:
        try:
            dictionary = self._get_tracking_dict(record)
            del dictionary[record.id]

        except KeyError:
            return Response.fail(
                detail=f"No matching record could be found for deletion: {record}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        except TypeError as e:
            return Response.fail(detail=str(e), error=ErrorCode.INTERNAL_ERROR)

        self._mark_dirty()

        return Response.succeed(detail="Record successfully removed from the gradebook.")

    # --- students and groups ---

    def add_student(self, student: Student) -> Response:
        return self._add_tracked(student)

    def remove_student(self, student: Student) -> Response:
        """
        Removes a student and every score record that belongs to them.

        Group memberships and service rubric entries are left in place; they no longer resolve to a roster
        student and are ignored by the engine.
        """
        response = self._remove_tracked(student)

        if response.success:
            self._academic_grades.pop(student.id, None)
            self._course_grades.pop(student.id, None)
            for exam_id in [e.id for e in self._practical_exams.values() if e.student_id == student.id]:
                del self._practical_exams[exam_id]

        return response

    def add_practice_group(self, group: PracticeGroup) -> Response:
        overlap = [
            student_id
            for student_id in group.student_ids
            for other in self._practice_groups.values()
            if other.has_student(student_id)
        ]

        if overlap:
            return Response.fail(
                detail=f"Students already belong to another group: {', '.join(overlap)}.",
                error=ErrorCode.VALIDATION_FAILED,
            )

        return self._add_tracked(group)

    def remove_practice_group(self, group: PracticeGroup) -> Response:
        return self._remove_tracked(group)

    # --- instruments, outcomes and criteria ---

    def add_instrument(self, instrument: EvaluationInstrument) -> Response:
        known = self.activities
        clashes = [a.id for a in instrument.activities if a.id in known]

        if clashes:
            return Response.fail(
                detail=f"Activity ids already in use: {', '.join(clashes)}.",
                error=ErrorCode.DUPLICATE_RECORD,
                status_code=409,
            )

        return self._add_tracked(instrument)

    def remove_instrument(self, instrument: EvaluationInstrument) -> Response:
        """
        Removes an instrument together with its activities.

        Criterion associations that still list those activity ids are kept; they resolve to "no data".
        """
        return self._remove_tracked(instrument)

    def add_outcome(self, outcome: LearningOutcome) -> Response:
        return self._add_tracked(outcome)

    def remove_outcome(self, outcome: LearningOutcome) -> Response:
        response = self._remove_tracked(outcome)

        if response.success:
            for criterion_id in [c.id for c in self._criteria.values() if c.outcome_id == outcome.id]:
                del self._criteria[criterion_id]

        return response

    def add_criterion(self, criterion: EvaluationCriterion, link_to_outcome: bool = True) -> Response:
        """
        Adds a criterion and, by default, appends it to its outcome's criterion list.

        Returns:
            Response: failure with `ErrorCode.NOT_FOUND` if linking is requested and the outcome is unknown;
            otherwise as `_add_tracked()`.
        """
        outcome = self._outcomes.get(criterion.outcome_id)

        if link_to_outcome and outcome is None:
            return Response.fail(
                detail=f"No learning outcome found for {criterion.outcome_id}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        response = self._add_tracked(criterion)

        if response.success and link_to_outcome:
            outcome.add_criterion_id(criterion.id)

        return response

    def remove_criterion(self, criterion: EvaluationCriterion) -> Response:
        response = self._remove_tracked(criterion)

        if response.success and criterion.outcome_id in self._outcomes:
            self._outcomes[criterion.outcome_id].remove_criterion_id(criterion.id)

        return response

    def associate_criterion(
        self,
        criterion: EvaluationCriterion,
        unit_id: str,
        activity_ids: list[str],
    ) -> Response:
        """
        Links a criterion to a unit of work and a list of activities.

        Activity ids are stored as given; ids that do not resolve to a known activity are reported in
        data "unresolved" but not rejected.
        """
        if criterion.id not in self._criteria:
            return Response.fail(
                detail=f"No criterion found for {criterion.id}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        association = criterion.associate(unit_id, activity_ids)
        known = self.activities
        self._mark_dirty()

        return Response.succeed(
            detail="Criterion association saved.",
            data={
                "association": association,
                "unresolved": [a for a in activity_ids if a not in known],
            },
        )

    # --- services ---

    def add_service(self, service: Service, with_evaluation: bool = True) -> Response:
        """
        Adds a service and, by default, an empty evaluation for it.

        Returns:
            Response: as `_add_tracked()`, with data "evaluation" when one was created.
        """
        response = self._add_tracked(service)

        if response.success and with_evaluation:
            evaluation = ServiceEvaluation(f"eval-{service.id}", service.id)
            self._service_evaluations[evaluation.id] = evaluation
            response.data["evaluation"] = evaluation

        return response

    def remove_service(self, service: Service) -> Response:
        response = self._remove_tracked(service)

        if response.success:
            for evaluation_id in [
                e.id for e in self._service_evaluations.values() if e.service_id == service.id
            ]:
                del self._service_evaluations[evaluation_id]

        return response

    def toggle_service_locked_status(self, service: Service) -> Response:
        if service.id not in self._services:
            return Response.fail(
                detail=f"No service found for {service.id}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        service.toggle_locked_status()
        self._mark_dirty()

        return Response.succeed(detail=f"Service is now {'locked' if service.is_locked else 'unlocked'}.")

    def add_service_evaluation(self, evaluation: ServiceEvaluation) -> Response:
        if self.find_service_evaluation(evaluation.service_id).success:
            return Response.fail(
                detail=f"Service {evaluation.service_id} already has an evaluation.",
                error=ErrorCode.DUPLICATE_RECORD,
                status_code=409,
            )

        return self._add_tracked(evaluation)

    def save_service_evaluation(self, evaluation: ServiceEvaluation) -> Response:
        """
        Replaces the stored evaluation of a service with `evaluation`.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the evaluation was stored.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if the service is unknown.
                    - `ErrorCode.RECORD_LOCKED` if the service is locked.
                - status_code (int | None): 200, 404 or 423.
                - data (dict | None): "record" (ServiceEvaluation) on success.
        """
        service = self._services.get(evaluation.service_id)

        if service is None:
            return Response.fail(
                detail=f"No service found for {evaluation.service_id}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        if service.is_locked:
            return Response.fail(
                detail=f"Service {service.name} is locked.",
                error=ErrorCode.RECORD_LOCKED,
                status_code=423,
            )

        for evaluation_id in [
            e.id for e in self._service_evaluations.values() if e.service_id == service.id
        ]:
            del self._service_evaluations[evaluation_id]

        self._service_evaluations[evaluation.id] = evaluation
        self._mark_dirty()

        return Response.succeed(
            detail=f"Service {service.name} saved.",
            data={"record": evaluation},
        )

    # --- practical exams ---

    def add_practical_exam(self, evaluation: PracticalExamEvaluation) -> Response:
        """Adds a practical exam as-is; its stored final score is not recomputed."""
        if self.find_practical_exam(evaluation.student_id, evaluation.exam_period).success:
            return Response.fail(
                detail=(
                    f"Student {evaluation.student_id} already has a practical exam "
                    f"for period {evaluation.exam_period}."
                ),
                error=ErrorCode.DUPLICATE_RECORD,
                status_code=409,
            )

        return self._add_tracked(evaluation)

    def new_practical_exam(self, student_id: str, exam_period: str) -> Response:
        """Returns the stored exam for (student, period), or a fresh unsaved one."""
        existing = self.find_practical_exam(student_id, exam_period)
        if existing.success:
            return existing

        try:
            evaluation = PracticalExamEvaluation(
                generate_record_id(f"{student_id}-{exam_period}"),
                student_id,
                exam_period,
            )

        except ValueError as e:
            return Response.fail(detail=str(e), error=ErrorCode.INVALID_FIELD_VALUE)

        return Response.succeed(data={"record": evaluation})

    def save_practical_exam(self, evaluation: PracticalExamEvaluation) -> Response:
        """
        Computes and stores the final score of a practical exam, then stores the exam.

        Any earlier exam for the same (student, period) is replaced. The final score is None when nothing
        has been scored yet.

        Returns:
            Response: success with data "record" and "final_score"; failure with `ErrorCode.NOT_FOUND` if the
            student is not on the roster.
        """
        if evaluation.student_id not in self._students:
            return Response.fail(
                detail=f"No student found for {evaluation.student_id}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        evaluation.final_score = calculate_final_score(evaluation).rounded()

        for exam_id in [
            e.id
            for e in self._practical_exams.values()
            if e.student_id == evaluation.student_id and e.exam_period == evaluation.exam_period
        ]:
            del self._practical_exams[exam_id]

        self._practical_exams[evaluation.id] = evaluation
        self._mark_dirty()

        return Response.succeed(
            detail="Practical exam saved.",
            data={"record": evaluation, "final_score": evaluation.final_score},
        )

    # --- manual grades ---

    def set_manual_grade(
        self,
        student_id: str,
        period_key: str,
        instrument_key: str,
        value: Any,
    ) -> Response:
        """
        Stores a manually entered instrument grade (0-10, or blank/None to clear it).

        Returns:
            Response: failure with `ErrorCode.NOT_FOUND` for unknown students or periods, or with
            `ErrorCode.INVALID_FIELD_VALUE` for out-of-range or non-numeric values.
        """
        if student_id not in self._students:
            return Response.fail(
                detail=f"No student found for {student_id}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        if self._structure.get_period(period_key) is None:
            return Response.fail(
                detail=f"Unknown period: {period_key}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        grades = self._academic_grades.get(student_id) or StudentAcademicGrades(student_id)

        try:
            grades.set_manual_grade(period_key, instrument_key, value)

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Invalid grade: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        self._academic_grades[student_id] = grades
        self._mark_dirty()

        return Response.succeed(detail="Grade saved.", data={"record": grades})

    def set_course_module_grade(
        self,
        student_id: str,
        module: str,
        period_key: str,
        value: Any,
    ) -> Response:
        if student_id not in self._students:
            return Response.fail(
                detail=f"No student found for {student_id}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        grades = self._course_grades.get(student_id) or StudentCourseGrades(student_id)

        try:
            grades.set_module_grade(module, period_key, value)

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Invalid grade: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        self._course_grades[student_id] = grades
        self._mark_dirty()

        return Response.succeed(detail="Grade saved.", data={"record": grades})

    # --- configuration ---

    def update_evaluation_structure(self, data: dict) -> Response:
        try:
            self._structure = EvaluationStructure.from_dict(data)

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Invalid evaluation structure: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        self._mark_dirty()

        return Response.succeed(detail="Evaluation structure updated.")

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Gradebook({self._metadata.get('name')}, {self._metadata.get('academic_year')}, {self._dir_path})"

    def __str__(self) -> str:
        return f"GRADEBOOK: {self._metadata.get('name')} ({self._metadata.get('academic_year')})"
