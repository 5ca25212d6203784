# models/course_defaults.py

"""
Starting course data for a new gradebook.

Instruments come with their activities already bound to the grade sources that feed
them (exam activities read the manual theory exam grades, service and practical exam
activities read the calculated aggregates). Fichas, Trabajos and P. Diaria have no
source yet and grade as absent until one is configured.

Outcome criterion lists are kept as the department wrote them, including criteria that
have not been drafted yet; those ids simply do not resolve.
"""

from __future__ import annotations

from models.grade_source import GradeSource
from models.instrument import EvaluationActivity, EvaluationInstrument
from models.outcome import EvaluationCriterion, LearningOutcome


def default_instruments() -> list[EvaluationInstrument]:
    return [
        EvaluationInstrument(
            "examen",
            "Examen",
            36,
            [
                EvaluationActivity("act-1", "Examen 1", "t1", GradeSource.manual("t1", "teorico1")),
                EvaluationActivity("act-2", "Examen 2", "t1", GradeSource.manual("t1", "teorico2")),
                EvaluationActivity("act-8", "Examen 3", "t2", GradeSource.manual("t2", "teorico1")),
                EvaluationActivity("act-9", "Examen 4", "t2", GradeSource.manual("t2", "teorico2")),
            ],
            description="Pruebas teóricas escritas para evaluar conocimientos.",
        ),
        EvaluationInstrument(
            "fichas",
            "Fichas",
            2,
            [
                EvaluationActivity("act-3", "Fichas 1", "t1"),
                EvaluationActivity("act-10", "Fichas 2", "t2"),
            ],
            description="Recopilación de fichas técnicas o de trabajo.",
        ),
        EvaluationInstrument(
            "trabajos",
            "Trabajos",
            2,
            [
                EvaluationActivity("act-4", "Trabajos 1", "t1"),
                EvaluationActivity("act-11", "Trabajos 2", "t2"),
            ],
            description="Trabajos de investigación o proyectos asignados.",
        ),
        EvaluationInstrument(
            "practica_diaria",
            "P. Diaria",
            30,
            [
                EvaluationActivity("act-5", "P. Diaria 1", "t1"),
                EvaluationActivity("act-12", "P. Diaria 2", "t2"),
            ],
            description="Evaluación continua de la participación y trabajo diario en el aula.",
        ),
        EvaluationInstrument(
            "servicios",
            "Servicios",
            12,
            [
                EvaluationActivity("act-6", "Servicios 1", "t1", GradeSource.service_average("t1")),
                EvaluationActivity("act-13", "Servicios 2", "t2", GradeSource.service_average("t2")),
            ],
            description="Evaluación del desempeño durante los servicios prácticos de restaurante.",
        ),
        EvaluationInstrument(
            "ex_practico",
            "Ex. Practico",
            18,
            [
                EvaluationActivity("act-7", "Ex. Practico 1", "t1", GradeSource.practical_exam("t1")),
                EvaluationActivity("act-14", "Ex. Practico 2", "t2", GradeSource.practical_exam("t2")),
            ],
            description="Exámenes prácticos de elaboración y técnicas culinarias.",
        ),
    ]


def default_outcomes() -> list[LearningOutcome]:
    return [
        LearningOutcome(
            "cocina_basica",
            "Cocina Básica",
            40,
            ["cocina_001", "cocina_002", "cocina_003", "cocina_004", "cocina_005"],
            description="Desarrolla habilidades básicas de cocina y manipulación de alimentos",
        ),
        LearningOutcome(
            "cocina_mediterranea",
            "Cocina Mediterránea",
            40,
            ["med_001", "med_002", "med_003", "med_004", "med_005", "med_006"],
            description="Domina los fundamentos de la cocina mediterránea tradicional",
        ),
        LearningOutcome(
            "panaderia_pasteleria",
            "Panadería y Pastelería",
            20,
            ["pan_001", "pan_002", "pan_003", "pan_004", "pan_005", "pan_006"],
            description="Especialización en productos de panadería y repostería",
        ),
    ]


def default_criteria() -> list[EvaluationCriterion]:
    rows = [
        ("cocina_001", "cocina_basica", "Prepara correctamente las técnicas básicas de cocción (hervir, freír, hornear)", 20),
        ("cocina_002", "cocina_basica", "Maneja con destreza los utensilios y equipos básicos de cocina", 15),
        ("cocina_003", "cocina_basica", "Aplica principios de higiene alimentaria en todas las operaciones", 25),
        ("cocina_004", "cocina_basica", "Colabora efectivamente en trabajo de equipo en cocina", 15),
        ("cocina_005", "cocina_basica", "Demuestra organización y planificación en sus tareas culinarias", 25),
        ("med_001", "cocina_mediterranea", "Identifica y selecciona ingredientes típicos mediterráneos", 20),
        ("med_002", "cocina_mediterranea", "Elabora platos tradicionales mediterráneos con técnica correcta", 25),
        ("pan_001", "panaderia_pasteleria", "Domina el proceso de elaboración de masas panarias", 30),
    ]
    return [
        EvaluationCriterion(criterion_id, outcome_id, description, weight)
        for criterion_id, outcome_id, description, weight in rows
    ]
