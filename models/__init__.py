from models.module import Assessment, AssessmentFormat, Module, ModuleEditError
from models.timeslot import TimeSlot, Weekday
from models.session import StudySession
from models.execution_guide import AgendaItem, ElaborationResult, ExecutionGuide
from models.learning_guide import LearningGuide
from models.study_data import InputReport, StudyData

__all__ = [
    "Assessment",
    "AssessmentFormat",
    "Module",
    "ModuleEditError",
    "TimeSlot",
    "Weekday",
    "StudySession",
    "AgendaItem",
    "ElaborationResult",
    "ExecutionGuide",
    "LearningGuide",
    "InputReport",
    "StudyData",
]
