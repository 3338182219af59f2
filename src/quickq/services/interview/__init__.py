from .difficulty import INTERVIEWER_NAMES, get_interview_config, pick_interviewer
from .manager import InterviewSessionManager
from .registry import SessionRegistry

__all__ = [
    "INTERVIEWER_NAMES",
    "InterviewSessionManager",
    "SessionRegistry",
    "get_interview_config",
    "pick_interviewer",
]
