"""Core domain types and logic."""

from .errors import ErrorCode, FyreError
from .project import Project, detect_project, is_project_root
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # errors
    "ErrorCode",
    "FyreError",
    # project
    "Project",
    "detect_project",
    "is_project_root",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
