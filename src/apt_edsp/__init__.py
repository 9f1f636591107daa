"""A Python data model of the APT External Dependency Solver Protocol (EDSP).

Reads scenarios (a request plus the package universe) handed to an external
solver by APT, and writes the solver's progress reports and answers back.
"""

from .answer import Answer, Autoremove, Error, Install, Keep, Remove, decode_answer
from .boolean import Bool
from .errors import (
    AnswerWriteError,
    BoolParseError,
    EdspError,
    FieldDecodeError,
    MissingFieldError,
    ProgressWriteError,
    RelationParseError,
    ScenarioReadError,
    StanzaReadError,
    VersionParseError,
)
from .progress import Progress
from .relations import ArchQualifiedName, Dependency, Operator, Relation, format_dependencies, parse_dependencies
from .response import ResponseWriter, read_response
from .scenario import Package, Request, Scenario
from .version import Version

__all__ = [
    "Answer",
    "AnswerWriteError",
    "ArchQualifiedName",
    "Autoremove",
    "Bool",
    "BoolParseError",
    "Dependency",
    "EdspError",
    "Error",
    "FieldDecodeError",
    "Install",
    "Keep",
    "MissingFieldError",
    "Operator",
    "Package",
    "Progress",
    "ProgressWriteError",
    "Relation",
    "RelationParseError",
    "Remove",
    "Request",
    "ResponseWriter",
    "Scenario",
    "ScenarioReadError",
    "StanzaReadError",
    "Version",
    "VersionParseError",
    "decode_answer",
    "format_dependencies",
    "parse_dependencies",
    "read_response",
]
