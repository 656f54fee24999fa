"""Workflow and version services."""

from .pipeline import PipelineRunner, Step
from .version import BumpKind, BumpOutcome, VersionTuple, bump_file, parse_bump_kind
from .workflows import GenerateKind

__all__ = [
    "BumpKind",
    "BumpOutcome",
    "GenerateKind",
    "PipelineRunner",
    "Step",
    "VersionTuple",
    "bump_file",
    "parse_bump_kind",
]
