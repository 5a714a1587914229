"""Initialization order and coordinator synthesis."""

from behaviorgraph.application.coordination.csharp import render_coordinator, render_editor_script
from behaviorgraph.application.coordination.synthesizer import (
    COORDINATOR_PRIORITY,
    CoordinatorSynthesizer,
)

__all__ = [
    "COORDINATOR_PRIORITY",
    "CoordinatorSynthesizer",
    "render_coordinator",
    "render_editor_script",
]
