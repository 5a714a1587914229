"""Reporters for pipeline results.

PlainTextReporter and JSONReporter use stdlib only.
ConsoleReporter renders with rich. DotExporter serializes the graph.
"""

from behaviorgraph.application.reporters._base import BaseReporter
from behaviorgraph.application.reporters.console import ConsoleConfig, ConsoleReporter
from behaviorgraph.application.reporters.dot import DotExporter
from behaviorgraph.application.reporters.json_reporter import JSONReporter
from behaviorgraph.application.reporters.plain_text import PlainTextReporter

__all__ = [
    "BaseReporter",
    "ConsoleConfig",
    "ConsoleReporter",
    "DotExporter",
    "JSONReporter",
    "PlainTextReporter",
]
