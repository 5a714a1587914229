"""Domain ports (Protocols)."""

from behaviorgraph.domain.ports.code_rule import CodeRuleProtocol
from behaviorgraph.domain.ports.reporter import ReporterProtocol

__all__ = [
    "CodeRuleProtocol",
    "ReporterProtocol",
]
