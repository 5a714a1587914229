"""Pipeline and report configuration.

Plain frozen dataclasses; loading them from files is the caller's concern.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from behaviorgraph.domain.model.coordinator import InitializationSettings
from behaviorgraph.domain.naming import is_valid_unit_name


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Configuration of one decomposition pipeline.

    Immutable configuration object with FAIL-FIRST validation.

    Attributes:
        require_entry_point: Units without lifecycle hooks are errors (else warnings)
        deep_chain_threshold: Chains longer than this produce a warning
        coupling_threshold: Coupling factor above this produces a warning
        max_direct_dependencies: Units with more direct dependencies produce a warning
        max_chains: Number of longest chains kept in reports
        shared_runtime_name: Class name of the shared runtime
        initialization: Coordinator and ordering settings
        disabled_rules: Generated-code rule names to skip
    """

    require_entry_point: bool = True
    deep_chain_threshold: int = 5
    coupling_threshold: float = 0.7
    max_direct_dependencies: int = 5
    max_chains: int = 10
    shared_runtime_name: str = "SharedRuntime"
    initialization: InitializationSettings = field(default_factory=InitializationSettings)
    disabled_rules: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.deep_chain_threshold < 1:
            raise ValueError(f"deep_chain_threshold must be >= 1, got {self.deep_chain_threshold}")
        if not 0.0 <= self.coupling_threshold <= 1.0:
            raise ValueError(f"coupling_threshold must be in [0, 1], got {self.coupling_threshold}")
        if self.max_direct_dependencies < 0:
            raise ValueError("max_direct_dependencies must be >= 0")
        if self.max_chains < 1:
            raise ValueError(f"max_chains must be >= 1, got {self.max_chains}")
        if not is_valid_unit_name(self.shared_runtime_name):
            raise ValueError(
                f"shared_runtime_name '{self.shared_runtime_name}' is not a legal class name"
            )
        if self.shared_runtime_name == self.initialization.coordinator_name:
            raise ValueError("shared_runtime_name and coordinator_name must differ")
        if not isinstance(self.disabled_rules, frozenset):
            raise TypeError("disabled_rules must be frozenset")

    @property
    def reserved_names(self) -> frozenset[str]:
        """Class names generated by the pipeline itself."""
        return frozenset({self.shared_runtime_name, self.initialization.coordinator_name})


@dataclass(frozen=True, slots=True)
class ReportConfig:
    """Configuration shared by text reporters.

    Attributes:
        max_findings_displayed: Findings shown per category. None = unlimited.
        include_suggestions: Print remediation suggestions
        verbose: Print dependency details per unit
    """

    max_findings_displayed: int | None = 10
    include_suggestions: bool = True
    verbose: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.max_findings_displayed is not None and self.max_findings_displayed < 1:
            raise ValueError(
                f"max_findings_displayed must be >= 1 or None, got {self.max_findings_displayed}"
            )
