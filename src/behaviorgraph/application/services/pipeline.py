"""Main facade for behavior decomposition.

DecompositionPipeline runs partitioning, dependency analysis, ordering,
coordinator synthesis, generated-code validation and aggregation as one
blocking computation. Callers see either a complete PipelineResult or
an exception, never a partial result.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Self

from behaviorgraph.application.aggregation.aggregator import aggregate
from behaviorgraph.application.analysis.analyzer import DependencyAnalyzer
from behaviorgraph.application.coordination.synthesizer import CoordinatorSynthesizer
from behaviorgraph.application.partitioning.partitioner import CodePartitioner, PartitionResult
from behaviorgraph.application.validators import (
    GeneratedCodeValidator,
    default_rules,
    rules_from_config,
)
from behaviorgraph.domain.exceptions.ordering import OrderingViolationError
from behaviorgraph.domain.exceptions.pipeline import BlockedPipelineError
from behaviorgraph.domain.model.configuration import PipelineConfig
from behaviorgraph.domain.model.enums import ErrorCategory, Severity
from behaviorgraph.domain.model.finding import Finding

if TYPE_CHECKING:
    from behaviorgraph.domain.model.behavior_unit import BehaviorUnit
    from behaviorgraph.domain.model.coordinator import (
        ExecutionOrderHint,
        InitializationCoordinator,
    )
    from behaviorgraph.domain.model.function import FunctionMeta
    from behaviorgraph.domain.model.generated_code import GeneratedClass
    from behaviorgraph.domain.model.graph import DependencyGraph
    from behaviorgraph.domain.model.report import DependencyAnalysisReport
    from behaviorgraph.domain.model.verdict import FinalVerdict
    from behaviorgraph.domain.ports.code_rule import CodeRuleProtocol
    from behaviorgraph.domain.ports.reporter import ReporterProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Everything one pipeline run produced.

    Attributes:
        partition: Units, shared functions and structural findings
        graph: Dependency graph (None if partitioning blocked)
        report: Dependency analysis (None if partitioning blocked)
        order: Initialization order (empty if it could not be determined)
        coordinator: Synthesized coordinator (None if not generated)
        execution_order_hints: Script execution order hints
        editor_script: Editor script applying the hints
        generated_code_issues: Findings of generated-code rules
        verdict: Final go/no-go decision
    """

    partition: PartitionResult
    graph: DependencyGraph | None
    report: DependencyAnalysisReport | None
    order: tuple[str, ...]
    coordinator: InitializationCoordinator | None
    execution_order_hints: tuple[ExecutionOrderHint, ...]
    editor_script: str | None
    generated_code_issues: tuple[Finding, ...]
    verdict: FinalVerdict

    @property
    def passed(self) -> bool:
        """True if emission may run."""
        return self.verdict.passed

    @property
    def units(self) -> tuple[BehaviorUnit, ...]:
        """Behavior units in declaration order."""
        return self.partition.units

    @property
    def ordered_units(self) -> tuple[BehaviorUnit, ...]:
        """Behavior units in initialization order."""
        by_name = {unit.name: unit for unit in self.partition.units}
        return tuple(by_name[name] for name in self.order)

    @property
    def shared_functions(self) -> tuple[FunctionMeta, ...]:
        """Shared-runtime functions."""
        return self.partition.shared_functions

    def ensure_emittable(self) -> None:
        """Guard for code emission.

        Raises:
            BlockedPipelineError: If the verdict is blocking
        """
        if self.verdict.blocking:
            raise BlockedPipelineError(self.verdict)


class DecompositionPipeline:
    """Main facade for behavior decomposition.

    Composition-based: accepts generated-code rules and reporter.
    Every component is created per pipeline, nothing is shared between
    pipelines, so independent pipelines can run concurrently.

    Factory methods:
    - with_defaults(): Default configuration, all rules
    - from_config(): Rules enabled by PipelineConfig

    Example:
        pipeline = DecompositionPipeline.with_defaults()
        result = pipeline.run(functions)
        result.ensure_emittable()
        emit(result.ordered_units, result.coordinator, result.shared_functions)
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        *,
        rules: Sequence[CodeRuleProtocol] = (),
        reporter: ReporterProtocol | None = None,
    ) -> None:
        """Initialize pipeline with dependencies.

        Args:
            config: Pipeline configuration (defaults if None)
            rules: Generated-code rules to run
            reporter: Optional reporter for output
        """
        self._config = config or PipelineConfig()
        self._rules = tuple(rules)
        self._reporter = reporter
        self._partitioner = CodePartitioner(self._config)
        self._analyzer = DependencyAnalyzer(self._config)
        self._synthesizer = CoordinatorSynthesizer(self._config.initialization, self._analyzer)
        self._code_validator = GeneratedCodeValidator(self._rules)

    @classmethod
    def with_defaults(cls, *, reporter: ReporterProtocol | None = None) -> Self:
        """Create pipeline with default configuration and every rule.

        Args:
            reporter: Optional reporter

        Returns:
            DecompositionPipeline
        """
        return cls(PipelineConfig(), rules=default_rules(), reporter=reporter)

    @classmethod
    def from_config(
        cls,
        config: PipelineConfig,
        *,
        reporter: ReporterProtocol | None = None,
    ) -> Self:
        """Create pipeline with rules enabled by config.

        Args:
            config: Pipeline configuration
            reporter: Optional reporter

        Returns:
            DecompositionPipeline
        """
        return cls(config, rules=rules_from_config(config), reporter=reporter)

    @property
    def config(self) -> PipelineConfig:
        """Active configuration."""
        return self._config

    @property
    def rule_count(self) -> int:
        """Number of configured generated-code rules."""
        return len(self._rules)

    def run(
        self,
        functions: Sequence[FunctionMeta],
        generated_classes: Sequence[GeneratedClass] = (),
    ) -> PipelineResult:
        """Run the whole pipeline.

        Stops early, with a blocking verdict, when partitioning fails,
        when cycles exist, or when the initialization order is invalid.

        Args:
            functions: Function metadata in declaration order
            generated_classes: Emitted unit classes to validate

        Returns:
            PipelineResult. Reported if a reporter is configured.
        """
        logger.info("Pipeline started with %d function(s)", len(functions))

        partition = self._partitioner.partition(functions)
        if partition.blocking:
            logger.info("Partitioning failed, skipping graph analysis")
            verdict = aggregate(
                partition.validation,
                None,
                shared_runtime_name=self._config.shared_runtime_name,
            )
            result = PipelineResult(
                partition=partition,
                graph=None,
                report=None,
                order=(),
                coordinator=None,
                execution_order_hints=(),
                editor_script=None,
                generated_code_issues=(),
                verdict=verdict,
            )
            return self._finish(result)

        units = partition.units
        graph = self._analyzer.build_graph(units)
        report = self._analyzer.generate_report(units, graph=graph)

        order: tuple[str, ...] = ()
        ordering: tuple[Finding, ...] = ()
        coordinator: InitializationCoordinator | None = None
        hints: tuple[ExecutionOrderHint, ...] = ()
        editor_script: str | None = None

        if report.has_cycles:
            logger.info("Cycles detected, no coordinator will be synthesized")
        else:
            order, ordering = self._determine_order(units, graph)

        settings = self._config.initialization
        if order and settings.generate_coordinator:
            coordinator = self._synthesizer.synthesize(order, units)
            hints = self._synthesizer.generate_execution_order_hints(order)
            if hints:
                editor_script = self._synthesizer.generate_editor_script(hints)

        classes = list(generated_classes)
        if coordinator is not None:
            classes.append(coordinator.source)
        issues = self._code_validator.validate(classes)

        verdict = aggregate(
            partition.validation,
            report,
            issues,
            ordering=ordering,
            shared_runtime_name=self._config.shared_runtime_name,
        )
        result = PipelineResult(
            partition=partition,
            graph=graph,
            report=report,
            order=order,
            coordinator=coordinator,
            execution_order_hints=hints,
            editor_script=editor_script,
            generated_code_issues=issues,
            verdict=verdict,
        )
        return self._finish(result)

    def _determine_order(
        self,
        units: tuple[BehaviorUnit, ...],
        graph: DependencyGraph,
    ) -> tuple[tuple[str, ...], tuple[Finding, ...]]:
        """Order units, converting manual-order problems into findings.

        Returns:
            (order, ordering findings). order is empty if findings exist.
        """
        try:
            return self._synthesizer.determine_order(units, graph=graph), ()
        except OrderingViolationError as e:
            logger.info("Manual initialization order rejected: %d problem(s)", len(e.messages))
            findings = tuple(
                Finding(
                    category=ErrorCategory.ORDERING_VIOLATION,
                    severity=Severity.ERROR,
                    message=message,
                    suggestion="Fix manual_order or enable auto_determine_order",
                )
                for message in e.messages
            )
            return (), findings

    def _finish(self, result: PipelineResult) -> PipelineResult:
        """Report result if reporter configured."""
        logger.info("Pipeline finished: %s", result.verdict.status)
        if self._reporter is not None:
            self._reporter.report(result)
        return result
