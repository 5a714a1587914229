"""Code partitioner: function metadata to validated behavior units.

Groups tagged functions into units, places untagged helpers either into
the single unit that reaches them or into the shared runtime, and
collects every structural problem in one pass.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from behaviorgraph.application.partitioning.sharing import plan_sharing
from behaviorgraph.domain.model.behavior_unit import BehaviorUnit, InterUnitCall
from behaviorgraph.domain.model.configuration import PipelineConfig
from behaviorgraph.domain.model.enums import CallKind, CallOrigin, ErrorCategory, Severity
from behaviorgraph.domain.model.finding import Finding, ValidationResult
from behaviorgraph.domain.model.function import FunctionDescriptor, FunctionMeta
from behaviorgraph.domain.naming import (
    CSHARP_KEYWORDS,
    NETWORKING_EVENTS,
    infer_unit_name,
    is_valid_event,
    is_valid_identifier,
    is_valid_unit_name,
)

if TYPE_CHECKING:
    from behaviorgraph.domain.model.sharing import SharedFunctionPlan

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PartitionResult:
    """Outcome of partitioning.

    Attributes:
        units: Units in declaration order (empty when blocking)
        shared_functions: Shared-runtime functions, each exactly once
        sharing_plans: Sharing analysis, highest benefit first
        validation: All structural findings
    """

    units: tuple[BehaviorUnit, ...]
    shared_functions: tuple[FunctionMeta, ...]
    sharing_plans: tuple[SharedFunctionPlan, ...]
    validation: ValidationResult

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.validation.blocking and self.units:
            raise ValueError("blocking partition result must not carry units")

    @property
    def blocking(self) -> bool:
        """True if partitioning failed."""
        return self.validation.blocking

    @property
    def unit_names(self) -> tuple[str, ...]:
        """Unit names in declaration order."""
        return tuple(unit.name for unit in self.units)

    @classmethod
    def failed(cls, validation: ValidationResult) -> PartitionResult:
        """Create result for a blocking validation."""
        return cls(units=(), shared_functions=(), sharing_plans=(), validation=validation)


@dataclass(frozen=True, slots=True)
class _Reachability:
    """Untagged helpers reached from unit functions."""

    used_by: dict[str, tuple[str, ...]]
    call_counts: dict[str, int]
    inferred_calls: dict[str, tuple[InterUnitCall, ...]]


class CodePartitioner:
    """Converts function metadata into BehaviorUnits.

    Stateless between calls: every partition() call recomputes everything
    from its input.

    Example:
        partitioner = CodePartitioner(PipelineConfig())
        result = partitioner.partition(functions)
        if result.blocking:
            for finding in result.validation.findings:
                print(finding)
    """

    def __init__(self, config: PipelineConfig | None = None) -> None:
        """Initialize partitioner.

        Args:
            config: Pipeline configuration (defaults if None)
        """
        self._config = config or PipelineConfig()

    @property
    def config(self) -> PipelineConfig:
        """Active configuration."""
        return self._config

    # =========================================================================
    # Partitioning
    # =========================================================================

    def partition(self, functions: Sequence[FunctionMeta]) -> PartitionResult:
        """Group functions into validated behavior units.

        Args:
            functions: Function metadata in declaration order

        Returns:
            PartitionResult. units is empty if any finding is an error.
        """
        functions = tuple(functions)
        findings: list[Finding] = []
        findings.extend(self._check_function_names(functions))

        explicit = self._explicit_unit_names(functions)
        unit_of: dict[str, str] = {}
        invalid_names: set[str] = set()

        for meta in functions:
            if meta.attribute is None:
                continue
            unit_name = self._resolve_unit_name(meta.name, meta.attribute.name, explicit)
            name_findings = self._check_unit_name(unit_name, meta, invalid_names)
            findings.extend(name_findings)
            findings.extend(self._check_attribute(meta, unit_name))
            if unit_name not in invalid_names:
                unit_of[meta.name] = unit_name

        validation = ValidationResult(findings=tuple(findings))
        if validation.blocking:
            logger.info("Partitioning blocked by %d error(s)", validation.error_count)
            return PartitionResult.failed(validation)

        reach = self._reach(unit_of, functions)
        units = self._build_units(functions, unit_of, reach)

        for unit in units:
            findings.extend(self.validate_unit_completeness(unit, units).findings)
        if not any(unit.lifecycle_events for unit in units):
            findings.append(_no_entry_point(len(units)))

        validation = ValidationResult(findings=tuple(findings))
        if validation.blocking:
            logger.info("Unit validation blocked by %d error(s)", validation.error_count)
            return PartitionResult.failed(validation)

        shared = tuple(m for m in functions if len(reach.used_by.get(m.name, ())) >= 2)
        plans = plan_sharing(shared, reach.used_by, reach.call_counts)

        logger.info(
            "Partitioned %d function(s) into %d unit(s), %d shared",
            len(functions),
            len(units),
            len(shared),
        )
        return PartitionResult(
            units=units,
            shared_functions=shared,
            sharing_plans=plans,
            validation=validation,
        )

    def identify_shared_functions(
        self,
        units: Sequence[BehaviorUnit],
        functions: Sequence[FunctionMeta],
    ) -> tuple[FunctionMeta, ...]:
        """Find untagged functions reachable from two or more units.

        Reachability follows the call graph through untagged functions
        only. Calls into another unit's tagged functions stop there.

        Args:
            units: Behavior units
            functions: All function metadata in declaration order

        Returns:
            Shared functions in declaration order, each exactly once
        """
        functions = tuple(functions)
        reach = self._reach(_tagged_owners(units, functions), functions)
        return tuple(m for m in functions if len(reach.used_by.get(m.name, ())) >= 2)

    def analyze_sharing(
        self,
        units: Sequence[BehaviorUnit],
        functions: Sequence[FunctionMeta],
    ) -> tuple[SharedFunctionPlan, ...]:
        """Score every shared function.

        Args:
            units: Behavior units
            functions: All function metadata in declaration order

        Returns:
            One plan per shared function, highest benefit first
        """
        functions = tuple(functions)
        reach = self._reach(_tagged_owners(units, functions), functions)
        shared = tuple(m for m in functions if len(reach.used_by.get(m.name, ())) >= 2)
        return plan_sharing(shared, reach.used_by, reach.call_counts)

    # =========================================================================
    # Unit completeness
    # =========================================================================

    def validate_unit_completeness(
        self,
        unit: BehaviorUnit,
        units: Sequence[BehaviorUnit] = (),
    ) -> ValidationResult:
        """Check one unit for entry points, name collisions and sync hooks.

        Args:
            unit: Unit to check
            units: All units, for collision detection

        Returns:
            Findings for this unit
        """
        findings: list[Finding] = []

        if not unit.lifecycle_events:
            severity = Severity.ERROR if self._config.require_entry_point else Severity.WARNING
            findings.append(
                Finding(
                    category=ErrorCategory.STRUCTURAL_INCOMPLETENESS,
                    severity=severity,
                    message=f"Behavior '{unit.name}' has no lifecycle hook (entry point)",
                    unit=unit.name,
                    suggestion="Add a Start, Awake or other Unity event function to the behavior",
                )
            )

        if any(other is not unit and other.name == unit.name for other in units):
            findings.append(
                Finding(
                    category=ErrorCategory.INVALID_UNIT_NAME,
                    severity=Severity.ERROR,
                    message=f"Behavior name '{unit.name}' is used by more than one behavior",
                    unit=unit.name,
                    suggestion="Give every behavior a unique name",
                )
            )

        if unit.auto_sync and not NETWORKING_EVENTS.intersection(unit.lifecycle_events):
            findings.append(
                Finding(
                    category=ErrorCategory.STRUCTURAL_INCOMPLETENESS,
                    severity=Severity.WARNING,
                    message=(
                        f"Behavior '{unit.name}' synchronizes state "
                        "but has no networking lifecycle hook"
                    ),
                    unit=unit.name,
                    suggestion="Add an OnDeserialization handler to react to synced state",
                )
            )

        return ValidationResult(findings=tuple(findings))

    # =========================================================================
    # Name resolution and attribute checks
    # =========================================================================

    @staticmethod
    def _explicit_unit_names(functions: tuple[FunctionMeta, ...]) -> tuple[str, ...]:
        names: list[str] = []
        for meta in functions:
            if meta.attribute is None or not meta.attribute.name:
                continue
            if meta.attribute.name not in names:
                names.append(meta.attribute.name)
        return tuple(names)

    @staticmethod
    def _resolve_unit_name(
        function_name: str,
        declared: str | None,
        explicit: tuple[str, ...],
    ) -> str:
        """Explicit name, else the only explicit name, else derived."""
        if declared is not None:
            return declared
        if len(explicit) == 1:
            return explicit[0]
        return infer_unit_name(function_name)

    @staticmethod
    def _check_function_names(functions: tuple[FunctionMeta, ...]) -> list[Finding]:
        findings: list[Finding] = []
        seen: set[str] = set()
        for meta in functions:
            if meta.name in seen:
                findings.append(
                    Finding(
                        category=ErrorCategory.INVALID_ATTRIBUTE,
                        severity=Severity.ERROR,
                        message=f"Function '{meta.name}' is declared more than once",
                        function=meta.name,
                    )
                )
            seen.add(meta.name)
        return findings

    def _check_unit_name(
        self,
        unit_name: str,
        meta: FunctionMeta,
        invalid_names: set[str],
    ) -> list[Finding]:
        """Check unit name once per distinct name."""
        if unit_name in invalid_names:
            return []

        message: str | None = None
        suggestion: str | None = None
        if not unit_name:
            message = "Behavior name must not be empty"
            suggestion = "Provide a name or omit it to derive one from the function name"
        elif unit_name in CSHARP_KEYWORDS:
            message = f"Behavior name '{unit_name}' is a reserved C# keyword"
            suggestion = "Choose a name that is not a C# keyword"
        elif not is_valid_unit_name(unit_name):
            message = f"Behavior name '{unit_name}' is not a valid identifier"
            suggestion = "Use letters, digits and underscores, not starting with a digit"
        elif unit_name in self._config.reserved_names:
            message = f"Behavior name '{unit_name}' collides with a generated class"
            suggestion = "Rename the behavior"

        if message is None:
            return []

        invalid_names.add(unit_name)
        return [
            Finding(
                category=ErrorCategory.INVALID_UNIT_NAME,
                severity=Severity.ERROR,
                message=message,
                unit=unit_name or None,
                function=meta.name,
                suggestion=suggestion,
            )
        ]

    @staticmethod
    def _check_attribute(meta: FunctionMeta, unit_name: str) -> list[Finding]:
        """Check events, dependencies and event targets of one attribute."""
        attribute = meta.attribute
        if attribute is None:
            return []
        findings: list[Finding] = []

        def invalid(message: str, suggestion: str | None = None) -> None:
            findings.append(
                Finding(
                    category=ErrorCategory.INVALID_ATTRIBUTE,
                    severity=Severity.ERROR,
                    message=message,
                    unit=unit_name or None,
                    function=meta.name,
                    suggestion=suggestion,
                )
            )

        for event in attribute.events:
            if not is_valid_event(event):
                invalid(
                    f"Invalid event '{event}' on function '{meta.name}'",
                    "Use a Unity event name such as Start or Update, or a custom method name",
                )

        for dependency in attribute.dependencies:
            if not dependency:
                invalid(f"Empty dependency name on function '{meta.name}'")
            elif not is_valid_identifier(dependency) or not dependency[0].isupper():
                invalid(
                    f"Dependency '{dependency}' on function '{meta.name}' "
                    "must be a PascalCase behavior name",
                )
            elif dependency == unit_name:
                invalid(
                    f"Behavior '{unit_name}' cannot depend on itself",
                    "Remove the dependency or move the function to another behavior",
                )

        for target in attribute.event_targets:
            if not target:
                invalid(f"Empty event target on function '{meta.name}'")
            elif not is_valid_identifier(target):
                invalid(f"Event target '{target}' on function '{meta.name}' is not a valid name")

        return findings

    # =========================================================================
    # Reachability and unit construction
    # =========================================================================

    @staticmethod
    def _reach(
        unit_of: dict[str, str],
        functions: tuple[FunctionMeta, ...],
    ) -> _Reachability:
        """Walk the call graph from every unit's tagged functions.

        Args:
            unit_of: Tagged function name → unit name
            functions: All function metadata

        Returns:
            Helper usage by unit, call-site counts and inferred unit calls
        """
        by_name: dict[str, FunctionMeta] = {}
        for meta in functions:
            by_name.setdefault(meta.name, meta)

        used_by: dict[str, list[str]] = {}
        call_sites: dict[str, set[str]] = {}
        inferred: dict[str, list[InterUnitCall]] = {}

        unit_roots: dict[str, list[str]] = {}
        for function_name, unit_name in unit_of.items():
            unit_roots.setdefault(unit_name, []).append(function_name)

        for unit_name, roots in unit_roots.items():
            visited: set[str] = set()
            targets: list[str] = []
            stack: list[tuple[str, str]] = []
            for root in reversed(roots):
                stack.extend((root, callee) for callee in reversed(by_name[root].calls))

            while stack:
                caller, callee = stack.pop()
                target = by_name.get(callee)
                if target is None:
                    logger.debug("Call %s -> %s leaves the module", caller, callee)
                    continue

                if target.is_tagged:
                    owner = unit_of.get(callee)
                    if owner is not None and owner != unit_name and owner not in targets:
                        targets.append(owner)
                        inferred.setdefault(unit_name, []).append(
                            InterUnitCall(
                                target=owner,
                                kind=CallKind.DIRECT,
                                origin=CallOrigin.INFERRED,
                                via=caller,
                            )
                        )
                    continue

                call_sites.setdefault(callee, set()).add(caller)
                if callee in visited:
                    continue
                visited.add(callee)
                users = used_by.setdefault(callee, [])
                if unit_name not in users:
                    users.append(unit_name)
                stack.extend((callee, nxt) for nxt in reversed(target.calls))

        return _Reachability(
            used_by={name: tuple(units) for name, units in used_by.items()},
            call_counts={name: len(callers) for name, callers in call_sites.items()},
            inferred_calls={name: tuple(calls) for name, calls in inferred.items()},
        )

    @staticmethod
    def _build_units(
        functions: tuple[FunctionMeta, ...],
        unit_of: dict[str, str],
        reach: _Reachability,
    ) -> tuple[BehaviorUnit, ...]:
        """Assemble units in order of first appearance."""
        members: dict[str, list[FunctionMeta]] = {}
        for meta in functions:
            unit_name = unit_of.get(meta.name)
            if unit_name is not None:
                members.setdefault(unit_name, []).append(meta)

        # Helpers reached by exactly one unit become local to it
        for meta in functions:
            users = reach.used_by.get(meta.name, ())
            if len(users) == 1:
                members[users[0]].append(meta)

        units: list[BehaviorUnit] = []
        for unit_name, metas in members.items():
            events: list[str] = []
            calls: list[InterUnitCall] = []
            auto_sync = False

            for meta in metas:
                if meta.attribute is None:
                    continue
                auto_sync = auto_sync or meta.attribute.auto_sync
                for event in meta.attribute.events:
                    if event not in events:
                        events.append(event)
                for dependency in meta.attribute.dependencies:
                    _append_call(calls, InterUnitCall(dependency, CallKind.DIRECT))
                for target in meta.attribute.event_targets:
                    _append_call(calls, InterUnitCall(target, CallKind.EVENT_SEND))

            for call in reach.inferred_calls.get(unit_name, ()):
                _append_call(calls, call)

            units.append(
                BehaviorUnit(
                    name=unit_name,
                    functions=tuple(FunctionDescriptor.from_meta(m) for m in metas),
                    inter_unit_calls=tuple(calls),
                    events=tuple(events),
                    auto_sync=auto_sync,
                )
            )
            logger.debug("Built unit %s with %d function(s)", unit_name, len(metas))

        return tuple(units)


def _append_call(calls: list[InterUnitCall], call: InterUnitCall) -> None:
    """Append unless a call with the same target and kind exists."""
    if not any(c.target == call.target and c.kind == call.kind for c in calls):
        calls.append(call)


def _tagged_owners(
    units: Sequence[BehaviorUnit],
    functions: tuple[FunctionMeta, ...],
) -> dict[str, str]:
    """Map each tagged function to the unit containing it."""
    tagged = {m.name for m in functions if m.is_tagged}
    return {name: unit.name for unit in units for name in unit.function_names if name in tagged}


def _no_entry_point(unit_count: int) -> Finding:
    """Fatal finding for input without a single lifecycle hook."""
    if unit_count == 0:
        message = "No behavior found: no function carries a behavior attribute"
    else:
        message = "No behavior has a lifecycle hook (entry point)"
    return Finding(
        category=ErrorCategory.STRUCTURAL_INCOMPLETENESS,
        severity=Severity.ERROR,
        message=message,
        suggestion="Tag at least one Start, Awake or other Unity event function",
    )
