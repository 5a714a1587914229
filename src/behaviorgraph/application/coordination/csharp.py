"""UdonSharp source emission for the coordinator and the editor script.

Output is a pure function of its arguments: same steps, same text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from behaviorgraph.domain.model.generated_code import GeneratedClass, GeneratedMethod

if TYPE_CHECKING:
    from collections.abc import Sequence

    from behaviorgraph.domain.model.coordinator import (
        CoordinatorStep,
        ExecutionOrderHint,
        InitializationSettings,
    )

_INDENT = "    "

COORDINATOR_USINGS: tuple[str, ...] = (
    "UnityEngine",
    "VRC.SDKBase",
    "VRC.Udon",
    "UdonSharp",
    "System.Collections",
)

EDITOR_SCRIPT_CLASS = "MultiBehaviorExecutionOrderSetup"


def float_literal(value: float) -> str:
    """C# float literal: 30.0 -> "30.0f"."""
    return f"{float(value)}f"


class _SourceWriter:
    """Line buffer with namespace-aware indentation."""

    def __init__(self, namespace: str | None) -> None:
        self._lines: list[str] = []
        self._base = _INDENT if namespace else ""
        self._namespace = namespace

    def line(self, text: str = "", depth: int = 0) -> None:
        if text:
            self._lines.append(f"{self._base}{_INDENT * depth}{text}")
        else:
            self._lines.append("")

    def raw(self, text: str) -> None:
        self._lines.append(text)

    def open_namespace(self) -> None:
        if self._namespace:
            self.raw(f"namespace {self._namespace}")
            self.raw("{")

    def close_namespace(self) -> None:
        if self._namespace:
            self.raw("}")

    def mark(self) -> int:
        return len(self._lines)

    def since(self, start: int) -> str:
        return "\n".join(self._lines[start:])

    def text(self) -> str:
        return "\n".join(self._lines) + "\n"


def render_coordinator(
    name: str,
    steps: Sequence[CoordinatorStep],
    settings: InitializationSettings,
) -> GeneratedClass:
    """Emit the coordinator class.

    Each step guards against a null unit reference (logged, sequence
    stopped), activates the unit, waits the configured delay, marks the
    unit ready and checks the timeout.

    Args:
        name: Coordinator class name
        steps: Initialization steps in order
        settings: Timeout, step delay and namespace

    Returns:
        GeneratedClass with source and declared methods
    """
    out = _SourceWriter(settings.namespace)
    methods: list[GeneratedMethod] = []
    tag = f"[{name}]"

    def method(declaration: str, body: list[str]) -> None:
        out.line(declaration, 1)
        out.line("{", 1)
        start = out.mark()
        for text in body:
            out.line(text.rstrip(), 2 if text else 0)
        body_text = out.since(start)
        out.line("}", 1)
        method_name = declaration.split("(")[0].split()[-1]
        methods.append(GeneratedMethod(name=method_name, declaration=declaration, body=body_text))

    for using in COORDINATOR_USINGS:
        out.raw(f"using {using};")
    out.raw("")
    out.open_namespace()

    out.line("/// <summary>")
    out.line("/// Initialization coordinator for multi-behavior UdonSharp system")
    out.line(f"/// Manages the startup sequence of {len(steps)} behaviors")
    out.line("/// </summary>")
    out.line("[UdonBehaviourSyncMode(BehaviourSyncMode.Manual)]")
    out.line(f"public class {name} : UdonSharpBehaviour")
    out.line("{")

    for step in steps:
        out.line(f'[Header("{step.unit} Behavior")]', 1)
        out.line(f"[SerializeField] private {step.unit} {step.field_name};", 1)

    out.line()
    out.line('[Header("Initialization State")]', 1)
    out.line("[SerializeField] private bool _initializationComplete = false;", 1)
    out.line("[SerializeField] private int _currentInitializationStep = 0;", 1)
    out.line(
        "[SerializeField] private float _initializationTimeout = "
        f"{float_literal(settings.timeout_seconds)};",
        1,
    )
    out.line("private float _initializationStartTime;", 1)

    out.line()
    out.line("// Initialization status for each behavior", 1)
    for step in steps:
        out.line(f"private bool {step.flag_name} = false;", 1)

    out.line()
    method(
        "public void Start()",
        [
            "_initializationStartTime = Time.time;",
            "StartCoroutine(nameof(InitializeBehaviors));",
        ],
    )

    body = [f'Debug.Log("{tag} Starting behavior initialization sequence");']
    for step in steps:
        body.extend(
            [
                "",
                f"// Step {step.index}: Initialize {step.unit}",
                f"_currentInitializationStep = {step.index};",
                f'Debug.Log("{tag} Initializing behavior: {step.unit}");',
                f"if ({step.field_name} == null)",
                "{",
                f'{_INDENT}Debug.LogError("{tag} {step.unit} behavior reference is null!");',
                f"{_INDENT}yield break;",
                "}",
                f"{step.field_name}.gameObject.SetActive(true);",
                "// Wait for behavior to initialize",
                f"yield return new WaitForSeconds({float_literal(settings.step_delay_seconds)});",
                f"{step.flag_name} = true;",
                "if (Time.time - _initializationStartTime > _initializationTimeout)",
                "{",
                f'{_INDENT}Debug.LogError("{tag} Initialization timeout reached!");',
                f"{_INDENT}yield break;",
                "}",
            ]
        )
    body.extend(
        [
            "",
            "_initializationComplete = true;",
            f'Debug.Log("{tag} All behaviors initialized successfully");',
            'SendCustomEvent("OnInitializationComplete");',
        ]
    )
    out.line()
    out.line("/// <summary>", 1)
    out.line("/// Initializes behaviors in the correct order", 1)
    out.line("/// </summary>", 1)
    method("public IEnumerator InitializeBehaviors()", body)

    out.line()
    out.line("public bool IsInitializationComplete => _initializationComplete;", 1)
    out.line()
    out.line("public int CurrentInitializationStep => _currentInitializationStep;", 1)

    switch = ["switch (behaviorName)", "{"]
    for step in steps:
        switch.append(f'{_INDENT}case "{step.unit}":')
        switch.append(f"{_INDENT * 2}return {step.flag_name};")
    switch.extend(
        [
            f"{_INDENT}default:",
            f'{_INDENT * 2}Debug.LogWarning("{tag} Unknown behavior name: " + behaviorName);',
            f"{_INDENT * 2}return false;",
            "}",
        ]
    )
    out.line()
    method("public bool IsBehaviorInitialized(string behaviorName)", switch)

    out.line()
    method(
        "public void OnInitializationComplete()",
        [f'Debug.Log("{tag} Initialization sequence completed!");'],
    )

    reset = [
        "if (Application.isPlaying)",
        "{",
        f"{_INDENT}_initializationComplete = false;",
        f"{_INDENT}_currentInitializationStep = 0;",
    ]
    reset.extend(f"{_INDENT}{step.flag_name} = false;" for step in steps)
    reset.extend(
        [
            f"{_INDENT}_initializationStartTime = Time.time;",
            f"{_INDENT}StartCoroutine(nameof(InitializeBehaviors));",
            "}",
        ]
    )
    out.line()
    out.line('[ContextMenu("Reinitialize Behaviors")]', 1)
    method("public void ReinitializeBehaviors()", reset)

    out.line("}")
    out.close_namespace()

    return GeneratedClass(class_name=name, source_code=out.text(), methods=tuple(methods))


def render_editor_script(
    hints: Sequence[ExecutionOrderHint],
    namespace: str | None = None,
) -> str:
    """Emit a Unity editor script applying execution order hints.

    Args:
        hints: Hints in priority order
        namespace: Optional C# namespace

    Returns:
        Script source wrapped in #if UNITY_EDITOR
    """
    out = _SourceWriter(namespace)
    out.raw("#if UNITY_EDITOR")
    out.raw("using System.Linq;")
    out.raw("using UnityEngine;")
    out.raw("using UnityEditor;")
    out.raw("")
    out.open_namespace()

    out.line("/// <summary>")
    out.line("/// Automatically sets script execution order for multi-behavior system")
    out.line("/// </summary>")
    out.line("[InitializeOnLoad]")
    out.line(f"public static class {EDITOR_SCRIPT_CLASS}")
    out.line("{")
    out.line(f"static {EDITOR_SCRIPT_CLASS}()", 1)
    out.line("{", 1)
    out.line("SetExecutionOrder();", 2)
    out.line("}", 1)
    out.line()
    out.line("private static void SetExecutionOrder()", 1)
    out.line("{", 1)
    for hint in hints:
        out.line(f'SetScriptExecutionOrder("{hint.script_name}", {hint.priority});', 2)
    out.line("}", 1)
    out.line()
    out.line("private static void SetScriptExecutionOrder(string scriptName, int order)", 1)
    out.line("{", 1)
    out.line(
        'var script = AssetDatabase.FindAssets("t:MonoScript " + scriptName).FirstOrDefault();', 2
    )
    out.line("if (script != null)", 2)
    out.line("{", 2)
    out.line("var scriptPath = AssetDatabase.GUIDToAssetPath(script);", 3)
    out.line("var monoScript = AssetDatabase.LoadAssetAtPath<MonoScript>(scriptPath);", 3)
    out.line("if (monoScript != null)", 3)
    out.line("{", 3)
    out.line("MonoImporter.SetExecutionOrder(monoScript, order);", 4)
    out.line("}", 3)
    out.line("}", 2)
    out.line("}", 1)
    out.line("}")

    out.close_namespace()
    out.raw("#endif")
    return out.text()
