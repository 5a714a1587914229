"""Identifier rules and name conversions for generated UdonSharp code.

Pure functions, no state. Used by the partitioner (unit names, events),
the coordinator synthesizer (field names) and the generated-code rules.
"""

from __future__ import annotations

import re

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_WORD_SEPARATORS = re.compile(r"[_\- ]+")

# Unity lifecycle, physics, UI, VRChat and UdonSharp events
UNITY_EVENTS: tuple[str, ...] = (
    "Awake",
    "Start",
    "Update",
    "LateUpdate",
    "FixedUpdate",
    "OnEnable",
    "OnDisable",
    "OnDestroy",
    "OnTriggerEnter",
    "OnTriggerExit",
    "OnTriggerStay",
    "OnCollisionEnter",
    "OnCollisionExit",
    "OnCollisionStay",
    "OnPointerClick",
    "OnPointerDown",
    "OnPointerUp",
    "OnPointerEnter",
    "OnPointerExit",
    "OnDrag",
    "OnBeginDrag",
    "OnEndDrag",
    "OnDrop",
    "OnPlayerJoined",
    "OnPlayerLeft",
    "OnPlayerRespawn",
    "OnStationEntered",
    "OnStationExited",
    "OnOwnershipTransferred",
    "OnDeserialization",
    "OnPreSerialization",
    "OnPostSerialization",
    "OnPickup",
    "OnPickupUseDown",
    "OnPickupUseUp",
    "OnVideoStart",
    "OnVideoEnd",
    "OnVideoError",
    "OnVideoReady",
    "OnVideoPlay",
    "OnVideoPause",
)

NETWORKING_EVENTS: frozenset[str] = frozenset(
    {
        "OnDeserialization",
        "OnPreSerialization",
        "OnPostSerialization",
        "OnOwnershipTransferred",
    }
)

# Suffixes stripped from camelCase function names when inferring a unit name
_CAMEL_LIFECYCLE_SUFFIXES: tuple[str, ...] = ("OnEnable", "OnDisable", "Update", "Start", "Awake")

CSHARP_KEYWORDS: frozenset[str] = frozenset(
    {
        "abstract", "as", "base", "bool", "break", "byte", "case", "catch", "char",
        "checked", "class", "const", "continue", "decimal", "default", "delegate",
        "do", "double", "else", "enum", "event", "explicit", "extern", "false",
        "finally", "fixed", "float", "for", "foreach", "goto", "if", "implicit",
        "in", "int", "interface", "internal", "is", "lock", "long", "namespace",
        "new", "null", "object", "operator", "out", "override", "params", "private",
        "protected", "public", "readonly", "ref", "return", "sbyte", "sealed",
        "short", "sizeof", "stackalloc", "static", "string", "struct", "switch",
        "this", "throw", "true", "try", "typeof", "uint", "ulong", "unchecked",
        "unsafe", "ushort", "using", "virtual", "void", "volatile", "while",
    }
)

_UNITY_EVENT_SET = frozenset(UNITY_EVENTS)


def is_valid_identifier(name: str) -> bool:
    """Check the lexical identifier rule: letter or underscore, then alphanumerics."""
    return bool(_IDENTIFIER.match(name))


def is_valid_unit_name(name: str) -> bool:
    """Check that name can be used as a generated class name.

    Must be a lexical identifier and must not be a C# keyword.
    """
    return is_valid_identifier(name) and name not in CSHARP_KEYWORDS


def is_pascal_case(name: str) -> bool:
    """Check PascalCase (identifier starting with an uppercase letter)."""
    return is_valid_identifier(name) and name[0].isupper()


def is_valid_event(event: str) -> bool:
    """Check a declared event: a known Unity/VRChat event or a custom method name."""
    return event in _UNITY_EVENT_SET or is_valid_identifier(event)


def is_unity_event(name: str) -> bool:
    """Check if name is a known Unity/VRChat event."""
    return name in _UNITY_EVENT_SET


def to_pascal_case(name: str) -> str:
    """Convert snake_case, kebab-case or spaced words to PascalCase.

    Each word gets an uppercase first letter and lowercase remainder:
    "player_manager" -> "PlayerManager".
    """
    words = [w for w in _WORD_SEPARATORS.split(name) if w]
    return "".join(w[0].upper() + w[1:].lower() for w in words)


def to_snake_case(name: str) -> str:
    """Convert PascalCase/camelCase to snake_case: "PlayerManager" -> "player_manager"."""
    chars: list[str] = []
    for i, ch in enumerate(name):
        if ch.isupper():
            if i > 0:
                chars.append("_")
            chars.append(ch.lower())
        else:
            chars.append(ch)
    return "".join(chars)


def lifecycle_event_for(function_name: str) -> str | None:
    """Map a function name to the Unity event it implements.

    Checked in order:
    1. whole name in PascalCase ("on_player_joined" -> "OnPlayerJoined")
    2. longest trailing snake_case suffix ("player_manager_start" -> "Start")
    3. camelCase suffix ("playerStart" -> "Start")

    Returns:
        Event name or None if the function is not a lifecycle hook
    """
    if not function_name:
        return None

    pascal = to_pascal_case(function_name)
    if pascal in _UNITY_EVENT_SET:
        return pascal

    if "_" in function_name:
        parts = [p for p in function_name.split("_") if p]
        for i in range(1, len(parts)):
            candidate = to_pascal_case("_".join(parts[i:]))
            if candidate in _UNITY_EVENT_SET:
                return candidate
        return None

    capitalized = function_name[0].upper() + function_name[1:]
    if capitalized in _UNITY_EVENT_SET:
        return capitalized
    for event in sorted(UNITY_EVENTS, key=len, reverse=True):
        if capitalized.endswith(event) and len(capitalized) > len(event):
            return event
    return None


def infer_unit_name(function_name: str) -> str:
    """Derive a behavior unit name from a function name.

    snake_case drops the trailing lifecycle suffix (or the last segment
    when there is none) and converts the rest to PascalCase:
    "player_manager_start" -> "PlayerManager".
    camelCase is capitalized with a trailing lifecycle suffix stripped:
    "scoreBoardUpdate" -> "ScoreBoard".

    Args:
        function_name: Source function name (must not be empty)

    Returns:
        Inferred PascalCase unit name

    Raises:
        ValueError: If function_name is empty
    """
    if not function_name:
        raise ValueError("function_name must not be empty")

    if "_" in function_name:
        parts = [p for p in function_name.split("_") if p]
        if len(parts) <= 1:
            return to_pascal_case(function_name)
        for i in range(1, len(parts)):
            if to_pascal_case("_".join(parts[i:])) in _UNITY_EVENT_SET:
                return to_pascal_case("_".join(parts[:i]))
        return to_pascal_case("_".join(parts[:-1]))

    capitalized = function_name[0].upper() + function_name[1:]
    for suffix in _CAMEL_LIFECYCLE_SUFFIXES:
        if capitalized.endswith(suffix) and len(capitalized) > len(suffix):
            return capitalized[: -len(suffix)]
    return capitalized
