"""Generated C# classes as seen by the generated-code rules."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GeneratedMethod:
    """Method of a generated class.

    Attributes:
        name: Method name
        declaration: Declaration line, e.g. "public void Start()"
        body: Method body text
    """

    name: str
    declaration: str
    body: str = ""

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        if not self.declaration:
            raise ValueError("declaration must not be empty")


@dataclass(frozen=True, slots=True)
class GeneratedClass:
    """Generated UdonSharp class ready to be written out.

    Attributes:
        class_name: C# class name
        source_code: Complete file content
        methods: Methods declared by the class
    """

    class_name: str
    source_code: str
    methods: tuple[GeneratedMethod, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.class_name:
            raise ValueError("class_name must not be empty")

    def method(self, name: str) -> GeneratedMethod | None:
        """Find method by name."""
        for method in self.methods:
            if method.name == name:
                return method
        return None
