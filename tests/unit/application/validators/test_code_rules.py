"""Tests for the generated-code rules."""

import pytest

from behaviorgraph.application.validators import (
    AccessModifierRule,
    CSharpSyntaxRule,
    InheritanceRule,
    NamingConventionRule,
    NetworkSyncRule,
    NullSafetyRule,
    PerformanceRule,
)
from behaviorgraph.application.validators._source import (
    declaration_line,
    declared_methods,
    line_of,
    strip_literals,
)
from behaviorgraph.domain.model.enums import ErrorCategory, Severity
from behaviorgraph.domain.model.generated_code import GeneratedClass, GeneratedMethod
from tests.factories import make_class_source, make_generated_class

# Body lines start at line 6 of make_class_source output
FIRST_BODY_LINE = 6


class TestSourceScanning:
    """Tests for _source helpers."""

    def test_strip_literals(self) -> None:
        """Strings and line comments are removed, lines kept."""
        source = 'Debug.Log("{ (");  // }\nFoo();'

        assert strip_literals(source) == 'Debug.Log("");  \nFoo();'

    def test_escaped_quotes(self) -> None:
        """Escaped quotes stay inside the literal."""
        assert strip_literals(r'x = "a \" {";') == 'x = "";'

    def test_line_numbers(self) -> None:
        """Lines are 1-based."""
        source = "a\nb\nc"

        assert line_of(source, 0) == 1
        assert line_of(source, source.index("c")) == 3
        assert declaration_line(source, "b") == 2
        assert declaration_line(source, "z") is None

    def test_scanned_methods(self) -> None:
        """Declarations and brace-matched bodies are found."""
        generated = make_generated_class(
            body=(
                "public void Start()",
                "{",
                "    if (ready)",
                "    {",
                "        Begin();",
                "    }",
                "}",
                "private int ComputeScore(int a, int b)",
                "{",
                "    return a + b;",
                "}",
            )
        )

        methods = declared_methods(generated)

        assert [m.name for m in methods] == ["Start", "ComputeScore"]
        assert methods[0].declaration == "public void Start()"
        assert "Begin();" in methods[0].body
        assert "return a + b;" in methods[1].body
        assert "return" not in methods[0].body

    def test_recorded_methods_preferred(self) -> None:
        """Recorded methods win over scanning."""
        recorded = (GeneratedMethod("Start", "public void Start()", "Begin();"),)
        generated = GeneratedClass("PlayerManager", make_class_source(), methods=recorded)

        assert declared_methods(generated) == recorded


class TestCSharpSyntaxRule:
    """Tests for CSharpSyntaxRule."""

    def test_clean_class(self) -> None:
        """Well-formed class passes."""
        assert CSharpSyntaxRule().check(make_generated_class()) == ()

    def test_invalid_class_name(self) -> None:
        """Class name must be an identifier."""
        (finding,) = CSharpSyntaxRule().check(make_generated_class("1Player"))

        assert finding.severity == Severity.ERROR
        assert finding.category == ErrorCategory.GENERATED_CODE_ISSUE
        assert finding.rule == "csharp_syntax"
        assert finding.message == "Invalid C# class name: 1Player"

    def test_keyword_class_name(self) -> None:
        """Class name must not be a keyword."""
        (finding,) = CSharpSyntaxRule().check(make_generated_class("class"))

        assert finding.message == "Class name 'class' is a reserved C# keyword"

    def test_unbalanced_braces(self) -> None:
        """Missing close brace is reported with counts."""
        generated = make_generated_class(body=("public void Start()", "{"))

        (finding,) = CSharpSyntaxRule().check(generated)

        assert finding.message == "Unbalanced braces: 2 open, 1 close"

    def test_unbalanced_parentheses(self) -> None:
        """Parentheses are counted too."""
        generated = make_generated_class(body=("public void Start()", "{", "Foo(;", "}"))

        (finding,) = CSharpSyntaxRule().check(generated)

        assert finding.message == "Unbalanced parentheses: 2 open, 1 close"

    def test_delimiters_in_literals_ignored(self) -> None:
        """Braces inside strings and comments do not count."""
        generated = make_generated_class(
            body=("public void Start()", "{", 'Debug.Log("{ (");', "// }", "}")
        )

        assert CSharpSyntaxRule().check(generated) == ()


class TestInheritanceRule:
    """Tests for InheritanceRule."""

    def test_udon_base(self) -> None:
        """UdonSharpBehaviour base passes."""
        assert InheritanceRule().check(make_generated_class()) == ()

    def test_other_base(self) -> None:
        """Any other base class is an error."""
        (finding,) = InheritanceRule().check(make_generated_class(base="MonoBehaviour"))

        assert finding.severity == Severity.ERROR
        assert finding.message == "Class must inherit from UdonSharpBehaviour"
        assert finding.unit == "PlayerManager"


class TestNamingConventionRule:
    """Tests for NamingConventionRule."""

    def test_pascal_case_passes(self) -> None:
        """PascalCase class and methods pass."""
        assert NamingConventionRule().check(make_generated_class()) == ()

    def test_class_name(self) -> None:
        """camelCase class name warns."""
        (finding,) = NamingConventionRule().check(make_generated_class("playerManager"))

        assert finding.severity == Severity.WARNING
        assert finding.message == "Class name 'playerManager' should use PascalCase"

    def test_method_name(self) -> None:
        """snake_case method warns with its line."""
        generated = make_generated_class(
            body=("public void Start()", "{", "}", "private void helper_fn()", "{", "}")
        )

        (finding,) = NamingConventionRule().check(generated)

        assert finding.message == "Method name 'helper_fn' should use PascalCase"
        assert finding.function == "helper_fn"
        assert finding.line == FIRST_BODY_LINE + 3
        assert finding.subject == "PlayerManager.helper_fn:9"


class TestAccessModifierRule:
    """Tests for AccessModifierRule."""

    def test_public_event(self) -> None:
        """Public Start passes."""
        assert AccessModifierRule().check(make_generated_class()) == ()

    @pytest.mark.parametrize("declaration", ["void Start()", "private void Update()"])
    def test_non_public_event(self, declaration: str) -> None:
        """Unity events without public warn."""
        generated = make_generated_class(body=(declaration, "{", "}"))

        (finding,) = AccessModifierRule().check(generated)

        assert finding.severity == Severity.WARNING
        assert finding.message.endswith("should be public")
        assert finding.line == FIRST_BODY_LINE

    def test_other_methods_ignored(self) -> None:
        """Non-event methods may be private."""
        generated = make_generated_class(body=("private void Awake()", "{", "}"))

        assert AccessModifierRule().check(generated) == ()


class TestNetworkSyncRule:
    """Tests for NetworkSyncRule."""

    def test_no_synced_fields(self) -> None:
        """Classes without synced fields are skipped."""
        assert NetworkSyncRule().check(make_generated_class()) == ()

    def test_unguarded_sync(self) -> None:
        """Synced field without master check or serialization."""
        generated = make_generated_class(body=("[UdonSynced] private int _score;",))

        findings = NetworkSyncRule().check(generated)

        assert [f.message for f in findings] == [
            "Synchronized fields should have master client validation",
            "UdonSynced fields detected but no RequestSerialization calls found",
        ]
        assert all(f.severity == Severity.WARNING for f in findings)

    def test_guarded_sync(self) -> None:
        """Master check and serialization satisfy the rule."""
        generated = make_generated_class(
            body=(
                "[UdonSynced] private int _score;",
                "public void AddScore()",
                "{",
                "    if (!Networking.IsMaster) return;",
                "    _score++;",
                "    RequestSerialization();",
                "}",
            )
        )

        assert NetworkSyncRule().check(generated) == ()


class TestPerformanceRule:
    """Tests for PerformanceRule."""

    def test_find_in_update(self) -> None:
        """Lookup inside Update warns."""
        generated = make_generated_class(
            body=("public void Update()", "{", 'var t = GameObject.Find("Target");', "}")
        )

        (finding,) = PerformanceRule().check(generated)

        assert finding.message == "GameObject.Find in Update method can impact performance"
        assert finding.function == "Update"

    def test_find_in_start(self) -> None:
        """Lookup in Start is fine."""
        generated = make_generated_class(
            body=("public void Start()", "{", 'var t = GameObject.Find("Target");', "}")
        )

        assert PerformanceRule().check(generated) == ()


class TestNullSafetyRule:
    """Tests for NullSafetyRule."""

    def test_unchecked_find(self) -> None:
        """Lookup without nearby null check is INFO."""
        generated = make_generated_class(
            body=("public void Start()", "{", 'var t = GameObject.Find("Target");', "}")
        )

        (finding,) = NullSafetyRule().check(generated)

        assert finding.severity == Severity.INFO
        assert finding.line == FIRST_BODY_LINE + 2

    def test_checked_find(self) -> None:
        """Null check within two lines passes."""
        generated = make_generated_class(
            body=(
                "public void Start()",
                "{",
                'var t = GameObject.Find("Target");',
                "if (t != null)",
                "{",
                "    t.SetActive(true);",
                "}",
                "}",
            )
        )

        assert NullSafetyRule().check(generated) == ()
