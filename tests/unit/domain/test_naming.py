"""Tests for domain/naming.py."""

import pytest

from behaviorgraph.domain.naming import (
    infer_unit_name,
    is_pascal_case,
    is_valid_event,
    is_valid_identifier,
    is_valid_unit_name,
    lifecycle_event_for,
    to_pascal_case,
    to_snake_case,
)


class TestIdentifiers:
    """Tests for identifier predicates."""

    @pytest.mark.parametrize("name", ["Player", "_hidden", "Player2", "score_board"])
    def test_valid_identifiers(self, name: str) -> None:
        """Letters or underscore first, alphanumerics after."""
        assert is_valid_identifier(name)

    @pytest.mark.parametrize("name", ["", "2Player", "Player Manager", "Player-Manager"])
    def test_invalid_identifiers(self, name: str) -> None:
        """Empty, digit-first and punctuated names are rejected."""
        assert not is_valid_identifier(name)

    def test_keyword_is_not_a_valid_unit_name(self) -> None:
        """C# keywords are identifiers but not class names."""
        assert is_valid_identifier("class")
        assert not is_valid_unit_name("class")

    def test_pascal_case(self) -> None:
        """PascalCase requires an uppercase first letter."""
        assert is_pascal_case("PlayerManager")
        assert not is_pascal_case("playerManager")
        assert not is_pascal_case("")

    def test_events(self) -> None:
        """Known Unity events and custom method names are valid events."""
        assert is_valid_event("Start")
        assert is_valid_event("OnPlayerJoined")
        assert is_valid_event("CustomReset")
        assert not is_valid_event("bad event")


class TestConversions:
    """Tests for case conversions."""

    def test_to_pascal_case(self) -> None:
        """Word separators are dropped, words capitalized."""
        assert to_pascal_case("player_manager") == "PlayerManager"
        assert to_pascal_case("score-board") == "ScoreBoard"
        assert to_pascal_case("game ui") == "GameUi"

    def test_to_snake_case(self) -> None:
        """Uppercase letters start new words."""
        assert to_snake_case("PlayerManager") == "player_manager"
        assert to_snake_case("Score") == "score"


class TestLifecycleEventFor:
    """Tests for lifecycle_event_for."""

    @pytest.mark.parametrize(
        ("function_name", "event"),
        [
            ("start", "Start"),
            ("on_player_joined", "OnPlayerJoined"),
            ("player_manager_start", "Start"),
            ("player_fixed_update", "FixedUpdate"),
            ("player_on_deserialization", "OnDeserialization"),
            ("playerStart", "Start"),
            ("scoreBoardUpdate", "Update"),
        ],
    )
    def test_hooks(self, function_name: str, event: str) -> None:
        """Whole names and suffixes map to Unity events."""
        assert lifecycle_event_for(function_name) == event

    @pytest.mark.parametrize("function_name", ["", "compute_score", "helper", "getValue"])
    def test_non_hooks(self, function_name: str) -> None:
        """Functions without an event name are not hooks."""
        assert lifecycle_event_for(function_name) is None


class TestInferUnitName:
    """Tests for infer_unit_name."""

    @pytest.mark.parametrize(
        ("function_name", "unit"),
        [
            ("player_manager_start", "PlayerManager"),
            ("player_fixed_update", "Player"),
            ("compute_score", "Compute"),
            ("scoreBoardUpdate", "ScoreBoard"),
            ("helper", "Helper"),
            ("_score_", "Score"),
        ],
    )
    def test_derived_names(self, function_name: str, unit: str) -> None:
        """Lifecycle suffix (or last word) is dropped, rest is PascalCase."""
        assert infer_unit_name(function_name) == unit

    def test_empty_name_raises(self) -> None:
        """Empty function name is a programming error."""
        with pytest.raises(ValueError, match="must not be empty"):
            infer_unit_name("")
