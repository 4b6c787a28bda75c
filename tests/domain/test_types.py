"""Tests for type tags and the type registry."""

import pytest

from valify.domain.types import TYPE_REGISTRY, TypeRegistry, TypeTag, check_type, register_type
from valify.errors import UnknownTypeError


class TestTypeTag:
    def test_values(self) -> None:
        assert [t.value for t in TypeTag] == ["string", "number", "boolean", "array", "object"]

    def test_all_tags_registered(self) -> None:
        assert set(TYPE_REGISTRY.names()) == {t.value for t in TypeTag}


class TestBuiltinChecks:
    @pytest.mark.parametrize(
        ("tag", "good", "bad"),
        [
            ("string", "abc", 1),
            ("number", 1.5, "1.5"),
            ("number", 0, True),
            ("boolean", False, 0),
            ("array", [1], "abc"),
            ("array", (1, 2), {"a": 1}),
            ("object", {"a": 1}, [("a", 1)]),
        ],
    )
    def test_accepts_and_rejects(self, tag: str, good: object, bad: object) -> None:
        assert check_type(tag, good)
        assert not check_type(tag, bad)

    def test_unknown_type(self) -> None:
        with pytest.raises(UnknownTypeError):
            check_type("integer", 1)


class TestTypeRegistry:
    def test_register_custom_type(self, types: TypeRegistry) -> None:
        types.register("integer", lambda v: isinstance(v, int) and not isinstance(v, bool))
        assert types.check("integer", 3)
        assert not types.check("integer", 3.0)
        assert "integer" not in TYPE_REGISTRY

    def test_copy_is_independent(self, types: TypeRegistry) -> None:
        types.register("any", lambda v: True)
        assert "any" in types
        assert "any" not in TYPE_REGISTRY

    def test_register_rejects_empty_name(self, types: TypeRegistry) -> None:
        with pytest.raises(ValueError):
            types.register("  ", lambda v: True)

    def test_register_rejects_non_callable(self, types: TypeRegistry) -> None:
        with pytest.raises(TypeError):
            types.register("x", "not callable")  # type: ignore[arg-type]

    def test_register_type_global(self) -> None:
        register_type("uuid", lambda v: isinstance(v, str) and len(v) == 36)
        assert "uuid" in TYPE_REGISTRY
