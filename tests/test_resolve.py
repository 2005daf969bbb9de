"""Tests for perch.routing.resolve — handler import resolution."""

import sys
import types

import pytest

from perch.errors import InvalidControllerError
from perch.routing.resolve import resolve_handler


def _index(params, app):
    return "index"


class _Widgets:
    @staticmethod
    def show(params, app):
        return "show"


@pytest.fixture
def _fake_handler_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with handlers on sys.modules."""
    mod = types.ModuleType("_fake_perch_handlers")
    mod.index = _index  # type: ignore[attr-defined]
    mod.Widgets = _Widgets  # type: ignore[attr-defined]
    mod.not_callable = "just a string"  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_perch_handlers", mod)


@pytest.mark.usefixtures("_fake_handler_module")
class TestResolveHandler:
    def test_colon_form(self) -> None:
        assert resolve_handler("_fake_perch_handlers:index") is _index

    def test_dotted_form(self) -> None:
        assert resolve_handler("_fake_perch_handlers.index") is _index

    def test_dotted_attribute(self) -> None:
        assert resolve_handler("_fake_perch_handlers:Widgets.show") is _Widgets.show

    def test_missing_module(self) -> None:
        with pytest.raises(InvalidControllerError, match="cannot import"):
            resolve_handler("nonexistent_module_xyz:index")

    def test_missing_attribute(self) -> None:
        with pytest.raises(InvalidControllerError, match="has no"):
            resolve_handler("_fake_perch_handlers:does_not_exist")

    def test_not_callable(self) -> None:
        with pytest.raises(InvalidControllerError, match="not a callable"):
            resolve_handler("_fake_perch_handlers:not_callable")

    @pytest.mark.parametrize("reference", [".views:index", "..views.index", ".views"])
    def test_relative_reference(self, reference: str) -> None:
        with pytest.raises(InvalidControllerError):
            resolve_handler(reference)

    def test_bare_name(self) -> None:
        with pytest.raises(InvalidControllerError, match="module:attribute"):
            resolve_handler("bogus-callback")
