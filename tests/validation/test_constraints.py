"""Tests for explicit constraint sets."""

from dataclasses import dataclass

from flyvalid.validation.constraints import (
    ConstraintSet,
    max_length,
    max_value,
    min_length,
    min_value,
    not_blank,
    not_none,
    resolve_path,
)
from flyvalid.validation.message import Severity


@dataclass
class Endereco:
    cidade: str | None


@dataclass
class Cliente:
    nome: str | None
    idade: int
    endereco: Endereco | None = None


class TestResolvePath:
    def test_attributes_and_keys(self):
        cliente = Cliente("Ana", 30, Endereco("Recife"))
        assert resolve_path(cliente, "endereco.cidade") == "Recife"
        assert resolve_path({"a": {"b": 1}}, "a.b") == 1

    def test_missing_segments_are_none(self):
        assert resolve_path(Cliente("Ana", 30), "endereco.cidade") is None
        assert resolve_path({}, "x.y") is None


class TestConstraintSet:
    def test_failing_rules_yield_messages_in_order(self):
        rules = (
            ConstraintSet()
            .rule("nome", not_none(), "não pode ser nulo")
            .rule("nome", min_length(50), "não pode ser menor que 50")
            .rule("idade", min_value(18), "deve ser maior de idade", Severity.WARN)
        )
        messages = list(rules.evaluate(Cliente(None, 10), prefix="cliente"))
        assert [(m.category, m.text, m.severity) for m in messages] == [
            ("cliente.nome", "não pode ser nulo", Severity.ERROR),
            ("cliente.idade", "deve ser maior de idade", Severity.WARN),
        ]

    def test_passing_object_yields_nothing(self):
        rules = ConstraintSet().rule("nome", not_blank(), "obrigatório")
        assert list(rules.evaluate(Cliente("Ana", 30))) == []
        assert len(rules) == 1

    def test_without_prefix_uses_path(self):
        rules = ConstraintSet().rule("endereco.cidade", not_none(), "obrigatória")
        assert [m.category for m in rules.evaluate(Cliente("Ana", 1))] == ["endereco.cidade"]


class TestPredicates:
    def test_not_blank(self):
        assert not not_blank()("   ")
        assert not not_blank()(None)
        assert not_blank()("x")

    def test_length_bounds_pass_none(self):
        assert min_length(2)(None)
        assert max_length(2)(None)
        assert not max_length(2)("abc")

    def test_value_bounds(self):
        assert max_value(10)(10)
        assert not max_value(10)(11)
