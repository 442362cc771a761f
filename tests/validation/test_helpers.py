"""Tests for the pydantic validation helpers."""

import pytest
from pydantic import BaseModel, ValidationError

from flyvalid.kernel.exceptions import ValidationException
from flyvalid.validation.helpers import error_category, messages_from_error, validate_model
from flyvalid.validation.message import Severity


class Endereco(BaseModel):
    cidade: str


class CreateClienteRequest(BaseModel):
    nome: str
    idade: int
    endereco: Endereco


class TestValidateModel:
    def test_valid_data(self):
        result = validate_model(
            CreateClienteRequest, {"nome": "Ana", "idade": 30, "endereco": {"cidade": "Recife"}}
        )
        assert result.endereco.cidade == "Recife"

    def test_invalid_data_raises_validation_exception(self):
        with pytest.raises(ValidationException) as exc_info:
            validate_model(CreateClienteRequest, {"nome": "Ana", "idade": "x", "endereco": {}})
        assert exc_info.value.code == "VALIDATION_ERROR"
        categories = [m["category"] for m in exc_info.value.context["messages"]]
        assert categories == ["idade", "endereco.cidade"]


class TestMessagesFromError:
    def test_prefixed_categories(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateClienteRequest.model_validate({"nome": "Ana", "idade": 1, "endereco": {}})
        messages = messages_from_error(exc_info.value, "cliente")
        assert [m.category for m in messages] == ["cliente.endereco.cidade"]
        assert all(m.severity is Severity.ERROR for m in messages)

    def test_custom_severity(self):
        with pytest.raises(ValidationError) as exc_info:
            Endereco.model_validate({})
        assert messages_from_error(exc_info.value, severity=Severity.WARN)[0].severity is Severity.WARN


class TestErrorCategory:
    def test_without_prefix(self):
        assert error_category(("itens", 0, "nome")) == "itens.0.nome"

    def test_empty_location_uses_prefix(self):
        assert error_category((), "cliente") == "cliente"
