"""Tests for handler return value conversion."""

import json

from pydantic import BaseModel
from starlette.responses import PlainTextResponse

from flyvalid.validation.message import Message
from flyvalid.validation.views import MessageList, ValidationMessages
from flyvalid.web.adapters.starlette.response import handle_return_value


class ClienteOut(BaseModel):
    nome: str


class TestHandleReturnValue:
    def test_none_is_no_content(self):
        assert handle_return_value(None).status_code == 204
        assert handle_return_value(None, 202).status_code == 202

    def test_response_passes_through(self):
        response = PlainTextResponse("ok")
        assert handle_return_value(response, 201) is response

    def test_model_is_serialized(self):
        response = handle_return_value(ClienteOut(nome="Ana"), 201)
        assert response.status_code == 201
        assert json.loads(response.body) == {"nome": "Ana"}

    def test_message_views_are_serialized(self):
        messages = [Message.error("nome", "obrigatório"), Message.info("idade", "ok")]
        body = json.loads(handle_return_value(ValidationMessages(messages)).body)
        assert body["errors"] == {"nome": ["obrigatório"]}
        assert body["infos"] == {"idade": ["ok"]}

        body = json.loads(handle_return_value(MessageList(messages[:1])).body)
        assert body == [{"category": "nome", "text": "obrigatório", "severity": "ERROR"}]
