"""End-to-end tests: on-error flows through a Starlette application."""

from pathlib import Path

import pytest
from pydantic import BaseModel
from starlette.responses import RedirectResponse
from starlette.testclient import TestClient

from flyvalid.container.stereotypes import controller, rest_controller
from flyvalid.core.config import Config
from flyvalid.validation.flow import THIS
from flyvalid.validation.message import Message
from flyvalid.validation.validator import Validator
from flyvalid.web.adapters.starlette.app import create_app
from flyvalid.web.mappings import get_mapping, post_mapping, request_mapping

FORM_TEMPLATE = """\
<h1>{{ title | default("Cliente") }}</h1>
<ul>{% for m in errors %}<li>{{ m.category }}: {{ m.text }}</li>{% endfor %}</ul>
<p id="nome">{{ errors.join("cliente.nome") }}</p>
<p id="warnings">{{ vmessages.warnings | length }}</p>
"""

SHOW_TEMPLATE = """\
<h1>Cliente {{ cliente_id }}</h1>
<ul>{% for m in errors %}<li>{{ m.text }}</li>{% endfor %}</ul>
"""

BUSCA_TEMPLATE = """\
<p id="termo">termo={{ termo }} pagina={{ pagina }}</p>
<ul>{% for m in errors %}<li>{{ m.text }}</li>{% endfor %}</ul>
"""


class Cliente(BaseModel):
    nome: str
    idade: int = 0


@controller
@request_mapping("/clientes")
class ClienteController:
    @get_mapping("/form")
    def form(self):
        return {"title": "Novo cliente"}

    @get_mapping("/{cliente_id:int}")
    def show(self, cliente_id: int):
        return {"cliente_id": cliente_id}

    @post_mapping("/")
    def adiciona(self, validator: Validator, nome: str = "", idade: int = 0):
        validator.ensure(nome, Message.error("cliente.nome", "não pode ser vazio"))
        validator.add_if(idade < 18, Message.warn("cliente.idade", "menor de idade"))
        validator.on_error_redirect_to(THIS).form()
        return RedirectResponse("/clientes/form", status_code=303)

    @post_mapping("/{cliente_id:int}")
    async def atualiza(self, validator: Validator, cliente_id: int, nome: str = ""):
        validator.ensure(nome, Message.error("cliente.nome", "não pode ser vazio"))
        validator.on_error_forward_to(THIS).show(cliente_id)
        return RedirectResponse(f"/clientes/{cliente_id}", status_code=303)

    @post_mapping("/{cliente_id:int}/remove")
    def remove(self, validator: Validator, cliente_id: int, confirm: bool = False):
        validator.ensure(confirm, Message.error("confirm", "confirme a remoção"))
        validator.on_error_redirect_to(ClienteController).show(cliente_id)
        return RedirectResponse("/clientes/form", status_code=303)

    @post_mapping("/edita")
    def edita(self, validator: Validator, nome: str = ""):
        validator.ensure(nome, Message.error("cliente.nome", "não pode ser vazio"))
        validator.on_error_use_page_of(ClienteController).form()
        return RedirectResponse("/clientes/form", status_code=303)

    @get_mapping("/busca")
    def busca(self, termo: str, pagina: int | None = None):
        return {"termo": termo, "pagina": pagina}

    @post_mapping("/filtra")
    def filtra(self, validator: Validator, termo: str = ""):
        validator.add_if(len(termo) < 5, Message.error("termo", "termo muito curto"))
        validator.on_error_forward_to(THIS).busca()
        return RedirectResponse("/clientes/form", status_code=303)

    @post_mapping("/perdido")
    def perdido(self, validator: Validator):
        validator.add(Message.error("geral", "falhou"))
        validator.on_error_forward_to(THIS).show()
        return RedirectResponse("/clientes/form", status_code=303)

    @post_mapping("/{cliente_id:int}/revisa")
    def revisa(self, validator: Validator, cliente_id: int, nome: str = ""):
        validator.ensure(nome, Message.error("cliente.nome", "não pode ser vazio"))
        validator.on_error_use_page_of(THIS).show(cliente_id)
        return RedirectResponse(f"/clientes/{cliente_id}", status_code=303)


@rest_controller
@request_mapping("/api/clientes")
class ClienteApi:
    @post_mapping("/", status_code=201)
    def create(self, cliente: Cliente, validator: Validator):
        validator.on_error_send_bad_request()
        return cliente


@pytest.fixture
def templates(tmp_path: Path) -> Path:
    (tmp_path / "cliente").mkdir()
    (tmp_path / "cliente" / "form.html").write_text(FORM_TEMPLATE)
    (tmp_path / "cliente" / "show.html").write_text(SHOW_TEMPLATE)
    (tmp_path / "cliente" / "busca.html").write_text(BUSCA_TEMPLATE)
    return tmp_path


@pytest.fixture
def client(templates: Path) -> TestClient:
    config = Config.with_defaults({"flyvalid": {"validation": {"templates_dir": str(templates)}}})
    return TestClient(create_app([ClienteController, ClienteApi], config))


class TestRedirect:
    def test_redirects_to_target_route(self, client):
        response = client.post("/clientes/", data={"nome": ""}, follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "/clientes/form"

    def test_messages_reach_the_next_request(self, client):
        client.post("/clientes/", data={"nome": "", "idade": "10"}, follow_redirects=False)
        page = client.get("/clientes/form")
        assert page.status_code == 200
        assert "<h1>Novo cliente</h1>" in page.text
        assert "cliente.nome: não pode ser vazio" in page.text
        assert '<p id="nome">não pode ser vazio</p>' in page.text
        assert '<p id="warnings">1</p>' in page.text

    def test_messages_are_gone_after_one_request(self, client):
        client.post("/clientes/", data={"nome": ""}, follow_redirects=False)
        client.get("/clientes/form")
        assert "não pode ser vazio" not in client.get("/clientes/form").text

    def test_path_arguments_build_the_location(self, client):
        response = client.post("/clientes/7/remove", follow_redirects=False)
        assert response.headers["location"] == "/clientes/7"
        assert "confirme a remoção" in client.get("/clientes/7").text

    def test_without_errors_handler_continues(self, client):
        response = client.post("/clientes/", data={"nome": "Ana", "idade": "30"}, follow_redirects=False)
        assert response.status_code == 303
        assert "não pode ser vazio" not in client.get("/clientes/form").text

    def test_warnings_alone_do_not_interrupt(self, client):
        response = client.post("/clientes/", data={"nome": "Ana", "idade": "10"}, follow_redirects=False)
        assert response.status_code == 303


class TestForward:
    def test_forward_renders_target_with_current_messages(self, client):
        response = client.post("/clientes/7", data={"nome": ""}, follow_redirects=False)
        assert response.status_code == 200
        assert "<h1>Cliente 7</h1>" in response.text
        assert "<li>não pode ser vazio</li>" in response.text

    def test_forward_does_not_leave_flash(self, client):
        client.post("/clientes/7", data={"nome": ""})
        assert "não pode ser vazio" not in client.get("/clientes/7").text

    def test_forward_target_reads_its_parameters_from_the_request(self, client):
        response = client.post("/clientes/filtra", data={"termo": "abc"})
        assert response.status_code == 200
        assert "termo=abc pagina=None" in response.text
        assert "<li>termo muito curto</li>" in response.text

    def test_forward_target_optional_query_value_is_coerced(self, client):
        response = client.post("/clientes/filtra?pagina=2", data={"termo": "abc"})
        assert "termo=abc pagina=2" in response.text

    def test_forward_target_missing_required_value_is_flow_error(self, client):
        response = client.post("/clientes/perdido")
        assert response.status_code == 500
        assert response.json()["error"]["code"] == "FLOW_ARGS"


class TestUsePageOf:
    def test_renders_page_without_running_its_logic(self, client):
        response = client.post("/clientes/edita", data={"nome": ""})
        assert response.status_code == 200
        assert "<h1>Cliente</h1>" in response.text
        assert "cliente.nome: não pode ser vazio" in response.text

    def test_positional_arguments_reach_the_template(self, client):
        response = client.post("/clientes/7/revisa", data={"nome": ""})
        assert response.status_code == 200
        assert "<h1>Cliente 7</h1>" in response.text
        assert "<li>não pode ser vazio</li>" in response.text


class TestSendBadRequest:
    def test_invalid_body_returns_400_with_messages(self, client):
        response = client.post("/api/clientes/", json={"idade": "x"})
        assert response.status_code == 400
        body = response.json()
        assert body["status"] == 400
        assert [m["category"] for m in body["messages"]] == ["cliente.nome", "cliente.idade"]
        assert all(m["severity"] == "ERROR" for m in body["messages"])

    def test_valid_body_passes(self, client):
        response = client.post("/api/clientes/", json={"nome": "Ana", "idade": 30})
        assert response.status_code == 201
        assert response.json() == {"nome": "Ana", "idade": 30}

    def test_malformed_json_returns_400(self, client):
        response = client.post(
            "/api/clientes/",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 400
        messages = response.json()["messages"]
        assert [(m["category"], m["severity"]) for m in messages] == [("cliente", "ERROR")]


class TestMisconfiguration:
    def test_use_page_without_renderer_is_a_server_error(self, tmp_path):
        config = Config.with_defaults(
            {"flyvalid": {"validation": {"templates_dir": str(tmp_path / "missing")}}}
        )
        client = TestClient(create_app([ClienteController], config))
        response = client.post("/clientes/edita", data={"nome": ""})
        assert response.status_code == 500
        assert response.json()["error"]["code"] == "VIEW_RENDERER_MISSING"

    def test_redirect_without_sessions_is_a_server_error(self, templates):
        config = Config.with_defaults(
            {
                "flyvalid": {
                    "validation": {"templates_dir": str(templates)},
                    "session": {"enabled": False},
                }
            }
        )
        client = TestClient(create_app([ClienteController], config))
        response = client.post("/clientes/", data={"nome": ""}, follow_redirects=False)
        assert response.status_code == 500
        assert response.json()["error"]["code"] == "FLASH_UNAVAILABLE"

    def test_controller_without_renderer_returns_json(self, tmp_path):
        config = Config.with_defaults(
            {"flyvalid": {"validation": {"templates_dir": str(tmp_path / "missing")}}}
        )
        client = TestClient(create_app([ClienteController], config))
        assert client.get("/clientes/3").json() == {"cliente_id": 3}
