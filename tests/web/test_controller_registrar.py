"""Tests for controller discovery, route building and the action registry."""

import pytest
from starlette.requests import Request

from flyvalid.container.stereotypes import controller, rest_controller
from flyvalid.kernel.exceptions import ConfigurationException, FlowConfigurationException
from flyvalid.validation.validator import Validator
from flyvalid.web.adapters.starlette.actions import bind_arguments
from flyvalid.web.adapters.starlette.controller import ControllerRegistrar
from flyvalid.web.adapters.starlette.outcome import OutcomeResolver
from flyvalid.web.mappings import get_mapping, post_mapping, request_mapping


@controller
@request_mapping("/clientes")
class ClienteController:
    @get_mapping("/{cliente_id:int}")
    def show(self, cliente_id: int):
        return {"cliente_id": cliente_id}

    @post_mapping("/", status_code=201)
    def adiciona(self, validator: Validator, nome: str = ""):
        return {"nome": nome}

    def helper(self):
        pass


class VipClienteController(ClienteController):
    pass


@rest_controller
class HealthApi:
    @get_mapping("/health")
    def health(self):
        return {"status": "UP"}


class NotAHandler:
    @get_mapping("/x")
    def x(self):
        pass


def _registrar() -> ControllerRegistrar:
    return ControllerRegistrar(OutcomeResolver())


class TestControllerRegistrar:
    def test_collects_mapped_methods_only(self):
        routes = _registrar().collect_routes([ClienteController])
        assert sorted(r.name for r in routes) == ["ClienteController.adiciona", "ClienteController.show"]

    def test_route_paths_and_methods(self):
        routes = {r.name: r for r in _registrar().collect_routes([ClienteController, HealthApi])}
        assert routes["ClienteController.show"].path == "/clientes/{cliente_id:int}"
        assert routes["ClienteController.adiciona"].path == "/clientes/"
        assert "POST" in routes["ClienteController.adiciona"].methods
        assert routes["HealthApi.health"].path == "/health"

    def test_accepts_instances(self):
        registrar = _registrar()
        instance = HealthApi()
        registrar.collect_routes([instance])
        assert registrar.registry.get(HealthApi, "health").instance is instance

    def test_rejects_undecorated_classes(self):
        with pytest.raises(ConfigurationException) as exc_info:
            _registrar().collect_routes([NotAHandler])
        assert exc_info.value.code == "NOT_A_HANDLER"


class TestActionRegistry:
    def test_lookup_and_status(self):
        registrar = _registrar()
        registrar.collect_routes([ClienteController])
        action = registrar.registry.get(ClienteController, "adiciona")
        assert action.status_code == 201
        assert action.renders_views
        assert action.route_name == "ClienteController.adiciona"
        assert len(registrar.registry) == 2

    def test_subclass_falls_back_to_base_actions(self):
        registrar = _registrar()
        registrar.collect_routes([ClienteController])
        assert registrar.registry.get(VipClienteController, "show").handler is ClienteController

    def test_unmapped_method_raises(self):
        registrar = _registrar()
        registrar.collect_routes([ClienteController])
        with pytest.raises(FlowConfigurationException) as exc_info:
            registrar.registry.get(ClienteController, "helper")
        assert exc_info.value.code == "FLOW_ROUTE"

    def test_bind_skips_injected_params(self):
        registrar = _registrar()
        registrar.collect_routes([ClienteController])
        action = registrar.registry.get(ClienteController, "adiciona")
        assert action.bind(("Ana",), {}) == {"nome": "Ana"}

    def test_bind_rejects_extra_arguments(self):
        registrar = _registrar()
        registrar.collect_routes([HealthApi])
        with pytest.raises(FlowConfigurationException) as exc_info:
            registrar.registry.get(HealthApi, "health").bind((1,), {})
        assert exc_info.value.code == "FLOW_ARGS"

    def test_find_returns_none_for_unmapped_method(self):
        registrar = _registrar()
        registrar.collect_routes([ClienteController])
        assert registrar.registry.find(ClienteController, "helper") is None
        assert registrar.registry.find(VipClienteController, "show") is not None


def _request(query_string: bytes = b"") -> Request:
    async def receive():
        return {"type": "http.request", "body": b""}

    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "path_params": {},
        "query_string": query_string,
        "headers": [],
    }
    return Request(scope, receive)


class TestActionArguments:
    @pytest.mark.asyncio
    async def test_request_fills_parameters_the_flow_call_omits(self):
        registrar = _registrar()
        registrar.collect_routes([ClienteController])
        action = registrar.registry.get(ClienteController, "show")
        kwargs = await action.arguments(_request(b"cliente_id=9"), Validator(), (), {})
        assert kwargs == {"cliente_id": 9}

    @pytest.mark.asyncio
    async def test_flow_arguments_take_precedence(self):
        registrar = _registrar()
        registrar.collect_routes([ClienteController])
        action = registrar.registry.get(ClienteController, "show")
        kwargs = await action.arguments(_request(b"cliente_id=9"), Validator(), (3,), {})
        assert kwargs == {"cliente_id": 3}

    @pytest.mark.asyncio
    async def test_unresolvable_required_parameter_is_flow_args(self):
        registrar = _registrar()
        registrar.collect_routes([ClienteController])
        action = registrar.registry.get(ClienteController, "show")
        with pytest.raises(FlowConfigurationException) as exc_info:
            await action.arguments(_request(), Validator(), (), {})
        assert exc_info.value.code == "FLOW_ARGS"


class TestBindArguments:
    def test_unbound_function_skips_self_and_injected(self):
        arguments = bind_arguments(
            ClienteController.adiciona, ("Ana",), {}, skip={"validator"}, owner=ClienteController
        )
        assert arguments == {"nome": "Ana"}

    def test_mismatch_names_the_target(self):
        with pytest.raises(FlowConfigurationException) as exc_info:
            bind_arguments(ClienteController.helper, (1,), {}, owner=ClienteController)
        assert exc_info.value.code == "FLOW_ARGS"
        assert exc_info.value.context == {"target": "ClienteController.helper"}
