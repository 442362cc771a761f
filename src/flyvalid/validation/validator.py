# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Validator — the per-request entry point handlers use to report messages."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ValidationError

from flyvalid.validation.flow import FlowBuilder, FlowDispatcher, FlowMode, InertFlowBuilder
from flyvalid.validation.helpers import messages_from_error
from flyvalid.validation.message import Message, Severity
from flyvalid.validation.store import MessageStore
from flyvalid.validation.views import MessageList, ValidationMessages

if TYPE_CHECKING:
    from flyvalid.validation.constraints import ConstraintSet

T = TypeVar("T", bound=BaseModel)


class Validator:
    """Collects validation messages for one request and routes on error.

    Typical handler code::

        validator.ensure(cliente.nome is not None, Message.error("cliente.nome", "não pode ser nulo"))
        validator.on_error_redirect_to(ClienteController).form()
        # only reached when there are no errors

    Args:
        current: The handler instance currently executing. Used when
            :data:`~flyvalid.validation.flow.THIS` is given as flow target.
        strict: Require flow targets to be decorated handler classes.
    """

    def __init__(self, current: Any = None, *, strict: bool = True) -> None:
        self._store = MessageStore()
        self._dispatcher = FlowDispatcher(self._store, current, strict=strict)

    # ------------------------------------------------------------------
    # Adding messages
    # ------------------------------------------------------------------

    def add(self, message: Message) -> None:
        self._store.add(message)

    def add_if(self, condition: Any, message: Message) -> None:
        """Add *message* when *condition* holds."""
        if condition:
            self._store.add(message)

    def ensure(self, condition: Any, message: Message) -> None:
        """Add *message* unless *condition* holds."""
        if not condition:
            self._store.add(message)

    def add_all(self, messages: Iterable[Message]) -> None:
        self._store.extend(messages)

    def validate(
        self,
        model: type[T],
        data: dict[str, Any],
        category: str | None = None,
    ) -> T | None:
        """Validate *data* with a pydantic *model*, collecting failures as errors.

        Returns the model instance, or ``None`` when validation failed.
        """
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            self._store.extend(messages_from_error(exc, category))
            return None

    def check(self, constraints: ConstraintSet, obj: Any, prefix: str | None = None) -> None:
        """Evaluate a constraint set against *obj* and add the resulting messages.

        *prefix* is prepended to every rule path, so ``"nome"`` under
        ``prefix="cliente"`` reports as ``cliente.nome``.
        """
        self._store.extend(constraints.evaluate(obj, prefix))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def has_errors(self) -> bool:
        return self._store.has_severity(Severity.ERROR)

    @property
    def store(self) -> MessageStore:
        return self._store

    @property
    def errors(self) -> MessageList:
        """ERROR messages, published to views as ``errors``."""
        return MessageList(self._store.by_severity(Severity.ERROR))

    @property
    def messages(self) -> ValidationMessages:
        """All messages by severity, published to views as ``vmessages``."""
        return ValidationMessages(self._store.all())

    # ------------------------------------------------------------------
    # On-error flow
    # ------------------------------------------------------------------

    @property
    def current(self) -> Any:
        return self._dispatcher.current

    @current.setter
    def current(self, handler: Any) -> None:
        self._dispatcher.current = handler

    def on_error_forward_to(self, target: Any) -> FlowBuilder | InertFlowBuilder:
        return self._dispatcher.builder(FlowMode.FORWARD, target)

    def on_error_redirect_to(self, target: Any) -> FlowBuilder | InertFlowBuilder:
        return self._dispatcher.builder(FlowMode.REDIRECT, target)

    def on_error_use_page_of(self, target: Any) -> FlowBuilder | InertFlowBuilder:
        return self._dispatcher.builder(FlowMode.RENDER_PAGE, target)

    def on_error_send_bad_request(self) -> None:
        self._dispatcher.send_bad_request()

    def __repr__(self) -> str:
        return f"Validator({len(self._store)} messages, has_errors={self.has_errors()})"
