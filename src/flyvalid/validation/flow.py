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
"""Post-validation flow dispatch.

Turns "on error, go there" into one of four concrete outcomes:

==========================================  ============
Helper                                      Mode
==========================================  ============
``on_error_forward_to(T).to(m, *args)``     FORWARD
``on_error_redirect_to(T).to(m, *args)``    REDIRECT
``on_error_use_page_of(T).to(m, *args)``    RENDER_PAGE
``on_error_send_bad_request()``             STATUS_CODE
==========================================  ============

When the validator holds no ERROR message, the builder returned is inert
and every call on it returns ``None``. Otherwise the first finalize call
builds a :class:`FlowOutcome` and raises
:class:`~flyvalid.kernel.exceptions.ValidationFlowInterrupt`, so no further
statement of the calling handler runs.

``builder.list(...)`` is shorthand for ``builder.to("list", ...)``.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, NoReturn

import structlog

from flyvalid.container.stereotypes import is_handler
from flyvalid.kernel.exceptions import (
    DispatcherMisuseException,
    FlowConfigurationException,
    ValidationFlowInterrupt,
)
from flyvalid.validation.message import Message, Severity

if TYPE_CHECKING:
    from flyvalid.validation.store import MessageStore

logger = structlog.get_logger("flyvalid.validation.flow")

BAD_REQUEST = 400


class FlowMode(Enum):
    """How control is handed to the alternate target."""

    FORWARD = "forward"
    REDIRECT = "redirect"
    RENDER_PAGE = "render_page"
    STATUS_CODE = "status_code"


class _CurrentHandler:
    """Sentinel type for :data:`THIS`."""

    _instance: _CurrentHandler | None = None

    def __new__(cls) -> _CurrentHandler:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "THIS"


THIS = _CurrentHandler()
"""Target meaning "the handler currently executing"."""


@dataclass(frozen=True)
class FlowOutcome:
    """One-shot routing decision handed to the web layer."""

    mode: FlowMode
    target: type | None = None
    method: str | None = None
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)
    messages: tuple[Message, ...] = ()
    status: int | None = None

    def describe(self) -> str:
        if self.mode is FlowMode.STATUS_CODE:
            return str(self.status)
        target = self.target.__name__ if self.target is not None else "?"
        return f"{target}.{self.method}"

    def payload(self) -> dict[str, Any]:
        """Serialized body for a status-code outcome."""
        return {
            "status": self.status,
            "messages": [m.to_dict() for m in self.messages],
        }


def resolve_target(target: Any, current: Any = None, *, strict: bool = True) -> type:
    """Resolve *target* to a handler class.

    Accepts a handler class, a handler instance, or :data:`THIS`.

    Raises:
        FlowConfigurationException: If the target is not a usable handler.
    """
    if target is THIS:
        if current is None:
            raise FlowConfigurationException(
                "THIS used as flow target but no handler is currently executing",
                code="FLOW_TARGET",
            )
        target = current

    cls = target if isinstance(target, type) else type(target)
    if target is None or cls in (str, int, float, bool, dict, list, tuple):
        raise FlowConfigurationException(
            f"Flow target {target!r} is not a handler type",
            code="FLOW_TARGET",
            context={"target": repr(target)},
        )
    if strict and not is_handler(cls):
        raise FlowConfigurationException(
            f"Flow target {cls.__name__} is not decorated as a controller",
            code="FLOW_TARGET",
            context={"target": cls.__name__},
        )
    return cls


def resolve_method(target: type, method: str | Callable[..., Any]) -> str:
    """Resolve *method* to the name of a callable attribute of *target*.

    *method* may be a name, a function taken from the class, or a bound method.

    Raises:
        FlowConfigurationException: If *target* has no such method.
    """
    if isinstance(method, str):
        name = method
    else:
        func = getattr(method, "__func__", method)
        name = getattr(func, "__name__", "")
        if not name or getattr(target, name, None) is not func:
            raise FlowConfigurationException(
                f"{getattr(func, '__qualname__', func)!r} is not a method of {target.__name__}",
                code="FLOW_METHOD",
                context={"target": target.__name__, "method": name},
            )

    attr = getattr(target, name, None) if name and not name.startswith("_") else None
    if attr is None or not callable(attr):
        raise FlowConfigurationException(
            f"{target.__name__} has no method '{name}'",
            code="FLOW_METHOD",
            context={"target": target.__name__, "method": name},
        )
    return name


class InertFlowBuilder:
    """Builder returned when there is nothing to report; every call is a no-op."""

    def to(self, method: str | Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        return None

    def __getattr__(self, name: str) -> Callable[..., None]:
        if name.startswith("_"):
            raise AttributeError(name)
        return _noop

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "InertFlowBuilder()"


def _noop(*args: Any, **kwargs: Any) -> None:
    return None


class FlowBuilder:
    """Captures ``{mode, target}`` and finalizes on the first method call."""

    def __init__(self, dispatcher: FlowDispatcher, mode: FlowMode, target: type) -> None:
        self._dispatcher = dispatcher
        self._mode = mode
        self._target = target
        self._finalized = False

    @property
    def mode(self) -> FlowMode:
        return self._mode

    @property
    def target(self) -> type:
        return self._target

    def to(self, method: str | Callable[..., Any], *args: Any, **kwargs: Any) -> NoReturn:
        """Finalize the outcome for ``target.method(*args, **kwargs)`` and interrupt."""
        if self._finalized:
            raise DispatcherMisuseException(
                f"Flow to {self._target.__name__} was already dispatched",
                code="FLOW_FINALIZED",
                context={"target": self._target.__name__, "mode": self._mode.value},
            )
        name = resolve_method(self._target, method)
        self._finalized = True
        outcome = FlowOutcome(
            mode=self._mode,
            target=self._target,
            method=name,
            args=args,
            kwargs=dict(kwargs),
            messages=self._dispatcher.snapshot(),
        )
        self._dispatcher.dispatch(outcome)

    def __getattr__(self, name: str) -> Callable[..., NoReturn]:
        if name.startswith("_"):
            raise AttributeError(name)
        return functools.partial(self.to, name)

    def __repr__(self) -> str:
        return f"FlowBuilder({self._mode.value}, {self._target.__name__})"


class FlowDispatcher:
    """Produces flow outcomes for one validator.

    Args:
        store: Messages of the current request.
        current: The handler currently executing, resolved when :data:`THIS`
            is used as target.
        strict: Require targets to carry a handler stereotype.
    """

    def __init__(self, store: MessageStore, current: Any = None, *, strict: bool = True) -> None:
        self._store = store
        self._current = current
        self._strict = strict

    @property
    def current(self) -> Any:
        return self._current

    @current.setter
    def current(self, value: Any) -> None:
        self._current = value

    def has_errors(self) -> bool:
        return self._store.has_severity(Severity.ERROR)

    def snapshot(self) -> tuple[Message, ...]:
        return tuple(self._store.all())

    def builder(self, mode: FlowMode, target: Any) -> FlowBuilder | InertFlowBuilder:
        if not self.has_errors():
            return InertFlowBuilder()
        return FlowBuilder(self, mode, resolve_target(target, self._current, strict=self._strict))

    def send_bad_request(self) -> None:
        if not self.has_errors():
            return
        self.dispatch(
            FlowOutcome(
                mode=FlowMode.STATUS_CODE,
                messages=self.snapshot(),
                status=BAD_REQUEST,
            )
        )

    def dispatch(self, outcome: FlowOutcome) -> NoReturn:
        logger.info(
            "validation_flow_dispatched",
            mode=outcome.mode.value,
            destination=outcome.describe(),
            messages=len(outcome.messages),
        )
        raise ValidationFlowInterrupt(outcome)
