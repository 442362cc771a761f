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
"""Exception hierarchy for flyvalid.

All engine exceptions inherit from FlyValidException so callers can handle
every framework failure in one place, or target a specific subclass.

Categories:
- BusinessException: validation failures that callers choose to raise
- ConfigurationException: flow targets or methods that cannot be resolved
- DispatcherMisuseException: an on-error builder finalized more than once

ValidationFlowInterrupt sits outside this tree. It is the
short-circuit signal that carries a FlowOutcome out of a handler, not a
failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flyvalid.validation.flow import FlowOutcome


# =============================================================================
# Base Exception
# =============================================================================


class FlyValidException(Exception):
    """Base exception for all flyvalid errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "FLOW_TARGET").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(FlyValidException):
    """Domain rule violations and business logic errors."""


class ValidationException(BusinessException):
    """Input validation failures raised in fail-fast style."""


# =============================================================================
# Programming Errors
# =============================================================================


class ConfigurationException(FlyValidException):
    """The engine was wired or called in a way that can never succeed."""


class FlowConfigurationException(ConfigurationException):
    """An on-error target or target method could not be resolved."""


class DispatcherMisuseException(FlyValidException):
    """An on-error builder was finalized more than once."""


# =============================================================================
# Control Flow
# =============================================================================


class ValidationFlowInterrupt(Exception):
    """Raised to abandon the current handler and follow a flow outcome.

    The web adapter catches it and turns ``outcome`` into a response.
    """

    def __init__(self, outcome: FlowOutcome) -> None:
        super().__init__(f"{outcome.mode.value} -> {outcome.describe()}")
        self.outcome = outcome
