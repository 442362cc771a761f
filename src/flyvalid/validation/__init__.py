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
"""flyvalid Validation — message aggregation and on-error flow dispatch."""

from flyvalid.validation.constraints import ConstraintSet
from flyvalid.validation.flow import (
    THIS,
    FlowBuilder,
    FlowDispatcher,
    FlowMode,
    FlowOutcome,
    InertFlowBuilder,
)
from flyvalid.validation.helpers import messages_from_error, validate_model
from flyvalid.validation.message import Message, Severity
from flyvalid.validation.store import MessageStore
from flyvalid.validation.validator import Validator
from flyvalid.validation.views import MessageList, ValidationMessages

__all__ = [
    "THIS",
    "ConstraintSet",
    "FlowBuilder",
    "FlowDispatcher",
    "FlowMode",
    "FlowOutcome",
    "InertFlowBuilder",
    "Message",
    "MessageList",
    "MessageStore",
    "Severity",
    "ValidationMessages",
    "Validator",
    "messages_from_error",
    "validate_model",
]
