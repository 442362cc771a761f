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
"""Session store selection from configuration."""

from __future__ import annotations

from flyvalid.config.properties.session import SessionProperties
from flyvalid.session.ports.outbound import SessionStore


def create_session_store(properties: SessionProperties) -> SessionStore:
    """Build the store named by ``flyvalid.session.store`` (``memory`` or ``redis``)."""
    if properties.store == "redis":
        import redis.asyncio as aioredis

        from flyvalid.session.adapters.redis import RedisSessionStore

        url = str(properties.redis.get("url", "redis://localhost:6379/0"))
        client = aioredis.from_url(url)  # type: ignore[no-untyped-call,unused-ignore]
        return RedisSessionStore(client=client)

    from flyvalid.session.adapters.memory import InMemorySessionStore

    return InMemorySessionStore()
