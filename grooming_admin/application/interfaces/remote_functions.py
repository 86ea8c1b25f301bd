from __future__ import annotations

from typing import Any, Mapping, Protocol


class RemoteFunctions(Protocol):
    @property
    def configured(self) -> bool: ...

    async def invoke(self, function_name: str, payload: Mapping[str, Any]) -> Any: ...
