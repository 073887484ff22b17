import asyncio
import json
from typing import Any


class RealtimeManager:
    """Best-effort in-process fan-out of room events to connected listeners."""

    def __init__(self) -> None:
        self._connections: dict[str, set[asyncio.Queue[str]]] = {}
        self._lock = asyncio.Lock()

    async def connect(self, room_id: str) -> asyncio.Queue[str]:
        queue: asyncio.Queue[str] = asyncio.Queue()
        async with self._lock:
            self._connections.setdefault(room_id, set()).add(queue)
        return queue

    async def disconnect(self, room_id: str, queue: asyncio.Queue[str]) -> None:
        async with self._lock:
            queues = self._connections.get(room_id)
            if not queues:
                return
            queues.discard(queue)
            if not queues:
                self._connections.pop(room_id, None)

    async def publish(self, room_id: str, payload: dict[str, Any]) -> int:
        """Queue a payload for every listener of a room. Returns the listener count."""
        message = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
        async with self._lock:
            queues = list(self._connections.get(room_id, set()))
        for queue in queues:
            queue.put_nowait(message)
        return len(queues)


realtime_manager = RealtimeManager()
