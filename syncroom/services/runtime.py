import logging
import threading

logger = logging.getLogger(__name__)


class RoomRuntime:
    """In-memory registry of live room state shared by all request workers.

    Only the connected client count is tracked; the room core reads it and
    never writes it.
    """

    def __init__(self):
        self._clients: dict[int, int] = {}
        self._lock = threading.Lock()

    def connect(self, room_id: int) -> int:
        with self._lock:
            count = self._clients.get(room_id, 0) + 1
            self._clients[room_id] = count
        logger.debug(f"Client joined room {room_id}, now {count}")
        return count

    def disconnect(self, room_id: int) -> int:
        with self._lock:
            count = max(self._clients.get(room_id, 0) - 1, 0)
            if count:
                self._clients[room_id] = count
            else:
                self._clients.pop(room_id, None)
        logger.debug(f"Client left room {room_id}, now {count}")
        return count

    def client_num(self, room_id: int) -> int:
        with self._lock:
            return self._clients.get(room_id, 0)

    def forget(self, room_id: int) -> None:
        with self._lock:
            self._clients.pop(room_id, None)
