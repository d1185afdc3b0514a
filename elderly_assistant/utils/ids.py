# module elderly_assistant.utils.ids
"""
Générateur d'identifiants numériques uniques (type Snowflake).
- 41 bits d'horodatage (ms depuis EPOCH), 5 bits datacenter, 5 bits worker, 12 bits de séquence.
- Unicité garantie dans le processus (verrou); la monotonie n'est pas requise par les appelants.
"""
import os
import threading
import time

EPOCH_MS = 1288834974657

_WORKER_BITS = 5
_DATACENTER_BITS = 5
_SEQUENCE_BITS = 12
_MAX_SEQUENCE = (1 << _SEQUENCE_BITS) - 1


def _now_ms() -> int:
    return int(time.time() * 1000)


class SnowflakeGenerator:
    def __init__(self, worker_id: int = 0, datacenter_id: int = 0):
        if not 0 <= worker_id < (1 << _WORKER_BITS):
            raise ValueError(f"worker_id hors limites: {worker_id}")
        if not 0 <= datacenter_id < (1 << _DATACENTER_BITS):
            raise ValueError(f"datacenter_id hors limites: {datacenter_id}")
        self.worker_id = worker_id
        self.datacenter_id = datacenter_id
        self._lock = threading.Lock()
        self._last_ms = -1
        self._sequence = 0

    def next_id(self) -> int:
        with self._lock:
            now = _now_ms()
            # Horloge revenue en arrière: on reste sur le dernier instant connu
            if now < self._last_ms:
                now = self._last_ms
            if now == self._last_ms:
                self._sequence = (self._sequence + 1) & _MAX_SEQUENCE
                if self._sequence == 0:
                    while now <= self._last_ms:
                        now = _now_ms()
            else:
                self._sequence = 0
            self._last_ms = now
            return (
                ((now - EPOCH_MS) << (_SEQUENCE_BITS + _WORKER_BITS + _DATACENTER_BITS))
                | (self.datacenter_id << (_SEQUENCE_BITS + _WORKER_BITS))
                | (self.worker_id << _SEQUENCE_BITS)
                | self._sequence
            )


_generator = SnowflakeGenerator(worker_id=os.getpid() % (1 << _WORKER_BITS))


def next_id_str() -> str:
    return str(_generator.next_id())


def now_ms() -> int:
    """Horodatage courant en millisecondes epoch (convention des colonnes *_time)."""
    return _now_ms()
