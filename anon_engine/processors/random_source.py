import random
import secrets
import threading
import uuid
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class RandomSource:
    """
    The single source of randomness shared by every processor of a run.

    Processors never seed it. The host creates it with an explicit seed for a
    repeatable run, or with :meth:`from_entropy` otherwise. Every draw holds an
    internal lock, so the source can be shared between worker threads.
    """

    def __init__(self, seed: int):
        if seed is None:
            raise ValueError("RandomSource requires an explicit seed, use RandomSource.from_entropy()")
        self.seed = seed
        self._random = random.Random(seed)
        self._lock = threading.Lock()

    @classmethod
    def from_entropy(cls) -> "RandomSource":
        return cls(secrets.randbits(64))

    def randrange(self, stop: int) -> int:
        with self._lock:
            return self._random.randrange(stop)

    def randint(self, a: int, b: int) -> int:
        with self._lock:
            return self._random.randint(a, b)

    def choice(self, seq: Sequence[T]) -> T:
        with self._lock:
            return self._random.choice(seq)

    def getrandbits(self, k: int) -> int:
        with self._lock:
            return self._random.getrandbits(k)

    def uuid4(self) -> uuid.UUID:
        return uuid.UUID(int=self.getrandbits(128), version=4)

    def __repr__(self):
        return f"{self.__class__.__name__}(seed={self.seed})"


def make_random_source(seed: Optional[int] = None) -> RandomSource:
    if seed is None:
        return RandomSource.from_entropy()
    return RandomSource(seed)
