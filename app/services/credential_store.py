# app/services/credential_store.py
from abc import ABC, abstractmethod

import redis

from app.utils.retry import redis_retry
from app.utils.settings import REDIS_URL
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CredentialStore(ABC):
    """
    Expiring key-value store for short-lived credentials (login codes).

    Entries expire on their own; nothing is kept in process memory, so any
    number of API workers can share one store.
    """

    @abstractmethod
    def set(self, key: str, value: str, ttl: int) -> None: ...

    @abstractmethod
    def get(self, key: str) -> str | None: ...

    @abstractmethod
    def delete(self, key: str) -> None: ...


class RedisCredentialStore(CredentialStore):
    def __init__(self, client: redis.Redis | None = None, url: str | None = None, prefix: str = "otp"):
        self.redis = client or redis.Redis.from_url(url or REDIS_URL, decode_responses=True)
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    @redis_retry()
    def set(self, key: str, value: str, ttl: int) -> None:
        # SET otp:9876543210 "123456" EX 600
        self.redis.set(name=self._key(key), value=value, ex=ttl)

    @redis_retry()
    def get(self, key: str) -> str | None:
        value = self.redis.get(self._key(key))
        if isinstance(value, bytes):
            value = value.decode()
        return value

    @redis_retry()
    def delete(self, key: str) -> None:
        self.redis.delete(self._key(key))
