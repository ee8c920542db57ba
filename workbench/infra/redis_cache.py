import json

from .redis_client import get_sync_redis


def get_json(key: str):
    r = get_sync_redis()
    raw = r.get(key)
    return json.loads(raw) if raw else None


def set_json(key: str, value, ttl_sec: int):
    r = get_sync_redis()
    r.set(key, json.dumps(value), ex=ttl_sec)


def delete_key(key: str) -> bool:
    r = get_sync_redis()
    return bool(r.delete(key))
