import logging

from fastapi import APIRouter
from redis.exceptions import RedisError

from ..infra.redis_client import get_sync_redis

router = APIRouter()
logger = logging.getLogger("workbench.ready")


@router.get("/ready")
def ready():
    redis_ok = False
    try:
        redis_ok = bool(get_sync_redis().ping())
    except RedisError as e:
        logger.warning(f"Redis ping failed: {e}")
    return {"ok": True, "redis_ok": redis_ok}
