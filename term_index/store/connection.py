# ======================== IMPORTS ========================
import redis
import logging
from contextlib import contextmanager
from term_index.errors import StoreUnavailable, StoreError, ConcurrentUpdateError
from term_index.constants import REDIS_HOST, REDIS_PORT, REDIS_DB, REDIS_PASSWORD, REDIS_SOCKET_TIMEOUT, REDIS_SOCKET_CONNECT_TIMEOUT

logger = logging.getLogger(__name__)


# =================== HELPER FUNCTIONS ====================
@contextmanager
def store_errors():
    """
    About:
    ------
        Translates redis-py exceptions raised inside the block into the index's own error types.
        The original exception is kept as __cause__.

    Raises:
    -------
        StoreUnavailable: connection refused, dropped or timed out.
        ConcurrentUpdateError: a WATCHed key changed before EXEC.
        StoreError: any other error reported by the store.
    """
    try:
        yield
    except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
        logger.error("Store unavailable: %s", e)
        raise StoreUnavailable(str(e)) from e
    except redis.exceptions.WatchError as e:
        raise ConcurrentUpdateError(str(e)) from e
    except redis.exceptions.RedisError as e:
        logger.error("Store error: %s", e)
        raise StoreError(str(e)) from e


# ======================= FUNCTIONS =======================
def make_redis_client(host: str=REDIS_HOST, port: int=REDIS_PORT, db: int=REDIS_DB, password: str | None=REDIS_PASSWORD,
                      socket_timeout: float=REDIS_SOCKET_TIMEOUT, socket_connect_timeout: float=REDIS_SOCKET_CONNECT_TIMEOUT) -> redis.Redis:
    """
    About:
    ------
        Creates a Redis client for the index and checks the connection with a PING.
        Defaults come from config.yaml (and REDIS_PASSWORD from the environment).

    Returns:
    --------
        A redis.Redis client with decode_responses enabled, as PostingStore and IndexAdmin expect str values.
    """
    client = redis.Redis(
        host=host,
        port=port,
        db=db,
        password=password,
        socket_timeout=socket_timeout,
        socket_connect_timeout=socket_connect_timeout,
        decode_responses=True
    )
    with store_errors():
        client.ping() # Test connection
    logger.info("Connected to Redis at %s:%s (db %s)", host, port, db)
    return client
