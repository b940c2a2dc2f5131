from .keys import KeyCodec
from .constants import StatusCode
from .store import PostingStore, IndexAdmin, WriteBatch, make_redis_client
from .errors import TermIndexError, StoreUnavailable, StoreError, CorruptDataError, ConcurrentUpdateError, InvalidInputError, FetchError

__version__ = "0.1.0"
