from .admin import IndexAdmin
from .batch import WriteBatch
from .posting_store import PostingStore
from .connection import make_redis_client, store_errors
