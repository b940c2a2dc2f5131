# ======================== IMPORTS ========================
from term_index.constants import StatusCode


# ======================= EXCEPTIONS ======================
class TermIndexError(Exception):
    """Base class for every error raised by the index."""
    status: StatusCode = StatusCode.UNKNOWN_ERROR


class StoreUnavailable(TermIndexError):
    """The store could not be reached (connection refused, timed out or dropped)."""
    status = StatusCode.CONNECTION_FAILED


class StoreError(TermIndexError):
    """The store rejected a command or a batch."""
    status = StatusCode.STORE_ERROR


class CorruptDataError(TermIndexError):
    """A stored value or key does not have the expected shape."""
    status = StatusCode.CORRUPT_DATA


class ConcurrentUpdateError(TermIndexError):
    """A watched key changed before the batch executed; nothing was written."""
    status = StatusCode.CONCURRENT_UPDATE


class InvalidInputError(TermIndexError, ValueError):
    status = StatusCode.INVALID_INPUT


class FetchError(TermIndexError):
    """Raised by fetchers when a document cannot be retrieved or parsed."""
    status = StatusCode.FETCH_FAILED
