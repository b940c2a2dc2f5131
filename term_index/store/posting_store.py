# ======================== IMPORTS ========================
import re
import redis
import logging
from typing import Dict, List, Mapping, Set
from term_index.keys import KeyCodec
from term_index.store.batch import WriteBatch
from term_index.store.connection import store_errors
from term_index.errors import CorruptDataError, InvalidInputError

logger = logging.getLogger(__name__)

COUNT_PATTERN = re.compile(r"[0-9]+")


# =================== HELPER FUNCTIONS ====================
def parse_count(value: str | None, url: str, term: str) -> int:
    # Absent field means the term never occurred at the URL
    if value is None:
        return 0
    if not isinstance(value, str) or not COUNT_PATTERN.fullmatch(value):
        raise CorruptDataError(f"Count for term {term!r} at {url!r} is not a non-negative integer: {value!r}")
    return int(value)


def validate_counts(url: str, term_counts: Mapping[str, int]) -> Dict[str, int]:
    """Checks the counter output and drops zero counts, which must not create postings."""
    if not isinstance(url, str):
        raise InvalidInputError(f"URL must be a string, got {type(url).__name__}")

    counts: Dict[str, int] = {}
    for term, count in term_counts.items():
        if not isinstance(term, str):
            raise InvalidInputError(f"Term must be a string, got {term!r}")
        if isinstance(count, bool) or not isinstance(count, int):
            raise InvalidInputError(f"Count for term {term!r} must be an integer, got {count!r}")
        if count < 0:
            raise InvalidInputError(f"Count for term {term!r} must be non-negative, got {count}")
        if count > 0:
            counts[term] = count
    return counts


# ======================== CLASSES ========================
class PostingStore:
    """
    Redis-backed inverted index.

    Two views are kept in step:
        URLSet:<term>       set of URLs containing the term
        TermCounter:<url>   hash of term -> occurrence count (decimal string)

    A URL is a member of URLSet:<term> exactly when TermCounter:<url> holds the term with a count of at least 1.
    Every index_page call is written as one MULTI/EXEC transaction, so readers never see half of a document.

    The client must be created with decode_responses=True (see make_redis_client).
    """
    def __init__(self, client: redis.Redis) -> None:
        self.client = client

    # Queries
    def is_indexed(self, url: str) -> bool:
        with store_errors():
            return self.client.exists(KeyCodec.term_counter_key(url)) == 1

    def get_urls(self, term: str) -> Set[str]:
        with store_errors():
            return set(self.client.smembers(KeyCodec.url_set_key(term)))

    def get_count(self, url: str, term: str) -> int:
        """
        About:
        ------
            Returns the number of times the term appears at the URL.

        Returns:
        --------
            The stored count, or 0 when the URL was never indexed or the term does not occur there.

        Raises:
        -------
            CorruptDataError: the stored value is not a non-negative integer.
        """
        with store_errors():
            value = self.client.hget(KeyCodec.term_counter_key(url), term)
        return parse_count(value, url, term)

    def get_counts(self, term: str) -> Dict[str, int]:
        """
        About:
        ------
            Maps every URL containing the term to its count. The counts are read with one pipelined
            round trip after the set lookup, not one round trip per URL.
        """
        urls: List[str] = list(self.get_urls(term))
        if not urls:
            return {}

        with store_errors(), self.client.pipeline(transaction=False) as pipe:
            for url in urls:
                pipe.hget(KeyCodec.term_counter_key(url), term)
            values: List[str | None] = pipe.execute()

        return {url: parse_count(value, url, term) for url, value in zip(urls, values)}

    def get_term_vector(self, url: str) -> Dict[str, int]:
        with store_errors():
            fields: Dict[str, str] = self.client.hgetall(KeyCodec.term_counter_key(url))
        return {term: parse_count(value, url, term) for term, value in fields.items()}

    # Updates
    def index_page(self, url: str, term_counts: Mapping[str, int], replace: bool=False) -> None:
        """
        About:
        ------
            Adds a page to the index. The term vector fields and the URL set memberships are written
            in a single transaction; if the store fails, nothing from this call becomes visible.

        Args:
        -----
            url: URL of the page.
            term_counts: Term -> occurrence count, as produced by the counter. Zero counts are ignored.
            replace: If False (default), re-indexing only overwrites and adds; terms that vanished from the page keep
                     their old postings. If True, the previous term vector is read under WATCH and replaced wholesale,
                     and the URL is removed from the URL sets of terms that no longer occur.

        Raises:
        -------
            InvalidInputError: a count is negative or not an integer.
            StoreUnavailable: the store could not be reached.
            ConcurrentUpdateError: (replace mode) another client modified the page's term vector first.
        """
        counts: Dict[str, int] = validate_counts(url, term_counts)

        if replace:
            self._replace_page(url, counts)
            return

        if not counts:
            logger.debug("Nothing to index for %s", url)
            return

        batch = WriteBatch(self.client)
        self._queue_page(batch, url, counts)
        with store_errors():
            batch.commit()
        logger.debug("Indexed %s (%d terms)", url, len(counts))

    def _queue_page(self, batch: WriteBatch, url: str, counts: Dict[str, int]) -> None:
        if not counts:
            return
        batch.hset(KeyCodec.term_counter_key(url), mapping={term: str(count) for term, count in counts.items()})
        for term in counts:
            batch.sadd(KeyCodec.url_set_key(term), url)

    def _replace_page(self, url: str, counts: Dict[str, int]) -> None:
        counter_key: str = KeyCodec.term_counter_key(url)

        with store_errors():
            with self.client.pipeline(transaction=True) as pipe:
                pipe.watch(counter_key)
                old_terms: Set[str] = set(pipe.hkeys(counter_key))

                batch = WriteBatch(self.client)
                if old_terms:
                    batch.delete(counter_key)
                for term in old_terms - counts.keys():
                    batch.srem(KeyCodec.url_set_key(term), url)
                self._queue_page(batch, url, counts)

                if not batch:
                    pipe.unwatch()
                    logger.debug("Nothing to index for %s", url)
                    return
                batch.commit(pipe)

        logger.debug("Re-indexed %s (%d terms, %d retracted)", url, len(counts), len(old_terms - counts.keys()))
