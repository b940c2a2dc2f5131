# ======================== IMPORTS ========================
import redis
import logging
from typing import Iterable, Set
from rich.table import Table
from rich.console import Console
from term_index.keys import KeyCodec
from term_index.store.batch import WriteBatch
from term_index.store.connection import store_errors
from term_index.store.posting_store import PostingStore

logger = logging.getLogger(__name__)


# ======================== CLASSES ========================
class IndexAdmin:
    """
    Enumeration and reset operations over the index key space.
    Meant for development, testing and maintenance, not for the query path: the delete
    operations drop whole key classes and do not keep URL sets and term counters in step.
    """
    def __init__(self, client: redis.Redis, store: PostingStore | None=None) -> None:
        self.client = client
        self.store = store or PostingStore(client)

    # Enumeration
    def url_set_keys(self) -> Set[str]:
        return self._scan(KeyCodec.URL_SET_PATTERN)

    def term_counter_keys(self) -> Set[str]:
        return self._scan(KeyCodec.TERM_COUNTER_PATTERN)

    def term_set(self) -> Set[str]:
        return {KeyCodec.term_from_key(key) for key in self.url_set_keys()}

    def url_set(self) -> Set[str]:
        return {KeyCodec.url_from_key(key) for key in self.term_counter_keys()}

    # Maintenance
    def delete_url_sets(self) -> int:
        return self._delete_keys(self.url_set_keys(), "URLSet")

    def delete_term_counters(self) -> int:
        return self._delete_keys(self.term_counter_keys(), "TermCounter")

    def delete_all_keys(self) -> int:
        # Everything in the selected database, not only index keys
        return self._delete_keys(self._scan("*"), "all")

    # Diagnostics
    def print_index(self, console: Console | None=None) -> None:
        console = console or Console()
        table = Table(title="Index", show_lines=False)
        table.add_column("Term", style="cyan", no_wrap=True)
        table.add_column("URL", style="green")
        table.add_column("Count", justify="right", style="magenta")

        for term in sorted(self.term_set()):
            counts = self.store.get_counts(term)
            for url in sorted(counts):
                table.add_row(term, url, str(counts[url]))

        console.print(table)

    # Private Methods
    def _scan(self, pattern: str) -> Set[str]:
        # SCAN may return a key more than once, the set takes care of it
        with store_errors():
            return set(self.client.scan_iter(match=pattern))

    def _delete_keys(self, keys: Iterable[str], label: str) -> int:
        keys = list(keys)
        if not keys:
            logger.info("No %s keys to delete", label)
            return 0

        batch = WriteBatch(self.client)
        batch.delete(*keys)
        with store_errors():
            batch.commit()
        logger.info("Deleted %d %s keys", len(keys), label)
        return len(keys)
