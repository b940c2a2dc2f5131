# ======================== IMPORTS ========================
import logging
from tqdm import tqdm
from typing import Callable, Dict, Iterable, Protocol, Sequence
from term_index.errors import FetchError
from term_index.utils import get_word_freq_dist
from term_index.store.posting_store import PostingStore

logger = logging.getLogger(__name__)

Counter = Callable[[Sequence[str]], Dict[str, int]]


# ======================== CLASSES ========================
class Fetcher(Protocol):
    def fetch(self, url: str) -> Sequence[str]:
        """Returns the indexable text blocks of the document. Raises FetchError on failure."""
        ...


# ======================= FUNCTIONS =======================
def count_terms(text_blocks: Sequence[str]) -> Dict[str, int]:
    return get_word_freq_dist(text_blocks)


def index_url(store: PostingStore, fetcher: Fetcher, url: str, counter: Counter=count_terms, skip_indexed: bool=False, replace: bool=False) -> bool:
    """
    About:
    ------
        Fetches one document, counts its terms and writes it to the index.

    Returns:
    --------
        True if the page was written, False if it was skipped because it is already indexed.

    Raises:
    -------
        FetchError: propagated from the fetcher.
    """
    if skip_indexed and store.is_indexed(url):
        logger.debug("Skipping %s, already indexed", url)
        return False

    text_blocks: Sequence[str] = fetcher.fetch(url)
    store.index_page(url, counter(text_blocks), replace=replace)
    return True


def index_urls(store: PostingStore, fetcher: Fetcher, urls: Iterable[str], counter: Counter=count_terms, skip_indexed: bool=False, replace: bool=False) -> int:
    """
    About:
    ------
        Indexes a batch of URLs. Pages that fail to fetch are logged and skipped; store errors stop the run.

    Returns:
    --------
        The number of pages written.
    """
    indexed: int = 0
    for url in tqdm(urls, desc="Indexing pages", unit="pages"):
        try:
            if index_url(store, fetcher, url, counter, skip_indexed, replace):
                indexed += 1
        except FetchError as e:
            logger.warning("Failed to fetch %s: %s", url, e)
    return indexed
