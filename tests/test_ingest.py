import unittest
import fakeredis
from term_index.store import PostingStore
from term_index.errors import FetchError
from term_index.ingest import count_terms, index_url, index_urls


class StubFetcher:
    def __init__(self, pages):
        self.pages = pages
        self.fetched = []

    def fetch(self, url):
        self.fetched.append(url)
        if url not in self.pages:
            raise FetchError(f"404 for {url}")
        return self.pages[url]


PAGES = {
    "https://example.com/cats": ["The cat sat.", "The cat, the mat!"],
    "https://example.com/dogs": ["The dog barked."],
}


class TestCountTerms(unittest.TestCase):
    def test_counts_across_blocks(self):
        self.assertEqual(count_terms(PAGES["https://example.com/cats"]), {"the": 3, "cat": 2, "sat": 1, "mat": 1})

    def test_no_blocks(self):
        self.assertEqual(count_terms([]), {})


class TestIndexUrl(unittest.TestCase):
    def setUp(self):
        self.store = PostingStore(fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True))
        self.fetcher = StubFetcher(PAGES)

    def test_index_url(self):
        self.assertTrue(index_url(self.store, self.fetcher, "https://example.com/cats"))
        self.assertEqual(self.store.get_count("https://example.com/cats", "the"), 3)
        self.assertEqual(self.store.get_urls("cat"), {"https://example.com/cats"})

    def test_skip_indexed(self):
        index_url(self.store, self.fetcher, "https://example.com/cats")
        self.assertFalse(index_url(self.store, self.fetcher, "https://example.com/cats", skip_indexed=True))
        self.assertEqual(self.fetcher.fetched, ["https://example.com/cats"])

    def test_custom_counter(self):
        index_url(self.store, self.fetcher, "https://example.com/dogs", counter=lambda blocks: {"dog": 1})
        self.assertEqual(self.store.get_term_vector("https://example.com/dogs"), {"dog": 1})

    def test_fetch_error_propagates(self):
        with self.assertRaises(FetchError):
            index_url(self.store, self.fetcher, "https://example.com/missing")

    def test_index_urls_skips_failed_fetches(self):
        urls = ["https://example.com/cats", "https://example.com/missing", "https://example.com/dogs"]
        with self.assertLogs("term_index.ingest", level="WARNING"):
            indexed = index_urls(self.store, self.fetcher, urls)

        self.assertEqual(indexed, 2)
        self.assertEqual(self.store.get_counts("the"), {"https://example.com/cats": 3, "https://example.com/dogs": 1})


if __name__ == "__main__":
    unittest.main()
