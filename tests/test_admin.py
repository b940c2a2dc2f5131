import io
import unittest
from unittest.mock import patch
import fakeredis
from rich.console import Console
from term_index.store import IndexAdmin, PostingStore
from term_index.errors import CorruptDataError


class TestIndexAdmin(unittest.TestCase):
    def setUp(self):
        self.client = fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)
        self.store = PostingStore(self.client)
        self.admin = IndexAdmin(self.client, self.store)
        self.store.index_page("A", {"the": 5, "cat": 2})
        self.store.index_page("B", {"the": 3, "a:b": 1})

    def test_key_enumeration(self):
        self.assertEqual(self.admin.url_set_keys(), {"URLSet:the", "URLSet:cat", "URLSet:a:b"})
        self.assertEqual(self.admin.term_counter_keys(), {"TermCounter:A", "TermCounter:B"})

    def test_term_set_matches_non_empty_url_sets(self):
        terms = self.admin.term_set()
        self.assertEqual(terms, {"the", "cat", "a:b"})
        for term in terms:
            self.assertTrue(self.store.get_urls(term))

    def test_url_set(self):
        self.assertEqual(self.admin.url_set(), {"A", "B"})

    def test_empty_term_key_decodes_to_empty_term(self):
        self.client.sadd("URLSet:", "C")
        self.assertIn("", self.admin.term_set())

    def test_other_keys_are_not_enumerated(self):
        self.client.set("unrelated", "1")
        self.assertNotIn("unrelated", self.admin.url_set_keys() | self.admin.term_counter_keys())

    def test_delete_url_sets(self):
        counters_before = self.admin.term_counter_keys()

        self.assertEqual(self.admin.delete_url_sets(), 3)

        self.assertEqual(self.admin.term_set(), set())
        self.assertEqual(self.admin.term_counter_keys(), counters_before)

    def test_delete_term_counters(self):
        self.assertEqual(self.admin.delete_term_counters(), 2)

        self.assertFalse(self.store.is_indexed("A"))
        self.assertFalse(self.store.is_indexed("B"))
        self.assertEqual(self.admin.term_set(), {"the", "cat", "a:b"})

    def test_delete_all_keys(self):
        self.client.set("unrelated", "1")
        self.assertEqual(self.admin.delete_all_keys(), 6)
        self.assertEqual(self.client.dbsize(), 0)

    def test_delete_on_empty_index(self):
        self.admin.delete_all_keys()
        self.assertEqual(self.admin.delete_url_sets(), 0)
        self.assertEqual(self.admin.delete_term_counters(), 0)

    def test_print_index(self):
        buffer = io.StringIO()
        self.admin.print_index(Console(file=buffer, width=120, color_system=None))
        output = buffer.getvalue()

        for expected in ["the", "cat", "A", "B", "5", "3", "2"]:
            self.assertIn(expected, output)

    def test_default_store_is_created(self):
        admin = IndexAdmin(self.client)
        self.assertIsInstance(admin.store, PostingStore)
        self.assertEqual(admin.store.get_counts("the"), {"A": 5, "B": 3})


class TestCodecErrorsThroughAdmin(unittest.TestCase):
    def test_url_from_foreign_key(self):
        client = fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)
        admin = IndexAdmin(client)
        with patch.object(admin, "term_counter_keys", return_value={"bogus"}):
            with self.assertRaises(CorruptDataError):
                admin.url_set()


if __name__ == "__main__":
    unittest.main()
