# ======================== IMPORTS ========================
from term_index.errors import CorruptDataError
from term_index.constants import URL_SET_PREFIX, TERM_COUNTER_PREFIX


# ======================== CLASSES ========================
class KeyCodec:
    """
    Maps terms and URLs to store keys and back. Every key built or parsed by the index goes through here.
    """
    URL_SET_PATTERN     : str = URL_SET_PREFIX + "*"
    TERM_COUNTER_PATTERN: str = TERM_COUNTER_PREFIX + "*"

    @staticmethod
    def url_set_key(term: str) -> str:
        return URL_SET_PREFIX + term

    @staticmethod
    def term_counter_key(url: str) -> str:
        return TERM_COUNTER_PREFIX + url

    @staticmethod
    def term_from_key(key: str) -> str:
        # Only the prefix is stripped, terms may contain ':'
        if not key.startswith(URL_SET_PREFIX):
            raise CorruptDataError(f"Not a URLSet key: {key!r}")
        return key[len(URL_SET_PREFIX):]

    @staticmethod
    def url_from_key(key: str) -> str:
        if not key.startswith(TERM_COUNTER_PREFIX):
            raise CorruptDataError(f"Not a TermCounter key: {key!r}")
        return key[len(TERM_COUNTER_PREFIX):]
