# ======================== IMPORTS ========================
import os
import re
import yaml
import logging
from typing import Iterable
from collections import defaultdict
from rich.logging import RichHandler

CONFIG_ENV_VAR: str = "TERM_INDEX_CONFIG"
CONFIG_FILE_PATH: str = "config.yaml" # Relative to the working directory


# =================== UTILITY FUNCTIONS ===================
def load_config(path: str | None = None) -> dict:
    '''
    Returns the configuration from config.yaml file as a dictionary.
    The path can be overridden with the TERM_INDEX_CONFIG environment variable. A missing file gives an empty config.
    '''
    path = path or os.getenv(CONFIG_ENV_VAR, CONFIG_FILE_PATH)
    if not os.path.exists(path):
        return {}
    with open(path, 'r') as f:
        config = yaml.safe_load(f)
    return config or {}


def setup_logging(level: str | None = None) -> None:
    '''
    Configures the root logger once with a rich handler. The level defaults to logging.level from config.yaml.
    '''
    level = level or load_config().get("logging", {}).get("level", "INFO")
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)]
    )


def get_word_freq_dist(text_blocks: Iterable[str]) -> dict:
    '''
    Returns the frequency distribution of words across the given text blocks. (Omits punctuations and is case insensitive)
    '''
    freq: dict = defaultdict(int)

    for text in text_blocks:
        text = re.sub(r"[^\w\s]", " ", text) # Remove all the punctuations from the text
        for word in text.split():
            freq[word.lower()] += 1 # Case insenitive
    return dict(freq)
