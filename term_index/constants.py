# ======================== IMPORTS ========================
import os
from enum import Enum
from dotenv import load_dotenv
from term_index.utils import load_config


# ======================= CONSTANTS =======================
# Environment variables (loaded first so TERM_INDEX_CONFIG can live in .env)
load_dotenv()
REDIS_PASSWORD              : str | None = os.getenv("REDIS_PASSWORD")

# Configurations from config.yaml
config = load_config()
REDIS_HOST                  : str   = config.get("redis", {}).get("host", "localhost")
REDIS_PORT                  : int   = config.get("redis", {}).get("port", 6379)
REDIS_DB                    : int   = config.get("redis", {}).get("db", 0)
REDIS_SOCKET_TIMEOUT        : float = config.get("redis", {}).get("socket_timeout", 5.0)
REDIS_SOCKET_CONNECT_TIMEOUT: float = config.get("redis", {}).get("socket_connect_timeout", 5.0)

# Key space shared with every deployment using the same store
URL_SET_PREFIX              : str   = "URLSet:"
TERM_COUNTER_PREFIX         : str   = "TermCounter:"


# ========================= ENUMS =========================
class StatusCode(Enum):
    SUCCESS          : int = 0
    CONNECTION_FAILED: int = 1000
    STORE_ERROR      : int = 1001
    INVALID_INPUT    : int = 1002
    CORRUPT_DATA     : int = 1003
    CONCURRENT_UPDATE: int = 1004
    FETCH_FAILED     : int = 1005

    UNKNOWN_ERROR    : int = 9999
