from .errors import (
    DecodeFailedError,
    FetchCancelledError,
    FetchError,
    InvalidSourceError,
    RetrievalFailedError,
)
from .fetcher import ConcurrentFetcher, fetch_pair
from .models import FetchResult, Record

__all__ = [
    "ConcurrentFetcher",
    "DecodeFailedError",
    "FetchCancelledError",
    "FetchError",
    "FetchResult",
    "InvalidSourceError",
    "Record",
    "RetrievalFailedError",
    "fetch_pair",
]
