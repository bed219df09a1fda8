"""
Transaction search on top of the REST ``/txs`` endpoint.

The backend can neither OR two conditions nor be trusted with its height
range filter, and this engine does not paginate. So:

- sender-or-recipient searches run two queries and merge them by hash,
- every result set is re-filtered by height on the client,
- a result set larger than one page is an error, never silently truncated.
"""
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from ._rate_limited_log import rate_limited_log
from .config import get_search_limit
from .exceptions import ResultSetTooLargeError
from .models import (
    IndexedTx, SearchByHeightQuery, SearchByIdQuery, SearchBySentFromOrToQuery,
    SearchByTagsQuery, SearchTxFilter, SearchTxQuery
)
from .normalize import indexed_tx_from_rest, parse_uint

logger = logging.getLogger(__name__)

Terms = List[Tuple[str, Any]]


def filter_by_height(txs: List[IndexedTx], min_height: int, max_height: int) -> List[IndexedTx]:
    """Keep transactions with ``min_height <= height <= max_height``, in order"""
    return [tx for tx in txs if min_height <= tx.height <= max_height]


def merge_sent_and_received(sent: List[IndexedTx], received: List[IndexedTx]) -> List[IndexedTx]:
    """
    All sent transactions first, then the received ones not already sent.

    Both input orders are preserved.
    """
    sent_hashes = {tx.hash for tx in sent}
    return list(sent) + [tx for tx in received if tx.hash not in sent_hashes]


class TxSearchEngine:
    """
    Runs search queries against a ``/txs`` style backend.
    """

    def __init__(
        self,
        txs_query: Callable[[Terms], Dict[str, Any]],
        limit: Optional[int] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Args:
            txs_query: Callable sending the query terms to the backend and
                returning the decoded response body
            limit: Page size requested from the backend (default 100)
            logger: Optional logger instance
        """
        self.txs_query = txs_query
        self.limit = limit if limit is not None else get_search_limit()
        self.logger = logger or logging.getLogger(__name__)

    def _query(self, terms: Terms) -> List[IndexedTx]:
        result = self.txs_query(terms + [("limit", self.limit)])
        pages = parse_uint(result.get("page_total") or 0, "page_total")
        if pages > 1:
            total = parse_uint(result.get("total_count") or 0, "total_count")
            raise ResultSetTooLargeError(total_count=total, limit=self.limit)
        return [indexed_tx_from_rest(item) for item in result.get("txs") or []]

    def search(self, query: SearchTxQuery, filter: Optional[SearchTxFilter] = None) -> List[IndexedTx]:
        """
        Search transactions.

        Args:
            query: Exactly one of the search query variants
            filter: Optional height range

        Returns:
            Matching transactions in backend order, without duplicates

        Raises:
            ResultSetTooLargeError: If any backend call has more than one page
            DecodeError: If a response holds a malformed height
            TypeError: If ``query`` is not a known query variant
        """
        filter = filter or SearchTxFilter()
        min_height = filter.min_height
        max_height = filter.max_height

        if max_height < min_height:
            return []

        range_terms: Terms = [("tx.minheight", min_height), ("tx.maxheight", max_height)]

        if isinstance(query, SearchByIdQuery):
            txs = self._query([("tx.hash", query.id)])
        elif isinstance(query, SearchByHeightQuery):
            if query.height < min_height or query.height > max_height:
                txs = []
            else:
                txs = self._query([("tx.height", query.height)])
        elif isinstance(query, SearchBySentFromOrToQuery):
            sent = self._query(
                [("message.module", "bank"), ("message.sender", query.sent_from_or_to)] + range_terms
            )
            received = self._query(
                [("message.module", "bank"), ("transfer.recipient", query.sent_from_or_to)] + range_terms
            )
            txs = merge_sent_and_received(sent, received)
        elif isinstance(query, SearchByTagsQuery):
            txs = self._query([(tag.key, tag.value) for tag in query.tags] + range_terms)
        else:
            raise TypeError(f"Unknown query type: {type(query).__name__}")

        filtered = filter_by_height(txs, min_height, max_height)
        if len(filtered) != len(txs):
            rate_limited_log(
                "Backend returned transactions outside the requested height range; dropped them",
                level="warning",
                logger_instance=self.logger,
            )
        return filtered
