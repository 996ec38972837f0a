# services/mirror_service.py
"""
Mirror node client - read-only access to the ledger's transaction index.

GET {base}/api/v1/transactions?account.id=<id>&limit=<n>&order=desc

Records come back most recent first. Memos arrive base64 encoded in
memo_base64 and are decoded to text before matching.
"""
import base64
import binascii
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import requests

from errors import VerificationUnavailable

logger = logging.getLogger(__name__)

TRANSACTIONS_PATH = "/api/v1/transactions"


def decode_memo(record: Dict[str, Any]) -> str:
     """
     Return the memo of a mirror node transaction record as text.

     memo_base64 wins over a plain memo field; a record with neither has
     an empty memo.

     Raises:
          VerificationUnavailable: memo_base64 is not valid base64.
     """
     encoded = record.get("memo_base64")
     if encoded:
          try:
               raw = base64.b64decode(encoded, validate=True)
          except (binascii.Error, ValueError, TypeError) as exc:
               raise VerificationUnavailable("Malformed memo in transaction feed") from exc
          return raw.decode("utf-8", errors="replace")
     memo = record.get("memo")
     return memo if isinstance(memo, str) else ""


class MirrorNodeClient:
     """Paginated, bounded reader over the mirror node transactions feed."""

     def __init__(
          self,
          base_url: str,
          page_limit: int = 50,
          max_pages: int = 1,
          timeout: float = 10.0,
          session: Optional[requests.Session] = None,
     ) -> None:
          self._base_url = base_url.rstrip("/")
          self._page_limit = page_limit
          self._max_pages = max_pages
          self._timeout = timeout
          self._session = session or requests.Session()

     def transactions_for_account(self, account_id: str) -> List[Dict[str, Any]]:
          """
          Fetch the most recent transactions touching account_id.

          Follows links.next for at most max_pages pages. Older matching
          transactions beyond that window are not returned.

          Raises:
               VerificationUnavailable: feed unreachable, timed out, non-2xx,
                    or the body is not the expected shape.
          """
          url = f"{self._base_url}{TRANSACTIONS_PATH}"
          params: Optional[Dict[str, Any]] = {
               "account.id": account_id,
               "limit": self._page_limit,
               "order": "desc",
          }
          records: List[Dict[str, Any]] = []

          for _ in range(self._max_pages):
               body = self._get_json(url, params)
               page = body.get("transactions")
               if not isinstance(page, list) or not all(isinstance(item, dict) for item in page):
                    logger.warning("Mirror node returned malformed transactions for %s", account_id)
                    raise VerificationUnavailable()
               records.extend(page)

               links = body.get("links") or {}
               next_link = links.get("next") if isinstance(links, dict) else None
               if not next_link:
                    break
               url = urljoin(self._base_url + "/", next_link)
               params = None

          return records

     def _get_json(self, url: str, params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
          try:
               response = self._session.get(url, params=params, timeout=self._timeout)
               response.raise_for_status()
               body = response.json()
          except requests.RequestException as exc:
               logger.warning("Mirror node request to %s failed: %s", url, exc)
               raise VerificationUnavailable() from exc
          except ValueError as exc:
               logger.warning("Mirror node returned invalid JSON from %s", url)
               raise VerificationUnavailable() from exc

          if not isinstance(body, dict):
               logger.warning("Mirror node returned a non-object body from %s", url)
               raise VerificationUnavailable()
          return body
