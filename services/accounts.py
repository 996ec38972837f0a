# services/accounts.py
"""Cheap shape check for ledger account identifiers (shard.realm.num)."""
import re

ACCOUNT_ID_PATTERN = re.compile(r"^[0-9]+\.[0-9]+\.[0-9]+$")


def is_valid_account_format(account_id) -> bool:
     """
     True when account_id is a string of three dot-separated non-negative
     integers, e.g. "0.0.717".

     This is only the shape check. The ledger client's own parser is the
     authoritative check and runs after this one.
     """
     if not isinstance(account_id, str):
          return False
     return ACCOUNT_ID_PATTERN.fullmatch(account_id) is not None
