"""
Jetstream envelope — the outer unit of every inbound frame.

Field names follow the wire format. Unknown fields are ignored so newer
upstream versions keep decoding.
"""

from typing import Any, Optional
from pydantic import BaseModel, StrictBool, StrictInt


class CommitEvent(BaseModel):
    rev: str = ""
    operation: str = ""
    collection: str = ""
    rkey: str = ""
    record: Optional[Any] = None  # Undecoded; shape depends on collection
    cid: Optional[str] = None


class IdentityEvent(BaseModel):
    did: str = ""
    handle: str = ""
    seq: StrictInt = 0
    time: str = ""


class AccountEvent(BaseModel):
    active: StrictBool = False
    did: str = ""
    seq: StrictInt = 0
    time: str = ""


class Envelope(BaseModel):
    did: str = ""
    time_us: StrictInt = 0
    kind: str = ""  # "commit" | "identity" | "account"
    commit: Optional[CommitEvent] = None
    identity: Optional[IdentityEvent] = None
    account: Optional[AccountEvent] = None
