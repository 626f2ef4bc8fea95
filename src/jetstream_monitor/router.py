"""
Event router — classifies each envelope and reports its fields to the sink.

Dispatch is on ``kind`` and, for commits, on the exact collection name via a
fixed table. Anything outside the table falls through to a generic ``other``
report carrying the raw record.
"""

from typing import Any, Callable, Optional

from pydantic import BaseModel, ValidationError

from jetstream_monitor.errors import ExtractionError
from jetstream_monitor.models.envelope import CommitEvent, Envelope
from jetstream_monitor.models.events import Collection, EventLabel, Kind
from jetstream_monitor.models.record import PostRecord, SubjectRecord
from jetstream_monitor.sinks import EventSink

Extractor = Callable[[CommitEvent], dict[str, Any]]


def _decode_record(commit: CommitEvent, model: type[BaseModel]) -> Any:
    if commit.record is None:
        raise ExtractionError(commit.collection, "commit has no record")
    try:
        return model.model_validate(commit.record)
    except ValidationError as e:
        raise ExtractionError(commit.collection, f"invalid record: {e.error_count()} validation error(s)") from e


def extract_post(commit: CommitEvent) -> dict[str, Any]:
    record = _decode_record(commit, PostRecord)
    return {
        "message": EventLabel.POST,
        "type": EventLabel.POST,
        "text": record.text,
        "rkey": commit.rkey,
        "embed": record.embed,
    }


def _strong_ref(label: str) -> Extractor:
    """like / repost: the subject is a post, reported as uri + cid."""
    def extract(commit: CommitEvent) -> dict[str, Any]:
        record = _decode_record(commit, SubjectRecord)
        return {
            "message": label,
            "type": label,
            "post_uri": record.subject.uri,
            "post_cid": record.subject.cid,
            "rkey": commit.rkey,
        }
    return extract


def _graph_ref(label: str) -> Extractor:
    """follow / block: only the subject uri is reported."""
    def extract(commit: CommitEvent) -> dict[str, Any]:
        record = _decode_record(commit, SubjectRecord)
        return {
            "message": label,
            "type": label,
            "subject": record.subject.uri,
            "rkey": commit.rkey,
        }
    return extract


def extract_threadgate(commit: CommitEvent) -> dict[str, Any]:
    return {"message": EventLabel.THREADGATE, "type": EventLabel.THREADGATE, "rkey": commit.rkey}


def _passthrough(label: str) -> Extractor:
    def extract(commit: CommitEvent) -> dict[str, Any]:
        return {"message": label, "type": label, "rkey": commit.rkey, "data": commit.record}
    return extract


def extract_other(commit: CommitEvent) -> dict[str, Any]:
    return {
        "message": EventLabel.OTHER,
        "type": EventLabel.OTHER,
        "collection": commit.collection,
        "rkey": commit.rkey,
        "data": commit.record,
    }


COLLECTION_EXTRACTORS: dict[str, Extractor] = {
    Collection.POST: extract_post,
    Collection.LIKE: _strong_ref(EventLabel.LIKE),
    Collection.REPOST: _strong_ref(EventLabel.REPOST),
    Collection.FOLLOW: _graph_ref(EventLabel.FOLLOW),
    Collection.BLOCK: _graph_ref(EventLabel.BLOCK),
    Collection.THREADGATE: extract_threadgate,
    Collection.PROFILE: _passthrough(EventLabel.PROFILE),
    Collection.FEED_GENERATOR: _passthrough(EventLabel.FEED_GENERATOR),
}


class Router:
    """Routes decoded envelopes to the sink. Holds no state between calls."""

    def __init__(self, sink: EventSink):
        self._sink = sink

    def route(self, envelope: Envelope) -> None:
        if envelope.kind == Kind.COMMIT:
            fields = self._commit_fields(envelope)
        elif envelope.kind == Kind.IDENTITY:
            fields = self._identity_fields(envelope)
        elif envelope.kind == Kind.ACCOUNT:
            fields = self._account_fields(envelope)
        else:
            fields = None
        if fields is not None:
            self._sink.record(fields)

    def _commit_fields(self, envelope: Envelope) -> Optional[dict[str, Any]]:
        commit = envelope.commit
        if commit is None:
            return None
        extract = COLLECTION_EXTRACTORS.get(commit.collection, extract_other)
        try:
            extracted = extract(commit)
        except ExtractionError:
            # Dropped without a report: a record missing its subject (or any
            # record that fails to decode) leaves no trace in the output.
            return None
        message = extracted.pop("message")
        return {"message": message, "did": envelope.did, "op": commit.operation, **extracted}

    def _identity_fields(self, envelope: Envelope) -> Optional[dict[str, Any]]:
        identity = envelope.identity
        if identity is None:
            return None
        return {
            "message": EventLabel.HANDLE_UPDATE,
            "did": envelope.did,
            "handle": identity.handle,
            "seq": identity.seq,
        }

    def _account_fields(self, envelope: Envelope) -> Optional[dict[str, Any]]:
        account = envelope.account
        if account is None:
            return None
        return {
            "message": EventLabel.ACCOUNT_UPDATE,
            "did": envelope.did,
            "active": account.active,
            "seq": account.seq,
        }
