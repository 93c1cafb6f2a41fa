"""Error Hierarchy — verifies codes, categories and the error envelope."""

from uuid import uuid4

from feature_history.core.errors import (
    DatabaseError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    FeatureHistoryError,
    InvalidLiveValueError,
    ReferenceResolutionError,
    ResourceNotFoundError,
    VersionConflictError,
)


def test_all_errors_share_base():
    for err in (
        ReferenceResolutionError([uuid4()]),
        InvalidLiveValueError("no actor", "who_updated_id"),
        VersionConflictError("fv@1"),
        ResourceNotFoundError("FeatureValueVersion", "fv@1"),
        DatabaseError("boom", "query"),
    ):
        assert isinstance(err, FeatureHistoryError)


def test_reference_resolution_message_lists_ids():
    a, b = uuid4(), uuid4()
    err = ReferenceResolutionError([a, b])
    assert str(a) in err.message and str(b) in err.message
    assert err.category == ErrorCategory.RESOURCE_NOT_FOUND


def test_database_error_is_critical():
    assert DatabaseError("boom", "commit").severity == ErrorSeverity.CRITICAL


def test_to_response_envelope():
    ctx = ErrorContext(feature_value_id="fv", version=3)
    body = InvalidLiveValueError("bad", "version", ctx).to_response()["error"]

    assert body["code"] == "INVALID_LIVE_VALUE"
    assert body["category"] == "validation"
    assert body["severity"] == "error"
    assert body["context"] == {"feature_value_id": "fv", "version": 3}
