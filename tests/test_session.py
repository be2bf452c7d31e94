"""Tests for the per-session upload holder."""

import io
from unittest.mock import Mock

import pytest

from launchlens.core.exceptions import MalformedInputError, MissingUploadError
from launchlens.services.session import UploadSession


PRE_CSV = b"id,review_text,rating\n1,meh,2\n2,ok,3\n"
POST_CSV = b"id,review_text,rating\n3,great,5\n"


def test_upload_returns_receipt():
    session = UploadSession()
    receipt = session.upload(io.BytesIO(PRE_CSV), io.BytesIO(POST_CSV))

    assert receipt.success
    assert (receipt.pre_launch_count, receipt.post_launch_count) == (2, 1)
    assert receipt.message == "Files uploaded successfully. Ready for analysis."
    assert session.ready


def test_parse_error_names_the_side():
    session = UploadSession()
    with pytest.raises(MalformedInputError) as exc_info:
        session.upload(PRE_CSV, b"id,rating\n1,2,3\n")

    assert "Failed to parse post-launch CSV" in str(exc_info.value)
    assert exc_info.value.line == 2
    assert not session.ready


def test_oversized_upload_rejected():
    session = UploadSession(max_upload_bytes=10)
    with pytest.raises(MalformedInputError, match="pre-launch"):
        session.upload(io.BytesIO(PRE_CSV), io.BytesIO(POST_CSV))


def test_analyze_requires_both_uploads():
    session = UploadSession()
    service = Mock()
    with pytest.raises(MissingUploadError, match="Please upload CSV files first"):
        session.analyze(service)
    service.analyze.assert_not_called()


def test_header_only_upload_is_not_ready():
    session = UploadSession()
    session.upload(b"id,rating\n", POST_CSV)
    with pytest.raises(MissingUploadError):
        session.analyze(Mock())


def test_analyze_delegates_to_service():
    session = UploadSession()
    session.upload(PRE_CSV, POST_CSV)
    service = Mock()

    assert session.analyze(service) is service.analyze.return_value
    pre, post = service.analyze.call_args.args
    assert [r.id for r in pre] == ["1", "2"]
    assert [r.id for r in post] == ["3"]


def test_sessions_do_not_share_state():
    first, second = UploadSession(), UploadSession()
    first.upload(PRE_CSV, POST_CSV)

    assert first.ready
    assert not second.ready
    first.clear()
    assert not first.ready
