from unittest.mock import Mock

import pytest
import requests

import chunkscribe.audio_processor as ap
from chunkscribe.exceptions import FetchError, InputError


@pytest.mark.parametrize("length,chunk_size", [(0, 4), (1, 4), (4, 4), (9, 4), (10, 1024 * 1024)])
def test_split_into_segments_covers_buffer(length, chunk_size):
    data = bytes(range(256)) * (length // 256 + 1)
    data = data[:length]
    segments = ap.split_into_segments(data, chunk_size)
    assert len(segments) == -(-length // chunk_size)
    assert b"".join(s.data for s in segments) == data
    assert [s.ordinal for s in segments] == list(range(len(segments)))
    for s in segments[:-1]:
        assert len(s) == chunk_size
    if segments:
        assert 1 <= len(segments[-1]) <= chunk_size


def test_split_empty_buffer():
    assert ap.split_into_segments(b"", 1024) == []


def test_split_single_small_segment():
    segments = ap.split_into_segments(b"0123456789", 1024 * 1024)
    assert len(segments) == 1
    assert segments[0].data == b"0123456789"


def test_split_rejects_non_positive_chunk_size():
    with pytest.raises(ValueError):
        ap.split_into_segments(b"abc", 0)


def test_validate_audio_url():
    assert ap.validate_audio_url(" https://example.com/a.mp3 ") == "https://example.com/a.mp3"
    with pytest.raises(InputError, match="Missing"):
        ap.validate_audio_url(None)
    with pytest.raises(InputError, match="Missing"):
        ap.validate_audio_url("  ")
    with pytest.raises(InputError, match="Invalid"):
        ap.validate_audio_url("ftp://example.com/a.mp3")
    with pytest.raises(InputError, match="Invalid"):
        ap.validate_audio_url("not a url")


def test_fetch_audio_follows_redirects(monkeypatch):
    get = Mock(return_value=Mock(ok=True, status_code=200, content=b"\x00\x01"))
    monkeypatch.setattr(ap.requests, "get", get)
    assert ap.fetch_audio("https://example.com/a.mp3", timeout=5) == b"\x00\x01"
    get.assert_called_once_with("https://example.com/a.mp3", allow_redirects=True, timeout=5)


def test_fetch_audio_non_success_status(monkeypatch):
    monkeypatch.setattr(
        ap.requests, "get", lambda *a, **k: Mock(ok=False, status_code=404, content=b"")
    )
    with pytest.raises(FetchError) as excinfo:
        ap.fetch_audio("https://example.com/missing.mp3")
    assert excinfo.value.status == 404
    assert "404" in str(excinfo.value)


def test_fetch_audio_network_failure(monkeypatch):
    def boom(*a, **k):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(ap.requests, "get", boom)
    with pytest.raises(FetchError) as excinfo:
        ap.fetch_audio("https://example.com/a.mp3")
    assert isinstance(excinfo.value.cause, requests.ConnectionError)
