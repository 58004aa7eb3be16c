"""
Unit tests for sentry file storage.

Tests partial writes, hashing and I/O failure reporting.
"""
import hashlib
import os

import pytest

from steamauth.core.exceptions import SentryIOError
from steamauth.core.sentry import SentryStore, sentry_path_for


def sha1(data: bytes) -> bytes:
    return hashlib.sha1(data).digest()


class TestSentryPath:
    """Tests for sentry path derivation."""
    
    def test_path_derived_from_username(self, tmp_path):
        assert sentry_path_for("alice", tmp_path) == tmp_path / "sentry-alice.bin"
    
    def test_same_username_same_path(self, tmp_path):
        a = SentryStore.for_account("bob", tmp_path)
        b = SentryStore.for_account("bob", tmp_path)
        
        assert a.path == b.path


class TestSentryStore:
    """Tests for SentryStore."""
    
    def test_existing_hash_none_without_file(self, sentry_store):
        """No file means no hash to report."""
        assert sentry_store.existing_hash() is None
        assert not sentry_store.exists()
    
    def test_first_write_creates_file(self, sentry_store):
        result = sentry_store.apply_partial_write(0, b'\x01\x02')
        
        assert sentry_store.exists()
        assert result.file_size == 2
        assert result.sentry_hash == sha1(b'\x01\x02')
        assert sentry_store.path.read_bytes() == b'\x01\x02'
    
    def test_duplicate_write_is_idempotent(self, sentry_store):
        """Replaying the same chunk gives the same size and hash."""
        first = sentry_store.apply_partial_write(0, b'abcdef')
        second = sentry_store.apply_partial_write(0, b'abcdef')
        
        assert first == second
    
    def test_hash_covers_whole_file(self, sentry_store):
        """Hash after a second chunk is over both chunks, not just the new one."""
        sentry_store.apply_partial_write(0, b'hello ')
        result = sentry_store.apply_partial_write(6, b'world')
        
        assert result.file_size == 11
        assert result.sentry_hash == sha1(b'hello world')
        assert result.sentry_hash != sha1(b'world')
    
    def test_overlapping_write(self, sentry_store):
        sentry_store.apply_partial_write(0, b'AAAAAAAA')
        result = sentry_store.apply_partial_write(2, b'BB')
        
        assert sentry_store.path.read_bytes() == b'AABBAAAA'
        assert result.file_size == 8
        assert result.sentry_hash == sha1(b'AABBAAAA')
    
    def test_write_past_end_extends_with_zeros(self, sentry_store):
        result = sentry_store.apply_partial_write(4, b'\xff')
        
        assert result.file_size == 5
        assert sentry_store.path.read_bytes() == b'\x00\x00\x00\x00\xff'
    
    def test_out_of_order_chunks(self, sentry_store):
        """Offset addressing makes chunk order irrelevant."""
        sentry_store.apply_partial_write(3, b'def')
        result = sentry_store.apply_partial_write(0, b'abc')
        
        assert result.sentry_hash == sha1(b'abcdef')
    
    def test_existing_hash_tracks_current_content(self, sentry_store):
        """Hash is recomputed from disk, never cached."""
        sentry_store.apply_partial_write(0, b'first')
        assert sentry_store.existing_hash() == sha1(b'first')
        
        sentry_store.path.write_bytes(b'changed outside')
        assert sentry_store.existing_hash() == sha1(b'changed outside')
    
    def test_existing_hash_matches_write_result(self, sentry_store):
        for offset, chunk in [(0, b'12'), (2, b'34'), (1, b'xx'), (10, b'z')]:
            result = sentry_store.apply_partial_write(offset, chunk)
            assert sentry_store.existing_hash() == result.sentry_hash
    
    def test_creates_missing_directory(self, tmp_path):
        store = SentryStore.for_account("carol", tmp_path / "nested" / "dir")
        
        store.apply_partial_write(0, b'x')
        
        assert store.path.read_bytes() == b'x'
    
    def test_negative_offset_rejected(self, sentry_store):
        with pytest.raises(SentryIOError):
            sentry_store.apply_partial_write(-1, b'x')
    
    def test_write_failure_raises_sentry_error(self, tmp_path):
        """A directory in place of the file cannot be written."""
        store = SentryStore(tmp_path / "blocked")
        os.mkdir(store.path)
        
        with pytest.raises(SentryIOError) as exc_info:
            store.apply_partial_write(0, b'data')
        
        assert exc_info.value.path == str(store.path)
        assert exc_info.value.errno is not None
    
    def test_read_failure_raises_sentry_error(self, tmp_path):
        store = SentryStore(tmp_path / "blocked")
        os.mkdir(store.path)
        
        with pytest.raises(SentryIOError):
            store.existing_hash()
