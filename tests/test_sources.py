# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for attachment byte sources."""

import pytest

from mime_mailer import InvalidArgumentError
from mime_mailer.sources import FilesystemSource, decode_base64, resolve_source


class TestDecodeBase64:
    """Tests for base64 storage paths."""

    def test_valid(self):
        assert decode_base64("SGVsbG8=") == b"Hello"

    def test_missing_padding(self):
        assert decode_base64("SGVsbG8") == b"Hello"

    def test_invalid(self):
        with pytest.raises(InvalidArgumentError, match="Invalid base64"):
            decode_base64("not*base64")


class TestFilesystemSource:
    """Tests for filesystem sources and path traversal protection."""

    def test_absolute_path(self, tmp_path):
        file_path = tmp_path / "a.txt"
        file_path.write_bytes(b"abc")
        assert FilesystemSource(str(file_path))() == b"abc"

    def test_relative_to_base_dir(self, tmp_path):
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "a.txt").write_bytes(b"abc")
        source = FilesystemSource("sub/a.txt", base_dir=tmp_path)
        assert source.path == (tmp_path / "sub" / "a.txt").resolve()
        assert source() == b"abc"

    def test_traversal_rejected(self, tmp_path):
        with pytest.raises(InvalidArgumentError, match="Path traversal"):
            FilesystemSource("../etc/passwd", base_dir=tmp_path)

    def test_absolute_outside_base_dir_rejected(self, tmp_path):
        base = tmp_path / "base"
        base.mkdir()
        with pytest.raises(InvalidArgumentError, match="Path traversal"):
            FilesystemSource(str(tmp_path / "other.txt"), base_dir=base)

    def test_relative_without_base_dir(self):
        with pytest.raises(InvalidArgumentError, match="not allowed"):
            FilesystemSource("a.txt")

    def test_empty_path(self):
        with pytest.raises(InvalidArgumentError, match="Empty path"):
            FilesystemSource("")

    def test_missing_file_raises_on_read(self, tmp_path):
        source = FilesystemSource("missing.txt", base_dir=tmp_path)
        with pytest.raises(FileNotFoundError):
            source()


def test_resolve_source_dispatch(tmp_path):
    assert resolve_source("base64:SGk=") == b"Hi"
    assert isinstance(resolve_source("x.txt", base_dir=tmp_path), FilesystemSource)
