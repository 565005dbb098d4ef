"""Tests for the bounded content reader."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from fmd.errors import FileReadError, FrontmatterTooLargeError
from fmd.infrastructure.reader import read_file_content, read_metadata

WriteFile = Callable[[str, str], Path]


def _numbered(count: int) -> str:
    return "".join(f"line {i}\n" for i in range(1, count + 1))


class TestBoundedRead:
    def test_stops_after_head_lines(self, write_file: WriteFile) -> None:
        path = write_file("a.md", _numbered(30))
        content = read_file_content(path, 10)
        assert content.splitlines() == [f"line {i}" for i in range(1, 11)]

    def test_short_file_read_whole(self, write_file: WriteFile) -> None:
        path = write_file("a.md", "one\ntwo\n")
        assert read_file_content(path, 10) == "one\ntwo"

    def test_empty_file(self, write_file: WriteFile) -> None:
        path = write_file("a.md", "")
        assert read_file_content(path) == ""

    def test_crlf_stripped_in_bounded_mode(self, tmp_path: Path) -> None:
        path = tmp_path / "a.md"
        path.write_bytes(b"---\r\ntitle: A\r\n---\r\nbody\r\n")
        assert read_file_content(path) == "---\ntitle: A\n---\nbody"

    def test_long_frontmatter_read_past_head(self, write_file: WriteFile) -> None:
        keys = "".join(f"key{i}: v{i}\n" for i in range(20))
        path = write_file("a.md", f"---\n{keys}author: Late Author\n---\nbody\nmore\n")
        content = read_file_content(path, 10)
        lines = content.splitlines()
        assert "author: Late Author" in lines
        assert lines[-1] == "---"

    def test_frontmatter_over_ceiling(self, write_file: WriteFile) -> None:
        path = write_file("big.md", "---\n" + _numbered(10))
        with pytest.raises(FrontmatterTooLargeError) as exc_info:
            read_file_content(path, 2, max_frontmatter_lines=5)
        assert exc_info.value.path == path
        assert "big.md" in str(exc_info.value)

    def test_closed_frontmatter_at_ceiling_is_fine(self, write_file: WriteFile) -> None:
        path = write_file("a.md", "---\na: 1\nb: 2\n---\nbody\n")
        content = read_file_content(path, 1, max_frontmatter_lines=4)
        assert content == "---\na: 1\nb: 2\n---"

    def test_unterminated_frontmatter_reads_to_eof(self, write_file: WriteFile) -> None:
        path = write_file("a.md", "---\ntitle: Open\n" + _numbered(3))
        content = read_file_content(path, 2)
        assert content.endswith("line 3")

    def test_delimiter_later_in_file_does_not_open_block(self, write_file: WriteFile) -> None:
        path = write_file("a.md", "# Title\n---\n" + _numbered(20))
        assert len(read_file_content(path, 5).splitlines()) == 5


class TestFullText:
    def test_verbatim(self, tmp_path: Path) -> None:
        path = tmp_path / "a.md"
        path.write_bytes(b"a\r\nb\n\nc")
        assert read_file_content(path, 1, full_text=True) == "a\r\nb\n\nc"

    def test_ignores_frontmatter_ceiling(self, write_file: WriteFile) -> None:
        path = write_file("a.md", "---\n" + _numbered(10))
        content = read_file_content(path, full_text=True, max_frontmatter_lines=2)
        assert "line 10" in content


class TestReadErrors:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileReadError, match="missing.md"):
            read_file_content(tmp_path / "missing.md")

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "binary.md"
        path.write_bytes(b"\xff\xfe\x00garbage")
        with pytest.raises(FileReadError):
            read_file_content(path)

    def test_too_large_is_a_read_error(self) -> None:
        assert issubclass(FrontmatterTooLargeError, FileReadError)


class TestReadMetadata:
    def test_inline_tag_beyond_head(self, write_file: WriteFile) -> None:
        path = write_file("late.md", _numbered(14) + "tags: #important\n")
        bounded = read_metadata(path, 10)
        full = read_metadata(path, 10, full_text=True)
        assert "#important" not in bounded.raw_content
        assert "#important" in full.raw_content

    def test_frontmatter_parsed(self, write_file: WriteFile) -> None:
        path = write_file("a.md", "---\ntitle: Guide\ntags: [rust]\n---\n# Body\n")
        metadata = read_metadata(path)
        assert metadata.frontmatter is not None
        assert metadata.frontmatter.title == "Guide"
        assert metadata.has_title("body")
