"""Tests for the disk-backed resume store."""

import asyncio

import pytest

from jobboard.storage.resumes import ResumeRejected, ResumeRejectedReason

DOC = "application/msword"


class TestValidate:
    @pytest.mark.parametrize("content, content_type, reason", [
        (b"", "application/pdf", ResumeRejectedReason.EMPTY),
        (b"plain", "text/plain", ResumeRejectedReason.BAD_TYPE),
        (b"plain", None, ResumeRejectedReason.BAD_TYPE),
    ])
    def test_rejections(self, store, content, content_type, reason):
        with pytest.raises(ResumeRejected) as exc_info:
            store.validate(content, content_type)
        assert exc_info.value.reason is reason

    def test_size_ceiling_is_inclusive(self, store):
        store.validate(b"x" * store.max_size, DOC)
        with pytest.raises(ResumeRejected):
            store.validate(b"x" * (store.max_size + 1), DOC)


class TestStore:
    def test_store_and_resolve(self, store):
        locator = asyncio.run(store.store(b"doc bytes", DOC, "My CV.doc"))

        assert locator.startswith("/uploads/resume-")
        assert locator.endswith(".doc")
        assert store.resolve(locator).read_bytes() == b"doc bytes"

    def test_unknown_extension_falls_back_to_type(self, store):
        locator = asyncio.run(store.store(b"%PDF", "application/pdf", "resume.exe"))
        assert locator.endswith(".pdf")

    def test_same_content_stored_twice(self, store):
        first = asyncio.run(store.store(b"%PDF", "application/pdf", "a.pdf"))
        second = asyncio.run(store.store(b"%PDF", "application/pdf", "a.pdf"))
        assert first != second

    def test_discard(self, store):
        locator = asyncio.run(store.store(b"%PDF", "application/pdf", "a.pdf"))
        asyncio.run(store.discard(locator))

        assert store.resolve(locator) is None
        asyncio.run(store.discard(locator))

    @pytest.mark.parametrize("locator", [
        "/uploads/../secret.pdf",
        "/uploads/sub/file.pdf",
        "/elsewhere/file.pdf",
        "",
    ])
    def test_resolve_rejects_foreign_locators(self, store, locator):
        assert store.resolve(locator) is None
