"""Tests for the in-memory preview registry."""

from modules.verification.interfaces import IPreviewRegistry
from modules.verification.previews import InMemoryPreviewRegistry


class TestInMemoryPreviewRegistry:
    def test_create_and_release(self):
        """Created previews should be live until released."""
        registry = InMemoryPreviewRegistry()
        ref = registry.create(b"data", "image/png")

        assert ref.startswith("preview:image/png:")
        assert registry.live_count == 1

        registry.release(ref)
        assert registry.live_count == 0

    def test_double_release_counts_once(self):
        """A second release of the same handle should leave the count alone."""
        registry = InMemoryPreviewRegistry()
        keep = registry.create(b"a", "image/png")
        ref = registry.create(b"b", "image/png")

        registry.release(ref)
        registry.release(ref)

        assert registry.live_count == 1
        registry.release(keep)
        assert registry.live_count == 0

    def test_unique_handles(self):
        """Each create should return a new handle."""
        registry = InMemoryPreviewRegistry()
        assert registry.create(b"a", "image/png") != registry.create(b"a", "image/png")

    def test_release_unknown_is_harmless(self):
        """Releasing an unknown handle should not raise."""
        registry = InMemoryPreviewRegistry()
        registry.release("preview:missing")
        assert registry.live_count == 0

    def test_implements_interface(self):
        """Should satisfy IPreviewRegistry."""
        assert isinstance(InMemoryPreviewRegistry(), IPreviewRegistry)
