"""Tests for the member directory."""

import gc

import pytest

from spatial.directory import AuxiliaryProxy, HerdDirectory, LiveHandle, MemberReference


class TestRegistration:
    """Test registering and removing handles."""

    def test_register_and_resolve(self):
        """Registered handles resolve by name."""
        directory = HerdDirectory()
        handle = LiveHandle("A", position=(1, 2, 3))
        directory.register(handle)

        reference = directory.resolve("A")
        assert reference == MemberReference("A")
        assert directory.try_resolve(reference) is handle
        assert handle.position == (1.0, 2.0, 3.0)

    def test_unknown_name(self):
        """Unknown names do not resolve."""
        assert HerdDirectory().resolve("missing") is None

    def test_empty_name_rejected(self):
        """Handles need a name."""
        with pytest.raises(ValueError):
            HerdDirectory().register(LiveHandle("  "))

    def test_unregister(self, directory):
        """Unregistering forgets the name."""
        assert directory.unregister("A")
        assert "A" not in directory
        assert not directory.unregister("A")
        assert len(directory) == 2


class TestReferenceResolution:
    """Test reference to handle resolution."""

    def test_inactive_handle(self, directory):
        """Deactivated handles no longer resolve."""
        reference = directory.resolve("A")
        directory.get("A").active = False
        assert directory.try_resolve(reference) is None
        assert not reference.is_valid

    def test_replaced_handle(self, directory):
        """A reference to a replaced handle is stale."""
        old = directory.resolve("A")
        directory.register(LiveHandle("A", position=(9, 9, 9)))

        assert directory.try_resolve(old) is None
        assert directory.try_resolve(directory.resolve("A")).position == (9.0, 9.0, 9.0)

    def test_reference_does_not_keep_handle_alive(self):
        """References hold handles weakly."""
        directory = HerdDirectory()
        reference = directory.register(LiveHandle("A"))
        directory.unregister("A")
        gc.collect()
        assert reference.live is None

    def test_plain_reference(self, directory):
        """A reference without a handle never resolves."""
        assert directory.try_resolve(MemberReference("A")) is None


class TestAuxiliaryProxy:
    """Test proxy state."""

    def test_gazing(self):
        """A proxy gazes while it has a target."""
        proxy = AuxiliaryProxy()
        assert not proxy.is_gazing
        proxy.gaze_target = "A"
        assert proxy.is_gazing
