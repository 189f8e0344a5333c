"""Unit tests for desktop session classification"""

import pytest

from gslaunch.display.desktop import DesktopVariant, detect
from conftest import fake_which


class TestDetect:
    """Test the first-match decision order"""

    def test_kde_marker_wins(self):
        env = {"KDE_FULL_SESSION": "true", "XDG_CURRENT_DESKTOP": "GNOME"}
        assert detect(env, fake_which(["xrandr"])) is DesktopVariant.KDE

    @pytest.mark.parametrize("key", ["XDG_CURRENT_DESKTOP", "XDG_SESSION_DESKTOP"])
    def test_gnome_from_either_signal(self, key):
        assert detect({key: "GNOME"}, fake_which([])) is DesktopVariant.GNOME

    def test_gnome_in_desktop_list(self):
        assert detect({"XDG_CURRENT_DESKTOP": "ubuntu:GNOME"}, fake_which([])) is DesktopVariant.GNOME

    def test_other_desktop_with_xrandr(self):
        env = {"XDG_CURRENT_DESKTOP": "XFCE"}
        assert detect(env, fake_which(["xrandr"])) is DesktopVariant.GENERIC_X11

    def test_gnome_match_is_exact(self):
        env = {"XDG_CURRENT_DESKTOP": "GNOME-Flashback-ish"}
        assert detect(env, fake_which([])) is DesktopVariant.UNKNOWN

    def test_nothing_available(self):
        assert detect({}, fake_which([])) is DesktopVariant.UNKNOWN

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("KDE_FULL_SESSION", "true")
        assert detect() is DesktopVariant.KDE
