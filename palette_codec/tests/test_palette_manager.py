#!/usr/bin/env python3
"""
Tests for palette caching and recent palette tracking
"""

import pytest

from palette_codec.exceptions import FormatError, PaletteLoadError
from palette_codec.file_system import DiskFileSystem, MemoryFileSystem
from palette_codec.palette import Palette
from palette_codec.palette_manager import PaletteManager
from palette_codec.settings_manager import SettingsManager


@pytest.fixture
def manager(disk_fs, settings):
    return PaletteManager(disk_fs, settings)


class TestPaletteManager:
    """Test loading through the manager"""

    @pytest.mark.integration
    def test_load_is_cached(self, manager, lmp_file):
        first = manager.load(lmp_file.name)
        second = manager.load(lmp_file.name.upper().replace("LMP", "lmp"))

        assert first is second
        assert manager.cached_paths() == ["palette.lmp"]

    @pytest.mark.integration
    def test_clear_cache(self, manager, lmp_file):
        first = manager.load(lmp_file.name)
        manager.clear_cache()

        second = manager.load(lmp_file.name)

        assert first is not second
        assert first == second

    @pytest.mark.integration
    def test_cache_disabled(self, disk_fs, settings, lmp_file):
        settings.set("preferences.cache_palettes", False)
        manager = PaletteManager(disk_fs, settings)

        manager.load(lmp_file.name)

        assert manager.cached_paths() == []

    @pytest.mark.integration
    def test_recent_palettes(self, manager, lmp_file, pcx_file):
        manager.load(lmp_file.name)
        manager.load(pcx_file.name)
        manager.load(lmp_file.name)

        assert manager.recent_palettes() == [lmp_file.name, pcx_file.name]

    @pytest.mark.integration
    def test_failed_load_is_not_cached(self, manager):
        with pytest.raises(PaletteLoadError):
            manager.load("missing.lmp")
        with pytest.raises(FormatError):
            manager.load("palette.tga")

        assert manager.cached_paths() == []
        assert manager.recent_palettes() == []

    @pytest.mark.integration
    def test_default_palette(self, manager, pcx_file, gradient_palette_data):
        assert manager.default_palette() is None

        manager.set_default_palette(pcx_file.name)

        assert manager.default_palette() == Palette(gradient_palette_data)

    @pytest.mark.unit
    def test_memory_file_system(self, settings, red_palette_data):
        manager = PaletteManager(MemoryFileSystem({"palette.lmp": red_palette_data}), settings)

        assert manager.load("palette.lmp").color(0) == (255, 0, 0, 255)

    @pytest.mark.unit
    def test_default_file_system_uses_size_setting(self, settings):
        settings.set("max_palette_file_size", 4096)

        manager = PaletteManager(settings=settings)

        assert isinstance(manager.file_system, DiskFileSystem)
        assert manager.file_system.max_file_size == 4096


class TestRecentPalettes:
    """Test that recent palettes stay in memory"""

    @pytest.mark.unit
    def test_recent_limit(self, settings, red_palette_data):
        settings.set("preferences.max_recent_files", 3)
        files = {f"p{i}.lmp": red_palette_data for i in range(5)}
        manager = PaletteManager(MemoryFileSystem(files), settings)

        for path in files:
            manager.load(path)

        assert manager.recent_palettes() == ["p4.lmp", "p3.lmp", "p2.lmp"]

    @pytest.mark.unit
    def test_load_writes_nothing_to_disk(self, tmp_path, monkeypatch, red_palette_data):
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.chdir(tmp_path)
        settings = SettingsManager(tmp_path / "settings.json")
        manager = PaletteManager(MemoryFileSystem({"p.lmp": red_palette_data}), settings)

        manager.load("p.lmp")
        manager.set_default_palette("p.lmp")

        assert list(tmp_path.iterdir()) == []
        assert settings.get("default_palette") == "p.lmp"

    @pytest.mark.unit
    def test_managers_do_not_share_recents(self, settings, red_palette_data):
        fs = MemoryFileSystem({"p.lmp": red_palette_data})
        first = PaletteManager(fs, settings)
        second = PaletteManager(fs, settings)

        first.load("p.lmp")

        assert second.recent_palettes() == []
