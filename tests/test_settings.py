from ikbdemu.settings import SECTOR_SIZE, NVSettings, Settings


def test_fresh_store_gets_defaults(tmp_path):
    path = tmp_path / "settings.bin"
    nv = NVSettings(path)
    assert nv.settings == Settings(version=1, mouse_speed=0, mouse_enabled=0, joy_device=0)
    assert path.stat().st_size == SECTOR_SIZE


def test_round_trip_through_file(tmp_path):
    path = tmp_path / "settings.bin"
    nv = NVSettings(path)
    nv.settings.mouse_speed = -7
    nv.settings.mouse_enabled = 1
    nv.settings.joy_device = 2
    nv.write()

    again = NVSettings(path)
    assert again.settings == nv.settings


def test_invalid_version_is_reset(tmp_path):
    path = tmp_path / "settings.bin"
    path.write_bytes(bytes([7, 3, 1, 1]) + b"\x00" * (SECTOR_SIZE - 4))
    nv = NVSettings(path)
    assert nv.settings == Settings()
    assert NVSettings(path).settings == Settings()


def test_in_memory_store_keeps_writes():
    nv = NVSettings()
    nv.settings.mouse_speed = 8
    nv.write()
    nv.settings.mouse_speed = 0
    nv.read()
    assert nv.settings.mouse_speed == 8


def test_settings_bytes_round_trip():
    settings = Settings(version=1, mouse_speed=-3, mouse_enabled=1, joy_device=3)
    data = settings.to_bytes()
    assert len(data) == 4
    assert data[0] == 1
    assert Settings.from_bytes(data) == settings


def test_written_sector_layout():
    nv = NVSettings()
    nv.settings.mouse_enabled = 1
    nv.write()
    assert len(nv.sector) == SECTOR_SIZE
    assert bytes(nv.sector[:4]) == nv.settings.to_bytes()
    assert nv.sector[-1] == 0xFF