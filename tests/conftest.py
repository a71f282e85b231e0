from pathlib import Path
from unittest.mock import Mock

import pytest
from pytest_mock import MockerFixture

import bright
from bright import config

from .mocks.device_mock import MockDevice

_WAIT = bright._wait


@pytest.fixture(autouse=True)
def no_wait(mocker: MockerFixture) -> Mock:
    '''Skip the pauses between fade steps, while still honouring stop events'''
    return mocker.patch.object(
        bright, '_wait', Mock(side_effect=lambda seconds, stop=None: stop is not None and stop.is_set())
    )


@pytest.fixture
def original_wait():
    '''The actual `_wait` function, pre mocking'''
    return _WAIT


@pytest.fixture
def device() -> MockDevice:
    return MockDevice()


@pytest.fixture
def backlight(device: MockDevice) -> bright.Backlight:
    return bright.Backlight(device)


@pytest.fixture
def sysfs(tmp_path: Path) -> Path:
    '''
    A fake `/sys/class/backlight` directory:
    - `acpi_video0`: brightness of 0, so discovery should skip it
    - `broken`: unparsable brightness
    - `intel_backlight`: 10% brightness, max of 120000
    - `nomax`: no `max_brightness` file
    - `README`: a file, not a device
    '''
    devices = {
        'acpi_video0': ('0\n', '15\n'),
        'broken': ('abc\n', '100\n'),
        'intel_backlight': ('12000\n', '120000\n'),
        'nomax': ('500\n', None)
    }
    for name, (brightness, max_brightness) in devices.items():
        folder = tmp_path / name
        folder.mkdir()
        (folder / 'brightness').write_text(brightness)
        if max_brightness is not None:
            (folder / 'max_brightness').write_text(max_brightness)
    (tmp_path / 'README').write_text('not a device')
    return tmp_path


@pytest.fixture
def patch_root(monkeypatch: pytest.MonkeyPatch, sysfs: Path) -> Path:
    monkeypatch.setattr(config, 'BACKLIGHT_ROOT', str(sysfs))
    return sysfs
