from typing import Callable, List, Optional

from bright.helpers import BrightnessDevice


class MockDevice(BrightnessDevice):
    '''An in-memory brightness device that records every write'''

    def __init__(self, level: int = 60000, max_level: int = 120000, name: str = 'mock_backlight'):
        self.level = level
        self.max_level = max_level
        self.name = name
        self.reads = 0
        self.writes: List[int] = []
        self.read_error: Optional[Exception] = None
        self.write_error: Optional[Exception] = None
        self.fail_after = 0
        '''number of successful writes before `write_error` is raised'''
        self.on_write: Optional[Callable[[int], None]] = None

    def read_level(self) -> int:
        if self.read_error is not None:
            raise self.read_error
        self.reads += 1
        return self.level

    def write_level(self, level: int):
        if self.write_error is not None and len(self.writes) >= self.fail_after:
            raise self.write_error
        self.writes.append(level)
        self.level = level
        if self.on_write is not None:
            self.on_write(level)
