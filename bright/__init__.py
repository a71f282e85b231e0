import logging
import platform
import threading
import time
from dataclasses import dataclass, field
from typing import List, Optional

from ._version import __author__, __version__  # noqa: F401
from . import config
from .exceptions import (BrightError, DeviceDiscoveryError,  # noqa: F401
                         DeviceReadError, DeviceWriteError,
                         InvalidDurationError, InvalidPercentError,
                         format_exc)
from .helpers import (BrightnessDevice, level_steps, level_to_percent,
                      parse_duration, percent_to_level, percentage)
from .linux import SysFiles, find_backlight, list_backlights  # noqa: F401
from .types import Duration, IntPercentage, Percentage, RawLevel


_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())


def _wait(seconds: float, stop: Optional[threading.Event] = None) -> bool:
    '''
    Sleep for `seconds`, waking early if `stop` is set.

    Returns:
        Whether `stop` has been set
    '''
    if stop is None:
        if seconds > 0:
            time.sleep(seconds)
        return False
    if seconds > 0:
        return stop.wait(seconds)
    return stop.is_set()


@dataclass
class Backlight():
    '''
    Controls the brightness of a single backlight device.

    Example:
        ```python
        import bright

        backlight = bright.get_backlight()

        # fade to 50% over the default duration
        backlight.fade(50)

        # fade to 100% over 2 seconds
        backlight.fade(100, '2s')

        # nudge the brightness up by 10%
        backlight.inc_brightness(10)
        ```
    '''
    device: BrightnessDevice
    '''The device that is read from and written to'''

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self):
        self._logger = _logger.getChild(self.__class__.__name__).getChild(self.device.name)

    @property
    def max_level(self) -> RawLevel:
        return self.device.max_level

    @property
    def tolerance(self) -> RawLevel:
        '''`.config.TOLERANCE` scaled to the max level of this device'''
        return config.TOLERANCE * self.max_level // config.DEFAULT_MAX_LEVEL

    def percent_to_level(self, value: IntPercentage) -> RawLevel:
        '''See `.helpers.percent_to_level`'''
        return percent_to_level(value, self.max_level)

    def level_to_percent(self, level: RawLevel) -> IntPercentage:
        '''See `.helpers.level_to_percent`'''
        return level_to_percent(level, self.max_level)

    def get_level(self) -> RawLevel:
        '''
        Returns:
            The current raw level of the device

        Raises:
            DeviceReadError: if the device cannot be read
        '''
        return self.device.read_level()

    def set_level(self, level: RawLevel):
        '''
        Write a raw level to the device. The level is not clamped.

        Raises:
            DeviceWriteError: if the device cannot be written to
        '''
        self.device.write_level(level)

    def _clamp(self, level: RawLevel) -> RawLevel:
        return min(self.max_level, max(0, level))

    def get_brightness(self) -> IntPercentage:
        '''
        Returns:
            The current brightness of the device as a percentage
        '''
        return self.level_to_percent(self.get_level())

    def set_brightness(self, value: Percentage, force: bool = False) -> RawLevel:
        '''
        Immediately set the brightness, without fading

        Args:
            value (.types.Percentage): the brightness percentage to set the device to.
                Relative values (eg: `'+10'`) are resolved against the current brightness
            force: allow the brightness to be set below `.config.LOWER_BOUND`.
                This is disabled by default because a brightness of 0 will often
                turn off the backlight

        Returns:
            The raw level that was written
        '''
        value = percentage(
            value,
            current=self.get_brightness,
            lower_bound=0 if force else config.LOWER_BOUND
        )
        level = self._clamp(self.percent_to_level(value))
        self.set_level(level)
        return level

    def fade(
        self,
        target: Percentage,
        duration: Optional[Duration] = None,
        stop: Optional[threading.Event] = None
    ) -> RawLevel:
        '''
        Gradually change the brightness to a set value, blocking until complete.

        The change is split into one step every `.config.STEP_INTERVAL` seconds
        for the length of `duration`. Stepping finishes once the level is within
        `Backlight.tolerance` of the target, after which the exact target level is
        written if `.config.EXACT_FINISH` is set.
        A duration shorter than one step interval writes the target level once.

        Args:
            target (.types.Percentage): the brightness percentage to end up on.
                Clamped between 0 and 100
            duration (.types.Duration): how long the fade should take.
                Defaults to `.config.DEFAULT_DURATION`
            stop: if this event is set, the fade will stop before its next write

        Returns:
            The last raw level written. If nothing was written (the fade was stopped
            before it started) the level read at the start of the fade is returned

        Raises:
            InvalidDurationError: if `duration` cannot be parsed. Nothing is read or written
            InvalidPercentError: if `target` cannot be parsed. Nothing is read or written
            DeviceReadError: if the current level cannot be read. Nothing is written
            DeviceWriteError: if a write fails. The device keeps the last level written
        '''
        seconds = parse_duration(config.DEFAULT_DURATION if duration is None else duration)
        # validate before touching the device
        percentage(target, current=0)

        current = self.get_level()
        target = percentage(target, current=lambda: self.level_to_percent(current))
        target_level = self.percent_to_level(target)

        step_count = int(round(seconds / config.STEP_INTERVAL, 9))
        self._logger.debug(
            f'fade {current}->{target_level} ({target}%) over {seconds}s in {step_count} steps')

        last = current
        next_change_start_time = time.time()
        for level in level_steps(current, target_level, step_count, tolerance=self.tolerance):
            if stop is not None and stop.is_set():
                self._logger.debug(f'fade stopped at {last}')
                return last
            last = self._clamp(level)
            self.set_level(last)

            if step_count < 1:
                return last

            # `STEP_INTERVAL` is the intended time between the start of each brightness change
            next_change_start_time += config.STEP_INTERVAL
            if _wait(next_change_start_time - time.time(), stop):
                self._logger.debug(f'fade stopped at {last}')
                return last

        if config.EXACT_FINISH and last != target_level:
            if stop is not None and stop.is_set():
                return last
            last = self._clamp(target_level)
            self.set_level(last)
        return last

    def _nudge(
        self,
        percent: Optional[IntPercentage],
        sign: int,
        duration: Optional[Duration],
        stop: Optional[threading.Event]
    ) -> RawLevel:
        percent = percentage(config.NUDGE_STEP if percent is None else percent, strict=True)
        seconds = parse_duration(config.NUDGE_DURATION if duration is None else duration)

        target = self.get_brightness() + sign * percent
        # a floor only applies when decreasing
        target = min(100, max(config.LOWER_BOUND, target) if sign < 0 else target)
        return self.fade(target, seconds, stop=stop)

    def inc_brightness(
        self,
        percent: Optional[IntPercentage] = None,
        duration: Optional[Duration] = None,
        stop: Optional[threading.Event] = None
    ) -> RawLevel:
        '''
        Increase the brightness by a percentage, fading quickly. Never goes above 100%.

        Args:
            percent: how much to increase by. Defaults to `.config.NUDGE_STEP`
            duration (.types.Duration): defaults to `.config.NUDGE_DURATION`
            stop: see `Backlight.fade`

        Returns:
            The last raw level written
        '''
        return self._nudge(percent, 1, duration, stop)

    def dec_brightness(
        self,
        percent: Optional[IntPercentage] = None,
        duration: Optional[Duration] = None,
        stop: Optional[threading.Event] = None
    ) -> RawLevel:
        '''
        Decrease the brightness by a percentage, fading quickly.
        Never goes below `.config.LOWER_BOUND`.

        Args:
            percent: how much to decrease by. Defaults to `.config.NUDGE_STEP`
            duration (.types.Duration): defaults to `.config.NUDGE_DURATION`
            stop: see `Backlight.fade`

        Returns:
            The last raw level written
        '''
        return self._nudge(percent, -1, duration, stop)

    def pulse(
        self,
        amplitude: Optional[IntPercentage] = None,
        stop: Optional[threading.Event] = None,
        cycles: Optional[int] = None,
        blocking: bool = True
    ) -> Optional[threading.Thread]:
        '''
        Repeatedly fade up and down around the current brightness until stopped.

        Each cycle fades to `amplitude` percent above the starting brightness,
        then to `amplitude` percent below it, then rests for `.config.PULSE_REST`.
        Levels are kept between `.config.LOWER_BOUND` and 100%.

        Args:
            amplitude: how far above and below the starting brightness to fade.
                Defaults to `.config.PULSE_AMPLITUDE`
            stop: setting this event ends the pulse. No writes happen afterwards
            cycles: the number of cycles to run. `None` runs until `stop` is set
            blocking: run in the current thread and block until finished.
                If `False`, a daemonic thread is started and returned. Its `stop`
                attribute holds the event that will end the pulse. If the pulse
                fails, the error is stored in the thread's `exception` attribute
                (otherwise `None`) once the thread has finished

        Returns:
            The thread running the pulse if `blocking` is `False`, otherwise None

        Raises:
            InvalidPercentError: if `amplitude` is not between 0 and 100
            DeviceReadError: if the starting brightness cannot be read (blocking only)
            DeviceWriteError: if a write fails (blocking only)

        Example:
            ```python
            import threading
            import bright

            stop = threading.Event()
            thread = bright.get_backlight().pulse(25, stop=stop, blocking=False)
            ...
            stop.set()
            thread.join()
            if thread.exception is not None:
                raise thread.exception
            ```
        '''
        amplitude = percentage(config.PULSE_AMPLITUDE if amplitude is None else amplitude, strict=True)
        if stop is None:
            stop = threading.Event()

        if not blocking:
            def run():
                try:
                    self._pulse(amplitude, stop, cycles)
                except Exception as e:
                    self._logger.error(f'pulse failed - {format_exc(e)}')
                    thread.exception = e  # type: ignore[attr-defined]

            thread = threading.Thread(target=run, daemon=True)
            thread.stop = stop  # type: ignore[attr-defined]
            thread.exception = None  # type: ignore[attr-defined]
            thread.start()
            return thread

        self._pulse(amplitude, stop, cycles)
        return None

    def _pulse(self, amplitude: IntPercentage, stop: threading.Event, cycles: Optional[int]):
        baseline = self.get_brightness()
        high = min(100, baseline + amplitude)
        low = max(config.LOWER_BOUND, baseline - amplitude)
        self._logger.debug(f'pulse {low}%<->{high}% around {baseline}%, cycles={cycles}')

        count = 0
        while not stop.is_set() and (cycles is None or count < cycles):
            self.fade(high, config.PULSE_DURATION, stop=stop)
            self.fade(low, config.PULSE_DURATION, stop=stop)
            count += 1
            if _wait(config.PULSE_REST, stop):
                break
        self._logger.debug(f'pulse ended after {count} cycles')


@config.default_params
def get_backlight(
    name: Optional[str] = None,
    root: Optional[str] = None,
    max_level: Optional[RawLevel] = None
) -> Backlight:
    '''
    Find a backlight device and return a `Backlight` to control it.
    See `.linux.find_backlight` for the arguments.

    Raises:
        DeviceDiscoveryError: if no usable device is found

    Example:
        ```python
        import bright

        backlight = bright.get_backlight()
        print(backlight.get_brightness())
        ```
    '''
    return Backlight(find_backlight(name=name, root=root, max_level=max_level))


def list_backlight_names(root: Optional[str] = None) -> List[str]:
    '''
    List the names of all devices in the backlight directory

    Example:
        ```python
        import bright
        names = bright.list_backlight_names()
        # eg: ['acpi_video0', 'intel_backlight']
        ```
    '''
    return [i['name'] for i in list_backlights(root=root)]


if platform.system() != 'Linux':
    _logger.warning(
        f'package imported on unsupported platform ({platform.system()})')
