import argparse
import logging
import pprint
import signal
import sys
import threading
import traceback
from typing import List, Optional

import bright
from bright import _debug, config
from bright.exceptions import BrightError
from bright.helpers import parse_duration, percentage

PRESETS = (
    ('low', ['lo'], 5, 'set brightness to low'),
    ('mid', ['medium'], 50, 'set brightness to mid'),
    ('high', ['hi', 'max'], 100, 'set brightness to max')
)


def _fade(backlight: bright.Backlight, args: argparse.Namespace, target) -> int:
    backlight.fade(target, args.duration or config.DEFAULT_DURATION)
    return 0


def cmd_preset(backlight: bright.Backlight, args: argparse.Namespace) -> int:
    return _fade(backlight, args, args.preset)


def cmd_target(backlight: bright.Backlight, args: argparse.Namespace) -> int:
    return _fade(backlight, args, args.target)


def cmd_inc(backlight: bright.Backlight, args: argparse.Namespace) -> int:
    backlight.inc_brightness(args.step, duration=args.duration)
    return 0


def cmd_dec(backlight: bright.Backlight, args: argparse.Namespace) -> int:
    backlight.dec_brightness(args.step, duration=args.duration)
    return 0


def cmd_pulse(backlight: bright.Backlight, args: argparse.Namespace) -> int:
    stop = threading.Event()

    def handle_signal(signum, _frame):
        logging.getLogger(__name__).debug(f'received signal {signum}, stopping pulse')
        stop.set()

    previous = {s: signal.signal(s, handle_signal) for s in (signal.SIGINT, signal.SIGTERM)}
    try:
        backlight.pulse(args.amplitude, stop=stop)
    finally:
        for s, handler in previous.items():
            signal.signal(s, handler)
    return 0


def cmd_get(backlight: bright.Backlight, args: argparse.Namespace) -> int:
    level = backlight.get_level()
    name = backlight.device.name
    if args.verbose:
        name += f' ({getattr(backlight.device, "path", "?")})'
    print(f'{name}: {backlight.level_to_percent(level)}% ({level}/{backlight.max_level})')
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    backlights = bright.list_backlights()
    if len(backlights) == 0:
        print('No backlights detected')
    for i in backlights:
        msg = f'{i["name"]}: {i["brightness"]}/{i["max_brightness"]}'
        if args.verbose:
            msg += f' ({i["path"]})'
        print(msg)
    return 0


def cmd_info(args: argparse.Namespace) -> int:
    pprint.pprint(_debug.info(name=args.device))
    return 0


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='bright', description='Set the screen brightness')
    parser.add_argument(
        '-d', '--duration', metavar='DURATION',
        help=f'set a fade duration, eg: 500ms or 1.5s (default: {config.DEFAULT_DURATION},'
        f' or {config.NUDGE_DURATION} for inc/dec)'
    )
    parser.add_argument(
        '-t', '--target', metavar='PERCENT',
        help='set target brightness level in percent. Cannot be combined with a command'
    )
    parser.add_argument('--device', help='the backlight device to use, eg: intel_backlight', metavar='NAME')
    parser.add_argument(
        '--max-level', type=int, metavar='LEVEL',
        help='override the maximum raw brightness level of the device'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='log debug messages and detailed errors')
    parser.add_argument('-V', '--version', action='store_true', help='print the current version')

    commands = parser.add_subparsers(dest='command', metavar='COMMAND')
    for name, aliases, value, help_text in PRESETS:
        preset = commands.add_parser(name, aliases=aliases, help=help_text)
        preset.set_defaults(func=cmd_preset, preset=value)

    for name, alias, func, help_text in (
        ('dec', '-', cmd_dec, 'decrease screen brightness'),
        ('inc', '+', cmd_inc, 'increase screen brightness')
    ):
        nudge = commands.add_parser(name, aliases=[alias], help=help_text)
        nudge.add_argument(
            '-s', '--step', type=int, default=config.NUDGE_STEP, metavar='PERCENT',
            help=f'the percentage to change by (default: {config.NUDGE_STEP})'
        )
        nudge.set_defaults(func=func)

    pulse = commands.add_parser('pulse', help='pulse effect, runs until interrupted')
    pulse.add_argument(
        '-a', '--amplitude', type=int, default=config.PULSE_AMPLITUDE, metavar='PERCENT',
        help=f'how far above and below the current brightness to pulse (default: {config.PULSE_AMPLITUDE})'
    )
    pulse.set_defaults(func=cmd_pulse)

    commands.add_parser('get', help='print the current brightness').set_defaults(func=cmd_get)
    commands.add_parser('list', help='list all backlight devices').set_defaults(func=cmd_list, standalone=True)
    commands.add_parser('info', help='print debugging information').set_defaults(func=cmd_info, standalone=True)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = make_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.version:
        print(bright.__version__)
        return 0

    if args.max_level is not None and args.max_level <= 0:
        parser.error('--max-level must be a positive integer')

    if args.command is not None and args.target is not None:
        parser.error(f'-t/--target cannot be used with the {args.command!r} command')

    if args.command is None:
        if args.target is None:
            print('Please set a valid target brightness.')
            return 0
        args.func = cmd_target

    try:
        # check user input before any device is touched
        if args.duration is not None:
            parse_duration(args.duration)
        if args.target is not None:
            percentage(args.target, current=0)

        if getattr(args, 'standalone', False):
            return args.func(args)

        backlight = bright.get_backlight(name=args.device, max_level=args.max_level)
        return args.func(backlight, args)
    except BrightError as e:
        if args.verbose:
            traceback.print_exc()
        print(f'{parser.prog}: error: {e}', file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
