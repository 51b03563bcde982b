# ACPIVIEW: ACPI Table Inspection and Validation
# Copyright (c) 2024, ACPIVIEW Authors
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU General Public License
# as published by the Free Software Foundation; Version 2.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301, USA.
#

"""
Logging functions

All output of acpiview goes through one named logger. Messages are prefixed
by level, coloured on a terminal, and optionally redirected to a log file.

usage:
    >>> logger().log('Table Statistics:')
    >>> logger().log(banner, color='BLUE')
    >>> print_buffer_bytes(table, 16)
"""
import logging
import os
import string
import sys
from enum import Enum
from typing import Optional

LOGGER_NAME = 'ACPIVIEW_LOGGER'


class level(Enum):
    DEBUG = 10
    HELPER = 11
    HAL = 12
    VERBOSE = 13
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


LEVEL_PREFIX = {
    level.DEBUG.value: '[*] [DEBUG] ',
    level.HELPER.value: '[*] [HELPER] ',
    level.HAL.value: '[*] [HAL] ',
    level.VERBOSE.value: '[*] [VERBOSE] ',
    level.WARNING.value: 'WARNING: ',
    level.ERROR.value: 'ERROR: ',
}

LEVEL_COLOR = {
    level.DEBUG.value: 'BLUE',
    level.HELPER.value: 'GREY',
    level.HAL.value: 'GREY',
    level.VERBOSE.value: 'GREY',
    level.WARNING.value: 'YELLOW',
    level.ERROR.value: 'RED',
    level.CRITICAL.value: 'PURPLE',
}

COLORS = {
    'GREY': '\033[90m',
    'RED': '\033[91m',
    'GREEN': '\033[92m',
    'YELLOW': '\033[93m',
    'BLUE': '\033[94m',
    'PURPLE': '\033[95m',
    'CYAN': '\033[96m',
    'WHITE': '\033[97m',
}
COLOR_END = '\033[0m'


def colors_enabled() -> bool:
    # https://no-color.org/, and never colour a redirected output
    try:
        is_atty = sys.stdout.isatty()
    except AttributeError:
        is_atty = False
    return is_atty and os.getenv('NO_COLOR') is None


class acpiviewFilter(logging.Filter):
    """Attaches the level prefix and the requested colour to each record"""

    def filter(self, record):
        record.additional = LEVEL_PREFIX.get(record.levelno, '')
        # log() passes the colour as the only record argument
        requested = record.args[0] if record.args else None
        record.color = requested if requested in COLORS else LEVEL_COLOR.get(record.levelno)
        record.args = tuple()
        return True


class acpiviewStreamFormatter(logging.Formatter):
    def __init__(self, fmt: str, use_colors: bool) -> None:
        super().__init__(fmt)
        self.use_colors = use_colors

    def format(self, record):
        text = super().format(record)
        if self.use_colors and record.color in COLORS:
            return f'{COLORS[record.color]}{text}{COLOR_END}'
        return text


class Logger:
    """Class for logging to console and text file."""

    VERBOSE: bool = False
    HAL: bool = False
    DEBUG: bool = False

    def __init__(self):
        self.logfile = None
        self.logstream = logging.StreamHandler(sys.stdout)
        self.logstream.setFormatter(acpiviewStreamFormatter('%(additional)s%(message)s', colors_enabled()))
        self.logFormatter = logging.Formatter('%(additional)s%(message)s')
        self.acpiviewLogger = logging.getLogger(LOGGER_NAME)
        self.acpiviewLogger.setLevel(level.INFO.value)
        if not self.acpiviewLogger.handlers:
            self.acpiviewLogger.addHandler(self.logstream)
        if not self.acpiviewLogger.filters:
            self.acpiviewLogger.addFilter(acpiviewFilter(LOGGER_NAME))
        self.acpiviewLogger.propagate = False
        for lvl in (level.HELPER, level.HAL, level.VERBOSE):
            logging.addLevelName(lvl.value, lvl.name)

    def log(self, text: str, level: level = level.INFO, color: Optional[str] = None) -> None:
        """Sends plain text to logging."""
        self.acpiviewLogger.log(level.value, text, color)

    def log_verbose(self, text: str) -> None:
        self.log(text, level.VERBOSE)

    def log_hal(self, text: str) -> None:
        self.log(text, level.HAL)

    def log_helper(self, text: str) -> None:
        self.log(text, level.HELPER)

    def log_debug(self, text: str) -> None:
        self.log(text, level.DEBUG)

    def log_error(self, text: str) -> None:
        self.log(text, level.ERROR)

    def log_warning(self, text: str) -> None:
        self.log(text, level.WARNING)

    def set_log_level(self, verbose: bool, hal: bool, debug: bool, vverbose: bool) -> None:
        """Switches only ever turn a level on; the most detailed one wins."""
        self.VERBOSE = self.VERBOSE or verbose or vverbose
        self.HAL = self.HAL or hal or vverbose
        self.DEBUG = self.DEBUG or debug or vverbose
        if self.DEBUG:
            self.acpiviewLogger.setLevel(level.DEBUG.value)
        elif self.HAL:
            self.acpiviewLogger.setLevel(level.HAL.value)
        elif self.VERBOSE:
            self.acpiviewLogger.setLevel(level.VERBOSE.value)
        else:
            self.acpiviewLogger.setLevel(level.INFO.value)

    def set_log_file(self, name: str) -> None:
        """Sends the output to the file instead of the console; an empty name restores the console."""
        self.close()
        if not name:
            return
        try:
            self.logfile = logging.FileHandler(filename=name, mode='a')
        except OSError:
            print(f'WARNING: Could not open log file: {name}')
            return
        self.logfile.setFormatter(self.logFormatter)
        self.acpiviewLogger.addHandler(self.logfile)
        self.acpiviewLogger.removeHandler(self.logstream)

    def close(self) -> None:
        """Closes the log file, if any, and logs to the console again."""
        if self.logfile is None:
            return
        try:
            self.acpiviewLogger.removeHandler(self.logfile)
            self.logfile.close()
        except OSError:
            print('WARNING: Could not close log file')
        finally:
            self.logfile = None
            self.acpiviewLogger.addHandler(self.logstream)


_logger = Logger()


def logger() -> Logger:
    """Returns a Logger instance."""
    return _logger


##################################################################################
# Hex dump functions
##################################################################################


def dump_buffer_bytes(arr, length=8, offset=0):
    """Dumps the buffer (bytes, bytearray) with ASCII"""
    output = []
    for line_start in range(0, len(arr), length):
        chunk = arr[line_start:line_start + length]
        hex_part = ''.join(f'{c:02X} ' for c in chunk).ljust(length * 3)
        ascii_part = ''.join(chr(c) if chr(c) in string.printable and chr(c) not in string.whitespace else ' ' for c in chunk)
        output.append(f'{offset + line_start:08X} : {hex_part}| {ascii_part}')
    return '\n'.join(output)


def print_buffer_bytes(arr, length=16, offset=0):
    """Prints the buffer (bytes, bytearray) with ASCII"""
    logger().log(dump_buffer_bytes(arr, length, offset))
