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
Per-table reporting decisions: trace, list, or dump to a binary file

usage:
    >>> report = ReportController(settings)
    >>> trace = report.process_table_report_options(sig, table, length)
"""

import os
from enum import Enum
from typing import TYPE_CHECKING

from acpiview.library.exceptions import SinkNotWritableError
from acpiview.library.file import delete_file, write_file
from acpiview.library.logger import logger
from acpiview.library.signature import signature_to_bytes

if TYPE_CHECKING:
    from acpiview.hal.context import AcpiViewSettings


class ReportOption(Enum):
    ALL = 'all'
    SELECTED = 'selected'
    TABLE_LIST = 'table_list'
    DUMP_BIN_FILE = 'dump_bin_file'


def signature_chars(signature: int) -> str:
    """The 4 signature characters as printed in banners and list entries"""
    return signature_to_bytes(signature).decode('latin_1').replace('\x00', ' ')


class ReportController:
    def __init__(self, settings: 'AcpiViewSettings'):
        self.settings = settings
        self.logger = logger()
        self.reset()

    def reset(self) -> None:
        self._found = False
        self.table_count = 0
        self.bin_table_count = 0

    @property
    def found(self) -> bool:
        """Set once the selected table has been seen in SELECTED or DUMP_BIN_FILE mode"""
        return self._found

    def _colour(self, colour: str):
        return colour if self.settings.colour_highlighting else None

    def _dump_file_name(self, extension: str) -> str:
        name = f'{self.settings.selected_table_name}{self.bin_table_count:04d}.{extension}'
        return os.path.join(self.settings.dump_dir, name)

    def check_dump_sink(self) -> None:
        """Fails fast when the dump destination cannot be written.

        Raises:
            SinkNotWritableError: if the check file cannot be created or removed
        """
        check_name = self._dump_file_name('tmp')
        if not write_file(check_name, b''):
            raise SinkNotWritableError(check_name)
        if not delete_file(check_name):
            raise SinkNotWritableError(check_name, 'unable to delete the check file')

    def dump_acpi_table_to_file(self, table: bytes, length: int) -> bool:
        file_name = self._dump_file_name('bin')
        self.bin_table_count += 1
        data = bytes(table[:length])
        self.logger.log(f'Dumping ACPI table to : {file_name} ... ')
        if not write_file(file_name, data):
            self.logger.log_warning(f"Unable to write '{file_name}': media is read-only or not writable")
            return False
        if len(data) != length:
            self.logger.log_error('Failed to dump table to binary file.')
            return False
        self.logger.log('DONE.')
        return True

    def process_table_report_options(self, signature: int, table: bytes, length: int) -> bool:
        """Decides whether the table is traced, applying the list and dump side effects of the active mode"""
        log = False
        option = self.settings.report_option

        if ReportOption.ALL == option:
            log = True
        elif ReportOption.SELECTED == option:
            if signature == self.settings.selected_table:
                log = True
                self._found = True
        elif ReportOption.TABLE_LIST == option:
            if 0 == self.table_count:
                self.logger.log('\nInstalled Table(s):', color=self._colour('CYAN'))
            self.table_count += 1
            self.logger.log(f'\t{self.table_count:4d}. {signature_chars(signature)}')
        elif ReportOption.DUMP_BIN_FILE == option:
            if signature == self.settings.selected_table:
                self._found = True
                self.dump_acpi_table_to_file(table, length)

        if log:
            self.logger.log(f'\n\n --------------- {signature_chars(signature)} Table --------------- \n',
                            color=self._colour('BLUE'))
        return log
