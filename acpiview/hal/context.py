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
State of one acpiview run: settings, error/warning counters and the per-run reporting state
"""

from dataclasses import dataclass
from typing import Set

from acpiview.hal.mandatory import MandatoryTableValidator
from acpiview.hal.report import ReportController, ReportOption
from acpiview.library.logger import logger
from acpiview.library.signature import str_to_signature

DEFAULT_MAX_TABLE_DEPTH = 8
DEFAULT_MAX_TABLE_LENGTH = 0x1000000


class Counters:
    """Errors and warnings found in the tables during one run"""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.reset_error_count()
        self.reset_warning_count()

    def reset_error_count(self) -> None:
        self._errors = 0

    def reset_warning_count(self) -> None:
        self._warnings = 0

    def increment_error_count(self) -> None:
        self._errors += 1

    def increment_warning_count(self) -> None:
        self._warnings += 1

    def get_error_count(self) -> int:
        return self._errors

    def get_warning_count(self) -> int:
        return self._warnings


@dataclass
class AcpiViewSettings:
    """Options of a run, fixed before traversal starts"""
    consistency_check: bool = True
    colour_highlighting: bool = False
    mandatory_table_validate: bool = False
    mandatory_table_spec: int = 0
    report_option: ReportOption = ReportOption.ALL
    selected_table_name: str = ''
    dump_dir: str = '.'
    max_table_depth: int = DEFAULT_MAX_TABLE_DEPTH
    max_table_length: int = DEFAULT_MAX_TABLE_LENGTH

    @property
    def selected_table(self) -> int:
        return str_to_signature(self.selected_table_name)


class AcpiViewContext:
    """Created once per run; creating it resets every counter, tally and ordinal"""

    def __init__(self, settings: AcpiViewSettings):
        self.settings = settings
        self.logger = logger()
        self.counters = Counters()
        self.report = ReportController(settings)
        self.mandatory = MandatoryTableValidator(self.counters)
        self.visited: Set[int] = set()

    def error(self, text: str) -> None:
        self.counters.increment_error_count()
        self.logger.log_error(text)

    def warning(self, text: str) -> None:
        self.counters.increment_warning_count()
        self.logger.log_warning(text)

    def mark_visited(self, address: int) -> bool:
        """Returns False when the table at this address was already visited in this run"""
        if address in self.visited:
            return False
        self.visited.add(address)
        return True
