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
Checks that every ACPI table a platform specification requires was found during traversal
"""

from collections import Counter
from typing import TYPE_CHECKING

from acpiview.hal.sbbr import ARM_SBBR_PROFILES
from acpiview.library.logger import logger
from acpiview.library.signature import signature_to_str

if TYPE_CHECKING:
    from acpiview.hal.context import Counters


class MandatoryTableValidator:
    def __init__(self, counters: 'Counters'):
        self.counters = counters
        self.logger = logger()
        self.table_counts: Counter = Counter()

    def reset(self) -> None:
        self.table_counts.clear()

    def increment_table_count(self, signature: int) -> None:
        self.table_counts[signature] += 1

    def get_table_count(self, signature: int) -> int:
        return self.table_counts[signature]

    def validate(self, spec_id: int) -> bool:
        """Reports one counted error per mandatory table that was never observed.

        Returns True when all the tables required by the specification are present.
        """
        if spec_id not in ARM_SBBR_PROFILES:
            self.counters.increment_error_count()
            self.logger.log_error(f'Unknown specification identifier 0x{spec_id:X} for mandatory table validation')
            return False

        (spec_name, mandatory_tables) = ARM_SBBR_PROFILES[spec_id]
        is_valid = True
        for signature in mandatory_tables:
            if 0 == self.table_counts[signature]:
                self.counters.increment_error_count()
                self.logger.log_error(f'{spec_name}: Mandatory {signature_to_str(signature)} table is missing')
                is_valid = False

        if is_valid:
            self.logger.log(f'\n{spec_name}: All mandatory ACPI tables are installed')
        return is_valid
