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

from typing import List, Tuple
from acpiview.helper.basehelper import Helper
from acpiview.library.exceptions import UnimplementedAPIError


class NoneHelper(Helper):
    """Helper used when no environment specific helper can be loaded"""

    def __init__(self):
        super(NoneHelper, self).__init__()
        self.name = 'NoneHelper'
        self.os_system = 'nonehelper'

    def create(self) -> bool:
        return False

    def start(self) -> bool:
        return False

    def stop(self) -> bool:
        return False

    def delete(self) -> bool:
        return False

    def read_phys_mem(self, phys_address: int, length: int) -> bytes:
        raise UnimplementedAPIError('read_phys_mem')

    def get_efi_configuration_table(self) -> List[Tuple[str, int]]:
        raise UnimplementedAPIError('get_efi_configuration_table')
