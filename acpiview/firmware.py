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
Owns the platform helper and the HAL objects used to reach the firmware tables
"""

import errno
import traceback
from typing import List, Tuple, Union

from acpiview.helper.basehelper import Helper
from acpiview.helper.oshelper import helper as os_helper
from acpiview.hal.physmem import Memory
from acpiview.library.exceptions import OsHelperError
from acpiview.library.logger import logger
from acpiview.library.options import Options


class Firmware:
    """Platform access for one acpiview invocation.

    The helper is loaded by name (one of the helper packages found by
    ``OsHelper``), or passed in as an instance, then started before any
    physical memory is read.
    """

    def __init__(self):
        self.options = Options()
        self.logger = logger()
        self.helper = None
        self.mem = None
        self.os_helper = os_helper()

    def init_hals_object(self) -> None:
        self.mem = Memory(self)

    def load_helper(self, helper_name: Union[str, Helper, None] = None, *args) -> None:
        """Load a platform helper.

        Raises:
            OsHelperError: If the specified helper cannot be found or loaded
        """
        if helper_name:
            if isinstance(helper_name, Helper):
                self.helper = helper_name
            else:
                self.helper = self.os_helper.get_helper(helper_name, *args)
                if self.helper is None:
                    error_msg = f'Helper named {helper_name} not found in available helpers'
                    raise OsHelperError(error_msg, errno.ENOENT)
        else:
            default_helper = self.options.get_section_data('Util_Config', 'default_helper', '')
            self.helper = self.os_helper.get_helper(default_helper) if default_helper else None
            if self.helper is None:
                self.helper = self.os_helper.get_default_helper()
        self.logger.log_debug(f'[fw] Using helper: {self.helper.name}')
        self.init_hals_object()

    def start_helper(self) -> None:
        """Start the platform helper.

        Raises:
            OsHelperError: If the helper fails to start
        """
        try:
            if not self.helper.create():
                raise OsHelperError("failed to create OS helper", 1)
            if not self.helper.start():
                raise OsHelperError("failed to start OS helper", 1)
        except Exception as msg:
            self.logger.log_debug(traceback.format_exc())
            error_no = errno.ENXIO
            if hasattr(msg, 'errorcode'):
                error_no = msg.errorcode
            raise OsHelperError(f'Message: "{msg}"', error_no)

    def destroy_helper(self) -> None:
        if not self.helper.stop():
            self.logger.log_warning("failed to stop OS helper")
        else:
            if not self.helper.delete():
                self.logger.log_warning("failed to delete OS helper")

    def get_efi_configuration_table(self) -> List[Tuple[str, int]]:
        return self.helper.get_efi_configuration_table()


_firmware = None


def clear_fw() -> None:
    global _firmware
    _firmware = None


def fw() -> Firmware:
    global _firmware
    if _firmware is None:
        _firmware = Firmware()
    return _firmware
