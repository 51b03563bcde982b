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
Native Linux helper
"""

import os
import platform
from typing import List, Optional, Tuple

from acpiview.hal.uefi_common import EFI_SYSTAB_GUIDS
from acpiview.library.exceptions import OsHelperError
from acpiview.helper.basehelper import Helper
from acpiview.library.logger import logger


class LinuxHelper(Helper):

    DEV_MEM = "/dev/mem"
    EFI_SYSTAB = "/sys/firmware/efi/systab"

    def __init__(self):
        super(LinuxHelper, self).__init__()
        self.os_system = platform.system()
        self.os_release = platform.release()
        self.os_version = platform.version()
        self.os_machine = platform.machine()
        self.name = "LinuxHelper"
        self.driverpath = self.DEV_MEM
        self.dev_mem: Optional[int] = None

###############################################################################################
# Driver/service management functions
###############################################################################################
    def create(self) -> bool:
        logger().log_debug("[helper] Linux Helper created")
        return True

    def start(self) -> bool:
        self.driver_loaded = self.devmem_available()
        logger().log_debug("[helper] Linux Helper started/loaded")
        return True

    def stop(self) -> bool:
        self.close()
        logger().log_debug("[helper] Linux Helper stopped/unloaded")
        return True

    def delete(self) -> bool:
        logger().log_debug("[helper] Linux Helper deleted")
        return True

    def devmem_available(self) -> bool:
        """Check if /dev/mem is usable.
           Returns True if /dev/mem is accessible, raises OsHelperError otherwise.
        """
        if self.dev_mem is not None:
            return True

        try:
            self.dev_mem = os.open(self.DEV_MEM, os.O_RDONLY)
            return True
        except OSError as err:
            raise OsHelperError("Unable to open /dev/mem.\n"
                                "This command requires access to /dev/mem.\n"
                                "Are you running this command as root?\n"
                                f"{str(err)}", err.errno)

    def close(self) -> None:
        if self.dev_mem is not None:
            os.close(self.dev_mem)
            self.dev_mem = None

###############################################################################################
# Actual API functions to access HW resources
###############################################################################################

    def read_phys_mem(self, phys_address: int, length: int) -> bytes:
        if self.devmem_available():
            os.lseek(self.dev_mem, phys_address, os.SEEK_SET)
            return os.read(self.dev_mem, length)
        return b''

    def get_efi_configuration_table(self) -> List[Tuple[str, int]]:
        """Vendor tables the kernel exposes from the EFI system table.

           Each line of /sys/firmware/efi/systab reads NAME=0xADDRESS.
        """
        entries = []
        try:
            with open(self.EFI_SYSTAB, 'r') as systab:
                lines = systab.read().splitlines()
        except OSError as err:
            raise OsHelperError(f"Unable to read {self.EFI_SYSTAB}.\n"
                                "Was the system booted through UEFI?\n"
                                f"{str(err)}", err.errno)
        for line in lines:
            name, sep, value = line.partition('=')
            if not sep or name.strip() not in EFI_SYSTAB_GUIDS:
                continue
            try:
                address = int(value.strip(), 16)
            except ValueError:
                logger().log_debug(f"[helper] Malformed entry in {self.EFI_SYSTAB}: '{line}'")
                continue
            entries.append((EFI_SYSTAB_GUIDS[name.strip()], address))
        logger().log_helper(f"[helper] Found {len(entries):d} vendor table(s) in {self.EFI_SYSTAB}")
        return entries


def get_helper() -> LinuxHelper:
    return LinuxHelper()
