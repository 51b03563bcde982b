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
Replays a capture of the firmware memory holding the ACPI tables

The capture is a JSON document:

    {
        "efi_configuration_table": {"8868E871-E4F1-11D3-BC22-0080C73C8881": "0x7FF5E014"},
        "memory": {"0x7FF5E014": "525344205054522...", ...}
    }

Addresses may be written as hex strings or integers, memory contents as hex strings.
"""

from json import loads
import os
from errno import EACCES, EFAULT
from typing import Dict, List, Tuple, Union
from acpiview.library.exceptions import OsHelperError
from acpiview.library.file import read_file
from acpiview.library.logger import logger
from acpiview.helper.basehelper import Helper

FILL_BYTE = b'\xFF'


def _to_int(value: Union[str, int]) -> int:
    if isinstance(value, int):
        return value
    return int(value, 0)


class ReplayHelper(Helper):

    def __init__(self, filepath: str = ""):
        super(ReplayHelper, self).__init__()
        self.os_system = "replay_helper"
        self.os_release = "0"
        self.os_version = "0"
        self.os_machine = "replay"
        self.driver_loaded = True
        self.name = "ReplayHelper"
        if not filepath or not os.path.isfile(filepath):
            raise FileNotFoundError(f"Cannot find a capture file to load: '{filepath}'")
        self.config_file = filepath
        self.driverpath = filepath
        self._config_table: List[Tuple[str, int]] = []
        self._regions: Dict[int, bytes] = {}

    def create(self) -> bool:
        return True

    def start(self) -> bool:
        self._load()
        return True

    def stop(self) -> bool:
        return True

    def delete(self) -> bool:
        return True

    def _load(self) -> None:
        file_data = read_file(self.config_file)
        if not file_data:
            raise OsHelperError(f"Unable to open JSON File: {self.config_file}", EACCES)
        try:
            data = loads(file_data)
            self._config_table = [(guid, _to_int(addr)) for guid, addr in data.get("efi_configuration_table", {}).items()]
            self._regions = {_to_int(addr): bytes.fromhex(content) for addr, content in data.get("memory", {}).items()}
        except (ValueError, TypeError, AttributeError) as err:
            raise OsHelperError(f'Unable to load JSON File: {self.config_file}: {str(err)}', EFAULT)
        logger().log_helper(f"[helper] Loaded {len(self._regions):d} memory region(s) from '{self.config_file}'")

    #
    # physical_address is 64 bit integer
    #
    def read_phys_mem(self, phys_address: int, length: int) -> bytes:
        buf = bytearray(FILL_BYTE * length)
        covered = 0
        end = phys_address + length
        for base, content in self._regions.items():
            lo = max(base, phys_address)
            hi = min(base + len(content), end)
            if lo >= hi:
                continue
            buf[lo - phys_address:hi - phys_address] = content[lo - base:hi - base]
            covered += hi - lo
        if covered < length:
            logger().log_error(f"[helper] Memory at 0x{phys_address:016X} (0x{length:X} bytes) is not fully captured")
        return bytes(buf)

    #
    # EFI Configuration Table
    #
    def get_efi_configuration_table(self) -> List[Tuple[str, int]]:
        return list(self._config_table)


def get_helper(filepath: str = "") -> ReplayHelper:
    return ReplayHelper(filepath)
