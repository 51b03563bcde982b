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
Access to physical memory

usage:
    >>> read_physical_mem( 0x7FF5E014, 0x24 )
    >>> read_physical_mem_dword( 0x7FF5E014 )
"""
from struct import unpack
from acpiview.hal.hal_base import HALBase
from acpiview.library.exceptions import PhysicalMemoryReadError


class Memory(HALBase):
    def __init__(self, fw):
        super(Memory, self).__init__(fw)
        self.helper = fw.helper

    # Reading physical memory

    def read_physical_mem(self, phys_address: int, length: int) -> bytes:
        """Returns exactly length bytes or raises PhysicalMemoryReadError"""
        self.logger.log_hal(f'[mem] 0x{phys_address:016X}')
        try:
            out_buf = self.helper.read_phys_mem(phys_address, length)
        except OSError as err:
            raise PhysicalMemoryReadError(phys_address, length, err.strerror or str(err)) from err
        if out_buf is None or len(out_buf) < length:
            got = 0 if out_buf is None else len(out_buf)
            raise PhysicalMemoryReadError(phys_address, length, f'short read of 0x{got:X} byte(s)')
        return out_buf[:length]

    def read_physical_mem_dword(self, phys_address: int) -> int:
        out_buf = self.read_physical_mem(phys_address, 4)
        value = unpack('<I', out_buf)[0]
        self.logger.log_hal(f'[mem] dword at PA = 0x{phys_address:016X}: 0x{value:08X}')
        return value

    def read_physical_mem_byte(self, phys_address: int) -> int:
        out_buf = self.read_physical_mem(phys_address, 1)
        value = unpack('<B', out_buf)[0]
        self.logger.log_hal(f'[mem] byte at PA = 0x{phys_address:016X}: 0x{value:02X}')
        return value
