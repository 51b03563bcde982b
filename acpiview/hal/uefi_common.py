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
Common UEFI structures and GUIDs used to reach the ACPI tables
"""

from typing import Dict, Iterable, Optional, Tuple
from uuid import UUID


def EFI_GUID_NORMALIZE(guid: str) -> str:
    return str(UUID(guid.strip('{}'))).upper()


# #################################################################################################
#
# \MdePkg\Include\Guid\Acpi.h, \MdePkg\Include\Guid\SmBios.h
# ----------------------------------------------------------
#
ACPI_20_TABLE_GUID = '8868E871-E4F1-11D3-BC22-0080C73C8881'
ACPI_10_TABLE_GUID = 'EB9D2D30-2D88-11D3-9A16-0090273FC14D'
SMBIOS_TABLE_GUID = 'EB9D2D31-2D88-11D3-9A16-0090273FC14D'
SMBIOS3_TABLE_GUID = 'F2FD1544-9794-4A2C-992E-E5BBCF20E394'

# Names used by the Linux kernel in /sys/firmware/efi/systab
EFI_SYSTAB_GUIDS: Dict[str, str] = {
    'ACPI20': ACPI_20_TABLE_GUID,
    'ACPI': ACPI_10_TABLE_GUID,
    'SMBIOS': SMBIOS_TABLE_GUID,
    'SMBIOS3': SMBIOS3_TABLE_GUID,
}

# #################################################################################################
#
# \MdePkg\Include\Uefi\UefiSpec.h
# -------------------------------
#

class EFI_CONFIGURATION_TABLE:
    """Vendor tables published by the firmware, in firmware order"""

    def __init__(self, entries: Iterable[Tuple[str, int]] = ()):
        self.VendorTables: Dict[str, int] = {}
        for (guid, address) in entries:
            self.add(guid, address)

    def add(self, guid: str, address: int) -> None:
        guid = EFI_GUID_NORMALIZE(guid)
        # The first entry carrying a GUID is the one the firmware consumers use
        if guid not in self.VendorTables:
            self.VendorTables[guid] = address

    def find(self, guid: str) -> Optional[int]:
        return self.VendorTables.get(EFI_GUID_NORMALIZE(guid))

    def __len__(self) -> int:
        return len(self.VendorTables)

    def __str__(self) -> str:
        vendor_table_str = ''.join([f'{{{vt}}} : 0x{self.VendorTables[vt]:016X}\n' for vt in self.VendorTables])
        return f'Vendor Tables:\n{vendor_table_str}'
