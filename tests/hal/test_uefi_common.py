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

import unittest

from acpiview.hal import uefi_common


class TestEfiConfigurationTable(unittest.TestCase):

    def test_find(self):
        ect = uefi_common.EFI_CONFIGURATION_TABLE([(uefi_common.SMBIOS_TABLE_GUID, 0x8000),
                                                   (uefi_common.ACPI_20_TABLE_GUID, 0x1000)])
        self.assertEqual(2, len(ect))
        self.assertEqual(0x1000, ect.find(uefi_common.ACPI_20_TABLE_GUID))
        self.assertIsNone(ect.find(uefi_common.ACPI_10_TABLE_GUID))

    def test_guid_normalization(self):
        ect = uefi_common.EFI_CONFIGURATION_TABLE([('{8868e871-e4f1-11d3-bc22-0080c73c8881}', 0x1000)])
        self.assertEqual(0x1000, ect.find(uefi_common.ACPI_20_TABLE_GUID))

    def test_first_entry_wins(self):
        ect = uefi_common.EFI_CONFIGURATION_TABLE([(uefi_common.ACPI_20_TABLE_GUID, 0x1000),
                                                   (uefi_common.ACPI_20_TABLE_GUID, 0x2000)])
        self.assertEqual(0x1000, ect.find(uefi_common.ACPI_20_TABLE_GUID))

    def test_str(self):
        ect = uefi_common.EFI_CONFIGURATION_TABLE([(uefi_common.ACPI_20_TABLE_GUID, 0x7FF5E014)])
        self.assertIn(f"{{{uefi_common.ACPI_20_TABLE_GUID}}} : 0x000000007FF5E014", str(ect))


if __name__ == '__main__':
    unittest.main()
