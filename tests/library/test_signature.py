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

from acpiview.library import signature


class TestSignature(unittest.TestCase):

    def test_name_and_header_bytes_match(self):
        self.assertEqual(signature.str_to_signature('XSDT'), signature.bytes_to_signature(b'XSDT'))

    def test_name_is_case_insensitive(self):
        self.assertEqual(signature.str_to_signature('ssdt'), signature.ACPI_SIG_SSDT)
        self.assertEqual(signature.str_to_signature('FaCp'), signature.ACPI_SIG_FACP)

    def test_little_endian_packing(self):
        self.assertEqual(0x54445344, signature.str_to_signature('DSDT'))

    def test_short_name_is_padded(self):
        self.assertEqual(0x00004241, signature.str_to_signature('ab'))
        self.assertEqual('AB', signature.signature_to_str(signature.str_to_signature('ab')))

    def test_long_name_is_truncated(self):
        self.assertEqual(signature.ACPI_SIG_APIC, signature.str_to_signature('APICX'))

    def test_empty_name(self):
        self.assertEqual(0, signature.str_to_signature(''))

    def test_signature_to_bytes(self):
        self.assertEqual(b'MCFG', signature.signature_to_bytes(signature.ACPI_SIG_MCFG))

    def test_to_signature(self):
        self.assertEqual(signature.ACPI_SIG_GTDT, signature.to_signature('gtdt'))
        self.assertEqual(signature.ACPI_SIG_GTDT, signature.to_signature(b'GTDT'))
        self.assertEqual(signature.ACPI_SIG_GTDT, signature.to_signature(signature.ACPI_SIG_GTDT))


if __name__ == '__main__':
    unittest.main()
