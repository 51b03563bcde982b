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
import errno
import unittest
from unittest.mock import MagicMock, patch

from acpiview.hal.physmem import Memory
from acpiview.library.exceptions import PhysicalMemoryReadError


@patch('acpiview.library.logger._logger')
class TestMemory(unittest.TestCase):

    def _memory(self, read_result=None, read_error=None):
        fw = MagicMock()
        fw.helper.read_phys_mem.return_value = read_result
        fw.helper.read_phys_mem.side_effect = read_error
        return Memory(fw)

    def test_read(self, logger_mock):
        mem = self._memory(b'\x01\x02\x03\x04')
        self.assertEqual(b'\x01\x02\x03\x04', mem.read_physical_mem(0x1000, 4))
        self.assertEqual(0x04030201, mem.read_physical_mem_dword(0x1000))
        self.assertEqual(0x01, mem.read_physical_mem_byte(0x1000))

    def test_read_os_error(self, logger_mock):
        mem = self._memory(read_error=OSError(errno.EPERM, 'Operation not permitted'))
        with self.assertRaises(PhysicalMemoryReadError) as cm:
            mem.read_physical_mem(0xDEAD0000, 8)
        self.assertEqual(0xDEAD0000, cm.exception.address)
        self.assertIn('Operation not permitted', str(cm.exception))
        self.assertIsInstance(cm.exception.__cause__, OSError)

    def test_short_read(self, logger_mock):
        mem = self._memory(b'\x01\x02')
        with self.assertRaises(PhysicalMemoryReadError) as cm:
            mem.read_physical_mem(0x1000, 8)
        self.assertIn('short read of 0x2 byte(s)', str(cm.exception))

    def test_short_read_dword(self, logger_mock):
        mem = self._memory(b'\x01\x02')
        with self.assertRaises(PhysicalMemoryReadError):
            mem.read_physical_mem_dword(0x1014)

    def test_empty_read_byte(self, logger_mock):
        mem = self._memory(b'')
        with self.assertRaises(PhysicalMemoryReadError):
            mem.read_physical_mem_byte(0x100F)


if __name__ == '__main__':
    unittest.main()
