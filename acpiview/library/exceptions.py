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


# ================================================
# ACPIVIEW common
# ================================================

class AcpiViewError(RuntimeError):
    pass


# Configuration
class AcpiViewConfigError(AcpiViewError):
    pass


# Root pointer location
class RsdpNotFoundError(AcpiViewError):
    pass


class UnsupportedRsdpRevisionError(AcpiViewError):
    def __init__(self, revision: int) -> None:
        super(UnsupportedRsdpRevisionError, self).__init__(f'RSDP version {revision:d} is not supported (less than 2)')
        self.revision = revision


# Dump sink
class SinkNotWritableError(AcpiViewError):
    def __init__(self, path: str, reason: str = '') -> None:
        msg = f"Unable to write '{path}': media is read-only or not writable"
        if reason:
            msg += f' ({reason})'
        super(SinkNotWritableError, self).__init__(msg)
        self.path = path


# Parser registry
class ParserRegistrationError(AcpiViewError):
    pass


class ParserAlreadyRegisteredError(ParserRegistrationError):
    pass


# OS Helper
class OsHelperError(AcpiViewError):
    def __init__(self, msg: str, errorcode: int) -> None:
        super(OsHelperError, self).__init__(msg)
        self.errorcode = errorcode


class UnimplementedAPIError(NotImplementedError):
    pass


# Physical memory access
class PhysicalMemoryReadError(AcpiViewError):
    def __init__(self, address: int, length: int, reason: str) -> None:
        super(PhysicalMemoryReadError, self).__init__(f'Unable to read 0x{length:X} byte(s) at 0x{address:016X}: {reason}')
        self.address = address
        self.length = length
