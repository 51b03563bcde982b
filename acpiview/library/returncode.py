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
Run status and process exit codes
"""

from enum import Enum


class AcpiViewStatus(Enum):
    SUCCESS = 'Success'
    NOT_FOUND = 'ACPI table pointer not found'
    UNSUPPORTED = 'Unsupported RSDP revision'
    INVALID_PARAMETER = 'Invalid parameter'


class ExitCode:
    # Values follow the UEFI shell status codes
    OK = 0
    INVALID_PARAMETER = 2
    NOT_FOUND = 14

    help_epilog = """\
  Exit Code
  ---------
  acpiview returns an integer exit code:
  - 0:  tables were located and processed (consistency errors may have been reported)
  - 2:  invalid command-line parameter or the dump destination is not writable
  - 14: the ACPI root pointer was not found in the EFI configuration table,
        or its revision is older than 2
"""


STATUS_TO_EXIT_CODE = {
    AcpiViewStatus.SUCCESS: ExitCode.OK,
    AcpiViewStatus.NOT_FOUND: ExitCode.NOT_FOUND,
    AcpiViewStatus.UNSUPPORTED: ExitCode.NOT_FOUND,
    AcpiViewStatus.INVALID_PARAMETER: ExitCode.INVALID_PARAMETER,
}


def status_to_exit_code(status: AcpiViewStatus) -> int:
    return STATUS_TO_EXIT_CODE.get(status, ExitCode.INVALID_PARAMETER)
