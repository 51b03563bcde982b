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
Banner functions
"""

import platform
import sys
from typing import Sequence, Tuple, TYPE_CHECKING
from acpiview.library.logger import logger

if TYPE_CHECKING:
    from acpiview.firmware import Firmware


def acpiview_banner(arguments: Sequence[str], version: str) -> str:
    """Creates the ACPIVIEW banner string"""
    args = ' '.join(arguments)
    banner = f'''
################################################################
##                                                            ##
##  ACPIVIEW: ACPI Table Inspection and Validation            ##
##                                                            ##
################################################################
[ACPIVIEW] Version  : {version}
[ACPIVIEW] Arguments: {args}'''
    return banner


def print_banner(arguments: Sequence[str], version: str) -> None:
    logger().log_verbose(acpiview_banner(arguments, version))


def acpiview_banner_properties(fw: 'Firmware', os_version: Tuple[str, str, str, str]) -> str:
    """Creates the ACPIVIEW properties banner string"""
    (system, release, version, machine) = os_version
    is_python_64 = True if (sys.maxsize > 2**32) else False
    python_version = platform.python_version()
    python_arch = '64-bit' if is_python_64 else '32-bit'
    (helper_name, driver_path) = fw.helper.get_info()

    banner_prop = f'''
[ACPIVIEW] OS      : {system} {release} {version} {machine}
[ACPIVIEW] Python  : {python_version} ({python_arch})
[ACPIVIEW] Helper  : {helper_name} {driver_path}
'''
    return banner_prop


def print_banner_properties(fw: 'Firmware', os_version: Tuple[str, str, str, str]) -> None:
    logger().log_verbose(acpiview_banner_properties(fw, os_version))
