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
Arm Server Base Boot Requirements (SBBR) profiles: ACPI tables each revision requires
"""

from typing import Dict, Tuple

from acpiview.library.signature import (ACPI_SIG_APIC, ACPI_SIG_DBG2, ACPI_SIG_DSDT, ACPI_SIG_FACP, ACPI_SIG_GTDT,
                                        ACPI_SIG_MCFG, ACPI_SIG_PPTT, ACPI_SIG_SPCR)

ARM_SBBR_VERSION_1_0 = 0x0
ARM_SBBR_VERSION_1_1 = 0x1
ARM_SBBR_VERSION_1_2 = 0x2

ARM_SBBR_1_0_MANDATORY_TABLES = (
    ACPI_SIG_DBG2,
    ACPI_SIG_DSDT,
    ACPI_SIG_APIC,
    ACPI_SIG_FACP,
    ACPI_SIG_GTDT,
    ACPI_SIG_MCFG,
    ACPI_SIG_SPCR,
)

ARM_SBBR_1_1_MANDATORY_TABLES = ARM_SBBR_1_0_MANDATORY_TABLES + (ACPI_SIG_PPTT,)

ARM_SBBR_1_2_MANDATORY_TABLES = ARM_SBBR_1_1_MANDATORY_TABLES

ARM_SBBR_PROFILES: Dict[int, Tuple[str, Tuple[int, ...]]] = {
    ARM_SBBR_VERSION_1_0: ('SBBR 1.0', ARM_SBBR_1_0_MANDATORY_TABLES),
    ARM_SBBR_VERSION_1_1: ('SBBR 1.1', ARM_SBBR_1_1_MANDATORY_TABLES),
    ARM_SBBR_VERSION_1_2: ('SBBR 1.2', ARM_SBBR_1_2_MANDATORY_TABLES),
}
