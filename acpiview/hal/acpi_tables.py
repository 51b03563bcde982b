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
HAL component decoding various ACPI tables

Every decoder follows the same contract: ``process()`` bounds-checks the
declared length, ``parse()`` decodes best-effort and reports inconsistencies
through the run context, ``get_child_tables()`` returns the physical addresses
of the tables referenced by the decoded table, in visiting order.
"""

__version__ = '1.0'

import struct
from collections import namedtuple
from typing import TYPE_CHECKING, List, Optional
from acpiview.library.logger import logger, dump_buffer_bytes
from acpiview.library.defines import bytestostring

if TYPE_CHECKING:
    from acpiview.hal.context import AcpiViewContext

# ACPI Table Header Format
ACPI_TABLE_HEADER_FORMAT = '<4sIBB6s8sI4sI'
ACPI_TABLE_HEADER_SIZE = struct.calcsize(ACPI_TABLE_HEADER_FORMAT)  # 36
assert 36 == ACPI_TABLE_HEADER_SIZE


class ACPI_TABLE_HEADER(namedtuple('ACPI_TABLE_HEADER', 'Signature Length Revision Checksum OEMID OEMTableID OEMRevision CreatorID CreatorRevision')):
    __slots__ = ()

    def __str__(self) -> str:
        return f"""  Table Header
------------------------------------------------------------------
  Signature        : {bytestostring(self.Signature)}
  Length           : 0x{self.Length:08X}
  Revision         : 0x{self.Revision:02X}
  Checksum         : 0x{self.Checksum:02X}
  OEM ID           : {bytestostring(self.OEMID)}
  OEM Table ID     : {bytestostring(self.OEMTableID)}
  OEM Revision     : 0x{self.OEMRevision:08X}
  Creator ID       : {bytestostring(self.CreatorID)}
  Creator Revision : 0x{self.CreatorRevision:08X}
"""


def checksum(data: bytes) -> int:
    """8-bit sum of the bytes; 0 for a table with a valid checksum"""
    return sum(data) & 0xFF


class ACPI_TABLE:
    NAME = 'ACPI Table'
    MIN_LENGTH = ACPI_TABLE_HEADER_SIZE

    def __init__(self):
        self.header: Optional[ACPI_TABLE_HEADER] = None
        self.children: List[int] = []

    def process(self, ctx: 'AcpiViewContext', trace: bool, table: bytes, length: int, revision: int) -> bool:
        if length > len(table):
            ctx.error(f'{self.NAME}: Length 0x{length:X} exceeds the 0x{len(table):X} bytes available')
            length = len(table)
        if length < self.MIN_LENGTH:
            ctx.error(f'{self.NAME}: Length 0x{length:X} is too small, expected at least 0x{self.MIN_LENGTH:X} bytes')
            return False
        self.parse(ctx, bytes(table[:length]), revision)
        if trace:
            logger().log(str(self))
        return True

    def parse(self, ctx: 'AcpiViewContext', table_content: bytes, revision: int) -> None:
        self.header = ACPI_TABLE_HEADER(*struct.unpack_from(ACPI_TABLE_HEADER_FORMAT, table_content))

    def get_child_tables(self) -> List[int]:
        return list(self.children)

    def __str__(self) -> str:
        header_str = str(self.header) if self.header is not None else ''
        return f"""==================================================================
  {self.NAME}
==================================================================
{header_str}"""

########################################################################################################
#
# RSDP
#
########################################################################################################


# RSDP Format
ACPI_RSDP_SIG = b'RSD PTR '
ACPI_RSDP_FORMAT = '<8sB6sBI'
ACPI_RSDP_EXT_FORMAT = 'IQB3s'
ACPI_RSDP_SIZE = struct.calcsize(ACPI_RSDP_FORMAT)
ACPI_RSDP_EXT_SIZE = struct.calcsize(ACPI_RSDP_FORMAT + ACPI_RSDP_EXT_FORMAT)
assert ACPI_RSDP_EXT_SIZE == 36

RSDP_REVISION_OFFSET = 15
RSDP_LENGTH_OFFSET = 20


class RSDP(ACPI_TABLE):
    NAME = 'Root System Description Pointer (RSDP)'
    MIN_LENGTH = ACPI_RSDP_EXT_SIZE

    def parse(self, ctx: 'AcpiViewContext', table_content: bytes, revision: int) -> None:
        (self.Signature, self.Checksum, self.OEMID,
         self.Revision, self.RsdtAddress, self.Length,
         self.XsdtAddress, self.ExtChecksum, self.Reserved) = struct.unpack_from(ACPI_RSDP_FORMAT + ACPI_RSDP_EXT_FORMAT, table_content)

        if self.Signature != ACPI_RSDP_SIG:
            ctx.error(f"RSDP: Invalid signature '{bytestostring(self.Signature)}'")
        if checksum(table_content[:ACPI_RSDP_SIZE]) != 0:
            ctx.error(f'RSDP: Checksum of the first {ACPI_RSDP_SIZE:d} bytes is invalid')
        if checksum(table_content[:self.Length]) != 0:
            ctx.error('RSDP: Extended checksum is invalid')

        if self.XsdtAddress != 0:
            self.children = [self.XsdtAddress]
        elif self.RsdtAddress != 0:
            ctx.warning('RSDP: XSDT address is 0, falling back to the RSDT')
            self.children = [self.RsdtAddress]
        else:
            ctx.error('RSDP: XSDT address is 0')

    def __str__(self) -> str:
        return ("==================================================================\n"
                f"  {self.NAME}\n"
                "==================================================================\n"
                f"  Signature        : {bytestostring(self.Signature)}\n"
                f"  Checksum         : 0x{self.Checksum:02X}\n"
                f"  OEM ID           : {bytestostring(self.OEMID)}\n"
                f"  Revision         : 0x{self.Revision:02X}\n"
                f"  RSDT Address     : 0x{self.RsdtAddress:08X}\n"
                f"  Length           : 0x{self.Length:08X}\n"
                f"  XSDT Address     : 0x{self.XsdtAddress:016X}\n"
                f"  Extended Checksum: 0x{self.ExtChecksum:02X}\n"
                f"  Reserved         : {self.Reserved.hex()}\n")

########################################################################################################
#
# XSDT/RSDT Tables
#
########################################################################################################


class XSDT(ACPI_TABLE):
    NAME = 'Extended System Description Table (XSDT)'
    ENTRY_FORMAT = 'Q'

    def __init__(self):
        super(XSDT, self).__init__()
        self.Entries = []

    def parse(self, ctx: 'AcpiViewContext', table_content: bytes, revision: int) -> None:
        super(XSDT, self).parse(ctx, table_content, revision)
        entry_size = struct.calcsize(self.ENTRY_FORMAT)
        entries_len = len(table_content) - ACPI_TABLE_HEADER_SIZE
        if entries_len % entry_size:
            ctx.error(f'{self.NAME}: Entry area of 0x{entries_len:X} bytes is not a multiple of {entry_size:d}')
        num_of_tables = entries_len // entry_size
        self.Entries = struct.unpack_from(f'<{num_of_tables:d}{self.ENTRY_FORMAT}', table_content, ACPI_TABLE_HEADER_SIZE)
        for (index, addr) in enumerate(self.Entries):
            if 0 == addr:
                ctx.error(f'{self.NAME}: Entry [{index:d}] is a null table pointer')
            else:
                self.children.append(addr)

    def __str__(self) -> str:
        entries_str = ''.join([f'  Entry [{i:d}]        : 0x{addr:016X}\n' for (i, addr) in enumerate(self.Entries)])
        return f"""{super(XSDT, self).__str__()}
ACPI Table Entries:
{entries_str}"""


class RSDT(XSDT):
    NAME = 'Root System Description Table (RSDT)'
    ENTRY_FORMAT = 'I'

########################################################################################################
#
# FADT Table
#
########################################################################################################


FADT_FIRMWARE_CTRL_OFFSET = 36
FADT_DSDT_OFFSET = 40
FADT_SMI_CMD_OFFSET = 48
FADT_FLAGS_OFFSET = 112
FADT_X_FIRMWARE_CTRL_OFFSET = 132
FADT_X_DSDT_OFFSET = 140


class FADT(ACPI_TABLE):
    NAME = 'Fixed ACPI Description Table (FADT)'
    MIN_LENGTH = FADT_DSDT_OFFSET + 4

    def __init__(self):
        super(FADT, self).__init__()
        self.firmware_ctrl = 0
        self.dsdt = 0
        self.smi = None
        self.flags = None
        self.x_firmware_ctrl = None
        self.x_dsdt = None

    def parse(self, ctx: 'AcpiViewContext', table_content: bytes, revision: int) -> None:
        super(FADT, self).parse(ctx, table_content, revision)
        (self.firmware_ctrl, self.dsdt) = struct.unpack_from('<II', table_content, FADT_FIRMWARE_CTRL_OFFSET)
        if len(table_content) >= FADT_SMI_CMD_OFFSET + 4:
            self.smi = struct.unpack_from('<I', table_content, FADT_SMI_CMD_OFFSET)[0]
        if len(table_content) >= FADT_FLAGS_OFFSET + 4:
            self.flags = struct.unpack_from('<I', table_content, FADT_FLAGS_OFFSET)[0]
        if len(table_content) >= FADT_X_FIRMWARE_CTRL_OFFSET + 8:
            self.x_firmware_ctrl = struct.unpack_from('<Q', table_content, FADT_X_FIRMWARE_CTRL_OFFSET)[0]
        if len(table_content) >= FADT_X_DSDT_OFFSET + 8:
            self.x_dsdt = struct.unpack_from('<Q', table_content, FADT_X_DSDT_OFFSET)[0]
        else:
            logger().log_hal('[acpi] Cannot find X_DSDT entry in FADT.')

        facs_address = self.get_FACS_address_to_use(ctx)
        if facs_address:
            self.children.append(facs_address)
        dsdt_address = self.get_DSDT_address_to_use(ctx)
        if dsdt_address:
            self.children.append(dsdt_address)

    def get_FACS_address_to_use(self, ctx: 'AcpiViewContext') -> Optional[int]:
        if self.x_firmware_ctrl:
            if self.firmware_ctrl:
                ctx.error('FADT: Both FIRMWARE_CTRL and X_FIRMWARE_CTRL are non-zero')
            return self.x_firmware_ctrl
        # FACS is optional on hardware-reduced platforms
        return self.firmware_ctrl or None

    def get_DSDT_address_to_use(self, ctx: 'AcpiViewContext') -> Optional[int]:
        if self.x_dsdt:
            if self.dsdt and self.dsdt != self.x_dsdt:
                ctx.error(f'FADT: DSDT (0x{self.dsdt:08X}) and X_DSDT (0x{self.x_dsdt:016X}) are both set and differ')
            return self.x_dsdt
        if self.dsdt:
            return self.dsdt
        ctx.error('FADT: Both DSDT and X_DSDT are 0')
        return None

    def __str__(self) -> str:
        def opt(value: Optional[int], width: int) -> str:
            return f'0x{value:0{width}X}' if value is not None else 'Not found'
        return f"""{super(FADT, self).__str__()}
  FIRMWARE_CTRL   : 0x{self.firmware_ctrl:08X}
  DSDT            : 0x{self.dsdt:08X}
  SMI_CMD         : {opt(self.smi, 8)}
  Flags           : {opt(self.flags, 8)}
  X_FIRMWARE_CTRL : {opt(self.x_firmware_ctrl, 16)}
  X_DSDT          : {opt(self.x_dsdt, 16)}
"""

########################################################################################################
#
# FACS Table
#
########################################################################################################


ACPI_TABLE_FORMAT_FACS = '<4sIIIIIQB3sI24s'
ACPI_TABLE_SIZE_FACS = struct.calcsize(ACPI_TABLE_FORMAT_FACS)
assert 64 == ACPI_TABLE_SIZE_FACS


class FACS(ACPI_TABLE):
    NAME = 'Firmware ACPI Control Structure (FACS)'
    MIN_LENGTH = ACPI_TABLE_SIZE_FACS

    def parse(self, ctx: 'AcpiViewContext', table_content: bytes, revision: int) -> None:
        (self.Signature, self.Length, self.HardwareSignature, self.FirmwareWakingVector,
         self.GlobalLock, self.Flags, self.XFirmwareWakingVector, self.Version,
         _, self.OSPMFlags, _) = struct.unpack_from(ACPI_TABLE_FORMAT_FACS, table_content)

    def __str__(self) -> str:
        return f"""==================================================================
  {self.NAME}
==================================================================
  Signature                : {bytestostring(self.Signature)}
  Length                   : 0x{self.Length:08X}
  Hardware Signature       : 0x{self.HardwareSignature:08X}
  Firmware Waking Vector   : 0x{self.FirmwareWakingVector:08X}
  Global Lock              : 0x{self.GlobalLock:08X}
  Flags                    : 0x{self.Flags:08X}
  X Firmware Waking Vector : 0x{self.XFirmwareWakingVector:016X}
  Version                  : 0x{self.Version:02X}
  OSPM Flags               : 0x{self.OSPMFlags:08X}
"""

########################################################################################################
#
# DSDT/SSDT Tables
#
########################################################################################################


class AML_TABLE(ACPI_TABLE):
    NAME = 'Definition Block (DSDT/SSDT)'

    def parse(self, ctx: 'AcpiViewContext', table_content: bytes, revision: int) -> None:
        super(AML_TABLE, self).parse(ctx, table_content, revision)
        self.aml_length = len(table_content) - ACPI_TABLE_HEADER_SIZE

    def __str__(self) -> str:
        return f"""{super(AML_TABLE, self).__str__()}
  Definition Block : 0x{self.aml_length:X} bytes of AML
"""

########################################################################################################
#
# APIC Table
#
########################################################################################################


ACPI_TABLE_FORMAT_APIC = '<II'
ACPI_TABLE_SIZE_APIC = struct.calcsize(ACPI_TABLE_FORMAT_APIC)

# Type: (name, accepted structure lengths)
APIC_STRUCTURE_TYPES = {
    0x00: ('Processor Local APIC', (8,)),
    0x01: ('I/O APIC', (12,)),
    0x02: ('Interrupt Source Override', (10,)),
    0x03: ('NMI Source', (8,)),
    0x04: ('Local APIC NMI', (6,)),
    0x05: ('Local APIC Address Override', (12,)),
    0x06: ('I/O SAPIC', (16,)),
    0x09: ('Processor Local x2APIC', (16,)),
    0x0A: ('Local x2APIC NMI', (12,)),
    0x0B: ('GICC CPU Interface', (76, 80, 82)),
    0x0C: ('GICD GIC Distributor', (24,)),
    0x0D: ('GICv2m MSI Frame', (24,)),
    0x0E: ('GICR Redistributor', (16,)),
    0x0F: ('GIC Interrupt Translation Service', (20,)),
}


class APIC_STRUCTURE(namedtuple('APIC_STRUCTURE', 'Type Length Offset Data')):
    __slots__ = ()

    def __str__(self) -> str:
        name = APIC_STRUCTURE_TYPES.get(self.Type, ('Reserved', ()))[0]
        return f"""
  {name} (0x{self.Type:02X}) at offset 0x{self.Offset:X}
    Length : 0x{self.Length:02X}
{dump_buffer_bytes(self.Data, 16)}
"""


class APIC(ACPI_TABLE):
    NAME = 'Multiple APIC Description Table (MADT)'
    MIN_LENGTH = ACPI_TABLE_HEADER_SIZE + ACPI_TABLE_SIZE_APIC

    def __init__(self):
        super(APIC, self).__init__()
        self.apic_structs = []

    def parse(self, ctx: 'AcpiViewContext', table_content: bytes, revision: int) -> None:
        super(APIC, self).parse(ctx, table_content, revision)
        (self.LAPICBase, self.Flags) = struct.unpack_from(ACPI_TABLE_FORMAT_APIC, table_content, ACPI_TABLE_HEADER_SIZE)
        off = self.MIN_LENGTH
        while off < len(table_content):
            if off + 2 > len(table_content):
                ctx.error(f'{self.NAME}: Truncated interrupt controller structure at offset 0x{off:X}')
                break
            (_type, length) = struct.unpack_from('<BB', table_content, off)
            if length < 2:
                ctx.error(f'{self.NAME}: Invalid length 0x{length:X} of structure type 0x{_type:02X} at offset 0x{off:X}')
                break
            if off + length > len(table_content):
                ctx.error(f'{self.NAME}: Structure type 0x{_type:02X} at offset 0x{off:X} runs past the end of the table')
                break
            if _type in APIC_STRUCTURE_TYPES and length not in APIC_STRUCTURE_TYPES[_type][1]:
                ctx.error(f'{self.NAME}: {APIC_STRUCTURE_TYPES[_type][0]} structure at offset 0x{off:X} has invalid length 0x{length:X}')
            self.apic_structs.append(APIC_STRUCTURE(_type, length, off, table_content[off:off + length]))
            off += length

    def __str__(self) -> str:
        apic_str = f"""{super(APIC, self).__str__()}
  Local APIC Base  : 0x{self.LAPICBase:08X}
  Flags            : 0x{self.Flags:08X}
"""
        apic_str += "\n  Interrupt Controller Structures:\n"
        for st in self.apic_structs:
            apic_str += str(st)
        return apic_str

########################################################################################################
#
# MCFG Table
#
########################################################################################################


ACPI_TABLE_FORMAT_MCFG_ALLOCATION = '<QHBBI'
ACPI_TABLE_SIZE_MCFG_ALLOCATION = struct.calcsize(ACPI_TABLE_FORMAT_MCFG_ALLOCATION)
assert 16 == ACPI_TABLE_SIZE_MCFG_ALLOCATION


class MCFG_ALLOCATION(namedtuple('MCFG_ALLOCATION', 'BaseAddress PCISegment StartBus EndBus Reserved')):
    __slots__ = ()

    def __str__(self) -> str:
        return f"""
  Configuration Space Base Address Allocation
    Base Address : 0x{self.BaseAddress:016X}
    PCI Segment  : 0x{self.PCISegment:04X}
    Start Bus    : 0x{self.StartBus:02X}
    End Bus      : 0x{self.EndBus:02X}
"""


class MCFG(ACPI_TABLE):
    NAME = 'PCI Express Memory Mapped Configuration Table (MCFG)'
    MIN_LENGTH = ACPI_TABLE_HEADER_SIZE + 8

    def __init__(self):
        super(MCFG, self).__init__()
        self.allocations = []

    def parse(self, ctx: 'AcpiViewContext', table_content: bytes, revision: int) -> None:
        super(MCFG, self).parse(ctx, table_content, revision)
        alloc_len = len(table_content) - self.MIN_LENGTH
        if alloc_len % ACPI_TABLE_SIZE_MCFG_ALLOCATION:
            ctx.error(f'{self.NAME}: Allocation area of 0x{alloc_len:X} bytes is not a multiple of {ACPI_TABLE_SIZE_MCFG_ALLOCATION:d}')
        for i in range(alloc_len // ACPI_TABLE_SIZE_MCFG_ALLOCATION):
            off = self.MIN_LENGTH + i * ACPI_TABLE_SIZE_MCFG_ALLOCATION
            alloc = MCFG_ALLOCATION(*struct.unpack_from(ACPI_TABLE_FORMAT_MCFG_ALLOCATION, table_content, off))
            if alloc.StartBus > alloc.EndBus:
                ctx.error(f'{self.NAME}: Allocation [{i:d}] start bus 0x{alloc.StartBus:02X} is above end bus 0x{alloc.EndBus:02X}')
            self.allocations.append(alloc)

    def __str__(self) -> str:
        mcfg_str = super(MCFG, self).__str__()
        for alloc in self.allocations:
            mcfg_str += str(alloc)
        return mcfg_str
