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
ACPI table signature conversion

A signature is the 4 byte name found at the start of every ACPI table.
It is handled as an unsigned 32 bit integer holding the 4 bytes in memory
(little-endian) order, so a signature typed by the user and a signature read
from a table header compare equal.

usage:
    >>> str_to_signature('xsdt') == bytes_to_signature(b'XSDT')
    >>> signature_to_str(str_to_signature('ssdt'))
"""

import struct
from typing import AnyStr

ACPI_TABLE_SIG_SIZE = 0x4


def str_to_signature(name: str) -> int:
    sig = bytearray(ACPI_TABLE_SIG_SIZE)
    for index, char in enumerate(name[:ACPI_TABLE_SIG_SIZE]):
        code = ord(char)
        if ord('a') <= code <= ord('z'):
            code -= ord('a') - ord('A')
        sig[index] = code if code <= 0xFF else ord('?')
    return struct.unpack('<I', bytes(sig))[0]


def bytes_to_signature(buf: bytes) -> int:
    sig = bytes(buf[:ACPI_TABLE_SIG_SIZE]).ljust(ACPI_TABLE_SIG_SIZE, b'\x00')
    return struct.unpack('<I', sig)[0]


def signature_to_bytes(sig: int) -> bytes:
    return struct.pack('<I', sig & 0xFFFFFFFF)


def signature_to_str(sig: int) -> str:
    return signature_to_bytes(sig).rstrip(b'\x00').decode('latin_1')


def to_signature(sig: AnyStr) -> int:
    """Accepts a signature as a name, raw bytes or an already packed value"""
    if isinstance(sig, int):
        return sig & 0xFFFFFFFF
    if isinstance(sig, (bytes, bytearray)):
        return bytes_to_signature(sig)
    return str_to_signature(sig)


ACPI_SIG_RSDP = str_to_signature('RSDP')
ACPI_SIG_RSDT = str_to_signature('RSDT')
ACPI_SIG_XSDT = str_to_signature('XSDT')
ACPI_SIG_FACP = str_to_signature('FACP')
ACPI_SIG_FACS = str_to_signature('FACS')
ACPI_SIG_DSDT = str_to_signature('DSDT')
ACPI_SIG_SSDT = str_to_signature('SSDT')
ACPI_SIG_APIC = str_to_signature('APIC')
ACPI_SIG_MCFG = str_to_signature('MCFG')
ACPI_SIG_GTDT = str_to_signature('GTDT')
ACPI_SIG_SPCR = str_to_signature('SPCR')
ACPI_SIG_DBG2 = str_to_signature('DBG2')
ACPI_SIG_PPTT = str_to_signature('PPTT')
