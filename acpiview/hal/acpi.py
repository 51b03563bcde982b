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
HAL component walking the ACPI tables from the RSDP and dispatching them to their decoders

usage:
    >>> ACPI(fw()).run(AcpiViewSettings())
    >>> ACPI(fw()).run(AcpiViewSettings(report_option=ReportOption.TABLE_LIST))
"""

__version__ = '1.0'

import struct
from typing import Dict, List, Optional, Tuple, Type, Union

from acpiview.hal import acpi_tables
from acpiview.hal.acpi_tables import ACPI_TABLE, RSDP_LENGTH_OFFSET, RSDP_REVISION_OFFSET, checksum
from acpiview.hal.context import AcpiViewContext, AcpiViewSettings
from acpiview.hal.hal_base import HALBase
from acpiview.hal.report import ReportOption, signature_chars
from acpiview.hal.uefi_common import ACPI_20_TABLE_GUID, EFI_CONFIGURATION_TABLE
from acpiview.library.exceptions import (OsHelperError, ParserAlreadyRegisteredError, ParserRegistrationError,
                                         PhysicalMemoryReadError, RsdpNotFoundError, SinkNotWritableError,
                                         UnimplementedAPIError, UnsupportedRsdpRevisionError)
from acpiview.library.logger import print_buffer_bytes
from acpiview.library.returncode import AcpiViewStatus
from acpiview.library.signature import ACPI_SIG_FACS, ACPI_SIG_RSDP, bytes_to_signature, to_signature

# Signature and Length open every table the engine reads
ACPI_TABLE_PREFIX_FORMAT = '<4sI'
ACPI_TABLE_PREFIX_SIZE = struct.calcsize(ACPI_TABLE_PREFIX_FORMAT)
ACPI_TABLE_REVISION_OFFSET = 8

ACPI_TABLES: Dict[str, Type[ACPI_TABLE]] = {
    'RSDP': acpi_tables.RSDP,
    'XSDT': acpi_tables.XSDT,
    'RSDT': acpi_tables.RSDT,
    'FACP': acpi_tables.FADT,
    'FACS': acpi_tables.FACS,
    'DSDT': acpi_tables.AML_TABLE,
    'SSDT': acpi_tables.AML_TABLE,
    'APIC': acpi_tables.APIC,
    'MCFG': acpi_tables.MCFG,
}

########################################################################################################
#
# Parser Registry
#
########################################################################################################


class ParserRegistry:
    """Maps table signatures to the decoder classes handling them"""

    def __init__(self, tables: Optional[Dict[Union[str, int], Type[ACPI_TABLE]]] = None):
        self._parsers: Dict[int, Type[ACPI_TABLE]] = {}
        self._frozen = False
        if tables:
            for (signature, table_class) in tables.items():
                self.register(signature, table_class)

    def register(self, signature: Union[str, int], table_class: Type[ACPI_TABLE]) -> None:
        if self._frozen:
            raise ParserRegistrationError('Parser registry is read-only')
        sig = to_signature(signature)
        if 0 == sig or table_class is None:
            raise ParserRegistrationError(f'Invalid parser registration for signature {signature!r}')
        if sig in self._parsers:
            raise ParserAlreadyRegisteredError(f'A parser is already registered for {signature_chars(sig)}')
        self._parsers[sig] = table_class

    def get_parser(self, signature: Union[str, int]) -> Optional[Type[ACPI_TABLE]]:
        return self._parsers.get(to_signature(signature))

    def is_registered(self, signature: Union[str, int]) -> bool:
        return to_signature(signature) in self._parsers

    def signatures(self) -> List[int]:
        return list(self._parsers.keys())

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._parsers)


PARSERS = ParserRegistry(ACPI_TABLES)
PARSERS.freeze()


def get_parser(signature: Union[str, int]) -> Optional[Type[ACPI_TABLE]]:
    return PARSERS.get_parser(signature)

########################################################################################################
#
# ACPI HAL Component
#
########################################################################################################


class ACPI(HALBase):
    def __init__(self, fw, registry: Optional[ParserRegistry] = None):
        super(ACPI, self).__init__(fw)
        self.registry = registry if registry is not None else PARSERS
        self.last_context: Optional[AcpiViewContext] = None

    #
    # Search for RSDP in the EFI memory (EFI Configuration Table)
    #
    def find_RSDP(self, ctx: AcpiViewContext) -> Tuple[int, int, int]:
        """Locates the ACPI 2.0+ RSDP and returns (address, revision, length).

        Raises:
            RsdpNotFoundError: the ACPI table GUID is not in the EFI Configuration Table
            UnsupportedRsdpRevisionError: the RSDP revision is less than 2
        """
        self.logger.log_hal('[acpi] Searching RSDP pointers in EFI Configuration Table...')
        try:
            ect = EFI_CONFIGURATION_TABLE(self.fw.get_efi_configuration_table())
        except (OsHelperError, UnimplementedAPIError) as err:
            self.logger.log_hal(f'[acpi] EFI Configuration Table is not available: {err}')
            ect = EFI_CONFIGURATION_TABLE()
        self.logger.log_hal(str(ect))

        rsdp_pa = ect.find(ACPI_20_TABLE_GUID)
        if rsdp_pa is None:
            ctx.counters.increment_error_count()
            raise RsdpNotFoundError('Failed to find ACPI Table Guid in System Configuration Table.')
        self.logger.log_hal(f'[acpi] ACPI 2.0+ RSDP {{{ACPI_20_TABLE_GUID}}} in EFI Config Table: 0x{rsdp_pa:016X}')

        try:
            revision = self.fw.mem.read_physical_mem_byte(rsdp_pa + RSDP_REVISION_OFFSET)
            if revision < 2:
                raise UnsupportedRsdpRevisionError(revision)
            length = self.fw.mem.read_physical_mem_dword(rsdp_pa + RSDP_LENGTH_OFFSET)
        except PhysicalMemoryReadError as err:
            ctx.counters.increment_error_count()
            raise RsdpNotFoundError(f'Failed to read the RSDP: {err}') from err
        return (rsdp_pa, revision, length)

    def run(self, settings: AcpiViewSettings) -> AcpiViewStatus:
        ctx = AcpiViewContext(settings)
        self.last_context = ctx

        if ReportOption.DUMP_BIN_FILE == settings.report_option:
            try:
                ctx.report.check_dump_sink()
            except SinkNotWritableError as err:
                self.logger.log_error(str(err))
                return AcpiViewStatus.INVALID_PARAMETER

        try:
            (rsdp_pa, revision, length) = self.find_RSDP(ctx)
        except RsdpNotFoundError as err:
            self.logger.log_error(str(err))
            return AcpiViewStatus.NOT_FOUND
        except UnsupportedRsdpRevisionError as err:
            self.logger.log_error(str(err))
            return AcpiViewStatus.UNSUPPORTED

        if settings.mandatory_table_validate:
            ctx.mandatory.reset()

        self.process_rsdp(ctx, rsdp_pa, revision, length)

        if settings.mandatory_table_validate and ReportOption.DUMP_BIN_FILE != settings.report_option:
            ctx.mandatory.validate(settings.mandatory_table_spec)

        self.summary(ctx)
        return AcpiViewStatus.SUCCESS

    def process_rsdp(self, ctx: AcpiViewContext, rsdp_pa: int, revision: int, length: int) -> None:
        ctx.mark_visited(rsdp_pa)
        try:
            table = self.fw.mem.read_physical_mem(rsdp_pa, min(length, ctx.settings.max_table_length))
        except PhysicalMemoryReadError as err:
            ctx.error(f'RSDP: {err}')
            return
        trace = ctx.report.process_table_report_options(ACPI_SIG_RSDP, table, length)
        self._dispatch(ctx, ACPI_SIG_RSDP, rsdp_pa, table, length, revision, trace, 0)

    def process_acpi_table(self, ctx: AcpiViewContext, address: int, depth: int = 1) -> None:
        settings = ctx.settings
        if depth > settings.max_table_depth:
            ctx.error(f'Table at 0x{address:016X} is nested deeper than {settings.max_table_depth:d} levels, not processed')
            return
        if not ctx.mark_visited(address):
            ctx.warning(f'Table at 0x{address:016X} is referenced more than once, not processed again')
            return

        try:
            prefix = self.fw.mem.read_physical_mem(address, ACPI_TABLE_PREFIX_SIZE)
        except PhysicalMemoryReadError as err:
            ctx.error(f'Unable to read the table header: {err}')
            return
        (sig_bytes, length) = struct.unpack_from(ACPI_TABLE_PREFIX_FORMAT, prefix)
        signature = bytes_to_signature(sig_bytes)
        name = signature_chars(signature)

        table = None
        if length < ACPI_TABLE_PREFIX_SIZE or length > settings.max_table_length:
            ctx.error(f'{name}: Table at 0x{address:016X} has invalid length 0x{length:X}')
        else:
            try:
                table = self.fw.mem.read_physical_mem(address, length)
            except PhysicalMemoryReadError as err:
                ctx.error(f'{name}: {err}')

        # A table that cannot be read is still listed, selected and counted as installed
        reported = prefix if table is None else table
        trace = ctx.report.process_table_report_options(signature, reported, len(reported))

        if settings.mandatory_table_validate:
            ctx.mandatory.increment_table_count(signature)
        if table is None:
            return

        if trace:
            print_buffer_bytes(table[:length], 16)
            # FACS has no checksum
            if ACPI_SIG_FACS != signature:
                self.verify_checksum(ctx, table[:length])

        revision = table[ACPI_TABLE_REVISION_OFFSET] if len(table) > ACPI_TABLE_REVISION_OFFSET else 0
        self._dispatch(ctx, signature, address, table, length, revision, trace, depth)

    def verify_checksum(self, ctx: AcpiViewContext, table: bytes) -> bool:
        table_checksum = checksum(table)
        if 0 == table_checksum:
            self.logger.log('\nTable Checksum : OK\n', color=('GREEN' if ctx.settings.colour_highlighting else None))
            return True
        ctx.error(f'Table Checksum : FAILED (0x{table_checksum:02X})')
        return False

    def _dispatch(self, ctx: AcpiViewContext, signature: int, address: int, table: bytes, length: int,
                  revision: int, trace: bool, depth: int) -> None:
        parser_class = self.registry.get_parser(signature)
        if parser_class is None:
            self.logger.log(f'No registered parser for {signature_chars(signature)} table at 0x{address:016X}, contents not decoded')
            return
        parsed_table = parser_class()
        parsed_table.process(ctx, trace, table, length, revision)
        for child_address in parsed_table.get_child_tables():
            self.process_acpi_table(ctx, child_address, depth + 1)

    def summary(self, ctx: AcpiViewContext) -> None:
        settings = ctx.settings
        option = settings.report_option
        if ReportOption.TABLE_LIST == option:
            return
        if option in (ReportOption.SELECTED, ReportOption.DUMP_BIN_FILE) and not ctx.report.found:
            self.logger.log('\nRequested ACPI Table not found.')
        elif settings.consistency_check and ReportOption.DUMP_BIN_FILE != option:
            errors = ctx.counters.get_error_count()
            warnings = ctx.counters.get_warning_count()
            highlight = settings.colour_highlighting
            self.logger.log('\nTable Statistics:')
            self.logger.log(f'\t{errors:d} Error(s)', color=('RED' if highlight and errors > 0 else None))
            self.logger.log(f'\t{warnings:d} Warning(s)', color=('RED' if highlight and warnings > 0 else None))
