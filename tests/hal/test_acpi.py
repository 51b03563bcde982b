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

import shutil
import tempfile
import unittest
from unittest.mock import MagicMock, patch

from tests.software import mock_helper

from acpiview.hal import acpi_tables
from acpiview.hal.acpi import ACPI, PARSERS, ParserRegistry, get_parser
from acpiview.hal.context import AcpiViewContext, AcpiViewSettings
from acpiview.hal.physmem import Memory
from acpiview.hal.report import ReportOption
from acpiview.library.exceptions import (ParserAlreadyRegisteredError, ParserRegistrationError, RsdpNotFoundError,
                                         UnsupportedRsdpRevisionError)
from acpiview.library.returncode import AcpiViewStatus
from acpiview.library.signature import ACPI_SIG_FACP, ACPI_SIG_MCFG


class TestParserRegistry(unittest.TestCase):

    def test_builtin_parsers(self):
        self.assertTrue(PARSERS.frozen)
        self.assertIs(acpi_tables.FADT, get_parser('FACP'))
        self.assertIs(acpi_tables.AML_TABLE, get_parser(b'SSDT'))
        self.assertIs(acpi_tables.MCFG, get_parser(ACPI_SIG_MCFG))
        self.assertIsNone(get_parser('GTDT'))
        self.assertEqual(9, len(PARSERS))

    def test_register(self):
        registry = ParserRegistry()
        registry.register('facp', acpi_tables.FADT)
        self.assertTrue(registry.is_registered(ACPI_SIG_FACP))
        self.assertEqual([ACPI_SIG_FACP], registry.signatures())

    def test_register_twice(self):
        registry = ParserRegistry({'FACP': acpi_tables.FADT})
        with self.assertRaises(ParserAlreadyRegisteredError):
            registry.register('FACP', acpi_tables.ACPI_TABLE)
        self.assertIs(acpi_tables.FADT, registry.get_parser('FACP'))

    def test_register_invalid(self):
        registry = ParserRegistry()
        with self.assertRaises(ParserRegistrationError):
            registry.register('', acpi_tables.FADT)
        with self.assertRaises(ParserRegistrationError):
            registry.register('FACP', None)

    def test_register_frozen(self):
        with self.assertRaises(ParserRegistrationError):
            PARSERS.register('GTDT', acpi_tables.ACPI_TABLE)
        self.assertFalse(PARSERS.is_registered('GTDT'))


@patch('acpiview.library.logger._logger')
class TestACPI(unittest.TestCase):

    def _acpi(self, helper_class=mock_helper.FADTParsingHelper, registry=None):
        fw = MagicMock()
        fw.helper = helper_class()
        fw.get_efi_configuration_table.side_effect = fw.helper.get_efi_configuration_table
        fw.mem = Memory(fw)
        return ACPI(fw, registry)

    def _logged(self, logger_mock, method='log'):
        return [c.args[0] for c in getattr(logger_mock, method).call_args_list]

    def test_find_rsdp(self, logger_mock):
        acpi = self._acpi()
        ctx = AcpiViewContext(AcpiViewSettings())
        self.assertEqual((0x1000, 2, 36), acpi.find_RSDP(ctx))

    def test_find_rsdp_no_guid(self, logger_mock):
        acpi = self._acpi(mock_helper.NoAcpiHelper)
        ctx = AcpiViewContext(AcpiViewSettings())
        with self.assertRaises(RsdpNotFoundError):
            acpi.find_RSDP(ctx)
        self.assertEqual(1, ctx.counters.get_error_count())

    def test_find_rsdp_no_config_table(self, logger_mock):
        acpi = self._acpi(mock_helper.TestHelper)
        with self.assertRaises(RsdpNotFoundError):
            acpi.find_RSDP(AcpiViewContext(AcpiViewSettings()))

    def test_find_rsdp_legacy(self, logger_mock):
        acpi = self._acpi(mock_helper.LegacyRsdpHelper)
        with self.assertRaises(UnsupportedRsdpRevisionError):
            acpi.find_RSDP(AcpiViewContext(AcpiViewSettings()))

    def test_find_rsdp_unreadable(self, logger_mock):
        acpi = self._acpi(mock_helper.ShortRsdpHelper)
        ctx = AcpiViewContext(AcpiViewSettings())
        with self.assertRaises(RsdpNotFoundError):
            acpi.find_RSDP(ctx)
        self.assertEqual(1, ctx.counters.get_error_count())
        self.assertEqual(AcpiViewStatus.NOT_FOUND, acpi.run(AcpiViewSettings()))

    def test_run(self, logger_mock):
        acpi = self._acpi()
        self.assertEqual(AcpiViewStatus.SUCCESS, acpi.run(AcpiViewSettings()))
        ctx = acpi.last_context
        self.assertEqual(0, ctx.counters.get_error_count())
        self.assertEqual(0, ctx.counters.get_warning_count())
        self.assertEqual({0x1000, 0x1100, 0x300, 0x500, 0x600}, ctx.visited)
        self.assertIn('\nTable Statistics:', self._logged(logger_mock))

    def test_run_status(self, logger_mock):
        self.assertEqual(AcpiViewStatus.NOT_FOUND, self._acpi(mock_helper.NoAcpiHelper).run(AcpiViewSettings()))
        self.assertEqual(AcpiViewStatus.UNSUPPORTED, self._acpi(mock_helper.LegacyRsdpHelper).run(AcpiViewSettings()))

    def test_run_resets_state(self, logger_mock):
        acpi = self._acpi(mock_helper.SBBRPlatformHelper)
        settings = AcpiViewSettings(mandatory_table_validate=True, mandatory_table_spec=1)
        acpi.run(settings)
        first = acpi.last_context
        acpi.run(settings)
        self.assertIsNot(first, acpi.last_context)
        self.assertEqual(1, acpi.last_context.counters.get_error_count())
        self.assertEqual(1, acpi.last_context.mandatory.get_table_count(ACPI_SIG_FACP))

    def test_run_legacy_leaves_state_clean(self, logger_mock):
        acpi = self._acpi(mock_helper.LegacyRsdpHelper)
        acpi.run(AcpiViewSettings())
        ctx = acpi.last_context
        self.assertEqual(0, ctx.counters.get_error_count())
        self.assertEqual(0, ctx.counters.get_warning_count())
        self.assertEqual(set(), ctx.visited)

    def test_unreadable_table(self, logger_mock):
        acpi = self._acpi(mock_helper.UnreadableTableHelper)
        self.assertEqual(AcpiViewStatus.SUCCESS, acpi.run(AcpiViewSettings()))
        ctx = acpi.last_context
        self.assertEqual(1, ctx.counters.get_error_count())
        self.assertEqual({0x1000, 0x1100, 0xDEAD0000, 0x400}, ctx.visited)
        self.assertIn('\nTable Statistics:', self._logged(logger_mock))

    def test_depth_limit(self, logger_mock):
        acpi = self._acpi()
        acpi.run(AcpiViewSettings(max_table_depth=2))
        ctx = acpi.last_context
        self.assertEqual(2, ctx.counters.get_error_count())
        self.assertEqual({0x1000, 0x1100, 0x300}, ctx.visited)

    def test_length_limit(self, logger_mock):
        acpi = self._acpi()
        acpi.run(AcpiViewSettings(max_table_length=0x100))
        ctx = acpi.last_context
        self.assertEqual(1, ctx.counters.get_error_count())
        self.assertIn('FACP: Table at 0x0000000000000300 has invalid length 0x114', self._logged(logger_mock, 'log_error'))

    def test_length_limit_table_still_reported(self, logger_mock):
        acpi = self._acpi()
        acpi.run(AcpiViewSettings(report_option=ReportOption.TABLE_LIST, max_table_length=0x100,
                                  mandatory_table_validate=True))
        ctx = acpi.last_context
        self.assertIn('\t   3. FACP', self._logged(logger_mock))
        self.assertEqual(1, ctx.mandatory.get_table_count(ACPI_SIG_FACP))
        self.assertNotIn(0x500, ctx.visited)

    def test_unregistered_children_not_followed(self, logger_mock):
        registry = ParserRegistry({'RSDP': acpi_tables.RSDP, 'XSDT': acpi_tables.XSDT})
        acpi = self._acpi(registry=registry)
        acpi.run(AcpiViewSettings())
        self.assertEqual({0x1000, 0x1100, 0x300}, acpi.last_context.visited)
        self.assertIn('No registered parser for FACP table at 0x0000000000000300, contents not decoded',
                      self._logged(logger_mock))

    def test_table_list(self, logger_mock):
        acpi = self._acpi()
        acpi.run(AcpiViewSettings(report_option=ReportOption.TABLE_LIST, mandatory_table_validate=True))
        logged = self._logged(logger_mock)
        self.assertIn('\t   5. DSDT', logged)
        self.assertNotIn('\nTable Statistics:', logged)
        self.assertIn('SBBR 1.0: Mandatory GTDT table is missing', self._logged(logger_mock, 'log_error'))

    def test_dump_skips_mandatory_validation(self, logger_mock):
        dump_dir = tempfile.mkdtemp()
        try:
            acpi = self._acpi()
            status = acpi.run(AcpiViewSettings(report_option=ReportOption.DUMP_BIN_FILE, selected_table_name='DSDT',
                                               dump_dir=dump_dir, mandatory_table_validate=True))
            self.assertEqual(AcpiViewStatus.SUCCESS, status)
            self.assertEqual(0, acpi.last_context.counters.get_error_count())
            self.assertTrue(acpi.last_context.report.found)
        finally:
            shutil.rmtree(dump_dir)

    def test_dump_sink_not_writable(self, logger_mock):
        acpi = self._acpi()
        status = acpi.run(AcpiViewSettings(report_option=ReportOption.DUMP_BIN_FILE, selected_table_name='DSDT',
                                           dump_dir='/nonexistent/acpiview'))
        self.assertEqual(AcpiViewStatus.INVALID_PARAMETER, status)
        self.assertEqual([], acpi.fw.helper.reads)

    def test_summary_highlighting(self, logger_mock):
        acpi = self._acpi()
        ctx = AcpiViewContext(AcpiViewSettings(colour_highlighting=True))
        ctx.counters.increment_error_count()
        acpi.summary(ctx)
        logger_mock.log.assert_any_call('\t1 Error(s)', color='RED')
        logger_mock.log.assert_any_call('\t0 Warning(s)', color=None)

    def test_summary_quiet(self, logger_mock):
        acpi = self._acpi()
        acpi.summary(AcpiViewContext(AcpiViewSettings(consistency_check=False)))
        logger_mock.log.assert_not_called()

    def test_verify_checksum(self, logger_mock):
        acpi = self._acpi()
        ctx = AcpiViewContext(AcpiViewSettings())
        self.assertTrue(acpi.verify_checksum(ctx, mock_helper.create_acpi_table(b"SSDT")))
        self.assertFalse(acpi.verify_checksum(ctx, b"SSDT\x01"))
        self.assertEqual(1, ctx.counters.get_error_count())


if __name__ == '__main__':
    unittest.main()
