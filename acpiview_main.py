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
Displays the ACPI tables installed by the firmware and checks them for consistency
"""

import argparse
import sys
from typing import Any, Dict, Optional, Sequence

from acpiview.firmware import fw
from acpiview.hal.acpi import ACPI
from acpiview.hal.context import DEFAULT_MAX_TABLE_DEPTH, DEFAULT_MAX_TABLE_LENGTH, AcpiViewSettings
from acpiview.hal.report import ReportOption
from acpiview.helper.oshelper import helper
from acpiview.library.banner import print_banner, print_banner_properties
from acpiview.library.defines import get_version, os_version
from acpiview.library.exceptions import AcpiViewError
from acpiview.library.logger import logger
from acpiview.library.options import Options
from acpiview.library.returncode import ExitCode, status_to_exit_code


def hex_spec_id(value: str) -> int:
    try:
        return int(value, 16)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid hexadecimal specification identifier: '{value}'")


def parse_args(argv: Sequence[str]) -> Optional[Dict[str, Any]]:
    """Parse the arguments provided on the command line."""
    options = Options()

    default_helper = options.get_section_data('Util_Config', 'default_helper', None)
    parser = argparse.ArgumentParser(prog='acpiview', usage='%(prog)s [options]', add_help=False,
                                     formatter_class=argparse.RawDescriptionHelpFormatter, epilog=ExitCode.help_epilog)
    tables = parser.add_argument_group('Table options')
    tables.add_argument('-?', '--help', dest='show_help', help='Show this message and exit', action='store_true')
    tables.add_argument('-q', dest='quiet', help='Disable the consistency checking of the ACPI tables', action='store_true')
    tables.add_argument('-d', dest='dump', help='Dump the selected ACPI table to a binary file (requires -s)', action='store_true')
    tables.add_argument('-h', dest='highlight', help='Enable colour highlighting', action='store_true')
    tables.add_argument('-l', dest='table_list', help='Display the list of installed ACPI tables', action='store_true')
    tables.add_argument('-s', dest='select', metavar='NAME', help='Only display the ACPI table with the given signature')
    tables.add_argument('-r', dest='spec', metavar='SPEC', type=hex_spec_id,
                        help='Check that all the ACPI tables required by the specification are installed '
                             '(hex identifier: 0 = SBBR 1.0, 1 = SBBR 1.1, 2 = SBBR 1.2)')
    log_opts = parser.add_argument_group('Logging options')
    log_opts.add_argument('-v', '--verbose', help='Verbose logging', action='store_true')
    log_opts.add_argument('--hal', help='HAL logging', action='store_true')
    log_opts.add_argument('--debug', help='Debug logging', action='store_true')
    log_opts.add_argument('--log', help='Output to log file')
    platform_opts = parser.add_argument_group('Platform options')
    platform_opts.add_argument('--helper', dest='_helper', help='Specify OS Helper', choices=helper().get_available_helpers(), default=default_helper)
    platform_opts.add_argument('--replay', dest='_replay', metavar='FILE', help='Read the firmware memory from a JSON capture')
    platform_opts.add_argument('--dump-dir', dest='dump_dir', metavar='DIR', help='Directory receiving the dumped tables')
    par = vars(parser.parse_args(argv))

    if par['show_help']:
        parser.print_help()
        return None
    return par


class AcpiViewMain:

    def __init__(self, switches: Dict[str, Any], argv: Sequence[str]):
        self.logger = logger()
        self.options = Options()
        self.__dict__.update(switches)
        self.argv = argv
        self.parse_switches()

    def parse_switches(self) -> None:
        self.logger.set_log_level(self.verbose, self.hal, self.debug, False)
        if self.log:
            self.logger.set_log_file(self.log)

    def validate_switches(self) -> bool:
        if self.select and self.table_list:
            self.logger.log_error("Too many arguments: '-s' cannot be combined with '-l'")
            return False
        if self.dump and not self.select:
            self.logger.log_error("Missing option: '-d' requires '-s'")
            return False
        return True

    def get_report_option(self) -> ReportOption:
        if self.table_list:
            return ReportOption.TABLE_LIST
        if self.select:
            return ReportOption.DUMP_BIN_FILE if self.dump else ReportOption.SELECTED
        return ReportOption.ALL

    def get_settings(self) -> AcpiViewSettings:
        section = 'AcpiView_Config'
        consistency_check = self.options.get_bool_data(section, 'consistency_check', True)
        colour_highlighting = self.options.get_bool_data(section, 'colour_highlighting', False)
        return AcpiViewSettings(
            consistency_check=consistency_check and not self.quiet,
            colour_highlighting=colour_highlighting or self.highlight,
            mandatory_table_validate=self.spec is not None,
            mandatory_table_spec=self.spec if self.spec is not None else 0,
            report_option=self.get_report_option(),
            selected_table_name=self.select or '',
            dump_dir=self.dump_dir or self.options.get_section_data(section, 'dump_directory', '.'),
            max_table_depth=self.options.get_int_data(section, 'max_table_depth', DEFAULT_MAX_TABLE_DEPTH),
            max_table_length=self.options.get_int_data(section, 'max_table_length', DEFAULT_MAX_TABLE_LENGTH),
        )

    ##################################################################################
    # Entry point
    ##################################################################################

    def main(self) -> int:
        if not self.validate_switches():
            return ExitCode.INVALID_PARAMETER

        print_banner(self.argv, get_version())

        firmware = fw()
        try:
            if self._replay:
                firmware.load_helper('replayhelper', self._replay)
            else:
                firmware.load_helper(self._helper)
            firmware.start_helper()
        except (AcpiViewError, FileNotFoundError) as msg:
            self.logger.log_error(str(msg))
            return ExitCode.NOT_FOUND

        print_banner_properties(firmware, os_version())

        try:
            status = ACPI(firmware).run(self.get_settings())
        finally:
            firmware.destroy_helper()
        self.logger.log_debug(f'[acpiview] Run status: {status.value}')
        return status_to_exit_code(status)


def run(cli_cmd: str = '') -> int:
    cli_cmds = []
    if cli_cmd:
        cli_cmds = cli_cmd.strip().split(' ')
    return main(cli_cmds)


def main(argv: Sequence[str] = sys.argv[1:]) -> int:
    par = parse_args(argv)
    if par is not None:
        acpiviewMain = AcpiViewMain(par, argv)
        return acpiviewMain.main()
    return ExitCode.OK


if __name__ == "__main__":
    sys.exit(main())
