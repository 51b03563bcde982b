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

import os
import tempfile
import unittest

from tests.software import mock_helper

import acpiview_main
from acpiview import firmware


class TestAcpiViewUtil(unittest.TestCase):
    """Test acpiview from its command line.

    Each test may define its virtual helper and then call the _acpiview
    method with the command line arguments.
    """

    def setUp(self):
        """Setup the environment for the command line tests.

        The firmware object is recreated for every test so it picks up the
        emulated helper.
        """
        fileno, self.log_file = tempfile.mkstemp()
        os.close(fileno)
        firmware.clear_fw()

    def tearDown(self):
        os.remove(self.log_file)
        firmware.clear_fw()

    def _acpiview(self, arg, helper_class=mock_helper.ACPIHelper, expected_code=0):
        """Run acpiview with the arguments.

        Each test may setup a virtual helper to emulate the firmware memory.
        If no helper is provided, ACPIHelper will be used. It verifies the
        exit code. self.log will be populated with the output.
        """
        args = arg.split()
        par = acpiview_main.parse_args(args)
        util = acpiview_main.AcpiViewMain(par, args)
        if helper_class is not None:
            util._helper = helper_class()
        util.logger.set_log_file(self.log_file)
        try:
            err_code = util.main()
        finally:
            util.logger.close()
        with open(self.log_file, 'rb') as log:
            self.log = log.read()
        self.assertEqual(err_code, expected_code)

    def _assertLogValue(self, name, value):
        """Shortcut to validate the output.

        Assert that at least one line exists within the log which matches the
        expression: name [:=] value.
        """
        exp = r'(^|\W){}\s*[:=]\s*{}($|\W)'.format(name, value)
        self.assertRegex(self.log, exp.encode())

    def _assertInLog(self, text):
        self.assertIn(text.encode(), self.log)

    def _assertNotInLog(self, text):
        self.assertNotIn(text.encode(), self.log)
