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
Base for HAL Components
"""

from acpiview.library.logger import logger


class HALBase:
    def __init__(self, fw):
        self.fw = fw
        self.logger = logger()
