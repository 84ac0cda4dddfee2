# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later

__version__ = "0.3.0"
