# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import unittest
from unittest import mock

import requests

from headsmith.errors import FetcherError
from headsmith.spdx import SpdxTemplateFetcher


def _response(data=None, error=None):
    response = mock.Mock()
    response.json.return_value = data
    if error is not None:
        response.raise_for_status.side_effect = error
    return response


class TestSpdxTemplateFetcher(unittest.TestCase):

    def setUp(self):
        self.fetcher = SpdxTemplateFetcher()
        self.get = mock.Mock()
        self.fetcher._session.get = self.get

    def tearDown(self):
        self.fetcher.close()

    def test_standard_license_header(self):
        self.get.return_value = _response({"standardLicenseHeader": "header", "licenseText": "text"})
        self.assertEqual(self.fetcher.fetch("Apache-2.0"), "header")
        self.assertEqual(self.get.call_args[0][0], "https://spdx.org/licenses/Apache-2.0.json")

    def test_license_text(self):
        self.get.return_value = _response({"standardLicenseHeader": "", "licenseText": "text"})
        self.assertEqual(self.fetcher.fetch("MIT"), "text")

    def test_cached(self):
        self.get.return_value = _response({"licenseText": "text"})
        self.fetcher.fetch("MIT")
        self.fetcher.fetch("MIT")
        self.assertEqual(self.get.call_count, 1)

    def test_http_error(self):
        self.get.return_value = _response(error=requests.HTTPError("404 Client Error"))
        with self.assertRaises(FetcherError):
            self.fetcher.fetch("NOT-A-LICENSE")

    def test_connection_error(self):
        self.get.side_effect = requests.ConnectionError("offline")
        with self.assertRaises(FetcherError):
            self.fetcher.fetch("MIT")

    def test_invalid_json(self):
        response = _response()
        response.json.side_effect = ValueError("no json")
        self.get.return_value = response
        with self.assertRaises(FetcherError):
            self.fetcher.fetch("MIT")

    def test_no_text(self):
        self.get.return_value = _response({"name": "MIT License"})
        with self.assertRaises(FetcherError):
            self.fetcher.fetch("MIT")


if __name__ == '__main__':
    unittest.main()
