# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3 import Retry

from headsmith.errors import FetcherError
from headsmith.log import get_child_logger

log = get_child_logger("spdx")

SPDX_LICENSE_URL = "https://spdx.org/licenses/{ident}.json"


class SpdxTemplateFetcher:
    """Downloads license header templates from the SPDX license list.

    The `standardLicenseHeader` of a license is used where the SPDX data
    defines one, its full `licenseText` otherwise.
    """

    RETRY_CODES = [429, 500, 502, 503, 504]
    USER_AGENT = "headsmith (license header tool)"

    def __init__(self, timeout: int = 10, retries: int = 3) -> None:
        self._timeout = timeout
        self._cache: dict[str, str] = {}

        retry = Retry(
            total=retries,
            backoff_factor=1,
            status_forcelist=self.RETRY_CODES,
        )

        self._session = requests.Session()
        self._session.mount(
            "https://",
            HTTPAdapter(max_retries=retry),
        )
        self._session.headers.update({
            "User-Agent": self.USER_AGENT,
            "Accept": "application/json",
        })

    def fetch(self, ident: str) -> str:
        """Get the header template of a license.

        Args:
            ident (str): SPDX license identifier, e.g. `Apache-2.0`.

        Raises:
            FetcherError: If the license could not be downloaded or has no text.
        """
        if ident in self._cache:
            return self._cache[ident]

        url = SPDX_LICENSE_URL.format(ident=ident)
        log.debug("fetching license template from %s", url)
        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as err:
            raise FetcherError(f"Failed to fetch the SPDX license '{ident}': {err}") from err
        except ValueError as err:
            raise FetcherError(f"Invalid SPDX license data for '{ident}': {err}") from err

        template = data.get("standardLicenseHeader") or data.get("licenseText")
        if not template:
            raise FetcherError(f"The SPDX license '{ident}' has no license text")
        self._cache[ident] = template
        return template

    def close(self) -> None:
        self._session.close()
