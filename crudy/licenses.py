"""License catalogue used to stamp generated files.

Each entry carries the header text that is placed, as a comment block, at the
top of the generated entry point.  Lookup is case-insensitive and accepts a
handful of common spellings per license (``apache2``, ``Apache-2.0``, ...).
The special key ``none`` means "no license block".
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .errors import UnknownLicenseError


class License(BaseModel):
    """A license known to crudy."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Canonical catalogue key")
    name: str = Field(..., description="Human readable license name")
    header: str = Field(default="", description="Header text for source files")
    aliases: tuple[str, ...] = Field(default=())

    @property
    def present(self) -> bool:
        """``True`` when there is header text to render."""
        return bool(self.header.strip())


# ---------------------------------------------------------------------------
# Header texts
# ---------------------------------------------------------------------------

_APACHE_HEADER = """\
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License."""

_MIT_HEADER = """\
Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
THE SOFTWARE."""

_BSD_HEADER = """\
Use of this source code is governed by a BSD-style license that can be
found in the LICENSE file."""

_GPL3_HEADER = """\
This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program. If not, see <http://www.gnu.org/licenses/>."""

_LGPL3_HEADER = """\
This program is free software: you can redistribute it and/or modify
it under the terms of the GNU Lesser General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU Lesser General Public License for more details.

You should have received a copy of the GNU Lesser General Public License
along with this program. If not, see <http://www.gnu.org/licenses/>."""


LICENSES: dict[str, License] = {
    lic.key: lic
    for lic in (
        License(
            key="apache",
            name="Apache 2.0",
            header=_APACHE_HEADER,
            aliases=("apache", "apache20", "apache 2.0", "apache2.0", "apache-2.0", "apache2"),
        ),
        License(key="mit", name="MIT License", header=_MIT_HEADER, aliases=("mit",)),
        License(
            key="bsd",
            name="BSD 3-Clause",
            header=_BSD_HEADER,
            aliases=("bsd", "bsd-3", "bsd3", "bsd-3-clause", "newbsd"),
        ),
        License(
            key="gpl3",
            name="GNU General Public License 3.0",
            header=_GPL3_HEADER,
            aliases=("gpl3", "gplv3", "gpl-3.0", "gpl", "gnu gpl3"),
        ),
        License(
            key="lgpl3",
            name="GNU Lesser General Public License 3.0",
            header=_LGPL3_HEADER,
            aliases=("lgpl3", "lgplv3", "lgpl-3.0", "lgpl"),
        ),
    )
}

NO_LICENSE_KEYS = frozenset({"none", "", "false"})


def get_license(key: str) -> License | None:
    """Look up a license by key or alias.

    Args:
        key: Catalogue key or one of its aliases.  Matching ignores case and
            surrounding whitespace.

    Returns:
        The matching :class:`License`, or ``None`` for ``"none"``.

    Raises:
        UnknownLicenseError: If *key* does not match any entry.
    """
    wanted = key.strip().lower()
    if wanted in NO_LICENSE_KEYS:
        return None
    for lic in LICENSES.values():
        if wanted == lic.key or wanted in lic.aliases:
            return lic
    raise UnknownLicenseError(key)


def list_licenses() -> list[License]:
    """Return every catalogued license sorted by key."""
    return [LICENSES[k] for k in sorted(LICENSES)]
