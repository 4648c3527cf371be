# jenkins - A Jenkins build notifier for maubot
# Copyright (C) 2019 Lorenz Steinert
# Copyright (C) 2021 Tulir Asokan
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
from typing import Any, List, Optional

from markupsafe import escape

from .types import BuildRecord, JobNotificationConfig, Result
from .changes import BROKEN_RESULTS, summarize_changes, summarize_culprits
from .status import resolve_previous_result, status_label
from .util import fragments

SUCCESS_IMAGE = "static/0ccb0342/images/24x24/blue.png"
FAIL_IMAGE = "static/0ccb0342/images/24x24/red.png"
FAIL_GRAPHIC_RESULTS = (Result.UNSTABLE, Result.FAILURE, Result.ABORTED)


class MessageBuilder:
    """Builds the HTML body of a single notification.

    Every ``append_*`` method returns the builder so calls can be chained. The
    message always starts with the status graphic and the
    ``"{project} - {build} "`` prefix.
    """

    build_record: BuildRecord
    config: JobNotificationConfig
    server_url: str
    _parts: List[str]

    def __init__(self, build: BuildRecord, config: JobNotificationConfig, server_url: str
                 ) -> None:
        self.build_record = build
        self.config = config
        self.server_url = server_url
        self._parts = []
        self._append_graphic()
        self._start_message()

    def _append_graphic(self) -> None:
        image = FAIL_IMAGE if self.build_record.result in FAIL_GRAPHIC_RESULTS else SUCCESS_IMAGE
        self._parts.append(fragments.render("graphic", src=f"{self.server_url}{image}"))

    def _start_message(self) -> None:
        self._parts.append(f"{escape(self.build_record.project_display_name)} - "
                           f"{escape(self.build_record.display_name)} ")

    def append_text(self, text: str) -> 'MessageBuilder':
        self._parts.append(text)
        return self

    def append_value(self, value: Any) -> 'MessageBuilder':
        self._parts.append(str(value))
        return self

    def append_at_all_mention(self) -> 'MessageBuilder':
        if self.build_record.result in BROKEN_RESULTS and self.config.mention_all:
            self._parts.append("@all ")
        return self

    def append_status_message(self) -> 'MessageBuilder':
        build = self.build_record
        self._parts.append(status_label(build.result, resolve_previous_result(build),
                                        build.building))
        return self

    def append_open_link(self) -> 'MessageBuilder':
        url = f"{self.server_url}{self.build_record.url}"
        self._parts.append(fragments.render("open_link", url=url))
        return self

    def append_duration(self) -> 'MessageBuilder':
        self._parts.append(f" after {self.build_record.duration_string}")
        return self

    def _append_section(self, label: str, fragment: Optional[str]) -> 'MessageBuilder':
        if fragment:
            self._parts.append(fragments.render("section", label=label))
            self._parts.append(fragment)
        return self

    def append_culprits(self) -> 'MessageBuilder':
        return self._append_section("Culprits", summarize_culprits(self.build_record))

    def append_changes(self) -> 'MessageBuilder':
        return self._append_section("Changes", summarize_changes(self.build_record))

    def build(self) -> str:
        return "".join(self._parts)

    __str__ = build


def build_status_message(build: BuildRecord, config: JobNotificationConfig, server_url: str
                         ) -> str:
    return (MessageBuilder(build, config, server_url)
            .append_at_all_mention()
            .append_status_message()
            .append_duration()
            .append_open_link()
            .append_culprits()
            .build())
