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
from typing import Iterable, List, Optional
import logging

from .types import AffectedFile, BuildRecord, ChangeEntry, Result
from .util import fragments

log = logging.getLogger(__name__)

BROKEN_RESULTS = (Result.FAILURE, Result.UNSTABLE)


def _unique_files(files: Iterable[AffectedFile]) -> List[AffectedFile]:
    # dict keeps first-seen order, AffectedFile hashes by identity
    return list(dict.fromkeys(files))


def summarize_for_start(changes: Optional[List[ChangeEntry]]) -> Optional[str]:
    if changes is None:
        log.debug("No change set computed")
        return None
    entries = list(changes)
    if not entries:
        log.debug("Empty change set")
        return None
    authors = list(dict.fromkeys(entry.author for entry in entries))
    files = _unique_files(file for entry in entries for file in entry.files)
    return (f"Started by changes from {', '.join(authors)} "
            f"({len(files)} file(s) changed)")


def summarize_culprits(build: BuildRecord) -> Optional[str]:
    if build.result not in BROKEN_RESULTS:
        return None
    if not build.culprits:
        return None
    return fragments.render("ordered_list", items=build.culprits)


def summarize_changes(build: BuildRecord, max_files: int = 10) -> Optional[str]:
    if build.result not in BROKEN_RESULTS:
        return None
    if not build.has_change_set_computed:
        log.debug("No change set computed for %s %s", build.project, build.display_name)
        return None
    files = _unique_files(build.affected_files)
    if not files:
        log.debug("Empty change set for %s %s", build.project, build.display_name)
        return None
    items = [file.path for file in files[:max_files]]
    if len(files) > max_files:
        items.append(f"... and {len(files) - max_files} more files")
    return fragments.render("ordered_list", items=items)
