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
from typing import Optional

from .types import BuildRecord, Color, JobNotificationConfig, Result


def resolve_previous_result(build: BuildRecord) -> Optional[Result]:
    """Return the result of the build before ``build``.

    A job without history counts as previously successful, so its first green
    build is never reported as being back to normal.
    """
    if build.previous_build is None:
        return Result.SUCCESS
    return build.previous_build.result


def classify_color(result: Optional[Result]) -> Color:
    if result == Result.SUCCESS:
        return Color.GREEN
    elif result in (Result.FAILURE, Result.UNSTABLE):
        return Color.RED
    return Color.YELLOW


def should_notify(result: Optional[Result], previous_result: Optional[Result],
                  config: JobNotificationConfig) -> bool:
    return ((result == Result.ABORTED and config.notify_aborted)
            or (result == Result.FAILURE and config.notify_failure)
            or (result == Result.NOT_BUILT and config.notify_not_built)
            or (result == Result.SUCCESS and previous_result == Result.FAILURE
                and config.notify_back_to_normal)
            or (result == Result.SUCCESS and config.notify_success)
            or (result == Result.UNSTABLE and config.notify_unstable))


def status_label(result: Optional[Result], previous_result: Optional[Result],
                 building: bool) -> str:
    if building:
        return "Starting..."
    # Checked before plain success
    if result == Result.SUCCESS and previous_result == Result.FAILURE:
        return "Back to normal"
    elif result == Result.SUCCESS:
        return "successful"
    elif result == Result.FAILURE:
        return "failed"
    elif result == Result.ABORTED:
        return "aborted"
    elif result == Result.NOT_BUILT:
        return "Not built"
    elif result == Result.UNSTABLE:
        return "unstable"
    return "Unknown"
