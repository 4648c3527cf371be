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
from typing import Dict, List, Optional, Iterable

from attr import dataclass
from yarl import URL
import attr

from mautrix.types import ExtensibleEnum, SerializableAttrs

from .util import TemplateUtil


class ConfigurationMissing(LookupError):
    """Raised when a job has no notification settings."""

    def __init__(self, project: str) -> None:
        super().__init__(f"No notification settings for {project}")
        self.project = project


class Result(ExtensibleEnum):
    SUCCESS = "SUCCESS"
    UNSTABLE = "UNSTABLE"
    FAILURE = "FAILURE"
    NOT_BUILT = "NOT_BUILT"
    ABORTED = "ABORTED"


class BuildPhase(ExtensibleEnum):
    QUEUED = "QUEUED"
    STARTED = "STARTED"
    COMPLETED = "COMPLETED"
    FINALIZED = "FINALIZED"
    DELETED = "DELETED"


class MessageFormat(ExtensibleEnum):
    TEXT = "text"
    HTML = "html"


class Color(ExtensibleEnum):
    GREEN = "green"
    RED = "red"
    YELLOW = "yellow"

    @property
    def color_circle(self) -> str:
        return _color_circles.get(self, "⚪")


_color_circles: Dict[Color, str] = {
    Color.GREEN: "🟢",
    Color.RED: "🔴",
    Color.YELLOW: "🟡",
}


# Affected files are compared by identity, so the same path touched by two
# commits counts twice unless the change set hands out the same object.
@dataclass(eq=False, hash=False)
class AffectedFile(SerializableAttrs):
    path: str
    edit_type: Optional[str] = None


@dataclass
class ChangeEntry(SerializableAttrs):
    author: str
    affected_files: Optional[List[AffectedFile]] = None
    commit_id: Optional[str] = None
    message: Optional[str] = None

    @property
    def files(self) -> List[AffectedFile]:
        return self.affected_files or []


@dataclass(frozen=True)
class JobNotificationConfig:
    project: str
    room: str = ""
    notify_aborted: bool = True
    notify_failure: bool = True
    notify_not_built: bool = False
    notify_back_to_normal: bool = True
    notify_success: bool = False
    notify_unstable: bool = True
    mention_all: bool = False

    @property
    def flags(self) -> Dict[str, bool]:
        return {field.name: getattr(self, field.name)
                for field in attr.fields(type(self)) if field.type is bool}


@dataclass(frozen=True)
class BuildRecord:
    """A read-only snapshot of one build, as reported by Jenkins.

    ``changes`` is None until Jenkins has computed the change set, which is
    different from a computed change set without entries.
    """

    project: str
    project_display_name: str
    display_name: str
    url: str
    number: Optional[int] = None
    result: Optional[Result] = None
    building: bool = False
    duration_string: str = ""
    previous_build: Optional['BuildRecord'] = None
    culprits: List[str] = attr.ib(factory=list)
    changes: Optional[List[ChangeEntry]] = None
    cause: Optional[str] = None

    @property
    def has_change_set_computed(self) -> bool:
        return self.changes is not None

    @property
    def affected_files(self) -> Iterable[AffectedFile]:
        for entry in self.changes or []:
            yield from entry.files


@dataclass
class JenkinsPreviousBuild(SerializableAttrs):
    number: int
    status: Optional[Result] = None
    display_name: Optional[str] = None


@dataclass
class JenkinsBuild(SerializableAttrs):
    number: int
    phase: BuildPhase
    url: Optional[str] = None
    full_url: Optional[str] = None
    display_name: Optional[str] = None
    status: Optional[Result] = None
    duration: Optional[int] = None
    duration_string: Optional[str] = None
    building: Optional[bool] = None
    culprits: Optional[List[str]] = None
    cause: Optional[str] = None
    changes: Optional[List[ChangeEntry]] = None
    previous: Optional[JenkinsPreviousBuild] = None

    @property
    def relative_url(self) -> str:
        if self.url:
            return self.url
        elif self.full_url:
            return URL(self.full_url).path.lstrip("/")
        return ""

    @property
    def human_duration(self) -> str:
        if self.duration_string:
            return self.duration_string
        elif self.duration is not None:
            return TemplateUtil.format_time(self.duration / 1000)
        return ""


@dataclass
class JenkinsNotification(SerializableAttrs):
    name: str
    build: JenkinsBuild
    display_name: Optional[str] = None
    url: Optional[str] = None

    @property
    def phase(self) -> BuildPhase:
        return self.build.phase

    def to_record(self, fallback_previous: Optional[BuildRecord] = None) -> BuildRecord:
        build = self.build
        project_display_name = self.display_name or self.name
        previous = fallback_previous
        if build.previous:
            previous = BuildRecord(
                project=self.name,
                project_display_name=project_display_name,
                display_name=build.previous.display_name or f"#{build.previous.number}",
                url="",
                number=build.previous.number,
                result=build.previous.status,
            )
        building = (build.building if build.building is not None
                    else build.phase == BuildPhase.STARTED)
        return BuildRecord(
            project=self.name,
            project_display_name=project_display_name,
            display_name=build.display_name or f"#{build.number}",
            url=build.relative_url,
            number=build.number,
            result=build.status,
            building=building,
            duration_string=build.human_duration,
            previous_build=previous,
            culprits=list(build.culprits or []),
            changes=build.changes,
            cause=build.cause,
        )
