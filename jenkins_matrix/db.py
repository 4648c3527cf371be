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
from typing import Any, List, NamedTuple, Optional

import attr

from mautrix.types import RoomID
from mautrix.util.async_db import Database

from .types import ConfigurationMissing, JobNotificationConfig, Result

LastBuildInfo = NamedTuple('LastBuildInfo', number=int, result=Optional[Result])

_flag_columns = [field.name for field in attr.fields(JobNotificationConfig)
                 if field.type is bool]
_config_columns = ["project", "room_id", *_flag_columns]


class DBManager:
    db: Database

    def __init__(self, db: Database) -> None:
        self.db = db

    @staticmethod
    def _config_from_row(row: Any) -> JobNotificationConfig:
        return JobNotificationConfig(
            project=row["project"],
            room=row["room_id"] or "",
            **{name: bool(row[name]) for name in _flag_columns},
        )

    async def get_job_config(self, project: str) -> Optional[JobNotificationConfig]:
        q = f"SELECT {', '.join(_config_columns)} FROM job_config WHERE project = $1"
        row = await self.db.fetchrow(q, project)
        return self._config_from_row(row) if row else None

    async def get_notification_config(self, project: str) -> JobNotificationConfig:
        config = await self.get_job_config(project)
        if config is None:
            raise ConfigurationMissing(project)
        return config

    async def get_room_configs(self, room_id: RoomID) -> List[JobNotificationConfig]:
        q = f"SELECT {', '.join(_config_columns)} FROM job_config WHERE room_id = $1"
        rows = await self.db.fetch(q, room_id)
        return [self._config_from_row(row) for row in rows]

    async def put_job_config(self, config: JobNotificationConfig) -> None:
        placeholders = ", ".join(f"${i}" for i in range(1, len(_config_columns) + 1))
        updates = ", ".join(f"{name} = excluded.{name}" for name in _config_columns[1:])
        q = (
            f"INSERT INTO job_config ({', '.join(_config_columns)}) VALUES ({placeholders}) "
            f"ON CONFLICT (project) DO UPDATE SET {updates}"
        )
        await self.db.execute(q, config.project, config.room,
                              *(getattr(config, name) for name in _flag_columns))

    async def remove_job_config(self, project: str) -> None:
        await self.db.execute("DELETE FROM job_config WHERE project = $1", project)

    async def get_last_build(self, project: str) -> Optional[LastBuildInfo]:
        q = "SELECT project, number, result FROM last_build WHERE project = $1"
        row = await self.db.fetchrow(q, project)
        if not row:
            return None
        return LastBuildInfo(number=row["number"],
                             result=Result(row["result"]) if row["result"] else None)

    async def put_last_build(self, project: str, number: int, result: Optional[Result]) -> None:
        q = (
            "INSERT INTO last_build (project, number, result) VALUES ($1, $2, $3) "
            "ON CONFLICT (project) DO UPDATE "
            "SET number = excluded.number, result = excluded.result"
        )
        await self.db.execute(q, project, number, result.value if result else None)
