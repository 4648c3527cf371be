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
from mautrix.util.async_db import Connection, UpgradeTable

upgrade_table = UpgradeTable()


@upgrade_table.register(description="Initial revision")
async def upgrade_v1(conn: Connection) -> None:
    await conn.execute(
        """CREATE TABLE IF NOT EXISTS job_config (
            project                TEXT,
            room_id                TEXT NOT NULL DEFAULT '',
            notify_aborted         BOOLEAN NOT NULL DEFAULT true,
            notify_failure         BOOLEAN NOT NULL DEFAULT true,
            notify_not_built       BOOLEAN NOT NULL DEFAULT false,
            notify_back_to_normal  BOOLEAN NOT NULL DEFAULT true,
            notify_success         BOOLEAN NOT NULL DEFAULT false,
            notify_unstable        BOOLEAN NOT NULL DEFAULT true,
            mention_all            BOOLEAN NOT NULL DEFAULT false,

            PRIMARY KEY (project)
        )"""
    )
    await conn.execute(
        """CREATE TABLE IF NOT EXISTS last_build (
            project                TEXT,
            number                 INTEGER NOT NULL,
            result                 VARCHAR(32),

            PRIMARY KEY (project)
        )"""
    )
