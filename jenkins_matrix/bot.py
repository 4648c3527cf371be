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
from typing import Type

from mautrix.util.async_db import UpgradeTable
from mautrix.util.config import BaseProxyConfig
from maubot import Plugin

from .db import DBManager
from .migrations import upgrade_table
from .notifier import EventNotifier
from .publisher import MatrixPublisher
from .util import Config
from .webhook import JenkinsWebhook
from .commands import JenkinsCommands


class JenkinsBot(Plugin):
    db: DBManager
    notifier: EventNotifier
    webhook: JenkinsWebhook
    commands: JenkinsCommands

    async def start(self) -> None:
        self.config.load_and_update()

        self.db = DBManager(self.database)
        self.notifier = self.create_notifier()
        self.webhook = await JenkinsWebhook(self).start()
        self.commands = JenkinsCommands(self)

        self.register_handler_class(self.webhook)
        self.register_handler_class(self.commands)

    async def stop(self) -> None:
        await self.webhook.stop()

    def create_notifier(self) -> EventNotifier:
        return EventNotifier(MatrixPublisher(self), self.db, self.config.jenkins_url,
                             log=self.log.getChild("notifier"))

    def on_external_config_update(self) -> None:
        self.config.load_and_update()
        self.notifier = self.create_notifier()

    @classmethod
    def get_config_class(cls) -> Type[BaseProxyConfig]:
        return Config

    @classmethod
    def get_db_upgrade_table(cls) -> UpgradeTable:
        return upgrade_table
