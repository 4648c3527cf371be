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
from typing import Optional, Protocol
import logging

from markupsafe import escape

from .types import BuildPhase, BuildRecord, Color, JobNotificationConfig, MessageFormat
from .changes import summarize_for_start
from .message import MessageBuilder, build_status_message
from .status import classify_color, resolve_previous_result, should_notify


class Publisher(Protocol):
    async def publish(self, message: str, color: Color,
                      fmt: MessageFormat = MessageFormat.TEXT) -> None:
        ...


class PublisherFactory(Protocol):
    def resolve_service(self, room: Optional[str]) -> Publisher:
        ...


class NotificationConfigStore(Protocol):
    async def get_notification_config(self, project: str) -> JobNotificationConfig:
        ...


class EventNotifier:
    """Turns build lifecycle events into chat notifications.

    The config store must have settings for every project it is asked about,
    a missing config raises from the store and is not handled here.
    """

    publisher: PublisherFactory
    config_store: NotificationConfigStore
    server_url: str
    log: logging.Logger

    def __init__(self, publisher: PublisherFactory, config_store: NotificationConfigStore,
                 server_url: str, log: Optional[logging.Logger] = None) -> None:
        self.publisher = publisher
        self.config_store = config_store
        self.server_url = server_url
        self.log = log or logging.getLogger(__name__)

    async def handle(self, phase: BuildPhase, build: BuildRecord) -> None:
        if phase == BuildPhase.STARTED:
            await self.started(build)
        elif phase == BuildPhase.COMPLETED:
            await self.completed(build)
        elif phase == BuildPhase.FINALIZED:
            await self.finalized(build)
        elif phase == BuildPhase.DELETED:
            await self.deleted(build)
        else:
            self.log.debug(f"Ignoring {phase.value} event for {build.project}")

    async def started(self, build: BuildRecord) -> None:
        config = await self.config_store.get_notification_config(build.project)
        changes = summarize_for_start(build.changes)
        if changes:
            message = (MessageBuilder(build, config, self.server_url)
                       .append_text(escape(changes))
                       .append_open_link()
                       .build())
        elif build.cause:
            message = (MessageBuilder(build, config, self.server_url)
                       .append_text(escape(build.cause))
                       .append_open_link()
                       .build())
        else:
            message = build_status_message(build, config, self.server_url)
        await self._publish(config, message, Color.GREEN)

    async def completed(self, build: BuildRecord) -> None:
        self.log.info(f"Processing {build.project} {build.display_name}")
        config = await self.config_store.get_notification_config(build.project)
        previous_result = resolve_previous_result(build)
        if not should_notify(build.result, previous_result, config):
            self.log.debug(f"Not notifying about {build.project} {build.display_name} "
                           f"({build.result!r}, previously {previous_result!r})")
            return
        message = build_status_message(build, config, self.server_url)
        color = classify_color(build.result)
        await self._publish(config, message, color)

    async def deleted(self, build: BuildRecord) -> None:
        pass

    async def finalized(self, build: BuildRecord) -> None:
        pass

    async def _publish(self, config: JobNotificationConfig, message: str, color: Color) -> None:
        self.log.info(f"Publishing to {config.room or 'default room'}, color: {color.value}")
        self.log.debug(f"Message: {message}")
        service = self.publisher.resolve_service(config.room)
        await service.publish(message, color, MessageFormat.HTML)
