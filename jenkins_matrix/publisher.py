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
from typing import Optional, TYPE_CHECKING

from mautrix.errors import MatrixError
from mautrix.types import RoomID, MessageType, TextMessageEventContent, Format
from mautrix.util.formatter import parse_html

from .types import Color, MessageFormat

if TYPE_CHECKING:
    from .bot import JenkinsBot


class RoomPublisher:
    bot: 'JenkinsBot'
    room_id: Optional[RoomID]

    def __init__(self, bot: 'JenkinsBot', room_id: Optional[RoomID]) -> None:
        self.bot = bot
        self.room_id = room_id

    async def publish(self, message: str, color: Color,
                      fmt: MessageFormat = MessageFormat.TEXT) -> None:
        log = self.bot.log.getChild("publisher")
        if not self.room_id:
            log.warning("No room to publish to, set default_room in the config")
            return
        msgtype = MessageType.NOTICE if self.bot.config["send_as_notice"] else MessageType.TEXT
        if self.bot.config["color_circles"]:
            message = f"{color.color_circle} {message}"
        if fmt == MessageFormat.HTML:
            content = TextMessageEventContent(msgtype=msgtype, format=Format.HTML,
                                              formatted_body=message,
                                              body=await parse_html(message))
        else:
            content = TextMessageEventContent(msgtype=msgtype, body=message)
        content["xyz.maubot.jenkins"] = {"color": color.value}
        try:
            await self.bot.client.send_message(self.room_id, content)
        except MatrixError:
            log.warning(f"Failed to publish notification to {self.room_id}", exc_info=True)


class MatrixPublisher:
    bot: 'JenkinsBot'

    def __init__(self, bot: 'JenkinsBot') -> None:
        self.bot = bot

    def resolve_service(self, room: Optional[str]) -> RoomPublisher:
        room_id = room or self.bot.config["default_room"] or None
        return RoomPublisher(self.bot, RoomID(room_id) if room_id else None)
