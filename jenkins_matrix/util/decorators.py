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
from typing import Any, Awaitable, Callable, TYPE_CHECKING
from functools import wraps

from mautrix.types import EventType

from maubot import MessageEvent

if TYPE_CHECKING:
    from ..commands import Command


Decoratable = Callable[..., Awaitable[Any]]


def require_power_level(func: Decoratable) -> Decoratable:
    @wraps(func)
    async def wrapper(self: 'Command', evt: MessageEvent, **kwargs) -> Any:
        power_levels = await self.bot.client.get_state_event(evt.room_id,
                                                             EventType.ROOM_POWER_LEVELS)
        if power_levels.get_user_level(evt.sender) < power_levels.state_default:
            await evt.reply("You don't have the permission to change "
                            "the notification settings of this room")
            return
        return await func(self, evt, **kwargs)

    return wrapper
