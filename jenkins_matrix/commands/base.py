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
from typing import TYPE_CHECKING

from maubot.handlers import command

if TYPE_CHECKING:
    from ..bot import JenkinsBot


class Command:
    bot: 'JenkinsBot'

    def __init__(self, bot: 'JenkinsBot') -> None:
        self.bot = bot

    @command.new(name="jenkins", help="Manage this Jenkins bot",
                 require_subcommand=True)
    async def jenkins(self) -> None:
        pass
