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
import attr

from maubot.handlers import command
from maubot import MessageEvent

from ..types import JobNotificationConfig
from ..util import FlagArgument, ToggleArgument, require_power_level
from .base import Command


def _format_config(config: JobNotificationConfig) -> str:
    if config.room:
        room = f"[{config.room}](https://matrix.to/#/{config.room})"
    else:
        room = "the default room"
    flags = "\n".join(f"* {name}: {'on' if value else 'off'}"
                      for name, value in config.flags.items())
    return f"**{config.project}** notifies {room}\n\n{flags}"


class CommandJob(Command):
    @Command.jenkins.subcommand("job", aliases=("j",),
                                help="Manage the notification settings of Jenkins jobs.")
    async def job(self) -> None:
        pass

    @job.subcommand("add", help="Send notifications for a job to this room.")
    @command.argument("project", "job name")
    @require_power_level
    async def job_add(self, evt: MessageEvent, project: str) -> None:
        existing = await self.bot.db.get_job_config(project)
        if existing:
            await evt.reply(f"{project} already has notification settings, "
                            f"use `!jenkins job room {project}` to move them here")
            return
        await self.bot.db.put_job_config(JobNotificationConfig(project=project,
                                                               room=evt.room_id))
        await evt.reply(f"Notifications for {project} will be sent to this room")

    @job.subcommand("remove", aliases=("rm", "delete"),
                    help="Stop sending notifications for a job.")
    @command.argument("project", "job name")
    @require_power_level
    async def job_remove(self, evt: MessageEvent, project: str) -> None:
        if not await self.bot.db.get_job_config(project):
            await evt.reply(f"{project} has no notification settings")
            return
        await self.bot.db.remove_job_config(project)
        await evt.reply(f"Removed the notification settings of {project}")

    @job.subcommand("room", help="Send notifications for a job to this room, "
                                 "or to the default room.")
    @command.argument("project", "job name")
    @command.argument("default", "default", required=False, matches="default")
    @require_power_level
    async def job_room(self, evt: MessageEvent, project: str, default: str) -> None:
        config = await self.bot.db.get_job_config(project)
        if not config:
            await evt.reply(f"{project} has no notification settings")
            return
        room = "" if default else evt.room_id
        await self.bot.db.put_job_config(attr.evolve(config, room=room))
        where = "the default room" if default else "this room"
        await evt.reply(f"Notifications for {project} will be sent to {where}")

    @job.subcommand("notify", help="Turn notifications for a build result on or off.")
    @command.argument("project", "job name")
    @FlagArgument("flag", "event")
    @ToggleArgument("enabled", "on/off")
    @require_power_level
    async def job_notify(self, evt: MessageEvent, project: str, flag: str, enabled: bool
                         ) -> None:
        config = await self.bot.db.get_job_config(project)
        if not config:
            await evt.reply(f"{project} has no notification settings")
            return
        await self.bot.db.put_job_config(attr.evolve(config, **{flag: enabled}))
        await evt.reply(f"Turned {flag} {'on' if enabled else 'off'} for {project}")

    @job.subcommand("show", help="Show the notification settings of a job.")
    @command.argument("project", "job name")
    async def job_show(self, evt: MessageEvent, project: str) -> None:
        config = await self.bot.db.get_job_config(project)
        if not config:
            await evt.reply(f"{project} has no notification settings")
            return
        await evt.reply(_format_config(config))

    @job.subcommand("list", aliases=("ls",), help="List the jobs that notify this room.")
    async def job_list(self, evt: MessageEvent) -> None:
        configs = await self.bot.db.get_room_configs(evt.room_id)
        if not configs:
            await evt.reply("No jobs send notifications to this room")
            return
        await evt.reply("Jobs notifying this room:\n\n"
                        + "\n".join(f"* {config.project}" for config in configs))
