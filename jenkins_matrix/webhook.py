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
from typing import List, Optional, TYPE_CHECKING
from asyncio import Task
import asyncio
import json

from aiohttp.web import Response, Request

from mautrix.types import JSON, SerializerError
from maubot.handlers import web

from .types import BuildPhase, BuildRecord, ConfigurationMissing, JenkinsNotification

if TYPE_CHECKING:
    from .bot import JenkinsBot


class JenkinsWebhook:
    bot: 'JenkinsBot'
    task_list: List[Task]

    def __init__(self, bot: 'JenkinsBot') -> None:
        self.bot = bot
        self.task_list = []

    async def start(self) -> 'JenkinsWebhook':
        return self

    async def stop(self) -> None:
        if self.task_list:
            await asyncio.wait(self.task_list, timeout=1)

    @web.post("/webhooks")
    async def post_handler(self, request: Request) -> Response:
        try:
            token = request.headers["X-Jenkins-Token"]
        except KeyError:
            return Response(text="401: Unauthorized\n"
                                 "Missing auth token header\n", status=401)
        if token != self.bot.config["secret"]:
            return Response(text="401: Unauthorized\n", status=401)

        if request.headers.getone("Content-Type", "") != "application/json":
            return Response(status=406, text="406: Not Acceptable\n",
                            headers={"Accept": "application/json"})

        try:
            body = await request.json()
        except json.JSONDecodeError:
            return Response(status=400, text="400: Bad Request\nBody is not valid JSON\n")

        try:
            evt = self.parse_notification(body)
        except SerializerError as e:
            return Response(status=400, text=f"400: Bad Request\n{e}\n")

        self.bot.log.trace("Accepted processing of %s %s for %s",
                           evt.phase.value, evt.build.number, evt.name)
        task = asyncio.create_task(self.try_process_hook(evt))
        self.task_list += [task]

        return Response(status=202, text="202: Accepted\nWebhook processing started.\n")

    @staticmethod
    def parse_notification(body: JSON) -> JenkinsNotification:
        try:
            return JenkinsNotification.deserialize(body)
        except (KeyError, TypeError, ValueError) as e:
            raise SerializerError(f"Invalid build notification: {e}") from e

    async def try_process_hook(self, evt: JenkinsNotification) -> None:
        try:
            await self.process_hook(evt)
        except ConfigurationMissing as e:
            self.bot.log.warning(f"{e}, use `!jenkins job add {e.project}` to enable them")
        except Exception:
            self.bot.log.warning("Failed to process webhook", exc_info=True)
        finally:
            try:
                task = asyncio.current_task()
            except RuntimeError:
                task = None
            if task and task in self.task_list:
                self.task_list.remove(task)

    async def process_hook(self, evt: JenkinsNotification) -> None:
        previous = None
        if not evt.build.previous:
            previous = await self.get_previous_build(evt)
        build = evt.to_record(fallback_previous=previous)
        try:
            await self.bot.notifier.handle(evt.phase, build)
        finally:
            # The next build reads this as its previous result even if notifying failed
            if evt.phase == BuildPhase.COMPLETED:
                await self.bot.db.put_last_build(evt.name, evt.build.number, evt.build.status)

    async def get_previous_build(self, evt: JenkinsNotification) -> Optional[BuildRecord]:
        last = await self.bot.db.get_last_build(evt.name)
        if not last or last.number >= evt.build.number:
            return None
        return BuildRecord(project=evt.name, project_display_name=evt.display_name or evt.name,
                           display_name=f"#{last.number}", url="", number=last.number,
                           result=last.result)
