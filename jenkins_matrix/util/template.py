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
from typing import Dict, Any, List, Union

from jinja2 import Environment as JinjaEnvironment, Template, DictLoader


class TemplateUtil:
    @staticmethod
    def pluralize(val: Union[int, float], unit: str) -> str:
        if val == 1:
            return f"{val} {unit}"
        return f"{val} {unit}s"

    @classmethod
    def format_time(cls, seconds: Union[int, float]) -> str:
        seconds = abs(seconds)
        frac_seconds = round(seconds - int(seconds), 1)
        minutes, seconds = divmod(int(seconds), 60)
        hours, minutes = divmod(minutes, 60)
        parts = []
        if hours > 0:
            parts.append(cls.pluralize(hours, "hour"))
        if minutes > 0:
            parts.append(cls.pluralize(minutes, "minute"))
        if seconds > 0 or frac_seconds > 0 or len(parts) == 0:
            parts.append(cls.pluralize(seconds + frac_seconds if frac_seconds else seconds,
                                       "second"))

        if len(parts) == 1:
            return parts[0]
        return ", ".join(parts[:-1]) + f" and {parts[-1]}"

    @staticmethod
    def join_human_list(data: List[str], *, joiner: str = ", ",
                        final_joiner: str = " and ") -> str:
        if not data:
            return ""
        elif len(data) == 1:
            return data[0]
        return joiner.join(data[:-1]) + final_joiner + data[-1]


# HTML snippets that make up a notification. Whitespace is significant.
FRAGMENTS: Dict[str, str] = {
    "graphic": "<img src='{{ src }}' alt='Failed'/> ",
    "open_link": " (<a href='{{ url }}'>Open</a>)",
    "section": "<br /><span style='margin-left:20px'><b>{{ label }}:</b></span>",
    "ordered_list": "<ol>{% for item in items %}<li>{{ item }}</li>{% endfor %}</ol>",
}


class TemplateManager:
    _env: JinjaEnvironment

    def __init__(self, templates: Dict[str, str]) -> None:
        self._env = JinjaEnvironment(loader=DictLoader(templates), autoescape=True,
                                     lstrip_blocks=True, trim_blocks=True)

    def __getitem__(self, item: str) -> Template:
        return self._env.get_template(item)

    def render(self, name: str, **args: Any) -> str:
        return self[name].render(**args)


fragments = TemplateManager(FRAGMENTS)
