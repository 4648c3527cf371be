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
from typing import Tuple, Any, Dict
import re

from maubot.handlers.command import Argument, ArgumentSyntaxError

from .template import TemplateUtil

FLAGS: Dict[str, str] = {
    "aborted": "notify_aborted",
    "failure": "notify_failure",
    "not_built": "notify_not_built",
    "back_to_normal": "notify_back_to_normal",
    "success": "notify_success",
    "unstable": "notify_unstable",
    "mention_all": "mention_all",
}

TRUE_VALUES = ("on", "yes", "true", "1", "enable")
FALSE_VALUES = ("off", "no", "false", "0", "disable")


def parse_flag(val: str) -> str:
    try:
        return FLAGS[val.lower().replace("-", "_")]
    except KeyError:
        raise ValueError(f"Unknown event {val!r}, expected one of "
                         + TemplateUtil.join_human_list(list(FLAGS), final_joiner=" or ")
                         ) from None


def parse_toggle(val: str) -> bool:
    val = val.lower()
    if val in TRUE_VALUES:
        return True
    elif val in FALSE_VALUES:
        return False
    raise ValueError(f"Expected on or off, got {val!r}")


def _first_word(val: str) -> str:
    return re.split(r"\s", val, maxsplit=1)[0]


class FlagArgument(Argument):
    def __init__(self, name: str, label: str = None, *, required: bool = True) -> None:
        super().__init__(name, label=label, required=required)

    def match(self, val: str, **kwargs) -> Tuple[str, Any]:
        word = _first_word(val)
        try:
            return val[len(word):], parse_flag(word)
        except ValueError as e:
            raise ArgumentSyntaxError(str(e)) from e


class ToggleArgument(Argument):
    def __init__(self, name: str, label: str = None, *, required: bool = True) -> None:
        super().__init__(name, label=label, required=required)

    def match(self, val: str, **kwargs) -> Tuple[str, Any]:
        word = _first_word(val)
        try:
            return val[len(word):], parse_toggle(word)
        except ValueError as e:
            raise ArgumentSyntaxError(str(e)) from e
