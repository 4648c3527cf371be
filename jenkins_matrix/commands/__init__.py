from .base import Command
from .job import CommandJob


class JenkinsCommands(CommandJob):
    pass


__all__ = ["JenkinsCommands", "Command"]
