from .bot import JenkinsBot
