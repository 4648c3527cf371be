from .config import Config
from .decorators import require_power_level
from .template import TemplateManager, TemplateUtil, fragments
from .arguments import FlagArgument, ToggleArgument, parse_flag, parse_toggle
