"""
Logger Manager - Resolves tagged loggers from a frozen configuration.

Configuration file format::

    # consult the platform filter (stdlib logger level of the tag)
    check-logcat-filter=true
    # root logger configuration
    root=<level>:<tag>
    # package / module / class logger configuration
    logger.<dotted name>=<level>:<tag>

For example, the following logs ERROR and above with tag ``MyApplication`` and
everything from ``com.example.server*`` with tag ``MyApplication-server``::

    root=ERROR:MyApplication
    logger.com.example.server=DEBUG:MyApplication-server
"""
from collections.abc import Callable, Mapping
from types import MappingProxyType, ModuleType
from typing import Any, Optional
import inspect
import re
import threading

from shared.models.logger_model import Level, Logger
from shared.services.logger import get_logger
from modules.tag_logger.services.properties_loader import load_properties
from config.settings import settings


logger = get_logger(__name__)

DEFAULT_LOGGER = Logger("XXX", Level.VERBOSE)

CONF_ROOT = "root"
CONF_LOGGER = "logger."
CONF_LOGCAT = "check-logcat-filter"
CONF_LOGGER_REGEX = re.compile(r"(.*?):(.*)")
CONF_DEFAULT_LEVEL = Level.VERBOSE

# Frames from these modules are skipped when inferring the caller
LIBRARY_MODULES = (
    "modules.tag_logger",
    "shared.models.logger_model",
    "shared.services.logger",
)


def qualified_name(target: Any) -> Optional[str]:
    """
    Dotted name used for resolution.

    Strings are used as-is, classes give ``module.QualName``, modules give
    their ``__name__``, anything else resolves by its class.
    """
    if target is None or isinstance(target, str):
        return target
    if isinstance(target, ModuleType):
        return target.__name__
    if not isinstance(target, type):
        target = type(target)
    return f"{target.__module__}.{target.__qualname__}"


def _frame_name(frame) -> str:
    module = frame.f_globals.get("__name__", "")
    qualname = getattr(frame.f_code, "co_qualname", "")
    owner = qualname.rpartition(".")[0]
    if owner and "<locals>" not in owner:
        return f"{module}.{owner}"
    return module


def _is_library_frame(frame) -> bool:
    module = frame.f_globals.get("__name__", "")
    return any(module == name or module.startswith(name + ".") for name in LIBRARY_MODULES)


class LoggerManager:
    """
    Registry of configured loggers.

    - Built once from the properties file (or an injected mapping)
    - The map is read-only afterwards, lookups need no locking
    - Lookups never raise and never return None
    """

    _instance: Optional["LoggerManager"] = None
    _lock = threading.Lock()

    def __init__(
        self,
        properties: Optional[Mapping[str, str]] = None,
        loader: Callable[[], Mapping[str, str]] = load_properties,
    ):
        """
        Load the configuration.

        Args:
            properties: Configuration entries (injected for testing, otherwise read by loader)
            loader: Callable returning the configuration entries
        """
        self._check_platform_filter = True
        self._loggers: Mapping[Optional[str], Logger] = MappingProxyType(
            self._load_configuration(properties, loader)
        )

    @classmethod
    def get_instance(cls) -> "LoggerManager":
        """Process-wide manager, created on first use."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @property
    def loggers(self) -> Mapping[Optional[str], Logger]:
        """Configured loggers keyed by name prefix (None is the root)."""
        return self._loggers

    @property
    def check_platform_filter(self) -> bool:
        return self._check_platform_filter

    def _load_configuration(
        self,
        properties: Optional[Mapping[str, str]],
        loader: Callable[[], Mapping[str, str]],
    ) -> dict[Optional[str], Logger]:
        if properties is None:
            try:
                properties = loader()
            except (OSError, UnicodeDecodeError) as e:
                DEFAULT_LOGGER.e(
                    "Cannot configure logger from %s. Default configuration will be used",
                    e, settings.LOGGER_PROPERTIES_NAME,
                )
                return {None: DEFAULT_LOGGER}

        if not properties:
            DEFAULT_LOGGER.e("Logger configuration file is empty. Default configuration will be used")
            return {None: DEFAULT_LOGGER}

        # Needed before any logger is built
        if CONF_LOGCAT in properties:
            self._check_platform_filter = properties[CONF_LOGCAT].lower() == "true"

        loggers: dict[Optional[str], Logger] = {}
        for key, value in properties.items():
            if key == CONF_ROOT:
                loggers[None] = self.decode_logger(value)
            elif key.startswith(CONF_LOGGER):
                loggers[key[len(CONF_LOGGER):]] = self.decode_logger(value)

        logger.debug(f"Configured {len(loggers)} logger(s)")
        return loggers

    def decode_logger(self, value: str) -> Logger:
        """
        Build a logger from a ``<level>:<tag>`` value.

        A value without a colon is used whole as the tag. An unknown level is
        reported and the whole value is used as the tag. Both cases fall back
        to the default level.
        """
        match = CONF_LOGGER_REGEX.fullmatch(value)
        if match is None:
            return Logger(value, CONF_DEFAULT_LEVEL, self._check_platform_filter)

        level_name, tag = match.groups()
        try:
            level = Level.parse(level_name)
        except ValueError:
            DEFAULT_LOGGER.w(
                "Cannot parse %s as logging level. Only %s are allowed",
                level_name, [member.name for member in Level],
            )
            return Logger(value, CONF_DEFAULT_LEVEL, self._check_platform_filter)
        return Logger(tag, level, self._check_platform_filter)

    def find_logger(self, name: Optional[str]) -> Logger:
        """
        Logger for the longest configured prefix of ``name``.

        Keys match as plain string prefixes, not dotted segments. Two keys of
        equal length cannot both prefix the same name unless they are equal,
        so the winner is unique. Falls back to the root entry, then to an
        untagged VERBOSE logger.
        """
        current_key = None
        if name is not None:
            for key in self._loggers:
                if key is None or not name.startswith(key):
                    continue
                if current_key is None or len(key) > len(current_key):
                    current_key = key

        found = self._loggers.get(current_key)
        if found is not None:
            return found
        return Logger("", Level.VERBOSE, self._check_platform_filter)

    def get_logger(self, target: Any = None) -> Logger:
        """Logger for a name, class, module or object; None is the root."""
        return self.find_logger(qualified_name(target))

    def get_caller_logger(self) -> Logger:
        """Logger for the first calling frame outside this library."""
        frame = inspect.currentframe()
        while frame is not None:
            if not _is_library_frame(frame):
                return self.find_logger(_frame_name(frame))
            frame = frame.f_back
        return self.find_logger(None)
