"""
Tag Logger Services Package.
"""
from modules.tag_logger.services.logger_manager import LoggerManager, DEFAULT_LOGGER
from modules.tag_logger.services.properties_loader import load_properties, parse_properties

__all__ = ["LoggerManager", "DEFAULT_LOGGER", "load_properties", "parse_properties"]
