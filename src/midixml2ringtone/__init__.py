from .analyze import read_events
from .config import ConverterConfig, converter_config, load_config
from .process import convert_file

__all__ = ["read_events", "ConverterConfig", "converter_config", "load_config", "convert_file"]
