from .fs_loader import FileSystemLoader
from .memory_loader import MemoryLoader
from .json_handler import JsonHandler
from .yaml_handler import YamlHandler

__all__ = ["FileSystemLoader", "MemoryLoader", "JsonHandler", "YamlHandler"]
