from .filters import create_valid_extensions, is_extension_valid, is_hidden
from .ordering import natural_compare, natural_key, path_name_key
from .walker import DirectoryWalker, ScanResult

__all__ = [
    "DirectoryWalker",
    "ScanResult",
    "create_valid_extensions",
    "is_extension_valid",
    "is_hidden",
    "natural_compare",
    "natural_key",
    "path_name_key",
]
