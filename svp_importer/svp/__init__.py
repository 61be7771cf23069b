from .errors import SvpImportError, SvpNoPayloadError, SvpNoProjectError, SvpReadError
from .importer import load_svp
from .units import TICK_RATE

__all__ = [
    "SvpImportError",
    "SvpNoPayloadError",
    "SvpNoProjectError",
    "SvpReadError",
    "TICK_RATE",
    "load_svp",
]
