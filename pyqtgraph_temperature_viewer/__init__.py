from .errors import MalformedSampleError, SettingParseError, SourceReadError, TelemetryError
from .handler import TemperatureHandler
from .messages import MessageBuffer, MessageKind, RawMessage
from .sample import Sample

__all__ = [
    "MalformedSampleError",
    "MessageBuffer",
    "MessageKind",
    "RawMessage",
    "Sample",
    "SettingParseError",
    "SourceReadError",
    "TelemetryError",
    "TemperatureHandler",
]
