class TelemetryError(Exception):
    """Base class for errors raised by the telemetry pipeline."""


class MalformedSampleError(TelemetryError):
    """A DATA payload could not be converted to a number."""

    def __init__(self, payload: str):
        super().__init__(f"malformed sample payload: {payload!r}")
        self.payload = payload


class SourceReadError(TelemetryError):
    """The message source failed to supply messages."""


class SettingParseError(TelemetryError):
    """A SETTING payload does not have the expected 'name:value' form."""

    def __init__(self, payload: str):
        super().__init__(f"unparseable setting payload: {payload!r}")
        self.payload = payload
