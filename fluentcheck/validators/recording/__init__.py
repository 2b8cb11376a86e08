"""Recording objects — infer field names from accessor expressions."""

from fluentcheck.validators.recording.recorder import Recorder, RecordingObject, name_of, to_property_name
from fluentcheck.validators.recording.defaults import get_default, is_terminal

__all__ = ["Recorder", "RecordingObject", "name_of", "to_property_name", "get_default", "is_terminal"]
