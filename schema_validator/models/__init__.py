"""Value types shared across compilation and execution."""

from .messages import (
    CustomErrorMessageType,
    ErrorMessageType,
    MessageFormatter,
    MessageTypes,
    PositionalMessageFormatter,
)
from .path import InstancePath
from .violation import Violation, format_violations
