
from .common import (
    UNSET_LABEL,
    UNSET_NUMBR,
    XMLNS,
    FallbackLogger,
    FSProbeException,
    IdentityFieldUnavailableException,
    PathNotFoundException,
    StatusUnavailableException,
    UnsupportedPlatformException,
)
from .fsprobe_platform import (
    PosixCapability,
    StatusCapability,
    UnsupportedCapability,
    current_capability,
)
from .fsprobe_identity import *
from .fsprobe_path import *
from .fsprobe_report import (
    PathReport,
    to_text,
    to_xml,
)
from .validate import (
    FSReadException,
    FSWriteException,
    Invalid,
    PathValidator,
    Validator,
    ensure_readable,
    ensure_writable,
    group_can_read,
    group_can_write,
    resource_can_be,
)
