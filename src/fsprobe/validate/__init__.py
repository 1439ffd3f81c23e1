from .common import (
    INVALID_LABEL_MISSING,
    INVALID_LABEL_PERMISSION,
    INVALID_LABEL_TYPE,
    INVALID_LABEL_UNREADABLE,
    Invalid,
    Validator,
)

from .fsdata import (
    LABEL_PATH_VALIDATOR,
    PERMISSION_GROUP_READ,
    PERMISSION_GROUP_READ_WRITE,
    REQUIRE_DIRECTORY,
    REQUIRE_EXECUTE,
    REQUIRE_EXISTS,
    REQUIRE_FILE,
    REQUIRE_READ,
    REQUIRE_WRITE,
    REQUIREMENTS,
    FSReadException,
    FSWriteException,
    PathValidator,
    ensure_readable,
    ensure_writable,
    group_can_read,
    group_can_write,
    resource_can_be,
)
