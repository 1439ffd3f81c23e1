"""Host specific access to status and identity data

Owner and group of a path as well as the identity of the
running process are only meaningful on hosts following
the POSIX user/group model. Other hosts get a capability
which signals this explicitely instead of guessing.
"""

import os
import stat

from .common import (
    UnsupportedPlatformException,
)

# extended attribute bits, outside of st_mode range
ATTR_APPEND = 1 << 30
ATTR_EXCLUSIVE = 1 << 29
ATTR_TEMPORARY = 1 << 28


class StatusCapability:
    """Common Base Interface"""

    label = 'abstract'

    def owner_user_id(self, stat_result) -> int:
        """Numeric owner of status data"""
        raise NotImplementedError

    def owner_group_id(self, stat_result) -> int:
        """Numeric group of status data"""
        raise NotImplementedError

    def process_identity(self) -> tuple:
        """Real and effective ids of running process
        as (uid, gid, euid, egid)"""
        raise NotImplementedError

    def file_attributes(self, stat_result) -> int:
        """Map host specific file flags to ATTR_* bits"""
        return 0


class PosixCapability(StatusCapability):
    """Hosts with uid/gid semantics, i.e. Linux, BSD, macOS"""

    label = 'posix'

    def owner_user_id(self, stat_result) -> int:
        return stat_result.st_uid

    def owner_group_id(self, stat_result) -> int:
        return stat_result.st_gid

    def process_identity(self) -> tuple:
        return (os.getuid(), os.getgid(), os.geteuid(), os.getegid())

    def file_attributes(self, stat_result) -> int:
        # st_flags only exists on BSD flavours
        flags = getattr(stat_result, 'st_flags', 0)
        attributes = 0
        if flags & (stat.UF_APPEND | stat.SF_APPEND):
            attributes |= ATTR_APPEND
        return attributes


class UnsupportedCapability(StatusCapability):
    """Hosts lacking uid/gid, i.e. Windows"""

    label = 'unsupported'

    def owner_user_id(self, stat_result) -> int:
        raise UnsupportedPlatformException(f"no owner user id on {os.name}")

    def owner_group_id(self, stat_result) -> int:
        raise UnsupportedPlatformException(f"no owner group id on {os.name}")

    def process_identity(self) -> tuple:
        raise UnsupportedPlatformException(f"no process identity on {os.name}")

    def file_attributes(self, stat_result) -> int:
        win_attributes = getattr(stat_result, 'st_file_attributes', 0)
        attributes = 0
        if win_attributes & stat.FILE_ATTRIBUTE_TEMPORARY:
            attributes |= ATTR_TEMPORARY
        return attributes


def current_capability() -> StatusCapability:
    """Pick capability matching running host"""

    if hasattr(os, 'getuid'):
        return PosixCapability()
    return UnsupportedCapability()
