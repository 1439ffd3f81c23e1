"""Inspect a single path by means of its status data

A PathSnapshot performs exactly one status lookup when
created. Every query afterwards is answered from the
captured data, so no re-stat takes place. Failures are
captured rather than raised: predicates answer False,
whereas the owner/group accessors and size() raise.
"""

import enum
import logging
import os
import stat

from .common import (
    UNSET_LABEL,
    UNSET_NUMBR,
    FallbackLogger,
    IdentityFieldUnavailableException,
    PathNotFoundException,
    StatusUnavailableException,
    UnsupportedPlatformException,
)
from .fsprobe_identity import (
    IdentitySnapshot,
    capture_identity,
)
from .fsprobe_platform import (
    ATTR_APPEND,
    ATTR_EXCLUSIVE,
    ATTR_TEMPORARY,
    StatusCapability,
    current_capability,
)

# permission bits
IRUSR = stat.S_IRUSR    # 0o400 read by owner
IWUSR = stat.S_IWUSR    # 0o200 write by owner
IXUSR = stat.S_IXUSR    # 0o100 execute/search by owner
IRGRP = stat.S_IRGRP    # 0o040 read by group
IWGRP = stat.S_IWGRP    # 0o020 write by group
IXGRP = stat.S_IXGRP    # 0o010 execute/search by group
IROTH = stat.S_IROTH    # 0o004 read by others
IWOTH = stat.S_IWOTH    # 0o002 write by others
IXOTH = stat.S_IXOTH    # 0o001 execute/search by others
IREAD = IRUSR
IWRITE = IWUSR
IEXEC = IXUSR

PERMISSION_MASK = 0o777

# (owner, group, other) per access kind
ACCESS_READ = (IRUSR, IRGRP, IROTH)
ACCESS_WRITE = (IWUSR, IWGRP, IWOTH)
ACCESS_EXECUTE = (IXUSR, IXGRP, IXOTH)


class StatOutcome(enum.Enum):
    """Result of the status lookup"""

    FOUND = 'found'
    NOT_FOUND = 'not_found'
    ERROR_OTHER = 'error_other'


class PathSnapshot(FallbackLogger):
    """Status data of a path at time of creation

    * never raises on construction, inspect has_error()
      and error() for the cause
    * exists() is only False if the path is definitely
      missing, other failures (like permission denied
      on a parent directory) still report True
    * follow_symlinks=False inspects the link itself,
      otherwise is_symlink() can't ever be True
    """

    def __init__(self, path, follow_symlinks=True,
                 capability: StatusCapability = None,
                 logger=None):
        super().__init__(some_logger=logger)
        self.path = path
        self.follow_symlinks = follow_symlinks
        self._capability = capability
        if self._capability is None:
            self._capability = current_capability()
        self._stat = None
        self._error = None
        self._outcome = StatOutcome.FOUND
        self._attributes = 0
        try:
            self._stat = os.stat(path, follow_symlinks=follow_symlinks)
        except FileNotFoundError as not_found:
            self._outcome = StatOutcome.NOT_FOUND
            self._error = PathNotFoundException(f"{path} not found")
            self._error.__cause__ = not_found
        except (OSError, ValueError) as stat_err:
            self._outcome = StatOutcome.ERROR_OTHER
            self._error = StatusUnavailableException(
                f"can't stat {path}: {stat_err}")
            self._error.__cause__ = stat_err
        if self._error is not None:
            self.log("status of %s unavailable: %s", path, self._error,
                     level=logging.DEBUG)
        else:
            self._attributes = self._capability.file_attributes(self._stat)

    def __repr__(self):
        return f"PathSnapshot({self.path!r}, {self._outcome.name})"

    @property
    def outcome(self) -> StatOutcome:
        """Three-valued result of the lookup"""
        return self._outcome

    @property
    def stat_result(self):
        """Raw os.stat_result, None if lookup failed"""
        return self._stat

    def has_error(self) -> bool:
        """Check to see if lookup failed"""
        return self._outcome != StatOutcome.FOUND

    def error(self):
        """Captured failure or None"""
        return self._error

    def exists(self) -> bool:
        """Validate path exists, i.e. lookup didn't
        fail with 'not found'"""
        return self._outcome != StatOutcome.NOT_FOUND

    def _check_mode(self, mode_test) -> bool:
        if self._stat is None:
            return False
        return mode_test(self._stat.st_mode)

    def has_mode(self, bits) -> bool:
        """Check *all* requested mode bits are set,
        e.g. stat.S_IFDIR or stat.S_ISUID | stat.S_ISGID"""
        if self._stat is None:
            return False
        return (self._stat.st_mode & bits) == bits

    def _has_attribute(self, attribute) -> bool:
        return (self._attributes & attribute) == attribute

    def is_directory(self) -> bool:
        return self._check_mode(stat.S_ISDIR)

    def is_symlink(self) -> bool:
        return self._check_mode(stat.S_ISLNK)

    def is_regular_file(self) -> bool:
        return self._check_mode(stat.S_ISREG)

    def is_device(self) -> bool:
        """Block as well as character devices"""
        return self._check_mode(stat.S_ISBLK) or self._check_mode(stat.S_ISCHR)

    def is_character_device(self) -> bool:
        return self._check_mode(stat.S_ISCHR)

    def is_named_pipe(self) -> bool:
        return self._check_mode(stat.S_ISFIFO)

    def is_socket(self) -> bool:
        return self._check_mode(stat.S_ISSOCK)

    def is_append_only(self) -> bool:
        """Only hosts with BSD file flags tell"""
        return self._has_attribute(ATTR_APPEND)

    def is_exclusive(self) -> bool:
        return self._has_attribute(ATTR_EXCLUSIVE)

    def is_temporary(self) -> bool:
        return self._has_attribute(ATTR_TEMPORARY)

    def has_set_user_id(self) -> bool:
        return self.has_mode(stat.S_ISUID)

    def has_set_group_id(self) -> bool:
        return self.has_mode(stat.S_ISGID)

    def is_sticky(self) -> bool:
        return self.has_mode(stat.S_ISVTX)

    @property
    def permissions(self) -> int:
        """Permission portion of mode (owner, group, other)"""
        if self._stat is None:
            return UNSET_NUMBR
        return stat.S_IMODE(self._stat.st_mode) & PERMISSION_MASK

    def mode_string(self) -> str:
        """Mode like 'ls -l' renders it, e.g. '-rw-r--r--'"""
        if self._stat is None:
            return UNSET_LABEL
        return stat.filemode(self._stat.st_mode)

    def has_permission(self, bits) -> bool:
        """Check *all* requested permission bits are set
        regardless of who is asking"""
        if self._stat is None:
            return False
        return (self.permissions & bits) == bits

    def is_owner_readable(self) -> bool:
        return self.has_permission(IRUSR)

    def is_owner_writeable(self) -> bool:
        return self.has_permission(IWUSR)

    def is_owner_executable(self) -> bool:
        return self.has_permission(IXUSR)

    def is_group_readable(self) -> bool:
        return self.has_permission(IRGRP)

    def is_group_writeable(self) -> bool:
        return self.has_permission(IWGRP)

    def is_group_executable(self) -> bool:
        return self.has_permission(IXGRP)

    def is_other_readable(self) -> bool:
        return self.has_permission(IROTH)

    def is_other_writeable(self) -> bool:
        return self.has_permission(IWOTH)

    def is_other_executable(self) -> bool:
        return self.has_permission(IXOTH)

    def owner_user_id(self) -> int:
        """Numeric user owning the path

        Raises IdentityFieldUnavailableException if there's
        no status data, UnsupportedPlatformException if host
        doesn't know about user ids at all.
        """
        if self._stat is None:
            raise IdentityFieldUnavailableException(
                f"no status data for {self.path}") from self._error
        return self._capability.owner_user_id(self._stat)

    def owner_group_id(self) -> int:
        """Numeric group owning the path, raises like owner_user_id()"""
        if self._stat is None:
            raise IdentityFieldUnavailableException(
                f"no status data for {self.path}") from self._error
        return self._capability.owner_group_id(self._stat)

    def _resolve_access(self, access_bits, identity: IdentitySnapshot = None) -> bool:
        """Pick permission class by ownership

        Compares real uid/gid only, no supplementary groups,
        no effective ids and no special treatment of root.
        Ids which can't be determined never match.
        """
        owner_bit, group_bit, other_bit = access_bits
        if identity is None:
            try:
                identity = capture_identity(self._capability)
            except UnsupportedPlatformException:
                identity = None
        try:
            path_uid = self.owner_user_id()
        except IdentityFieldUnavailableException:
            path_uid = None
        try:
            path_gid = self.owner_group_id()
        except IdentityFieldUnavailableException:
            path_gid = None

        if identity is not None and path_uid is not None \
                and path_uid == identity.user_id:
            return self.has_permission(owner_bit)
        if identity is not None and path_gid is not None \
                and path_gid == identity.group_id:
            return self.has_permission(group_bit)
        return self.has_permission(other_bit)

    def can_read(self, identity: IdentitySnapshot = None) -> bool:
        """Check whether current process may read path

        Pass an identity to re-use it for several
        checks, otherwise a fresh one gets captured.
        """
        return self._resolve_access(ACCESS_READ, identity)

    def can_write(self, identity: IdentitySnapshot = None) -> bool:
        """Check whether current process may write path"""
        return self._resolve_access(ACCESS_WRITE, identity)

    def can_execute(self, identity: IdentitySnapshot = None) -> bool:
        """Check whether current process may execute
        file or search directory"""
        return self._resolve_access(ACCESS_EXECUTE, identity)

    def size(self) -> int:
        """Length in bytes for regular files, system
        dependent for others

        Raises a copy of the captured failure if lookup
        failed, so error() stays untouched.
        """
        if self._stat is None:
            raise type(self._error)(str(self._error)) from self._error.__cause__
        return self._stat.st_size


def current_directory(trailing_separator=False, logger=None) -> str:
    """Working directory of running process

    Returns empty string if lookup fails, i.e. because
    working directory has been removed meanwhile.
    Separator is appended unconditionally if requested,
    so root directory yields a doubled one.
    """

    try:
        the_dir = os.getcwd()
    except OSError as os_err:
        FallbackLogger(logger).log("can't determine working directory: %s",
                                   os_err, level=logging.DEBUG)
        return ''
    if trailing_separator:
        the_dir = the_dir + os.sep
    return the_dir
